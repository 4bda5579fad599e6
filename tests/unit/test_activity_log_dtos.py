"""Paging DTOs: lenient parsing and total page arithmetic."""

import pytest

from app.application.dtos.activity_log import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    ActivityLogPage,
    PageRequest,
)
from app.shared.enums import SortOrder


@pytest.mark.parametrize(
    ("page", "limit", "expected"),
    [
        (None, None, (1, DEFAULT_PAGE_SIZE)),
        ("3", "50", (3, 50)),
        ("abc", "xyz", (1, DEFAULT_PAGE_SIZE)),
        ("0", "0", (1, DEFAULT_PAGE_SIZE)),
        ("-4", "-10", (1, 1)),
        ("2", "5000", (2, MAX_PAGE_SIZE)),
        (" 7 ", 10, (7, 10)),
    ],
)
def test_page_request_from_raw(page, limit, expected) -> None:
    request = PageRequest.from_raw(page, limit)
    assert (request.page, request.limit) == expected


def test_offset() -> None:
    assert PageRequest(page=1, limit=20).offset == 0
    assert PageRequest(page=3, limit=25).offset == 50


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("asc", SortOrder.ASC), ("ASC", SortOrder.ASC), ("desc", SortOrder.DESC), (None, SortOrder.DESC), ("sideways", SortOrder.DESC)],
)
def test_sort_order_parse(raw, expected) -> None:
    assert PageRequest.from_raw(None, None, raw).sort_order is expected


@pytest.mark.parametrize(
    ("total", "limit", "pages"),
    [(0, 20, 1), (1, 20, 1), (20, 20, 1), (21, 20, 2), (45, 20, 3)],
)
def test_total_pages(total, limit, pages) -> None:
    assert ActivityLogPage(total_count=total, limit=limit).total_pages == pages
