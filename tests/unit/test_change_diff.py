"""Field-level diffing of entity snapshots."""

from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal
from uuid import UUID

from app.application.services.change_diff import (
    diff_snapshots,
    is_scalar_like,
    normalize,
    to_snapshot,
)
from app.infrastructure.persistence.models import Club
from app.shared.utils.masking import REDACTED


def test_creation_lists_every_present_field_with_old_none() -> None:
    changes = diff_snapshots(None, {"name": "Acme", "password": "secret123"})
    assert changes == {
        "name": {"old": None, "new": "Acme"},
        "password": {"old": None, "new": REDACTED},
    }


def test_deletion_lists_every_present_field_with_new_none() -> None:
    changes = diff_snapshots({"id": "c1", "name": "Acme"}, None)
    assert changes == {
        "id": {"old": "c1", "new": None},
        "name": {"old": "Acme", "new": None},
    }


def test_identical_snapshots_give_empty_diff() -> None:
    snapshot = {"id": "c1", "name": "Acme", "active": True, "founded": date(1990, 1, 1)}
    assert diff_snapshots(snapshot, dict(snapshot)) == {}


def test_unchanged_keys_are_omitted() -> None:
    changes = diff_snapshots(
        {"id": "c1", "name": "Acme", "active": True},
        {"id": "c1", "name": "Acme FC", "active": True},
    )
    assert changes == {"name": {"old": "Acme", "new": "Acme FC"}}


def test_nested_values_never_appear() -> None:
    """Relations, lists and JSON-like values are skipped on either side."""
    changes = diff_snapshots(
        {"name": "Acme", "players": [{"id": "p1"}], "meta": {"a": 1}},
        {"name": "Acme", "players": [], "meta": None},
    )
    assert changes == {}


def test_aadhar_change_is_masked_on_both_sides() -> None:
    changes = diff_snapshots(
        {"aadharNumber": "123456789012"}, {"aadharNumber": "123456789099"}
    )
    assert changes == {
        "aadharNumber": {"old": "XXXX-XXXX-9012", "new": "XXXX-XXXX-9099"}
    }


def test_secret_change_is_recorded_without_values() -> None:
    changes = diff_snapshots({"client_secret": "a"}, {"client_secret": "b"})
    assert changes == {"client_secret": {"old": REDACTED, "new": REDACTED}}


def test_datetimes_are_compared_and_stored_as_iso_strings() -> None:
    when = datetime(2026, 5, 1, 12, 30, tzinfo=timezone.utc)
    assert diff_snapshots({"at": when}, {"at": when.isoformat()}) == {}
    changes = diff_snapshots({"at": None}, {"at": when})
    assert changes == {"at": {"old": None, "new": "2026-05-01T12:30:00+00:00"}}


def test_bool_int_swap_counts_as_change() -> None:
    assert diff_snapshots({"flag": 1}, {"flag": True}) == {
        "flag": {"old": 1, "new": True}
    }


def test_is_scalar_like_allow_list() -> None:
    for value in (None, True, 3, 2.5, Decimal("1.10"), "x", date.today(),
                  UUID(int=1)):
        assert is_scalar_like(value)
    for value in ({"a": 1}, [1], (1,), {1}, object()):
        assert not is_scalar_like(value)


def test_normalize_decimal_and_uuid_to_string() -> None:
    assert normalize(Decimal("10.50")) == "10.50"
    assert normalize(UUID(int=0)) == "00000000-0000-0000-0000-000000000000"


def test_to_snapshot_of_orm_instance_uses_columns_only() -> None:
    club = Club(id="c1", name="Acme", registration_number="R-1", active=True)
    snapshot = to_snapshot(club)
    assert snapshot is not None
    assert snapshot["id"] == "c1"
    assert snapshot["name"] == "Acme"
    assert "players" not in snapshot


def test_to_snapshot_of_dataclass_and_mapping() -> None:
    @dataclass
    class Row:
        id: str
        name: str

    assert to_snapshot(Row("r1", "Acme")) == {"id": "r1", "name": "Acme"}
    assert to_snapshot({"id": "r2"}) == {"id": "r2"}
    assert to_snapshot(None) is None
