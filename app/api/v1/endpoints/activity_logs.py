"""Activity log API: administrators browse who changed what, when, from where."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from app.api.v1.dependencies import (
    get_activity_log_query_service,
    require_authenticated_actor,
)
from app.application.dtos.activity_log import ActivityLogFilters, PageRequest
from app.application.services.activity_log_query_service import ActivityLogQueryService
from app.core.limiter import limit_activity_log_query
from app.schemas.activity_log import ActivityLogEntryResponse, ActivityLogListResponse
from app.shared.context import RequestContext
from app.shared.utils.datetime import parse_datetime_or_none

router = APIRouter()


def _blank_to_none(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value.strip()


@router.get("", response_model=ActivityLogListResponse)
@limit_activity_log_query
async def list_activity_logs(
    request: Request,
    actor: Annotated[RequestContext, Depends(require_authenticated_actor)],
    service: Annotated[ActivityLogQueryService, Depends(get_activity_log_query_service)],
    page: str | None = Query(None, description="1-indexed page (default 1)"),
    limit: str | None = Query(None, description="Page size (default 20, max 200)"),
    search: str | None = Query(None, description="Substring over actor, entity and action"),
    entity_type: str | None = Query(None, alias="entityType"),
    action: str | None = Query(None),
    actor_email: str | None = Query(None, alias="actorEmail"),
    created_from: str | None = Query(None, alias="from", description="ISO 8601, inclusive"),
    created_to: str | None = Query(None, alias="to", description="ISO 8601, inclusive"),
    sort_order: str | None = Query(None, alias="sortOrder", description="asc or desc"),
) -> ActivityLogListResponse:
    """List activity log entries (administrators only, newest first by default).

    Query values are parsed leniently: bad page/limit fall back to defaults,
    bad dates are ignored.
    """
    filters = ActivityLogFilters(
        entity_type=_blank_to_none(entity_type),
        action=_blank_to_none(action),
        actor_email=_blank_to_none(actor_email),
        search=_blank_to_none(search),
        created_from=parse_datetime_or_none(created_from),
        created_to=parse_datetime_or_none(created_to),
    )
    result = await service.list(
        actor.actor_role, filters, PageRequest.from_raw(page, limit, sort_order)
    )
    return ActivityLogListResponse(
        logs=[ActivityLogEntryResponse.model_validate(r) for r in result.records],
        page=result.page,
        total_pages=result.total_pages,
        total_logs=result.total_count,
    )
