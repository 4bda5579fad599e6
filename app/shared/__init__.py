"""Shared utilities: request context, enums, telemetry, and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from app.shared.context import (
    RequestContext,
    get_request_context,
    request_context,
    run_with_context,
)
from app.shared.enums import MutationKind, SortOrder
from app.shared.utils import generate_cuid, mask_value, utc_now

__all__ = [
    "MutationKind",
    "RequestContext",
    "SortOrder",
    "generate_cuid",
    "get_request_context",
    "mask_value",
    "request_context",
    "run_with_context",
    "utc_now",
]
