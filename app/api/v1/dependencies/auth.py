"""Caller identity dependencies (composition root)."""

from __future__ import annotations

from app.domain.exceptions import AuthenticationException
from app.shared.context import RequestContext, get_request_context


async def require_authenticated_actor() -> RequestContext:
    """Request context of an authenticated caller; 401 otherwise.

    Identity comes from the bearer token verified by RequestContextMiddleware.
    """
    ctx = get_request_context()
    if ctx is None or not ctx.is_authenticated:
        raise AuthenticationException()
    return ctx
