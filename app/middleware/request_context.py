"""Request context middleware.

Installs a RequestContext (actor identity from the bearer token, client IP,
user agent) for the whole downstream call graph of each HTTP request and
resets it when the request finishes. Uses raw ASGI (no BaseHTTPMiddleware)
so the ContextVar is set in the same task that runs the route.

For unauthenticated writes with a small JSON body, the body is buffered to
read email/name hints for attribution, then replayed unchanged.
"""

from __future__ import annotations

from typing import Any, Callable

from app.core.config import get_settings
from app.infrastructure.security.jwt import verify_token
from app.shared.context import RequestContext, request_context
from app.shared.request_audit import (
    get_bearer_token,
    get_client_ip,
    get_header,
    parse_claimed_identity,
)
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

_BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})


def build_request_context(scope: dict[str, Any]) -> RequestContext:
    """Context for one HTTP scope. Invalid or missing tokens give an anonymous actor."""
    actor: dict[str, Any] = {}
    token = get_bearer_token(scope)
    if token:
        try:
            payload = verify_token(token)
        except ValueError as e:
            logger.debug("Ignoring invalid bearer token for request context: %s", e)
        else:
            actor = {
                "actor_id": str(payload["sub"]),
                "actor_name": payload.get("name"),
                "actor_email": payload.get("email"),
                "actor_role": payload.get("role"),
            }
    return RequestContext(
        ip_address=get_client_ip(scope),
        user_agent=get_header(scope, "User-Agent"),
        **actor,
    )


def _wants_body_hints(scope: dict[str, Any], ctx: RequestContext, max_bytes: int) -> bool:
    if ctx.is_authenticated or scope.get("method") not in _BODY_METHODS:
        return False
    content_type = (get_header(scope, "Content-Type") or "").lower()
    if "json" not in content_type:
        return False
    length = get_header(scope, "Content-Length")
    if length is None or not length.strip().isdigit():
        return False
    return int(length) <= max_bytes


async def _buffer_body(receive: Callable) -> tuple[bytes, list[dict[str, Any]]]:
    """Read the full request body; return it with the messages to replay."""
    messages: list[dict[str, Any]] = []
    chunks: list[bytes] = []
    while True:
        message = await receive()
        messages.append(message)
        if message["type"] != "http.request":
            break
        chunks.append(message.get("body", b""))
        if not message.get("more_body", False):
            break
    return b"".join(chunks), messages


def RequestContextMiddleware(app: Callable) -> Callable:
    """Set the per-request RequestContext for HTTP requests. Raw ASGI."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        ctx = build_request_context(scope)
        downstream_receive = receive
        if _wants_body_hints(scope, ctx, get_settings().context_body_max_bytes):
            body, replay = await _buffer_body(receive)
            ctx = ctx.with_claims(*parse_claimed_identity(body))

            async def replay_receive() -> dict[str, Any]:
                if replay:
                    return replay.pop(0)
                return await receive()

            downstream_receive = replay_receive

        with request_context(ctx):
            await app(scope, downstream_receive, send)

    return asgi_app
