"""Request context management using contextvars.

Ambient, per-request storage of actor identity and network provenance.
A ContextVar is copied into every asyncio task created while it is set,
so the context follows the request across await points and into
background tasks without being threaded through function signatures,
and concurrent requests never observe each other's values.

Usage:
    with request_context(RequestContext(actor_id="42", actor_role="admin")):
        ctx = get_request_context()

    await run_with_context(ctx, some_coroutine_function, arg)
"""

from collections.abc import Awaitable, Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, replace
from typing import ParamSpec, TypeVar

P = ParamSpec("P")
R = TypeVar("R")

_current_request: ContextVar["RequestContext | None"] = ContextVar(
    "current_request", default=None
)


@dataclass(frozen=True)
class RequestContext:
    """Immutable snapshot of who is making the current request and from where.

    claimed_email / claimed_name come from the request body of
    unauthenticated calls (login, self-registration) and are only used as
    an attribution fallback.
    """

    actor_id: str | None = None
    actor_name: str | None = None
    actor_role: str | None = None
    actor_email: str | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    claimed_email: str | None = None
    claimed_name: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.actor_id is not None

    def with_claims(self, email: str | None, name: str | None) -> "RequestContext":
        """Return a copy carrying body-supplied identity hints."""
        return replace(self, claimed_email=email, claimed_name=name)


def get_request_context() -> RequestContext | None:
    """Return the context of the in-flight request, or None outside any request."""
    return _current_request.get()


@contextmanager
def request_context(ctx: RequestContext) -> Iterator[RequestContext]:
    """Install ctx for the enclosed block and restore the previous value on exit."""
    token = _current_request.set(ctx)
    try:
        yield ctx
    finally:
        _current_request.reset(token)


async def run_with_context(
    ctx: RequestContext,
    fn: Callable[P, Awaitable[R]],
    *args: P.args,
    **kwargs: P.kwargs,
) -> R:
    """Await fn(*args, **kwargs) with ctx as the current request context."""
    with request_context(ctx):
        return await fn(*args, **kwargs)
