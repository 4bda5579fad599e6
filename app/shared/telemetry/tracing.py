"""Span helpers used around the activity log write and query paths."""

import dataclasses
import inspect
from collections.abc import Callable
from enum import Enum
from functools import wraps
from typing import Any

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

# Only these argument names are copied onto spans; anything else may carry PII.
_SAFE_SPAN_ATTR_KEYS = frozenset({
    "action", "entity_type", "entity_id", "page", "limit", "sort_order", "count",
})


def _span_value(value: Any) -> str | None:
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (str, int, float)):
        return str(value)
    return None


def _set_safe_span_attrs(span: trace.Span, arguments: dict[str, Any]) -> None:
    """Copy safe arguments onto span; dataclass arguments contribute their fields."""
    for key, value in arguments.items():
        if dataclasses.is_dataclass(value) and not isinstance(value, type):
            _set_safe_span_attrs(
                span, {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
            )
            continue
        if key.lower() not in _SAFE_SPAN_ATTR_KEYS:
            continue
        text = _span_value(value)
        if text is not None:
            span.set_attribute(f"arg.{key}", text)


def _bound_arguments(
    signature: inspect.Signature, args: tuple[Any, ...], kwargs: dict[str, Any]
) -> dict[str, Any]:
    """Arguments by parameter name, whether passed positionally or by keyword."""
    try:
        return dict(signature.bind_partial(*args, **kwargs).arguments)
    except TypeError:
        return dict(kwargs)


def traced(operation_name: str | None = None) -> Callable:
    """Decorator: run an async function inside a span named operation_name.

    Exceptions are recorded on the span and re-raised.
    """

    def decorator(func: Callable) -> Callable:
        if not inspect.iscoroutinefunction(func):
            raise TypeError("traced() only decorates coroutine functions")
        span_name = operation_name or f"{func.__module__}.{func.__qualname__}"
        signature = inspect.signature(func)

        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            tracer = trace.get_tracer(func.__module__)
            with tracer.start_as_current_span(span_name) as span:
                _set_safe_span_attrs(span, _bound_arguments(signature, args, kwargs))
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    set_span_error(e, span)
                    raise
                span.set_status(Status(StatusCode.OK))
                return result

        return wrapper

    return decorator


def set_span_error(exception: Exception, span: trace.Span | None = None) -> None:
    """Mark span (default: current) as failed and record the exception."""
    span = span or trace.get_current_span()
    if span.is_recording():
        span.set_status(Status(StatusCode.ERROR, str(exception)))
        span.record_exception(exception)
