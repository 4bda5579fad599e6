"""FastAPI exception handlers.

Every error leaves the API as {"errors": {"message": ..., "code": ...}},
optionally with "details". Register once with register_exception_handlers(app).
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import get_settings
from app.domain.exceptions import LeagueDeskException

logger = logging.getLogger(__name__)

# Domain error_code -> HTTP status; unknown codes answer 400.
_ERROR_CODE_STATUS: dict[str, int] = {
    "RESOURCE_NOT_FOUND": 404,
    "AUTHENTICATION_ERROR": 401,
    "PERMISSION_DENIED": 403,
    "VALIDATION_ERROR": 400,
    "SERVICE_UNAVAILABLE": 500,
    "ACTIVITY_LOG_UNAVAILABLE": 500,
}


def _error_body(message: Any, code: str, details: Any = None) -> dict[str, Any]:
    errors: dict[str, Any] = {"message": message, "code": code}
    if details:
        errors["details"] = details
    return {"errors": errors}


def _leaguedesk_exception_handler(
    request: Request, exc: LeagueDeskException
) -> JSONResponse:
    """Domain errors. 5xx details (driver messages) are shown only in debug."""
    status = _ERROR_CODE_STATUS.get(exc.error_code, 400)
    body = exc.to_dict()
    if status >= 500:
        logger.error("%s: %s %s", exc.error_code, exc.message, exc.details)
        if not get_settings().debug:
            body["errors"].pop("details", None)
    headers = {"WWW-Authenticate": "Bearer"} if status == 401 else None
    return JSONResponse(status_code=status, content=body, headers=headers)


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content=_error_body(
            "Request validation failed",
            "VALIDATION_ERROR",
            jsonable_encoder(exc.errors()),
        ),
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.detail, "HTTP_ERROR"),
        headers=getattr(exc, "headers", None),
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Anything unexpected is a 500; the message is hidden unless debug."""
    logger.exception("Unhandled exception: %s", exc)
    message = str(exc) if get_settings().debug else "Internal server error"
    return JSONResponse(status_code=500, content=_error_body(message, "INTERNAL_ERROR"))


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers for domain, validation, HTTP and unexpected errors."""
    app.add_exception_handler(LeagueDeskException, _leaguedesk_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
