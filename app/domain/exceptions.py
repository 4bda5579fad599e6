"""Domain exceptions for LeagueDesk.

Raised by services and repositories; app.core.exception_handlers turns
them into HTTP responses by error_code. The activity log write path
never raises any of these to its callers.
"""

from typing import Any


class LeagueDeskException(Exception):
    """Root of every LeagueDesk error.

    The API renders message, error_code and details as the error body.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the error body rendered by the API exception handler."""
        body: dict[str, Any] = {"message": self.message, "code": self.error_code}
        if self.details:
            body["details"] = self.details
        return {"errors": body}


class ValidationException(LeagueDeskException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(LeagueDeskException):
    """Raised when the caller is not authenticated (missing or invalid token)."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(LeagueDeskException):
    """Raised when the caller lacks the role required for the operation."""

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        message: str = "Access denied",
    ) -> None:
        """Initialize with optional resource, action, and message.

        Args:
            resource: Optional resource type (e.g. 'activity_log').
            action: Optional action that was attempted (e.g. 'read').
            message: Human-readable message returned to the caller.
        """
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(LeagueDeskException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class SqlNotConfiguredException(LeagueDeskException):
    """Raised when an operation requires the SQL database but none is configured."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )


class ActivityLogStoreUnavailableException(LeagueDeskException):
    """Raised on the activity log read path when the store cannot be queried."""

    def __init__(self, reason: str | None = None) -> None:
        super().__init__(
            message="Activity log store is unavailable.",
            error_code="ACTIVITY_LOG_UNAVAILABLE",
            details={"reason": reason} if reason else None,
        )
