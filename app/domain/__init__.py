"""Domain layer: exceptions shared by application, infrastructure and API.

No dependencies on infrastructure or presentation.
"""

from app.domain.exceptions import (
    ActivityLogStoreUnavailableException,
    AuthenticationException,
    AuthorizationException,
    LeagueDeskException,
    ResourceNotFoundException,
    SqlNotConfiguredException,
    ValidationException,
)

__all__ = [
    "ActivityLogStoreUnavailableException",
    "AuthenticationException",
    "AuthorizationException",
    "LeagueDeskException",
    "ResourceNotFoundException",
    "SqlNotConfiguredException",
    "ValidationException",
]
