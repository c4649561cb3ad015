"""Error taxonomy and response handling for the Stormpath client."""

from stormpath_client.errors.exceptions import (
    ApplicationCreationError,
    BadRequestError,
    ClientError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ProtocolError,
    RateLimitError,
    ResponseDecodeError,
    ServerError,
    ServiceError,
    StormpathError,
    TenantDiscoveryError,
    UnauthorizedError,
)
from stormpath_client.errors.handler import raise_for_status, raise_for_unexpected_status
from stormpath_client.errors.models import ErrorDetail

__all__ = [
    "ApplicationCreationError",
    "BadRequestError",
    "ClientError",
    "ConflictError",
    "ErrorDetail",
    "ForbiddenError",
    "NotFoundError",
    "ProtocolError",
    "RateLimitError",
    "ResponseDecodeError",
    "ServerError",
    "ServiceError",
    "StormpathError",
    "TenantDiscoveryError",
    "UnauthorizedError",
    "raise_for_status",
    "raise_for_unexpected_status",
]
