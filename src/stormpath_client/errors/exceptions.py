"""Structured exceptions for Stormpath client errors."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx

    from stormpath_client.errors.models import ErrorDetail


class StormpathError(Exception):
    """Base exception for every error raised by this package."""

    pass


class ProtocolError(StormpathError):
    """The service answered in a way the client protocol does not allow."""

    def __init__(self, message: str, response: "httpx.Response | None" = None):
        super().__init__(message)
        self.response = response


class TenantDiscoveryError(ProtocolError):
    """The current-tenant lookup did not redirect to a tenant."""

    pass


class ResponseDecodeError(StormpathError, ValueError):
    """A JSON body does not have the shape of the expected resource."""

    pass


class ServiceError(StormpathError):
    """A well-formed error response from the Stormpath API."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response: "httpx.Response | None" = None,
        error_detail: "ErrorDetail | None" = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response = response
        self.error_detail = error_detail

    @property
    def developer_message(self) -> str | None:
        return self.error_detail.developer_message if self.error_detail else None

    @property
    def more_info(self) -> str | None:
        return self.error_detail.more_info if self.error_detail else None


class ClientError(ServiceError):
    """4xx client errors."""

    pass


class BadRequestError(ClientError):
    """400 Bad Request."""

    pass


class UnauthorizedError(ClientError):
    """401 Unauthorized."""

    pass


class ForbiddenError(ClientError):
    """403 Forbidden."""

    pass


class NotFoundError(ClientError):
    """404 Not Found."""

    pass


class ConflictError(ClientError):
    """409 Conflict."""

    pass


class RateLimitError(ClientError):
    """429 Too Many Requests."""

    def __init__(self, message: str, retry_after: int | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.retry_after = retry_after


class ServerError(ServiceError):
    """5xx server errors."""

    pass


class ApplicationCreationError(ServiceError):
    """Creating an application did not answer 201 Created."""

    pass
