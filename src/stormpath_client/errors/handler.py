"""Error handling utilities for Stormpath HTTP responses."""

import httpx

from stormpath_client.errors.exceptions import (
    BadRequestError,
    ClientError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    ServerError,
    ServiceError,
    UnauthorizedError,
)
from stormpath_client.errors.models import ErrorDetail

EXCEPTION_MAP: dict[int, type[ServiceError]] = {
    400: BadRequestError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    409: ConflictError,
    429: RateLimitError,
}


def error_class_for_status(status_code: int) -> type[ServiceError]:
    if status_code in EXCEPTION_MAP:
        return EXCEPTION_MAP[status_code]
    if 400 <= status_code < 500:
        return ClientError
    if 500 <= status_code < 600:
        return ServerError
    return ServiceError


def raise_for_status(response: httpx.Response) -> None:
    """Raise the mapped ServiceError subclass for an unsuccessful response.

    The Stormpath error body is parsed when present; otherwise the message
    falls back to the status code and the start of the response text.

    Args:
        response: HTTP response object

    Raises:
        ServiceError subclass based on status code
    """
    if response.is_success:
        return

    status_code = response.status_code
    error_detail = ErrorDetail.from_response(response)
    exc_class = error_class_for_status(status_code)

    if error_detail:
        message = error_detail.to_exception_message()
    else:
        response_text = response.text[:200]
        message = f"HTTP {status_code}: {response_text}" if response_text else f"HTTP {status_code}"

    if exc_class is RateLimitError:
        retry_after = None
        if "retry-after" in response.headers:
            try:
                retry_after = int(response.headers["retry-after"])
            except (ValueError, TypeError):
                retry_after = None
        raise RateLimitError(
            message=message,
            retry_after=retry_after,
            status_code=status_code,
            response=response,
            error_detail=error_detail,
        )

    raise exc_class(
        message=message,
        status_code=status_code,
        response=response,
        error_detail=error_detail,
    )


def raise_for_unexpected_status(
    response: httpx.Response,
    expected_status: int,
    error_class: type[ServiceError] = ServiceError,
) -> None:
    """Raise ``error_class`` unless the response has exactly ``expected_status``.

    Unlike :func:`raise_for_status` the body must be a Stormpath error
    payload: a malformed body surfaces as the JSON decode error itself.
    """
    if response.status_code == expected_status:
        return

    error_detail = ErrorDetail.decode(response)
    raise error_class(
        error_detail.to_exception_message(),
        status_code=response.status_code,
        response=response,
        error_detail=error_detail,
    )
