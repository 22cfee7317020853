"""Custom exception hierarchy for the Hetzner Cloud client."""
from __future__ import annotations

from typing import Any


class HetznerCloudError(RuntimeError):
    """Base error for Hetzner Cloud client failures."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        details: Any | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details


class ValidationError(HetznerCloudError):
    """Raised when caller-supplied options fail validation."""

    def __init__(self, message: str, *, option: str | None = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.option = option


class SerializationError(HetznerCloudError):
    """Raised when request parameters cannot be encoded into a body."""


class TransportError(HetznerCloudError):
    """Raised when the HTTP transport cannot complete a request."""


class UnexpectedResponseError(HetznerCloudError):
    """Raised when the API returns an unexpected payload structure."""


class ApiError(HetznerCloudError):
    """Raised for every non-2xx response returned by the API."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        error_code: str | None = None,
        raw_body: bytes | None = None,
        details: Any | None = None,
    ) -> None:
        super().__init__(message, status_code=status_code, details=details)
        self.error_code = error_code
        self.raw_body = raw_body


class AuthenticationError(ApiError):
    """401: the API token is missing or invalid."""


class ForbiddenError(ApiError):
    """403: the token lacks the required permissions."""


class NotFoundError(ApiError):
    """404: the resource does not exist."""


class ConflictError(ApiError):
    """409: the resource was changed by a concurrent action."""


class InvalidInputError(ApiError):
    """422: the API rejected the request payload."""


class RateLimitError(ApiError):
    """429: the rate limit of the project was exceeded."""


class ServerError(ApiError):
    """5xx: the API failed to handle the request."""


STATUS_ERRORS: dict[int, type[ApiError]] = {
    401: AuthenticationError,
    403: ForbiddenError,
    404: NotFoundError,
    409: ConflictError,
    422: InvalidInputError,
    429: RateLimitError,
}


def error_class_for_status(status_code: int) -> type[ApiError]:
    """Return the `ApiError` subclass matching an HTTP status code."""

    if status_code in STATUS_ERRORS:
        return STATUS_ERRORS[status_code]
    if 500 <= status_code < 600:
        return ServerError
    return ApiError
