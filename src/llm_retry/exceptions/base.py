"""
Base exception classes for remote service calls.

Each exception carries the HTTP-like status it was raised for and a
`retryable` flag indicating whether the same call can safely be repeated.
"""

import math

import httpx


class ServiceError(Exception):
    """Base exception for all remote service errors."""

    def __init__(
        self,
        message: str,
        *,
        retryable: bool = False,
        status_code: int | None = None,
        provider: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.retryable = retryable
        self.status_code = status_code
        self.provider = provider

    def __str__(self) -> str:
        parts = [self.message]
        if self.provider:
            parts.insert(0, f"[{self.provider}]")
        if self.status_code:
            parts.append(f"(status: {self.status_code})")
        return " ".join(parts)


class RateLimitError(ServiceError):
    """Raised when the service rejects a call with 429. Always retryable."""

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        *,
        retry_after: float | None = None,
        status_code: int | None = 429,
        **kwargs,
    ):
        super().__init__(message, retryable=True, status_code=status_code, **kwargs)
        self.retry_after = retry_after


class ConnectionError(ServiceError):
    """Raised when the service cannot be reached. Usually retryable."""

    def __init__(self, message: str = "Connection failed", **kwargs):
        super().__init__(message, retryable=True, **kwargs)


class TimeoutError(ServiceError):
    """Raised when a call times out. Usually retryable."""

    def __init__(self, message: str = "Request timed out", **kwargs):
        super().__init__(message, retryable=True, **kwargs)


class AuthenticationError(ServiceError):
    """Raised when credentials are rejected. Not retryable."""

    def __init__(self, message: str = "Authentication failed", **kwargs):
        super().__init__(message, retryable=False, **kwargs)


class ModelNotFoundError(ServiceError):
    """Raised when the requested model is not available. Not retryable."""

    def __init__(self, message: str = "Model not found", model: str | None = None, **kwargs):
        super().__init__(message, retryable=False, **kwargs)
        self.model = model


class InvalidRequestError(ServiceError):
    """Raised when the request is malformed. Not retryable."""

    def __init__(self, message: str = "Invalid request", **kwargs):
        super().__init__(message, retryable=False, **kwargs)


class ServerError(ServiceError):
    """Raised when the service returns a 5xx error. Usually retryable."""

    def __init__(self, message: str = "Server error", **kwargs):
        super().__init__(message, retryable=True, **kwargs)


def parse_retry_after(value: str | None) -> float | None:
    """Parse a Retry-After header given in seconds. HTTP dates are ignored."""
    if not value:
        return None
    try:
        seconds = float(value.strip())
    except ValueError:
        return None
    if not math.isfinite(seconds) or seconds < 0:
        return None
    return seconds


def error_from_status(
    status_code: int,
    message: str = "",
    *,
    provider: str | None = None,
    retry_after: float | None = None,
) -> ServiceError:
    """
    Map an HTTP status code to the matching domain exception.

    Args:
        status_code: Status returned by the service
        message: Optional detail (usually the response body)
        provider: Provider name for error context
        retry_after: Server-supplied wait in seconds, kept on rate limit errors

    Returns:
        The exception instance (not raised)
    """
    detail = f": {message}" if message else ""
    if status_code == 429:
        return RateLimitError(
            f"Rate limit exceeded{detail}",
            retry_after=retry_after,
            provider=provider,
            status_code=status_code,
        )
    if status_code in (401, 403):
        return AuthenticationError(
            f"Authentication failed{detail}",
            provider=provider,
            status_code=status_code,
        )
    if status_code == 404:
        return ModelNotFoundError(
            f"Model not found{detail}",
            provider=provider,
            status_code=status_code,
        )
    if 500 <= status_code <= 599:
        return ServerError(
            f"Server error{detail}",
            provider=provider,
            status_code=status_code,
        )
    if 400 <= status_code <= 499:
        return InvalidRequestError(
            f"Invalid request{detail}",
            provider=provider,
            status_code=status_code,
        )
    return ServiceError(
        f"Unexpected status{detail}",
        provider=provider,
        status_code=status_code,
    )


def error_from_response(
    response: httpx.Response, *, provider: str | None = None
) -> ServiceError:
    """Convert a failed httpx response to a domain exception."""
    return error_from_status(
        response.status_code,
        response.text,
        provider=provider,
        retry_after=parse_retry_after(response.headers.get("Retry-After")),
    )
