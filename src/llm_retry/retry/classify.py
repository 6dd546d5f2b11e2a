"""
Error classification used by the retry controller.

Two separate questions are answered here: whether a failure may be retried
at all, and whether it counts as a rate limit toward escalation.
"""

import math

from ..exceptions import RateLimitError, parse_retry_after

RATE_LIMIT_STATUS = 429


def get_status_code(error: BaseException) -> int | None:
    """
    Extract a numeric HTTP-like status from an error.

    Looks at `status_code`, then `status`, then `response.status_code`
    (which covers `httpx.HTTPStatusError`).
    """
    for attr in ("status_code", "status"):
        value = getattr(error, attr, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value

    response = getattr(error, "response", None)
    value = getattr(response, "status_code", None)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


def default_should_retry(error: Exception) -> bool:
    """Retry on 429 and 5xx; fall back to the error's own `retryable` flag."""
    status = get_status_code(error)
    if status is not None:
        return status == RATE_LIMIT_STATUS or 500 <= status <= 599
    return getattr(error, "retryable", False) is True


def is_rate_limit_error(error: Exception) -> bool:
    """Check whether a failure counts toward consecutive rate limiting."""
    if isinstance(error, RateLimitError):
        return True
    return get_status_code(error) == RATE_LIMIT_STATUS


def get_retry_after(error: Exception) -> float | None:
    """Server-supplied wait in seconds, from the error or its httpx response."""
    retry_after = getattr(error, "retry_after", None)
    if isinstance(retry_after, (int, float)) and not isinstance(retry_after, bool):
        if not math.isfinite(retry_after) or retry_after < 0:
            return None
        return float(retry_after)

    response = getattr(error, "response", None)
    headers = getattr(response, "headers", None)
    if headers is None:
        return None
    return parse_retry_after(headers.get("Retry-After"))
