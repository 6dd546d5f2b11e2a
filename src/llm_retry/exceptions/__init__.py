"""
LLM Retry - Exception Hierarchy.

Status-aware exceptions for remote service calls with retry-awareness.
"""

from .base import (
    ServiceError,
    RateLimitError,
    ConnectionError,
    TimeoutError,
    AuthenticationError,
    ModelNotFoundError,
    InvalidRequestError,
    ServerError,
    error_from_response,
    error_from_status,
    parse_retry_after,
)

__all__ = [
    "ServiceError",
    "RateLimitError",
    "ConnectionError",
    "TimeoutError",
    "AuthenticationError",
    "ModelNotFoundError",
    "InvalidRequestError",
    "ServerError",
    "error_from_response",
    "error_from_status",
    "parse_retry_after",
]
