"""
LLM Retry - Resilient calls to rate-limited services.

Exponential backoff with jitter, escalation to a fallback model under
persistent rate limiting, and conversation checkpoints.
"""

from .auth import AuthMode, allows_escalation
from .checkpoint import CheckpointStore
from .exceptions import (
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
)
from .fallback import ModelFallback
from .retry import RetryPolicy, async_with_retry, calculate_backoff, execute

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Auth
    "AuthMode",
    "allows_escalation",
    # Exceptions
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
    # Retry
    "RetryPolicy",
    "execute",
    "async_with_retry",
    "calculate_backoff",
    # Fallback
    "ModelFallback",
    # Checkpoints
    "CheckpointStore",
]
