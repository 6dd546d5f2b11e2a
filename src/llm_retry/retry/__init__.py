"""
LLM Retry - Retry Logic.

Exponential backoff with jitter and one-shot escalation on persistent
rate limiting.
"""

from .classify import (
    default_should_retry,
    get_retry_after,
    get_status_code,
    is_rate_limit_error,
)
from .config import EscalationHook, RetryPolicy
from .backoff import base_delay, calculate_backoff
from .controller import execute, async_with_retry

__all__ = [
    "RetryPolicy",
    "EscalationHook",
    "base_delay",
    "calculate_backoff",
    "default_should_retry",
    "get_retry_after",
    "get_status_code",
    "is_rate_limit_error",
    "execute",
    "async_with_retry",
]
