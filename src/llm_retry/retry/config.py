"""
Retry policy definition.
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from ..auth import AuthMode
from .classify import default_should_retry

EscalationHook = Callable[[AuthMode | str | None, Exception], Awaitable[Any]]


@dataclass(frozen=True)
class RetryPolicy:
    """
    Configuration for retry behavior.

    Attributes:
        max_attempts: Total attempts including the first (default: 5)
        initial_delay: Base delay in seconds before the first retry (default: 5.0)
        max_delay: Cap on the base delay in seconds (default: 30.0)
        jitter: Jitter factor as fraction of delay (default: 0.3 = ±30%)
        should_retry: Predicate deciding whether a failure is retryable
        on_persistent_rate_limit: Async hook(auth_mode, error) offered once
            consecutive rate limits reach the threshold; a truthy result
            accepts the escalation
        auth_mode: How the caller is authenticated; API-key mode never escalates
        rate_limit_threshold: Consecutive rate limits before escalation (default: 2)
        respect_retry_after: Wait the server-supplied Retry-After when present
    """

    max_attempts: int = 5
    initial_delay: float = 5.0
    max_delay: float = 30.0
    jitter: float = 0.3
    should_retry: Callable[[Exception], bool] = default_should_retry
    on_persistent_rate_limit: EscalationHook | None = None
    auth_mode: AuthMode | str | None = None
    rate_limit_threshold: int = 2
    respect_retry_after: bool = True

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {self.max_attempts}")
        if self.initial_delay < 0 or self.max_delay < 0:
            raise ValueError("delays must not be negative")
        if not 0 <= self.jitter < 1:
            raise ValueError(f"jitter must be in [0, 1), got {self.jitter}")
        if self.rate_limit_threshold < 1:
            raise ValueError(
                f"rate_limit_threshold must be at least 1, got {self.rate_limit_threshold}"
            )

    @classmethod
    def aggressive(cls, **overrides: Any) -> "RetryPolicy":
        """Preset for aggressive retry (more attempts, longer delays)."""
        return cls(**{"max_attempts": 10, "initial_delay": 2.0, "max_delay": 120.0, **overrides})

    @classmethod
    def conservative(cls, **overrides: Any) -> "RetryPolicy":
        """Preset for conservative retry (fewer attempts, shorter delays)."""
        return cls(**{"max_attempts": 3, "initial_delay": 0.5, "max_delay": 10.0, **overrides})

    @classmethod
    def no_retry(cls, **overrides: Any) -> "RetryPolicy":
        """Preset for no retry (single attempt only)."""
        return cls(**{"max_attempts": 1, **overrides})
