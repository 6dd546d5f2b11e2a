"""
Retry controller with backoff and persistent rate-limit escalation.
"""

import asyncio
import functools
import logging
import random
from dataclasses import dataclass
from typing import Awaitable, Callable, ParamSpec, TypeVar

from ..auth import allows_escalation
from .backoff import calculate_backoff
from .classify import get_retry_after, is_rate_limit_error
from .config import RetryPolicy

logger = logging.getLogger(__name__)

P = ParamSpec("P")
T = TypeVar("T")


@dataclass
class _AttemptState:
    """Counters scoped to a single `execute` call."""

    attempt: int = 1
    consecutive_rate_limits: int = 0
    escalation_offered: bool = False
    # Attempt after which exponential backoff restarts from initial_delay
    backoff_origin: int = 0


async def _offer_escalation(
    error: Exception, policy: RetryPolicy, state: _AttemptState
) -> bool:
    """
    Invoke the escalation hook if this failure makes the caller eligible.

    Returns True when the hook accepted, after resetting the retry budget.
    A declining or failing hook leaves the state untouched apart from
    `escalation_offered`.
    """
    hook = policy.on_persistent_rate_limit
    if (
        hook is None
        or state.escalation_offered
        or state.consecutive_rate_limits < policy.rate_limit_threshold
        or not allows_escalation(policy.auth_mode)
    ):
        return False

    state.escalation_offered = True
    try:
        target = await hook(policy.auth_mode, error)
    except Exception as hook_error:
        logger.warning(f"Escalation hook failed, continuing with original error: {hook_error}")
        return False

    if not target:
        logger.info(f"Escalation declined after {state.consecutive_rate_limits} rate limits")
        return False

    logger.warning(
        f"Persistent rate limiting ({state.consecutive_rate_limits} in a row), "
        f"escalated to {target}; retry budget reset"
    )
    state.attempt = 1
    state.consecutive_rate_limits = 0
    state.backoff_origin = 0
    return True


def _next_delay(
    error: Exception,
    policy: RetryPolicy,
    state: _AttemptState,
    rng: random.Random | None,
) -> float:
    """
    Delay before the next attempt.

    A server-supplied Retry-After is used verbatim and restarts the
    exponential schedule, so the next computed backoff is `initial_delay`.
    """
    if policy.respect_retry_after:
        retry_after = get_retry_after(error)
        if retry_after is not None:
            state.backoff_origin = state.attempt
            return retry_after
    return calculate_backoff(state.attempt - state.backoff_origin, policy, rng)


async def execute(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy | None = None,
    *,
    rng: random.Random | None = None,
    sleep: Callable[[float], Awaitable[object]] | None = None,
    on_retry: Callable[[int, Exception, float], None] | None = None,
) -> T:
    """
    Run an async operation, retrying transient failures.

    Attempts are strictly sequential. Cancellation is never caught, so a
    cancelled attempt or delay stops the loop.

    Args:
        operation: Zero-argument coroutine function to invoke
        policy: Retry policy (default: RetryPolicy())
        rng: Source of randomness for jitter
        sleep: Awaitable used to wait between attempts (default: asyncio.sleep)
        on_retry: Optional callback(attempt, exception, delay) called before each retry

    Returns:
        The operation's result

    Raises:
        The last error raised by the operation, unchanged, once it is
        classified non-retryable or the attempt budget is exhausted.
    """
    if policy is None:
        policy = RetryPolicy()
    if sleep is None:
        sleep = asyncio.sleep

    state = _AttemptState()

    while True:
        try:
            return await operation()
        except Exception as e:
            error = e

        if not policy.should_retry(error):
            raise error

        if is_rate_limit_error(error):
            state.consecutive_rate_limits += 1
        else:
            state.consecutive_rate_limits = 0

        if await _offer_escalation(error, policy, state):
            continue

        if state.attempt >= policy.max_attempts:
            logger.error(f"All {policy.max_attempts} attempts failed: {error}")
            raise error

        delay = _next_delay(error, policy, state, rng)
        if on_retry:
            on_retry(state.attempt, error, delay)
        else:
            logger.warning(
                f"Retry {state.attempt}/{policy.max_attempts - 1}: {error}, "
                f"waiting {delay:.1f}s"
            )
        await sleep(delay)
        state.attempt += 1


def async_with_retry(
    policy: RetryPolicy | None = None,
    *,
    rng: random.Random | None = None,
    on_retry: Callable[[int, Exception, float], None] | None = None,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """
    Decorator for async functions with retry logic.

    Each attempt calls the decorated function again with the same arguments.

    Args:
        policy: Retry policy (default: RetryPolicy())
        rng: Source of randomness for jitter
        on_retry: Optional callback(attempt, exception, delay) called before each retry

    Returns:
        Decorated async function with retry behavior
    """

    def decorator(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            return await execute(
                lambda: func(*args, **kwargs),
                policy,
                rng=rng,
                on_retry=on_retry,
            )

        return wrapper

    return decorator
