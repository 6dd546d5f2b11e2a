"""
Backoff delay calculation.
"""

import random

from .config import RetryPolicy


def base_delay(retry_number: int, policy: RetryPolicy) -> float:
    """
    Nominal delay before a retry, without jitter.

    Args:
        retry_number: One-based retry number (1 = first retry after the first failure)
        policy: Retry policy

    Returns:
        `initial_delay * 2 ** (retry_number - 1)` capped at `max_delay`
    """
    exponent = max(retry_number - 1, 0)
    # 2**64 already exceeds any sane cap; larger exponents would overflow float
    if exponent >= 64:
        return policy.max_delay if policy.initial_delay > 0 else 0.0
    return min(policy.initial_delay * (2**exponent), policy.max_delay)


def calculate_backoff(
    retry_number: int,
    policy: RetryPolicy,
    rng: random.Random | None = None,
) -> float:
    """
    Calculate the delay before a retry.

    The cap is applied to the base delay before jitter, so jittered values
    can reach `(1 + jitter) * max_delay`.

    Args:
        retry_number: One-based retry number
        policy: Retry policy
        rng: Source of randomness (default: the `random` module)

    Returns:
        Delay in seconds with jitter applied
    """
    delay = base_delay(retry_number, policy)

    if policy.jitter > 0:
        source = rng if rng is not None else random
        delay *= source.uniform(1 - policy.jitter, 1 + policy.jitter)

    return max(0.0, delay)
