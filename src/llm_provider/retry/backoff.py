"""
Backoff calculation and failure classification.
"""

import random

import httpx

from .config import RetryConfig, RetryStrategy
from ..exceptions import LLMClientError


def calculate_backoff(attempt: int, config: RetryConfig) -> float:
    """
    Calculate the delay applied before an attempt.

    Args:
        attempt: One-based number of the attempt about to run
        config: Retry configuration

    Returns:
        Delay in seconds, capped at config.max_delay (jitter applied if set)
    """
    if attempt < 1:
        raise ValueError("attempt is 1-indexed")

    if config.strategy == RetryStrategy.EXPONENTIAL:
        # Stop doubling at the cap so any attempt number stays finite.
        delay = config.initial_delay
        for _ in range(attempt - 1):
            if delay >= config.max_delay:
                break
            delay *= 2
    elif config.strategy == RetryStrategy.LINEAR:
        delay = config.initial_delay * attempt
    else:  # CONSTANT
        delay = config.initial_delay

    # Apply max delay cap
    delay = min(delay, config.max_delay)

    # Apply jitter (±jitter%)
    if config.jitter > 0:
        jitter_amount = delay * config.jitter * (2 * random.random() - 1)
        delay = min(delay + jitter_amount, config.max_delay)

    return max(0.0, delay)


def is_retryable(
    error: BaseException | None,
    status_code: int | None,
    config: RetryConfig,
) -> bool:
    """
    Decide whether a failed attempt may be retried.

    An HTTP response is retryable iff its status is in the configured set.
    Transport-level failures (refused connection, timeout, broken pipe)
    carry no status and are always retryable. Anything else falls back to
    the error's own `retryable` flag.
    """
    if status_code is not None:
        return config.should_retry(status_code)
    if isinstance(error, (httpx.TransportError, OSError)):
        return True
    if isinstance(error, LLMClientError):
        return error.retryable
    return False
