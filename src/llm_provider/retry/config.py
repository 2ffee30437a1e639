"""
Retry configuration and strategy definitions.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet


class RetryStrategy(str, Enum):
    """Available retry strategies."""

    EXPONENTIAL = "exponential"  # delay = initial * 2 ** (attempt - 1)
    LINEAR = "linear"  # delay = initial * attempt
    CONSTANT = "constant"  # delay = initial


DEFAULT_RETRYABLE_STATUS_CODES: FrozenSet[int] = frozenset({429, 500, 502, 503, 504})


@dataclass(frozen=True)
class RetryConfig:
    """
    Configuration for retry behavior. Immutable once a client holds it.

    Attributes:
        max_attempts: Total attempts including the first one (default: 3)
        initial_delay: Delay in seconds after the first failed attempt (default: 1.0)
        max_delay: Maximum delay cap in seconds (default: 10.0)
        strategy: Backoff strategy to use (default: exponential)
        jitter: Jitter factor as fraction of delay (default: 0, deterministic)
        retryable_status_codes: HTTP status codes that trigger retry
    """

    max_attempts: int = 3
    initial_delay: float = 1.0
    max_delay: float = 10.0
    strategy: RetryStrategy = RetryStrategy.EXPONENTIAL
    jitter: float = 0.0
    retryable_status_codes: FrozenSet[int] = field(
        default_factory=lambda: DEFAULT_RETRYABLE_STATUS_CODES
    )

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.initial_delay < 0 or self.max_delay < 0:
            raise ValueError("delays cannot be negative")
        if not 0 <= self.jitter <= 1:
            raise ValueError("jitter must be between 0 and 1")
        # Accept any iterable of codes but store a frozenset.
        object.__setattr__(
            self, "retryable_status_codes", frozenset(self.retryable_status_codes)
        )

    def should_retry(self, status_code: int) -> bool:
        """Check if the given status code should trigger a retry."""
        return status_code in self.retryable_status_codes

    @classmethod
    def aggressive(cls) -> "RetryConfig":
        """Preset for aggressive retry (more attempts, longer delays)."""
        return cls(
            max_attempts=10,
            initial_delay=2.0,
            max_delay=120.0,
        )

    @classmethod
    def conservative(cls) -> "RetryConfig":
        """Preset for conservative retry (fewer attempts, shorter delays)."""
        return cls(
            max_attempts=2,
            initial_delay=0.5,
            max_delay=5.0,
        )

    @classmethod
    def no_retry(cls) -> "RetryConfig":
        """Preset for no retry (single attempt only)."""
        return cls(max_attempts=1)
