"""
LLM Provider - Retry Logic.

Bounded exponential backoff and retryable-failure classification.
"""

from .config import DEFAULT_RETRYABLE_STATUS_CODES, RetryConfig, RetryStrategy
from .backoff import calculate_backoff, is_retryable

__all__ = [
    "DEFAULT_RETRYABLE_STATUS_CODES",
    "RetryConfig",
    "RetryStrategy",
    "calculate_backoff",
    "is_retryable",
]
