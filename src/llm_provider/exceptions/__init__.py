"""
LLM Provider - Exception Hierarchy.

Custom exceptions for LLM client operations with retry-awareness.
"""

from .base import (
    LLMClientError,
    MissingCredentialError,
    ConfigurationError,
    RateLimitError,
    ConnectionError,
    TimeoutError,
    APIError,
    AuthenticationError,
    ModelNotFoundError,
    InvalidRequestError,
    ServerError,
    DecodeError,
    StreamTruncatedError,
    RetryExhaustedError,
    ValidationError,
)
from .http import error_from_status, parse_retry_after

__all__ = [
    "LLMClientError",
    "MissingCredentialError",
    "ConfigurationError",
    "RateLimitError",
    "ConnectionError",
    "TimeoutError",
    "APIError",
    "AuthenticationError",
    "ModelNotFoundError",
    "InvalidRequestError",
    "ServerError",
    "DecodeError",
    "StreamTruncatedError",
    "RetryExhaustedError",
    "ValidationError",
    "error_from_status",
    "parse_retry_after",
]
