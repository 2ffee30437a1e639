"""
LLM Provider - Resilient completion client.

Rate-limited, retrying, streaming access to LLM backends behind the
Anthropic Messages and OpenAI-compatible wire protocols.
"""

from .clients import Client
from .config import ProviderSettings, create_compat_client, create_native_client
from .exceptions import (
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
from .ratelimit import RateLimiter
from .retry import RetryConfig, RetryStrategy, calculate_backoff, is_retryable
from .streaming import StreamDecoder
from .transports import (
    AnthropicModel,
    CompatModel,
    CompatTransport,
    NativeTransport,
    ProviderTransport,
    Vendor,
)
from .types import Message, Request, Response, Role, StreamEvent, StreamEventKind

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Client
    "Client",
    "ProviderSettings",
    "create_native_client",
    "create_compat_client",
    # Types
    "Message",
    "Role",
    "Request",
    "Response",
    "StreamEvent",
    "StreamEventKind",
    # Transports
    "ProviderTransport",
    "NativeTransport",
    "CompatTransport",
    "AnthropicModel",
    "CompatModel",
    "Vendor",
    # Exceptions
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
    # Retry and rate limiting
    "RetryConfig",
    "RetryStrategy",
    "calculate_backoff",
    "is_retryable",
    "RateLimiter",
    "StreamDecoder",
]
