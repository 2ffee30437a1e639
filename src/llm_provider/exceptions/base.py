"""
Base exception classes for LLM provider operations.

Each exception includes a `retryable` flag indicating whether the operation
can be safely retried with the same parameters. HTTP-derived errors take
their flag from the client's retry configuration; the class default only
applies when no status code is involved.
"""


class LLMClientError(Exception):
    """Base exception for all LLM client errors."""

    default_retryable = False

    def __init__(
        self,
        message: str,
        *,
        retryable: bool | None = None,
        status_code: int | None = None,
        provider: str | None = None,
        operation: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.retryable = self.default_retryable if retryable is None else retryable
        self.status_code = status_code
        self.provider = provider
        self.operation = operation

    def __str__(self) -> str:
        parts = [self.message]
        if self.operation:
            parts.insert(0, f"{self.operation}:")
        if self.provider:
            parts.insert(0, f"[{self.provider}]")
        if self.status_code:
            parts.append(f"(status: {self.status_code})")
        return " ".join(parts)


class MissingCredentialError(LLMClientError):
    """Raised at construction when the provider credential is absent."""

    def __init__(self, message: str = "API key not configured", *, env_var: str | None = None, **kwargs):
        if env_var and message == "API key not configured":
            message = f"{env_var} environment variable not set"
        super().__init__(message, **kwargs)
        self.env_var = env_var


class ConfigurationError(LLMClientError):
    """Raised at construction when the client configuration is invalid."""

    def __init__(self, message: str = "Invalid configuration", **kwargs):
        super().__init__(message, **kwargs)


class RateLimitError(LLMClientError):
    """Raised on HTTP 429. Retryable under the default configuration."""

    default_retryable = True

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        *,
        retry_after: float | None = None,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        self.retry_after = retry_after


class ConnectionError(LLMClientError):
    """Raised when connection to the LLM service fails. Always retryable."""

    default_retryable = True

    def __init__(self, message: str = "Connection failed", **kwargs):
        super().__init__(message, **kwargs)


class TimeoutError(LLMClientError):
    """Raised when a single attempt times out. Always retryable."""

    default_retryable = True

    def __init__(self, message: str = "Request timed out", **kwargs):
        super().__init__(message, **kwargs)


class APIError(LLMClientError):
    """Raised for a non-2xx response without a more specific class."""

    def __init__(self, message: str = "API error", **kwargs):
        super().__init__(message, **kwargs)


class AuthenticationError(APIError):
    """Raised when authentication fails."""

    def __init__(self, message: str = "Authentication failed", **kwargs):
        super().__init__(message, **kwargs)


class ModelNotFoundError(APIError):
    """Raised when the requested model is not available."""

    def __init__(self, message: str = "Model not found", model: str | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.model = model


class InvalidRequestError(APIError):
    """Raised when the request is malformed."""

    def __init__(self, message: str = "Invalid request", **kwargs):
        super().__init__(message, **kwargs)


class ServerError(APIError):
    """Raised when the server returns a 5xx error."""

    default_retryable = True

    def __init__(self, message: str = "Server error", **kwargs):
        super().__init__(message, **kwargs)


class DecodeError(LLMClientError):
    """Raised when a response body or stream event cannot be decoded. Not retryable."""

    def __init__(self, message: str = "Malformed response", **kwargs):
        super().__init__(message, **kwargs)


class StreamTruncatedError(LLMClientError):
    """Raised when a stream ends before its terminal event. Not retryable."""

    def __init__(self, message: str = "Stream ended without terminal event", **kwargs):
        super().__init__(message, **kwargs)


class RetryExhaustedError(LLMClientError):
    """Raised when every attempt failed with a retryable error."""

    def __init__(self, attempts: int, last_error: LLMClientError, **kwargs):
        kwargs.setdefault("status_code", last_error.status_code)
        kwargs.setdefault("provider", last_error.provider)
        super().__init__(
            f"max retry attempts reached after {attempts} attempts: {last_error.message}",
            retryable=False,
            **kwargs,
        )
        self.attempts = attempts
        self.last_error = last_error


class ValidationError(LLMClientError):
    """Raised when the credential/endpoint liveness probe fails."""

    def __init__(self, message: str = "validation failed", **kwargs):
        super().__init__(message, retryable=False, **kwargs)
