"""
Mapping from HTTP error responses to domain exceptions.
"""

from typing import Collection, Mapping

from .base import (
    APIError,
    AuthenticationError,
    InvalidRequestError,
    LLMClientError,
    ModelNotFoundError,
    RateLimitError,
    ServerError,
)

# Longest response body excerpt carried in an error message.
_MAX_BODY_EXCERPT = 500


def parse_retry_after(headers: Mapping[str, str] | None) -> float | None:
    """Return the Retry-After header in seconds, if present and numeric."""
    if not headers:
        return None
    value = headers.get("retry-after") or headers.get("Retry-After")
    if value is None:
        return None
    try:
        return max(0.0, float(value))
    except ValueError:
        return None


def error_from_status(
    status_code: int,
    body: str = "",
    *,
    retryable_status_codes: Collection[int],
    provider: str | None = None,
    headers: Mapping[str, str] | None = None,
) -> LLMClientError:
    """
    Convert a non-2xx response into a domain exception.

    The exception class reflects the status, while retryability is decided
    solely by membership in `retryable_status_codes`.

    Args:
        status_code: HTTP status of the response
        body: Response body text, truncated into the message
        retryable_status_codes: Statuses the client is configured to retry
        provider: Provider name for the error prefix
        headers: Response headers, consulted for Retry-After

    Returns:
        The exception to raise (not raised here)
    """
    detail = body.strip()[:_MAX_BODY_EXCERPT]
    kwargs = {
        "retryable": status_code in retryable_status_codes,
        "status_code": status_code,
        "provider": provider,
    }

    if status_code in (401, 403):
        return AuthenticationError("Invalid API key", **kwargs)
    if status_code == 404:
        return ModelNotFoundError("Model not found", **kwargs)
    if status_code in (400, 422):
        return InvalidRequestError(f"Invalid request: {detail}", **kwargs)
    if status_code == 429:
        return RateLimitError(
            "Rate limit exceeded",
            retry_after=parse_retry_after(headers),
            **kwargs,
        )
    if status_code >= 500:
        return ServerError(f"Server error: {detail}", **kwargs)
    return APIError(f"API error: {detail}", **kwargs)
