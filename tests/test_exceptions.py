"""Tests for exceptions module - behavior focused."""

import pytest
from llm_provider.exceptions import (
    APIError,
    AuthenticationError,
    ConfigurationError,
    ConnectionError,
    DecodeError,
    InvalidRequestError,
    LLMClientError,
    MissingCredentialError,
    ModelNotFoundError,
    RateLimitError,
    RetryExhaustedError,
    ServerError,
    StreamTruncatedError,
    TimeoutError,
    ValidationError,
    error_from_status,
    parse_retry_after,
)

DEFAULT_SET = frozenset({429, 500, 502, 503, 504})


class TestRetryableFlag:
    """Test that exceptions have correct retryable defaults."""

    @pytest.mark.parametrize("exception_class", [RateLimitError, ConnectionError, TimeoutError, ServerError])
    def test_transient_errors_are_retryable(self, exception_class):
        assert exception_class().retryable is True

    @pytest.mark.parametrize(
        "exception_class",
        [
            AuthenticationError,
            ModelNotFoundError,
            InvalidRequestError,
            APIError,
            DecodeError,
            StreamTruncatedError,
            MissingCredentialError,
            ConfigurationError,
            ValidationError,
        ],
    )
    def test_permanent_errors_not_retryable(self, exception_class):
        assert exception_class().retryable is False

    def test_flag_can_be_overridden(self):
        """HTTP-derived errors take their flag from configuration."""
        assert ServerError(retryable=False).retryable is False
        assert AuthenticationError(retryable=True).retryable is True

    def test_base_error_not_retryable_by_default(self):
        """Base LLMClientError should not be retryable by default."""
        error = LLMClientError("test")
        assert error.retryable is False


class TestExceptionStringRepresentation:
    """Test that exception string includes useful context."""

    def test_str_includes_message(self):
        error = LLMClientError("Something went wrong")
        assert "Something went wrong" in str(error)

    def test_str_includes_all_context(self):
        """String should include provider, operation, message, and status."""
        error = LLMClientError(
            "Rate limited",
            provider="Anthropic",
            status_code=429,
            operation="complete",
        )

        assert str(error) == "[Anthropic] complete: Rate limited (status: 429)"

    def test_missing_credential_names_env_var(self):
        error = MissingCredentialError(env_var="DEEPSEEK_API_KEY")
        assert "DEEPSEEK_API_KEY environment variable not set" in str(error)


class TestRetryExhaustedError:
    """Test wrapping of the last underlying cause."""

    def test_carries_attempts_and_cause(self):
        cause = ServerError("Server error: boom", status_code=503, provider="Anthropic")

        error = RetryExhaustedError(3, cause, operation="complete")

        assert error.attempts == 3
        assert error.last_error is cause
        assert error.status_code == 503
        assert error.retryable is False
        assert "3 attempts" in str(error)
        assert "complete" in str(error)


class TestErrorFromStatus:
    """Test mapping of HTTP statuses to exceptions."""

    @pytest.mark.parametrize(
        "status,expected",
        [
            (400, InvalidRequestError),
            (401, AuthenticationError),
            (403, AuthenticationError),
            (404, ModelNotFoundError),
            (409, APIError),
            (422, InvalidRequestError),
            (429, RateLimitError),
            (500, ServerError),
            (503, ServerError),
        ],
    )
    def test_maps_status_to_class(self, status, expected):
        error = error_from_status(status, "details", retryable_status_codes=DEFAULT_SET)
        assert type(error) is expected
        assert error.status_code == status

    def test_retryability_follows_configured_set(self):
        """501 is a server error but not in the default set."""
        assert error_from_status(501, retryable_status_codes=DEFAULT_SET).retryable is False
        assert error_from_status(503, retryable_status_codes=DEFAULT_SET).retryable is True
        assert error_from_status(429, retryable_status_codes=set()).retryable is False

    def test_rate_limit_reads_retry_after(self):
        error = error_from_status(
            429,
            retryable_status_codes=DEFAULT_SET,
            headers={"retry-after": "7"},
        )
        assert error.retry_after == 7.0

    def test_body_is_truncated(self):
        error = error_from_status(500, "x" * 5000, retryable_status_codes=DEFAULT_SET)
        assert len(error.message) < 600


class TestParseRetryAfter:
    def test_numeric_seconds(self):
        assert parse_retry_after({"Retry-After": "2.5"}) == 2.5

    def test_missing_or_http_date(self):
        assert parse_retry_after(None) is None
        assert parse_retry_after({"retry-after": "Wed, 21 Oct 2015 07:28:00 GMT"}) is None


class TestExceptionInheritance:
    """Test that all exceptions inherit from LLMClientError."""

    @pytest.mark.parametrize(
        "exception_class",
        [
            RateLimitError,
            ConnectionError,
            TimeoutError,
            AuthenticationError,
            ModelNotFoundError,
            InvalidRequestError,
            ServerError,
            DecodeError,
            StreamTruncatedError,
        ],
    )
    def test_inherits_from_base(self, exception_class):
        """All exception types should be catchable as LLMClientError."""
        error = exception_class()
        assert isinstance(error, LLMClientError)
