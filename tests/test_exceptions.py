"""Tests for exceptions module - behavior focused."""

import httpx
import pytest

from llm_retry.exceptions import (
    ServiceError,
    RateLimitError,
    ConnectionError,
    TimeoutError,
    AuthenticationError,
    ModelNotFoundError,
    InvalidRequestError,
    ServerError,
    error_from_response,
    error_from_status,
    parse_retry_after,
)


class TestRetryableFlag:
    """Test that exceptions have correct retryable defaults."""

    @pytest.mark.parametrize(
        "exception_class", [RateLimitError, ConnectionError, TimeoutError, ServerError]
    )
    def test_transient_errors_are_retryable(self, exception_class):
        assert exception_class().retryable is True

    @pytest.mark.parametrize(
        "exception_class", [AuthenticationError, ModelNotFoundError, InvalidRequestError]
    )
    def test_persistent_errors_are_not_retryable(self, exception_class):
        assert exception_class().retryable is False

    def test_base_error_not_retryable_by_default(self):
        """Base ServiceError should not be retryable by default."""
        assert ServiceError("test").retryable is False


class TestExceptionStringRepresentation:
    """Test that exception string includes useful context."""

    def test_str_includes_message(self):
        error = ServiceError("Something went wrong")
        assert "Something went wrong" in str(error)

    def test_str_includes_provider_and_status(self):
        """String should include provider, message, and status."""
        error = ServiceError("Rate limited", provider="OpenRouter", status_code=429)
        result = str(error)

        assert "OpenRouter" in result
        assert "Rate limited" in result
        assert "429" in result


class TestRateLimitErrorExtras:
    """Test RateLimitError specific behavior."""

    def test_defaults_to_status_429(self):
        assert RateLimitError().status_code == 429

    def test_retry_after_is_stored(self):
        assert RateLimitError(retry_after=30.0).retry_after == 30.0

    def test_retry_after_defaults_to_none(self):
        assert RateLimitError().retry_after is None


class TestModelNotFoundErrorExtras:
    """Test ModelNotFoundError specific behavior."""

    def test_model_name_is_stored(self):
        assert ModelNotFoundError(model="gpt-5-turbo").model == "gpt-5-turbo"


class TestExceptionInheritance:
    """Test that all exceptions inherit from ServiceError."""

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
        ],
    )
    def test_inherits_from_base(self, exception_class):
        """All exception types should be catchable as ServiceError."""
        assert isinstance(exception_class(), ServiceError)


class TestErrorFromStatus:
    """Test mapping HTTP statuses to domain exceptions."""

    @pytest.mark.parametrize(
        "status, expected",
        [
            (429, RateLimitError),
            (401, AuthenticationError),
            (403, AuthenticationError),
            (404, ModelNotFoundError),
            (400, InvalidRequestError),
            (422, InvalidRequestError),
            (500, ServerError),
            (503, ServerError),
        ],
    )
    def test_maps_status_to_class(self, status, expected):
        error = error_from_status(status, "details", provider="OpenRouter")

        assert type(error) is expected
        assert error.status_code == status
        assert error.provider == "OpenRouter"
        assert "details" in str(error)

    def test_unknown_status_is_plain_service_error(self):
        error = error_from_status(302)

        assert type(error) is ServiceError
        assert error.retryable is False


class TestErrorFromResponse:
    """Test converting httpx responses."""

    def test_rate_limit_response_keeps_retry_after(self):
        response = httpx.Response(
            429,
            headers={"Retry-After": "12"},
            text="slow down",
            request=httpx.Request("POST", "http://test"),
        )

        error = error_from_response(response, provider="Ollama")

        assert isinstance(error, RateLimitError)
        assert error.retry_after == 12.0
        assert "slow down" in str(error)

    def test_server_error_response(self):
        response = httpx.Response(502, text="bad gateway", request=httpx.Request("GET", "http://test"))

        error = error_from_response(response)

        assert isinstance(error, ServerError)
        assert error.status_code == 502


class TestParseRetryAfter:
    """Test Retry-After header parsing."""

    def test_parses_seconds(self):
        assert parse_retry_after("5") == 5.0
        assert parse_retry_after(" 1.5 ") == 1.5

    @pytest.mark.parametrize("value", [None, "", "soon", "-3", "Wed, 21 Oct 2015 07:28:00 GMT"])
    def test_rejects_unusable_values(self, value):
        assert parse_retry_after(value) is None

    @pytest.mark.parametrize("value", ["inf", "Infinity", "-inf", "nan"])
    def test_rejects_non_finite_values(self, value):
        """Non-finite waits would suspend forever, so they are ignored."""
        assert parse_retry_after(value) is None

    def test_infinite_header_is_not_kept_on_error(self):
        response = httpx.Response(
            429, headers={"Retry-After": "inf"}, request=httpx.Request("POST", "http://test")
        )

        assert error_from_response(response).retry_after is None
