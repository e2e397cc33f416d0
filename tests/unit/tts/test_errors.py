"""
Unit tests for TTS error classification.

Tests for TTSError, TTSErrorType, classify_error and classify_status_code.
"""

import pytest
from pydantic import ValidationError

from tts_gateway.tts.errors import (
    TTSError,
    TTSErrorType,
    classify_error,
    classify_status_code,
    is_retryable_error_type,
)


class TestTTSErrorType:
    """Tests for default retryability of error types."""

    @pytest.mark.parametrize(
        "error_type",
        [
            TTSErrorType.TIMEOUT,
            TTSErrorType.RATE_LIMITED,
            TTSErrorType.UPSTREAM_UNAVAILABLE,
            TTSErrorType.UNKNOWN,
        ],
    )
    def test_transient_errors_are_retryable(self, error_type):
        assert is_retryable_error_type(error_type) is True

    @pytest.mark.parametrize(
        "error_type",
        [
            TTSErrorType.INVALID_INPUT,
            TTSErrorType.AUTHENTICATION_FAILED,
            TTSErrorType.PROVIDER_UNAVAILABLE,
            TTSErrorType.SYNTHESIS_FAILED,
            TTSErrorType.ENCODING_FAILED,
        ],
    )
    def test_permanent_errors_are_not_retryable(self, error_type):
        assert is_retryable_error_type(error_type) is False


class TestTTSError:
    """Tests for TTSError model."""

    def test_empty_message_rejected(self):
        with pytest.raises(ValidationError):
            TTSError(error_type=TTSErrorType.UNKNOWN, message="", retryable=True)

    def test_serializes_error_type_as_value(self):
        error = TTSError(
            error_type=TTSErrorType.RATE_LIMITED,
            message="slow down",
            retryable=True,
        )
        assert error.model_dump(mode="json")["error_type"] == "rate_limited"


class TestClassifyError:
    """Tests for classify_error."""

    def test_uses_default_retryability(self):
        error = classify_error(TTSErrorType.TIMEOUT, "took too long")
        assert error.retryable is True

    def test_override_wins_over_default(self):
        error = classify_error(
            TTSErrorType.TIMEOUT, "took too long", retryable_override=False
        )
        assert error.retryable is False

    def test_details_are_kept(self):
        error = classify_error(
            TTSErrorType.INVALID_INPUT, "bad", details={"length": 9000}
        )
        assert error.details == {"length": 9000}

    def test_blank_message_raises(self):
        with pytest.raises(ValueError, match="non-empty"):
            classify_error(TTSErrorType.UNKNOWN, "   ")


class TestClassifyStatusCode:
    """Tests for vendor HTTP status mapping."""

    @pytest.mark.parametrize(
        "status_code,expected_type,expected_retryable",
        [
            (400, TTSErrorType.INVALID_INPUT, False),
            (413, TTSErrorType.INVALID_INPUT, False),
            (401, TTSErrorType.AUTHENTICATION_FAILED, False),
            (403, TTSErrorType.AUTHENTICATION_FAILED, False),
            (408, TTSErrorType.TIMEOUT, True),
            (504, TTSErrorType.TIMEOUT, True),
            (429, TTSErrorType.RATE_LIMITED, True),
            (500, TTSErrorType.UPSTREAM_UNAVAILABLE, True),
            (503, TTSErrorType.UPSTREAM_UNAVAILABLE, True),
        ],
    )
    def test_status_mapping(self, status_code, expected_type, expected_retryable):
        error = classify_status_code(status_code, "polly", RuntimeError("boom"))

        assert error.error_type == expected_type
        assert error.retryable is expected_retryable
        assert error.details["status_code"] == status_code
        assert error.details["provider"] == "polly"

    def test_unknown_status_is_retryable_synthesis_failure(self):
        error = classify_status_code(None, "google", RuntimeError("odd"))

        assert error.error_type == TTSErrorType.SYNTHESIS_FAILED
        assert error.retryable is True
        assert "google" in error.message
