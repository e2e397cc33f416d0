"""
TTS Error Types and Classification.

This module defines error types and classification logic for TTS providers.
Errors are classified as retryable or non-retryable so the speech service can
decide whether to retry a request and which HTTP status to answer with.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class TTSErrorType(str, Enum):
    """Classification of TTS errors for retry and HTTP mapping policies.

    Each error type has a default retryability that can be overridden
    in specific cases.
    """

    # Retryable errors (transient failures)
    TIMEOUT = "timeout"  # Vendor call exceeded its deadline
    RATE_LIMITED = "rate_limited"  # Vendor throttled the request (HTTP 429)
    UPSTREAM_UNAVAILABLE = "upstream_unavailable"  # Vendor 5xx / network failure
    UNKNOWN = "unknown"  # Unclassified failure (safe default: retryable)

    # Non-retryable errors (permanent failures)
    INVALID_INPUT = "invalid_input"  # Empty text, unsupported language, etc.
    AUTHENTICATION_FAILED = "authentication_failed"  # Credentials rejected by the vendor
    PROVIDER_UNAVAILABLE = "provider_unavailable"  # SDK, binary or credentials missing
    SYNTHESIS_FAILED = "synthesis_failed"  # Engine crashed or returned no audio
    ENCODING_FAILED = "encoding_failed"  # Transcoding to requested format failed


_DEFAULT_RETRYABLE: dict[TTSErrorType, bool] = {
    TTSErrorType.TIMEOUT: True,
    TTSErrorType.RATE_LIMITED: True,
    TTSErrorType.UPSTREAM_UNAVAILABLE: True,
    TTSErrorType.UNKNOWN: True,
    TTSErrorType.INVALID_INPUT: False,
    TTSErrorType.AUTHENTICATION_FAILED: False,
    TTSErrorType.PROVIDER_UNAVAILABLE: False,
    TTSErrorType.SYNTHESIS_FAILED: False,
    TTSErrorType.ENCODING_FAILED: False,
}


class TTSError(BaseModel):
    """Structured error information for failed synthesis."""

    error_type: TTSErrorType = Field(..., description="Error classification")
    message: str = Field(
        ..., min_length=1, description="Human-readable error message (safe for logs)"
    )
    retryable: bool = Field(..., description="Whether this error warrants a retry")
    details: dict[str, Any] | None = Field(
        default=None, description="Additional error context (debug info)"
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "error_type": "rate_limited",
                "message": "polly rate limit exceeded: ThrottlingException",
                "retryable": True,
                "details": {"provider": "polly", "status_code": 429},
            }
        }
    }


def classify_error(
    error_type: TTSErrorType,
    message: str,
    details: dict[str, Any] | None = None,
    retryable_override: bool | None = None,
) -> TTSError:
    """Create a TTSError with proper classification.

    Uses default retryability for the error type unless explicitly overridden.

    Args:
        error_type: The type of error that occurred
        message: Human-readable error message (must be non-empty)
        details: Optional additional context (exception type, status code, etc.)
        retryable_override: Optional override for default retryability

    Returns:
        TTSError with proper classification

    Raises:
        ValueError: If message is empty
    """
    if not message or not message.strip():
        raise ValueError("Error message must be non-empty")

    retryable = (
        retryable_override
        if retryable_override is not None
        else _DEFAULT_RETRYABLE.get(error_type, True)
    )

    return TTSError(
        error_type=error_type,
        message=message,
        retryable=retryable,
        details=details,
    )


def is_retryable_error_type(error_type: TTSErrorType) -> bool:
    """Check if an error type is retryable by default."""
    return _DEFAULT_RETRYABLE.get(error_type, True)


def classify_status_code(
    status_code: int | None,
    provider: str,
    error: Exception,
) -> TTSError:
    """Classify a vendor HTTP status code into a TTSError.

    Shared by the cloud providers (Google Cloud TTS, AWS Polly, gTTS), which all
    surface the status of the failed upstream call.

    Args:
        status_code: HTTP status returned by the vendor, if known
        provider: Provider name used in the message
        error: Original exception

    Returns:
        TTSError with proper classification
    """
    details = {
        "provider": provider,
        "status_code": status_code,
        "exception_type": type(error).__name__,
    }

    if status_code in (400, 404, 413, 422):
        return classify_error(
            TTSErrorType.INVALID_INPUT,
            f"{provider} rejected the request: {error}",
            details=details,
        )

    if status_code in (401, 403):
        return classify_error(
            TTSErrorType.AUTHENTICATION_FAILED,
            f"{provider} authentication failed: {error}",
            details=details,
        )

    if status_code in (408, 504):
        return classify_error(
            TTSErrorType.TIMEOUT,
            f"{provider} request timed out: {error}",
            details=details,
        )

    if status_code == 429:
        return classify_error(
            TTSErrorType.RATE_LIMITED,
            f"{provider} rate limit exceeded: {error}",
            details=details,
        )

    if status_code is not None and 500 <= status_code < 600:
        return classify_error(
            TTSErrorType.UPSTREAM_UNAVAILABLE,
            f"{provider} server error: {error}",
            details=details,
        )

    # Default: unknown vendor failure (retryable for safety)
    return classify_error(
        TTSErrorType.SYNTHESIS_FAILED,
        f"{provider} synthesis failed: {error}",
        details=details,
        retryable_override=True,
    )
