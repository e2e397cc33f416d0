"""Prometheus metrics for the TTS gateway.

Defines and exports metrics for monitoring:
- Synthesis requests by provider and outcome (counter)
- Synthesis latency per provider (histogram)
- Errors by provider and error type (counter)
- Retries per provider (counter)
- Requests abandoned at the HTTP timeout per provider (counter)
- Audio bytes produced per provider and format (counter)
"""

import logging

from prometheus_client import Counter, Histogram

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Synthesis Metrics
# -----------------------------------------------------------------------------

tts_requests_total = Counter(
    "tts_requests_total",
    "Total synthesis requests",
    labelnames=["provider", "status"],
)

tts_synthesis_duration_seconds = Histogram(
    "tts_synthesis_duration_seconds",
    "Synthesis duration in seconds (including retries)",
    labelnames=["provider"],
    buckets=(0.1, 0.25, 0.5, 1.0, 2.0, 4.0, 8.0, 16.0, float("inf")),
)

tts_errors_total = Counter(
    "tts_errors_total",
    "Total synthesis errors",
    labelnames=["provider", "error_type"],
)

tts_retries_total = Counter(
    "tts_retries_total",
    "Total synthesis retries",
    labelnames=["provider"],
)

tts_audio_bytes_total = Counter(
    "tts_audio_bytes_total",
    "Total bytes of audio produced",
    labelnames=["provider", "format"],
)

# The worker thread is not cancelled on timeout; it still records its own
# success or failure in the counters above.
tts_timeouts_total = Counter(
    "tts_timeouts_total",
    "Requests answered with 504 before synthesis finished",
    labelnames=["provider"],
)

# -----------------------------------------------------------------------------
# Metric Recording Functions
# -----------------------------------------------------------------------------


def record_synthesis_success(
    provider: str,
    duration_ms: int,
    audio_format: str,
    audio_bytes: int,
) -> None:
    """Record a successful synthesis.

    Args:
        provider: Provider name
        duration_ms: Wall time including retries, in milliseconds
        audio_format: Output format (mp3, wav)
        audio_bytes: Size of the produced audio
    """
    try:
        tts_requests_total.labels(provider=provider, status="success").inc()
        tts_synthesis_duration_seconds.labels(provider=provider).observe(duration_ms / 1000.0)
        tts_audio_bytes_total.labels(provider=provider, format=audio_format).inc(audio_bytes)
    except Exception as e:
        logger.error(f"Failed to record success metrics: {e}")


def record_synthesis_failure(
    provider: str,
    error_type: str,
    duration_ms: int | None = None,
) -> None:
    """Record a failed synthesis.

    Args:
        provider: Provider name
        error_type: TTSErrorType value of the final error
        duration_ms: Wall time including retries, in milliseconds (optional)
    """
    try:
        tts_requests_total.labels(provider=provider, status="failed").inc()
        tts_errors_total.labels(provider=provider, error_type=error_type).inc()
        if duration_ms is not None:
            tts_synthesis_duration_seconds.labels(provider=provider).observe(
                duration_ms / 1000.0
            )
    except Exception as e:
        logger.error(f"Failed to record failure metrics: {e}")


def record_retry(provider: str) -> None:
    """Record a retry of a retryable synthesis failure."""
    try:
        tts_retries_total.labels(provider=provider).inc()
    except Exception as e:
        logger.error(f"Failed to record retry metric: {e}")


def record_timeout(provider: str) -> None:
    """Record a request abandoned at the HTTP timeout."""
    try:
        tts_timeouts_total.labels(provider=provider).inc()
    except Exception as e:
        logger.error(f"Failed to record timeout metric: {e}")
