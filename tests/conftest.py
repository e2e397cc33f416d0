"""Shared test fixtures for TTS gateway tests.

Provides audio generators, configuration builders and a stub TTS component
that records the calls it receives.
"""

import math
import struct

import pytest

from tts_gateway.config import (
    GatewayConfig,
    ObservabilityConfig,
    ServerConfig,
    StorageConfig,
    SynthesisConfig,
)
from tts_gateway.tts.encoding import pcm_to_wav
from tts_gateway.tts.errors import TTSErrorType, classify_error
from tts_gateway.tts.interface import BaseTTSComponent
from tts_gateway.tts.models import AudioFormat, TTSConfig

# =============================================================================
# Audio Fixtures
# =============================================================================


def generate_test_audio(
    frequency_hz: float = 440.0,
    duration_ms: int = 1000,
    sample_rate_hz: int = 16000,
    amplitude: float = 0.5,
) -> bytes:
    """Generate mono 16-bit little-endian PCM sine wave samples.

    Args:
        frequency_hz: Frequency of the sine wave in Hz.
        duration_ms: Duration of the audio in milliseconds.
        sample_rate_hz: Sample rate in Hz.
        amplitude: Amplitude of the wave (0.0 to 1.0).

    Returns:
        Raw PCM bytes.
    """
    num_samples = int(sample_rate_hz * duration_ms / 1000)
    samples = []

    for i in range(num_samples):
        t = i / sample_rate_hz
        value = amplitude * math.sin(2 * math.pi * frequency_hz * t)
        sample = max(-32768, min(32767, int(value * 32767)))
        samples.append(sample)

    return struct.pack(f"<{len(samples)}h", *samples)


def generate_test_wav(duration_ms: int = 1000, sample_rate_hz: int = 16000) -> bytes:
    """Generate a WAV file containing a 440Hz tone."""
    return pcm_to_wav(
        generate_test_audio(duration_ms=duration_ms, sample_rate_hz=sample_rate_hz),
        sample_rate_hz=sample_rate_hz,
    )


# Minimal MP3 frame header followed by padding; never decoded in tests
FAKE_MP3 = b"\xff\xfb\x90\x00" + b"\x00" * 1000


@pytest.fixture
def sample_wav_1s() -> bytes:
    """1 second of 16kHz mono WAV audio."""
    return generate_test_wav(duration_ms=1000)


@pytest.fixture
def fake_mp3() -> bytes:
    return FAKE_MP3


# =============================================================================
# Configuration Fixtures
# =============================================================================


def make_config(
    provider: str = "mock",
    output_format: str = "wav",
    delivery: str = "download",
    output_dir: str = "./audio",
    s3_bucket: str | None = None,
    max_retries: int = 1,
    max_text_length: int = 5000,
    timeout_ms: int = 30000,
    default_text: str = "Default sentence.",
    url_expiry_seconds: int = 3600,
) -> GatewayConfig:
    """Build a GatewayConfig without reading the environment."""
    return GatewayConfig(
        server=ServerConfig(host="127.0.0.1", port=8000, cors_origins=("*",)),
        observability=ObservabilityConfig(log_level="INFO", log_json=True),
        synthesis=SynthesisConfig(
            provider=provider,
            default_text=default_text,
            default_language="en",
            output_format=output_format,
            max_text_length=max_text_length,
            max_retries=max_retries,
            timeout_ms=timeout_ms,
        ),
        storage=StorageConfig(
            delivery=delivery,
            output_dir=output_dir,
            s3_bucket=s3_bucket,
            s3_region="us-east-1",
            s3_prefix="tts/",
            url_expiry_seconds=url_expiry_seconds,
        ),
    )


@pytest.fixture
def gateway_config(tmp_path) -> GatewayConfig:
    """Config using the mock provider, WAV output and a temp output dir."""
    return make_config(output_dir=str(tmp_path / "audio"))


# =============================================================================
# Stub Component
# =============================================================================


class _StubFailure(Exception):
    pass


class RecordingTTSComponent(BaseTTSComponent):
    """Stub component returning fixed audio and recording each call.

    ``fail_with`` makes every call fail with the given error type;
    ``failures`` limits how many calls fail before succeeding.
    """

    def __init__(
        self,
        config: TTSConfig | None = None,
        audio: bytes | None = None,
        native_format: AudioFormat = AudioFormat.WAV,
        ready: bool = True,
        fail_with: TTSErrorType | None = None,
        failures: int | None = None,
    ):
        super().__init__(config)
        self._native_formats = (native_format,)
        self._audio = audio if audio is not None else generate_test_wav(duration_ms=200)
        self._ready = ready
        self._fail_with = fail_with
        self._failures = failures
        self.calls: list[tuple[str, object, AudioFormat]] = []
        self.shutdown_called = False

    @property
    def component_instance(self) -> str:
        return "recording-stub"

    @property
    def is_ready(self) -> bool:
        return self._ready

    def _synthesize(self, text, voice_profile, output_format):
        self.calls.append((text, voice_profile, output_format))
        if self._fail_with is not None and (
            self._failures is None or len(self.calls) <= self._failures
        ):
            raise _StubFailure(f"stub failure {len(self.calls)}")
        return self._audio, self._native_formats[0]

    def _classify_error(self, error):
        return classify_error(self._fail_with, str(error))

    def shutdown(self) -> None:
        self.shutdown_called = True


@pytest.fixture
def config_factory():
    """Return make_config for tests that need custom settings."""
    return make_config


@pytest.fixture
def stub_component_factory():
    """Return the RecordingTTSComponent class."""
    return RecordingTTSComponent


@pytest.fixture
def wav_factory():
    """Return generate_test_wav for tests that need custom WAV audio."""
    return generate_test_wav
