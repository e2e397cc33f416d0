"""
Mock TTS Component Implementations.

Provides mock implementations for testing without vendor SDKs or network.
These mocks implement the TTSComponent interface and produce deterministic
WAV output.

Mock Implementations:
- MockTTSFixedTone: Produces deterministic 440Hz sine wave tone
- MockTTSFailOnce: Fails first call per text, succeeds on retry
"""

import math
import struct

from .encoding import pcm_to_wav
from .errors import TTSError, TTSErrorType, classify_error
from .interface import BaseTTSComponent
from .models import AudioFormat, TTSConfig, VoiceProfile


def generate_tone_wav(
    duration_ms: int,
    sample_rate_hz: int,
    frequency_hz: float = 440.0,
    amplitude: float = 0.5,
) -> bytes:
    """Generate a mono 16-bit sine wave wrapped in a WAV container."""
    num_samples = int(sample_rate_hz * duration_ms / 1000)
    samples = []

    for i in range(num_samples):
        t = i / sample_rate_hz
        value = amplitude * math.sin(2 * math.pi * frequency_hz * t)
        samples.append(max(-32768, min(32767, int(value * 32767))))

    pcm = struct.pack(f"<{len(samples)}h", *samples)
    return pcm_to_wav(pcm, sample_rate_hz=sample_rate_hz)


def estimate_duration_ms(text: str) -> int:
    """Rough estimate: ~100ms per word, at least half a second."""
    return max(500, len(text.split()) * 100)


class MockTTSFixedTone(BaseTTSComponent):
    """Mock TTS that produces deterministic 440Hz sine wave tone.

    This mock is useful for:
    - HTTP route tests
    - Running the gateway locally without vendor credentials
    """

    _native_formats = (AudioFormat.WAV,)

    def __init__(
        self,
        config: TTSConfig | None = None,
        frequency_hz: float = 440.0,
        amplitude: float = 0.5,
    ):
        """Initialize MockTTSFixedTone.

        Args:
            config: TTS configuration
            frequency_hz: Frequency of sine wave (default 440Hz = A4 note)
            amplitude: Amplitude of wave (0.0 to 1.0)
        """
        super().__init__(config)
        self._frequency_hz = frequency_hz
        self._amplitude = amplitude
        self._is_ready = True

    @property
    def component_instance(self) -> str:
        return "mock-fixed-tone-v1"

    @property
    def is_ready(self) -> bool:
        return self._is_ready

    def _synthesize(
        self,
        text: str,
        voice_profile: VoiceProfile,
        output_format: AudioFormat,
    ) -> tuple[bytes, AudioFormat]:
        audio = generate_tone_wav(
            duration_ms=estimate_duration_ms(text),
            sample_rate_hz=self._config.sample_rate_hz,
            frequency_hz=self._frequency_hz,
            amplitude=self._amplitude,
        )
        return audio, AudioFormat.WAV

    def shutdown(self) -> None:
        self._is_ready = False


class _SimulatedUpstreamError(Exception):
    pass


class MockTTSFailOnce(BaseTTSComponent):
    """Mock TTS that fails the first call for each text, succeeds on retry.

    This mock is useful for:
    - Testing retry behavior
    - Error handling verification
    """

    _native_formats = (AudioFormat.WAV,)

    def __init__(self, config: TTSConfig | None = None):
        super().__init__(config)
        self._is_ready = True
        # Texts that have already failed once
        self._failed_once: set[str] = set()

    @property
    def component_instance(self) -> str:
        return "mock-fail-once-v1"

    @property
    def is_ready(self) -> bool:
        return self._is_ready

    def _synthesize(
        self,
        text: str,
        voice_profile: VoiceProfile,
        output_format: AudioFormat,
    ) -> tuple[bytes, AudioFormat]:
        if text not in self._failed_once:
            self._failed_once.add(text)
            raise _SimulatedUpstreamError(
                "Simulated transient failure (will succeed on retry)"
            )

        audio = generate_tone_wav(
            duration_ms=estimate_duration_ms(text),
            sample_rate_hz=self._config.sample_rate_hz,
        )
        return audio, AudioFormat.WAV

    def _classify_error(self, error: Exception) -> TTSError:
        return classify_error(
            TTSErrorType.UPSTREAM_UNAVAILABLE,
            str(error),
            details={"attempt": 1},
        )

    def shutdown(self) -> None:
        self._is_ready = False
        self._failed_once.clear()
