"""
Unit tests for mock TTS components.
"""

from tts_gateway.tts.encoding import probe_duration_ms
from tts_gateway.tts.errors import TTSErrorType
from tts_gateway.tts.mock import (
    MockTTSFailOnce,
    MockTTSFixedTone,
    estimate_duration_ms,
    generate_tone_wav,
)
from tts_gateway.tts.models import AudioFormat, AudioStatus, TTSConfig


class TestGenerateToneWav:
    def test_is_wav_with_requested_duration(self):
        wav = generate_tone_wav(duration_ms=300, sample_rate_hz=16000)

        assert wav[:4] == b"RIFF"
        assert probe_duration_ms(wav, AudioFormat.WAV) == 300

    def test_deterministic(self):
        assert generate_tone_wav(100, 8000) == generate_tone_wav(100, 8000)


class TestEstimateDuration:
    def test_minimum(self):
        assert estimate_duration_ms("hi") == 500

    def test_scales_with_words(self):
        assert estimate_duration_ms(" ".join(["word"] * 12)) == 1200


class TestMockTTSFixedTone:
    def test_synthesizes_wav(self):
        component = MockTTSFixedTone(TTSConfig(output_format=AudioFormat.WAV))

        asset = component.synthesize("one two three four five six")

        assert asset.status == AudioStatus.SUCCESS
        assert asset.component_instance == "mock-fixed-tone-v1"
        assert asset.duration_ms == 600

    def test_shutdown_marks_not_ready(self):
        component = MockTTSFixedTone()
        component.shutdown()

        assert not component.is_ready
        asset = component.synthesize("Hello")
        assert asset.errors[0].error_type == TTSErrorType.PROVIDER_UNAVAILABLE


class TestMockTTSFailOnce:
    def test_fails_then_succeeds(self):
        component = MockTTSFailOnce(TTSConfig(output_format=AudioFormat.WAV))

        first = component.synthesize("Retry me")
        second = component.synthesize("Retry me")

        assert first.status == AudioStatus.FAILED
        assert first.errors[0].error_type == TTSErrorType.UPSTREAM_UNAVAILABLE
        assert first.is_retryable
        assert second.status == AudioStatus.SUCCESS

    def test_tracks_texts_independently(self):
        component = MockTTSFailOnce(TTSConfig(output_format=AudioFormat.WAV))
        component.synthesize("first")

        assert component.synthesize("second").status == AudioStatus.FAILED
