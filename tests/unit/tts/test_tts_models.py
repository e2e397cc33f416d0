"""
Unit tests for TTS data models.
"""

import pytest
from pydantic import ValidationError

from tts_gateway.tts.errors import TTSErrorType, classify_error
from tts_gateway.tts.models import (
    AudioAsset,
    AudioFormat,
    AudioStatus,
    DeliveryMode,
    SynthesisRequest,
    TTSConfig,
    VoiceProfile,
)


class TestAudioFormat:
    def test_media_types(self):
        assert AudioFormat.MP3.media_type == "audio/mpeg"
        assert AudioFormat.WAV.media_type == "audio/wav"

    def test_extension_matches_value(self):
        assert AudioFormat.MP3.extension == "mp3"
        assert AudioFormat.WAV.extension == "wav"


class TestVoiceProfile:
    def test_defaults(self):
        profile = VoiceProfile()
        assert profile.language == "en"
        assert profile.speaking_rate == 1.0
        assert profile.engine == "standard"

    def test_speaking_rate_bounds(self):
        with pytest.raises(ValidationError):
            VoiceProfile(speaking_rate=0.1)
        with pytest.raises(ValidationError):
            VoiceProfile(speaking_rate=5.0)

    def test_unknown_engine_rejected(self):
        with pytest.raises(ValidationError, match="engine"):
            VoiceProfile(engine="generative-xl")


class TestTTSConfig:
    def test_default_format_is_mp3(self):
        assert TTSConfig().output_format == AudioFormat.MP3

    def test_sample_rate_must_be_allowed(self):
        with pytest.raises(ValidationError, match="sample_rate_hz"):
            TTSConfig(sample_rate_hz=12345)

    def test_timeout_minimum(self):
        with pytest.raises(ValidationError):
            TTSConfig(timeout_ms=10)


class TestSynthesisRequest:
    def test_empty_body_is_valid(self):
        request = SynthesisRequest()
        assert request.text is None
        assert request.provider is None

    def test_parses_enums(self):
        request = SynthesisRequest.model_validate(
            {"text": "hi", "format": "wav", "delivery": "s3"}
        )
        assert request.format == AudioFormat.WAV
        assert request.delivery == DeliveryMode.S3

    def test_unknown_format_rejected(self):
        with pytest.raises(ValidationError):
            SynthesisRequest.model_validate({"text": "hi", "format": "ogg"})


class TestAudioAsset:
    def _asset(self, **overrides):
        fields = {
            "component_instance": "mock",
            "audio_format": AudioFormat.MP3,
            "audio_bytes": b"abc",
            "language": "en",
            "status": AudioStatus.SUCCESS,
        }
        fields.update(overrides)
        return AudioAsset(**fields)

    def test_filename_uses_asset_id_and_extension(self):
        asset = self._asset()
        assert asset.filename == f"tts-{asset.asset_id}.mp3"
        assert asset.media_type == "audio/mpeg"

    def test_asset_ids_are_unique(self):
        assert self._asset().asset_id != self._asset().asset_id

    def test_is_retryable_requires_failed_status(self):
        retryable = classify_error(TTSErrorType.TIMEOUT, "slow")

        assert self._asset(status=AudioStatus.FAILED, errors=[retryable]).is_retryable
        assert not self._asset(status=AudioStatus.SUCCESS, errors=[retryable]).is_retryable

    def test_non_retryable_error(self):
        permanent = classify_error(TTSErrorType.INVALID_INPUT, "bad")
        asset = self._asset(status=AudioStatus.FAILED, errors=[permanent])

        assert asset.has_errors
        assert not asset.is_retryable
