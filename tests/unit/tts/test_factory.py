"""
Unit tests for the TTS component factory.
"""

import pytest

from tts_gateway.tts.factory import SUPPORTED_PROVIDERS, create_tts_component
from tts_gateway.tts.gtts_provider import GTTSComponent
from tts_gateway.tts.mock import MockTTSFailOnce, MockTTSFixedTone
from tts_gateway.tts.models import AudioFormat, TTSConfig
from tts_gateway.tts.polly_provider import PollyTTSComponent
from tts_gateway.tts.pyttsx3_provider import Pyttsx3TTSComponent
from tts_gateway.tts.say_provider import SayTTSComponent


class TestCreateTTSComponent:
    def test_mock_alias(self):
        assert isinstance(create_tts_component("mock"), MockTTSFixedTone)

    def test_mock_fail_once(self):
        assert isinstance(create_tts_component("mock_fail_once"), MockTTSFailOnce)

    def test_name_is_normalized(self):
        assert isinstance(create_tts_component("  MOCK_TONE "), MockTTSFixedTone)

    def test_config_is_passed(self):
        config = TTSConfig(output_format=AudioFormat.WAV)
        component = create_tts_component("mock", config=config)

        asset = component.synthesize("Hello")

        assert asset.audio_format == AudioFormat.WAV

    def test_env_var_selects_provider(self, monkeypatch):
        monkeypatch.setenv("TTS_PROVIDER", "mock_fail_once")
        assert isinstance(create_tts_component(), MockTTSFailOnce)

    def test_default_is_gtts(self, monkeypatch):
        monkeypatch.delenv("TTS_PROVIDER", raising=False)
        assert isinstance(create_tts_component(), GTTSComponent)

    @pytest.mark.parametrize(
        "provider,expected_class",
        [
            ("gtts", GTTSComponent),
            ("polly", PollyTTSComponent),
            ("pyttsx3", Pyttsx3TTSComponent),
            ("say", SayTTSComponent),
        ],
    )
    def test_vendor_providers(self, provider, expected_class):
        assert isinstance(create_tts_component(provider), expected_class)

    def test_provider_kwargs_forwarded(self):
        component = create_tts_component("say", binary="definitely-not-a-real-binary")
        assert not component.is_ready

    def test_unknown_provider(self):
        with pytest.raises(ValueError, match="Unknown TTS provider: espeak"):
            create_tts_component("espeak")

    def test_error_lists_supported_providers(self):
        with pytest.raises(ValueError) as exc_info:
            create_tts_component("nope")

        for name in SUPPORTED_PROVIDERS:
            assert name in str(exc_info.value)
