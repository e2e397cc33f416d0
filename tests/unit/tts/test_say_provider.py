"""
Unit tests for the macOS say provider.

The say binary is never executed: shutil.which and subprocess.run are
patched.
"""

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from tts_gateway.tts.errors import TTSErrorType
from tts_gateway.tts.models import AudioFormat, AudioStatus, TTSConfig, VoiceProfile
from tts_gateway.tts.say_provider import SayTTSComponent


@pytest.fixture
def say_component():
    with patch("tts_gateway.tts.say_provider.shutil.which", return_value="/usr/bin/say"):
        yield SayTTSComponent(TTSConfig(sample_rate_hz=16000, timeout_ms=5000))


@pytest.fixture
def mock_run(wav_factory):
    def run(cmd, **kwargs):
        with open(cmd[2], "wb") as f:
            f.write(wav_factory(duration_ms=150))
        return MagicMock(returncode=0, stderr=b"")

    with patch("tts_gateway.tts.say_provider.subprocess.run", side_effect=run) as mocked:
        yield mocked


class TestSayTTSComponent:
    def test_not_ready_without_binary(self):
        with patch("tts_gateway.tts.say_provider.shutil.which", return_value=None):
            component = SayTTSComponent()

        assert not component.is_ready
        asset = component.synthesize("Hello")
        assert asset.errors[0].error_type == TTSErrorType.PROVIDER_UNAVAILABLE

    def test_synthesize_wav(self, say_component, mock_run):
        asset = say_component.synthesize("Hello", output_format=AudioFormat.WAV)

        assert asset.status == AudioStatus.SUCCESS
        assert asset.component_instance == "macos-say"
        assert asset.duration_ms == 150

    def test_command_line(self, say_component, mock_run):
        profile = VoiceProfile(voice_id="Samantha", speaking_rate=2.0)

        say_component.synthesize("-n not an option", voice_profile=profile, output_format=AudioFormat.WAV)

        cmd = mock_run.call_args.args[0]
        kwargs = mock_run.call_args.kwargs
        assert cmd[0] == "/usr/bin/say"
        assert "--data-format=LEI16@16000" in cmd
        assert cmd[cmd.index("-r") + 1] == "350"
        assert cmd[cmd.index("-v") + 1] == "Samantha"
        assert cmd[-2:] == ["-f", "-"]
        assert kwargs["input"] == b"-n not an option"
        assert kwargs["timeout"] == 5.0

    def test_non_zero_exit(self, say_component):
        result = MagicMock(returncode=1, stderr=b"Voice `Nope' not found.")
        with patch("tts_gateway.tts.say_provider.subprocess.run", return_value=result):
            asset = say_component.synthesize("Hello", output_format=AudioFormat.WAV)

        error = asset.errors[0]
        assert error.error_type == TTSErrorType.SYNTHESIS_FAILED
        assert error.details["returncode"] == 1
        assert "not found" in error.message

    def test_timeout(self, say_component):
        with patch(
            "tts_gateway.tts.say_provider.subprocess.run",
            side_effect=subprocess.TimeoutExpired(cmd="say", timeout=5.0),
        ):
            asset = say_component.synthesize("Hello", output_format=AudioFormat.WAV)

        assert asset.errors[0].error_type == TTSErrorType.TIMEOUT
        assert asset.is_retryable

    def test_temp_file_removed(self, say_component, mock_run):
        say_component.synthesize("Hello", output_format=AudioFormat.WAV)

        path = mock_run.call_args.args[0][2]
        with pytest.raises(FileNotFoundError):
            open(path, "rb")
