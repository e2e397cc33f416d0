"""
macOS ``say`` Provider Implementation.

Runs the ``say`` command line tool and captures its output as 16-bit WAV.
Text is passed on stdin so that input beginning with ``-`` is never parsed
as an option.
"""

import logging
import os
import shutil
import subprocess
import tempfile

from .errors import TTSError, TTSErrorType, classify_error
from .interface import BaseTTSComponent
from .models import AudioFormat, TTSConfig, VoiceProfile

logger = logging.getLogger(__name__)

# Default speaking rate of say, in words per minute
BASE_RATE_WPM = 175


class SayCommandError(RuntimeError):
    """Raised when the say command exits with a non-zero status."""

    def __init__(self, returncode: int, stderr: str):
        super().__init__(f"say exited with code {returncode}: {stderr}")
        self.returncode = returncode
        self.stderr = stderr


class SayTTSComponent(BaseTTSComponent):
    """macOS say component implementing the TTSComponent interface."""

    _native_formats = (AudioFormat.WAV,)

    def __init__(
        self,
        config: TTSConfig | None = None,
        binary: str = "say",
    ):
        super().__init__(config)
        self._binary = binary
        self._binary_path = shutil.which(binary)

        if self._binary_path is None:
            logger.warning(f"'{binary}' command not found. The say provider only works on macOS.")

    @property
    def component_instance(self) -> str:
        return "macos-say"

    @property
    def is_ready(self) -> bool:
        return self._binary_path is not None

    def _build_command(self, output_path: str, voice_profile: VoiceProfile) -> list[str]:
        cmd = [
            self._binary_path,
            "-o",
            output_path,
            "--file-format=WAVE",
            f"--data-format=LEI16@{self._config.sample_rate_hz}",
            "-r",
            str(int(BASE_RATE_WPM * voice_profile.speaking_rate)),
        ]
        if voice_profile.voice_id:
            cmd.extend(["-v", voice_profile.voice_id])
        # Read the text from stdin
        cmd.extend(["-f", "-"])
        return cmd

    def _synthesize(
        self,
        text: str,
        voice_profile: VoiceProfile,
        output_format: AudioFormat,
    ) -> tuple[bytes, AudioFormat]:
        with tempfile.NamedTemporaryFile(suffix=".wav", delete=False) as f:
            output_path = f.name

        try:
            result = subprocess.run(
                self._build_command(output_path, voice_profile),
                input=text.encode("utf-8"),
                capture_output=True,
                timeout=self._config.timeout_ms / 1000,
            )

            if result.returncode != 0:
                stderr = result.stderr.decode("utf-8", errors="replace")
                raise SayCommandError(result.returncode, stderr[:500])

            with open(output_path, "rb") as f:
                audio = f.read()
        finally:
            if os.path.exists(output_path):
                os.unlink(output_path)

        return audio, AudioFormat.WAV

    def _classify_error(self, error: Exception) -> TTSError:
        details = {"exception_type": type(error).__name__}

        if isinstance(error, subprocess.TimeoutExpired):
            return classify_error(
                TTSErrorType.TIMEOUT,
                f"say timed out after {error.timeout}s",
                details=details,
            )

        if isinstance(error, FileNotFoundError):
            return classify_error(
                TTSErrorType.PROVIDER_UNAVAILABLE,
                f"say command not found: {error}",
                details=details,
            )

        if isinstance(error, SayCommandError):
            details["returncode"] = error.returncode
            return classify_error(
                TTSErrorType.SYNTHESIS_FAILED,
                str(error),
                details=details,
            )

        return super()._classify_error(error)
