"""
pyttsx3 Provider Implementation.

Offline synthesis through pyttsx3, which drives the platform speech engine
(espeak on Linux, SAPI5 on Windows, NSSpeechSynthesizer on macOS). The engine
renders to a temporary file that is read back as WAV.
"""

import logging
import os
import tempfile
import threading

from .encoding import ensure_wav
from .errors import TTSError, TTSErrorType, classify_error
from .interface import BaseTTSComponent
from .models import AudioFormat, TTSConfig, VoiceProfile

logger = logging.getLogger(__name__)

# pyttsx3 engine - imported lazily to handle missing package
try:
    import pyttsx3

    PYTTSX3_AVAILABLE = True
except ImportError:
    PYTTSX3_AVAILABLE = False
    pyttsx3 = None

# Words per minute at speaking_rate=1.0
BASE_RATE_WPM = 200

# pyttsx3 engines share one event loop per driver and are not thread-safe
_ENGINE_LOCK = threading.Lock()


class Pyttsx3TTSComponent(BaseTTSComponent):
    """pyttsx3 component implementing the TTSComponent interface."""

    _native_formats = (AudioFormat.WAV,)

    def __init__(
        self,
        config: TTSConfig | None = None,
        driver_name: str | None = None,
    ):
        """Initialize Pyttsx3TTSComponent.

        Args:
            config: TTS configuration
            driver_name: Optional pyttsx3 driver ('espeak', 'sapi5', 'nsss')
        """
        super().__init__(config)
        self._driver_name = driver_name
        self._is_ready = PYTTSX3_AVAILABLE

        if not PYTTSX3_AVAILABLE:
            logger.warning("pyttsx3 not available. Install with: pip install pyttsx3")

    @property
    def component_instance(self) -> str:
        return f"pyttsx3-{self._driver_name or 'default'}"

    @property
    def is_ready(self) -> bool:
        return self._is_ready

    def _select_voice(self, engine, voice_profile: VoiceProfile) -> str | None:
        """Pick an explicit voice, else the first voice matching the language."""
        if voice_profile.voice_id:
            return voice_profile.voice_id

        language = voice_profile.language.lower()
        for voice in engine.getProperty("voices") or []:
            languages = [
                lang.decode("utf-8", errors="ignore") if isinstance(lang, bytes) else str(lang)
                for lang in (getattr(voice, "languages", None) or [])
            ]
            if any(language in lang.lower() for lang in languages):
                return voice.id
        return None

    def _synthesize(
        self,
        text: str,
        voice_profile: VoiceProfile,
        output_format: AudioFormat,
    ) -> tuple[bytes, AudioFormat]:
        with tempfile.NamedTemporaryFile(suffix=".wav", delete=False) as f:
            output_path = f.name

        try:
            with _ENGINE_LOCK:
                engine = pyttsx3.init(self._driver_name)
                engine.setProperty("rate", int(BASE_RATE_WPM * voice_profile.speaking_rate))
                engine.setProperty("volume", voice_profile.volume)

                voice_id = self._select_voice(engine, voice_profile)
                if voice_id:
                    engine.setProperty("voice", voice_id)

                engine.save_to_file(text, output_path)
                engine.runAndWait()

            with open(output_path, "rb") as f:
                audio = f.read()
        finally:
            if os.path.exists(output_path):
                os.unlink(output_path)

        if not audio:
            return b"", AudioFormat.WAV
        return ensure_wav(audio), AudioFormat.WAV

    def _classify_error(self, error: Exception) -> TTSError:
        details = {"exception_type": type(error).__name__}

        # Missing espeak / speech driver surfaces as OSError or ImportError
        if isinstance(error, (OSError, ImportError)):
            return classify_error(
                TTSErrorType.PROVIDER_UNAVAILABLE,
                f"pyttsx3 speech engine unavailable: {error}",
                details=details,
            )

        if isinstance(error, RuntimeError):
            return classify_error(
                TTSErrorType.SYNTHESIS_FAILED,
                f"pyttsx3 engine failed: {error}",
                details=details,
            )

        return super()._classify_error(error)
