"""
gTTS Provider Implementation.

Implements the TTSComponent interface using gTTS, which calls the Google
Translate text-to-speech endpoint. No credentials are needed; output is MP3.
Accents are selected through the Google Translate host (``tld``), e.g.
``co.uk`` for British English.
"""

import io
import logging

from .errors import TTSError, TTSErrorType, classify_error, classify_status_code
from .interface import BaseTTSComponent
from .models import AudioFormat, TTSConfig, VoiceProfile

logger = logging.getLogger(__name__)

# gTTS client - imported lazily to handle missing package
try:
    from gtts import gTTS
    from gtts.tts import gTTSError

    GTTS_AVAILABLE = True
except ImportError:
    GTTS_AVAILABLE = False
    gTTS = None
    gTTSError = None


class GTTSComponent(BaseTTSComponent):
    """gTTS component implementing the TTSComponent interface."""

    _native_formats = (AudioFormat.MP3,)

    def __init__(self, config: TTSConfig | None = None):
        super().__init__(config)
        self._is_ready = GTTS_AVAILABLE

        if not GTTS_AVAILABLE:
            logger.warning("gTTS library not available. Install with: pip install gTTS")

    @property
    def component_instance(self) -> str:
        return "gtts"

    @property
    def is_ready(self) -> bool:
        return self._is_ready

    def _synthesize(
        self,
        text: str,
        voice_profile: VoiceProfile,
        output_format: AudioFormat,
    ) -> tuple[bytes, AudioFormat]:
        tts = gTTS(
            text=text,
            lang=voice_profile.language,
            tld=voice_profile.tld,
            slow=voice_profile.slow,
        )
        buffer = io.BytesIO()
        tts.write_to_fp(buffer)
        return buffer.getvalue(), AudioFormat.MP3

    def _classify_error(self, error: Exception) -> TTSError:
        """Classify gTTS errors.

        gTTSError carries the failed HTTP response when the endpoint answered;
        without one it was a network failure. Unsupported languages surface as
        ValueError and empty token lists as AssertionError.
        """
        if gTTSError is not None and isinstance(error, gTTSError):
            response = getattr(error, "rsp", None)
            status_code = getattr(response, "status_code", None)
            if status_code is None:
                return classify_error(
                    TTSErrorType.UPSTREAM_UNAVAILABLE,
                    f"gtts request failed: {error}",
                    details={"exception_type": type(error).__name__},
                )
            return classify_status_code(status_code, "gtts", error)

        if isinstance(error, (ValueError, AssertionError)):
            return classify_error(
                TTSErrorType.INVALID_INPUT,
                f"gtts rejected the input: {str(error) or 'no speakable text'}",
                details={"exception_type": type(error).__name__},
            )

        return super()._classify_error(error)
