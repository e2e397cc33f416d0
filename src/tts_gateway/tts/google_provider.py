"""
Google Cloud Text-to-Speech Provider Implementation.

Implements the TTSComponent interface using the google-cloud-texttospeech
client. Credentials come from a service account file (``credentials_path``
or GOOGLE_APPLICATION_CREDENTIALS) or from Application Default Credentials.

MP3 and WAV are both produced natively: WAV uses the LINEAR16 encoding,
which Google returns with a RIFF header.
"""

import logging
import os

from .errors import TTSError, TTSErrorType, classify_error, classify_status_code
from .interface import BaseTTSComponent
from .models import AudioFormat, TTSConfig, VoiceProfile

logger = logging.getLogger(__name__)

# Google Cloud client - imported lazily to handle missing package
try:
    from google.auth.exceptions import DefaultCredentialsError
    from google.cloud import texttospeech

    GOOGLE_TTS_AVAILABLE = True
except ImportError:
    GOOGLE_TTS_AVAILABLE = False
    texttospeech = None
    DefaultCredentialsError = None

# Short language codes expanded to the locale Google expects
DEFAULT_LANGUAGE_CODES: dict[str, str] = {
    "en": "en-US",
    "es": "es-ES",
    "fr": "fr-FR",
    "de": "de-DE",
    "it": "it-IT",
    "pt": "pt-BR",
    "ja": "ja-JP",
    "zh": "cmn-CN",
}


class GoogleTTSComponent(BaseTTSComponent):
    """Google Cloud TTS component implementing the TTSComponent interface."""

    _native_formats = (AudioFormat.MP3, AudioFormat.WAV)

    def __init__(
        self,
        config: TTSConfig | None = None,
        credentials_path: str | None = None,
        client=None,
    ):
        """Initialize GoogleTTSComponent.

        Args:
            config: TTS configuration
            credentials_path: Optional service account JSON path
                (defaults to GOOGLE_APPLICATION_CREDENTIALS env var)
            client: Optional pre-built TextToSpeechClient
        """
        super().__init__(config)
        self._credentials_path = credentials_path or os.environ.get(
            "GOOGLE_APPLICATION_CREDENTIALS"
        )
        self._client = client
        self._is_ready = GOOGLE_TTS_AVAILABLE or client is not None

        if not self._is_ready:
            logger.warning(
                "google-cloud-texttospeech not available. "
                "Install with: pip install google-cloud-texttospeech"
            )

    @property
    def component_instance(self) -> str:
        return "google-cloud-tts"

    @property
    def is_ready(self) -> bool:
        return self._is_ready

    def _get_client(self):
        if self._client is None:
            if self._credentials_path:
                self._client = texttospeech.TextToSpeechClient.from_service_account_file(
                    self._credentials_path
                )
            else:
                self._client = texttospeech.TextToSpeechClient()
        return self._client

    @staticmethod
    def _language_code(language: str) -> str:
        if "-" in language:
            return language
        return DEFAULT_LANGUAGE_CODES.get(language.lower(), language)

    def _synthesize(
        self,
        text: str,
        voice_profile: VoiceProfile,
        output_format: AudioFormat,
    ) -> tuple[bytes, AudioFormat]:
        client = self._get_client()

        voice_params = {"language_code": self._language_code(voice_profile.language)}
        if voice_profile.voice_id:
            voice_params["name"] = voice_profile.voice_id

        if output_format == AudioFormat.WAV:
            audio_config = texttospeech.AudioConfig(
                audio_encoding=texttospeech.AudioEncoding.LINEAR16,
                sample_rate_hertz=self._config.sample_rate_hz,
                speaking_rate=voice_profile.speaking_rate,
                pitch=voice_profile.pitch,
            )
        else:
            audio_config = texttospeech.AudioConfig(
                audio_encoding=texttospeech.AudioEncoding.MP3,
                speaking_rate=voice_profile.speaking_rate,
                pitch=voice_profile.pitch,
            )

        response = client.synthesize_speech(
            input=texttospeech.SynthesisInput(text=text),
            voice=texttospeech.VoiceSelectionParams(**voice_params),
            audio_config=audio_config,
        )
        return response.audio_content, self._pick_native_format(output_format)

    def _classify_error(self, error: Exception) -> TTSError:
        """Classify Google API errors.

        ``google.api_core`` exceptions expose the HTTP status as ``code``.
        """
        if DefaultCredentialsError is not None and isinstance(error, DefaultCredentialsError):
            return classify_error(
                TTSErrorType.PROVIDER_UNAVAILABLE,
                f"google credentials not found: {error}",
                details={"exception_type": type(error).__name__},
            )

        if isinstance(error, (TimeoutError, ConnectionError)):
            return classify_error(
                TTSErrorType.TIMEOUT,
                f"google request failed: {error}",
                details={"exception_type": type(error).__name__},
            )

        status_code = getattr(error, "code", None)
        if isinstance(status_code, int):
            return classify_status_code(status_code, "google", error)

        return super()._classify_error(error)

    def shutdown(self) -> None:
        self._client = None
        logger.info("GoogleTTSComponent shutdown complete")
