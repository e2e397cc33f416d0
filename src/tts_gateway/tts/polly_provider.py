"""
AWS Polly Provider Implementation.

Implements the TTSComponent interface using ``boto3.client("polly")``.
Credentials and region follow the standard boto3 resolution chain
(environment, shared config, instance role).

Features:
- Language-specific default voices (Joanna for English)
- Standard and neural engines
- MP3 natively; WAV by wrapping Polly's 16kHz PCM output
- Error classification from botocore error codes and HTTP status
"""

import logging
import os

from .encoding import pcm_to_wav
from .errors import TTSError, TTSErrorType, classify_error, classify_status_code
from .interface import BaseTTSComponent
from .models import AudioFormat, TTSConfig, VoiceProfile

logger = logging.getLogger(__name__)

# boto3 client - imported lazily to handle missing package
try:
    import boto3
    from botocore.exceptions import (
        ClientError,
        ConnectTimeoutError,
        EndpointConnectionError,
        NoCredentialsError,
        PartialCredentialsError,
        ReadTimeoutError,
    )

    BOTO3_AVAILABLE = True
except ImportError:
    BOTO3_AVAILABLE = False
    boto3 = None

# ============================================================================
# Constants
# ============================================================================

DEFAULT_REGION = "us-east-1"

# Polly only accepts 8000 or 16000 for PCM output
PCM_SAMPLE_RATE_HZ = 16000

# Default voice per language; all of these support standard and neural engines
DEFAULT_VOICES: dict[str, str] = {
    "en": "Joanna",
    "es": "Lucia",
    "fr": "Lea",
    "de": "Vicki",
    "it": "Bianca",
    "pt": "Camila",
    "ja": "Takumi",
    "zh": "Zhiyu",
}

FALLBACK_VOICE = "Joanna"

# Polly error codes that indicate a problem with the request itself
_INVALID_INPUT_CODES = {
    "TextLengthExceededException",
    "InvalidSsmlException",
    "InvalidSampleRateException",
    "LexiconNotFoundException",
    "EngineNotSupportedException",
    "LanguageNotSupportedException",
    "MarksNotSupportedForFormatException",
    "SsmlMarksNotSupportedForTextTypeException",
    "ValidationException",
}

_THROTTLING_CODES = {"ThrottlingException", "TooManyRequestsException"}


class PollyTTSComponent(BaseTTSComponent):
    """AWS Polly component implementing the TTSComponent interface."""

    _native_formats = (AudioFormat.MP3, AudioFormat.WAV)

    def __init__(
        self,
        config: TTSConfig | None = None,
        region_name: str | None = None,
        client=None,
    ):
        """Initialize PollyTTSComponent.

        Args:
            config: TTS configuration
            region_name: AWS region (defaults to AWS_REGION / AWS_DEFAULT_REGION)
            client: Optional pre-built boto3 Polly client
        """
        super().__init__(config)
        self._region_name = (
            region_name
            or os.environ.get("AWS_REGION")
            or os.environ.get("AWS_DEFAULT_REGION")
            or DEFAULT_REGION
        )
        self._client = client
        self._is_ready = BOTO3_AVAILABLE or client is not None

        if not self._is_ready:
            logger.warning("boto3 not available. Install with: pip install boto3")

    @property
    def component_instance(self) -> str:
        return "aws-polly"

    @property
    def is_ready(self) -> bool:
        return self._is_ready

    def _get_client(self):
        if self._client is None:
            self._client = boto3.client("polly", region_name=self._region_name)
        return self._client

    def _get_voice_id(self, voice_profile: VoiceProfile) -> str:
        """Get the voice to use for synthesis.

        Priority:
        1. Explicit voice_id in voice_profile
        2. Language-based default from DEFAULT_VOICES
        3. Fallback to Joanna
        """
        if voice_profile.voice_id:
            return voice_profile.voice_id

        language = voice_profile.language.split("-")[0].lower()
        if language in DEFAULT_VOICES:
            return DEFAULT_VOICES[language]

        logger.warning(
            f"No default Polly voice for language '{language}'. Falling back to {FALLBACK_VOICE}."
        )
        return FALLBACK_VOICE

    def _synthesize(
        self,
        text: str,
        voice_profile: VoiceProfile,
        output_format: AudioFormat,
    ) -> tuple[bytes, AudioFormat]:
        client = self._get_client()
        request = {
            "Text": text,
            "VoiceId": self._get_voice_id(voice_profile),
            "Engine": voice_profile.engine,
        }

        if output_format == AudioFormat.WAV:
            request["OutputFormat"] = "pcm"
            request["SampleRate"] = str(PCM_SAMPLE_RATE_HZ)
        else:
            request["OutputFormat"] = "mp3"

        response = client.synthesize_speech(**request)
        stream = response["AudioStream"]
        try:
            audio = stream.read()
        finally:
            stream.close()

        if output_format == AudioFormat.WAV:
            return pcm_to_wav(audio, sample_rate_hz=PCM_SAMPLE_RATE_HZ), AudioFormat.WAV
        return audio, AudioFormat.MP3

    def _classify_error(self, error: Exception) -> TTSError:
        """Classify botocore errors to TTSError."""
        if not BOTO3_AVAILABLE:
            return super()._classify_error(error)

        details = {"exception_type": type(error).__name__}

        if isinstance(error, (NoCredentialsError, PartialCredentialsError)):
            return classify_error(
                TTSErrorType.PROVIDER_UNAVAILABLE,
                f"polly credentials not found: {error}",
                details=details,
            )

        if isinstance(
            error,
            (EndpointConnectionError, ConnectTimeoutError, ReadTimeoutError, TimeoutError),
        ):
            return classify_error(
                TTSErrorType.TIMEOUT,
                f"polly request failed: {error}",
                details=details,
            )

        if isinstance(error, ClientError):
            code = error.response.get("Error", {}).get("Code", "")
            status_code = error.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
            details["error_code"] = code

            if code in _THROTTLING_CODES:
                return classify_error(
                    TTSErrorType.RATE_LIMITED,
                    f"polly rate limit exceeded: {code}",
                    details=details,
                )

            if code in _INVALID_INPUT_CODES:
                return classify_error(
                    TTSErrorType.INVALID_INPUT,
                    f"polly rejected the request: {error}",
                    details=details,
                )

            return classify_status_code(status_code, "polly", error)

        return super()._classify_error(error)

    def shutdown(self) -> None:
        self._client = None
        logger.info("PollyTTSComponent shutdown complete")
