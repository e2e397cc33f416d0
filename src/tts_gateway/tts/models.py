"""
Pydantic data models for the TTS gateway.

Defines typed input/output contracts for text-to-speech synthesis: the HTTP
request body, voice selection, provider configuration and the synthesized
audio asset.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import TTSError

# -----------------------------------------------------------------------------
# Enums
# -----------------------------------------------------------------------------


class AudioFormat(str, Enum):
    """Supported audio formats for synthesis output."""

    MP3 = "mp3"  # audio/mpeg
    WAV = "wav"  # audio/wav, 16-bit PCM

    @property
    def media_type(self) -> str:
        return _MEDIA_TYPES[self]

    @property
    def extension(self) -> str:
        return self.value


_MEDIA_TYPES = {
    AudioFormat.MP3: "audio/mpeg",
    AudioFormat.WAV: "audio/wav",
}


class AudioStatus(str, Enum):
    """Status of audio synthesis."""

    SUCCESS = "success"
    FAILED = "failed"


class DeliveryMode(str, Enum):
    """How synthesized audio reaches the caller."""

    DOWNLOAD = "download"  # Audio bytes in the response body
    FILE = "file"  # Written to the local output directory, URL returned
    S3 = "s3"  # Uploaded to S3, URL returned


# Allowed sample rates
ALLOWED_SAMPLE_RATES = [8000, 16000, 22050, 24000, 44100, 48000]


# -----------------------------------------------------------------------------
# Configuration Models
# -----------------------------------------------------------------------------


class VoiceProfile(BaseModel):
    """Voice selection and prosody settings for a single synthesis call.

    Not every provider honours every field: gTTS only understands language,
    tld and slow, while Polly and Google Cloud TTS ignore tld.
    """

    language: str = Field(default="en", min_length=2, description="Language code (ISO 639-1)")
    voice_id: str | None = Field(
        default=None, description="Provider-specific voice name or id"
    )
    speaking_rate: float = Field(
        default=1.0, ge=0.25, le=4.0, description="Relative speaking rate"
    )
    pitch: float = Field(default=0.0, ge=-20.0, le=20.0, description="Pitch shift in semitones")
    volume: float = Field(default=1.0, ge=0.0, le=1.0, description="Output volume (pyttsx3)")
    tld: str = Field(default="com", description="Google Translate host for gTTS accents")
    slow: bool = Field(default=False, description="Slow speech (gTTS)")
    engine: str = Field(default="standard", description="Polly engine (standard or neural)")

    @field_validator("engine")
    @classmethod
    def validate_engine(cls, v: str) -> str:
        """Ensure the Polly engine is one the API accepts."""
        if v not in ("standard", "neural"):
            raise ValueError(f"engine must be 'standard' or 'neural', got {v!r}")
        return v

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "language": "en",
                "voice_id": "Joanna",
                "speaking_rate": 1.0,
                "pitch": 0.0,
                "engine": "neural",
            }
        }
    )


class TTSConfig(BaseModel):
    """Configuration shared by all TTS components."""

    output_format: AudioFormat = Field(
        default=AudioFormat.MP3,
        description="Audio format returned when the caller does not ask for one",
    )
    max_text_length: int = Field(
        default=5000,
        ge=1,
        description="Longest text accepted for a single synthesis call",
    )
    timeout_ms: int = Field(
        default=30000,
        ge=1000,
        description="Maximum processing time per request (ms)",
    )
    sample_rate_hz: int = Field(
        default=22050,
        description="Sample rate requested from engines that produce raw PCM",
    )

    @field_validator("sample_rate_hz")
    @classmethod
    def validate_sample_rate(cls, v: int) -> int:
        """Ensure sample rate is in allowed list."""
        if v not in ALLOWED_SAMPLE_RATES:
            raise ValueError(
                f"sample_rate_hz must be one of {ALLOWED_SAMPLE_RATES}, got {v}"
            )
        return v


# -----------------------------------------------------------------------------
# HTTP Models
# -----------------------------------------------------------------------------


class SynthesisRequest(BaseModel):
    """Body of POST /tts and POST /api/tts.

    Only ``text`` appears in the basic contract; every other field is an
    optional override of the configured defaults.
    """

    text: str | None = Field(default=None, description="Text to speak (default text if blank)")
    provider: str | None = Field(default=None, description="TTS provider override")
    voice: str | None = Field(default=None, description="Provider-specific voice id")
    language: str | None = Field(default=None, description="Language code override")
    format: AudioFormat | None = Field(default=None, description="Output audio format")
    delivery: DeliveryMode | None = Field(default=None, description="Delivery mode override")
    speaking_rate: float | None = Field(default=None, ge=0.25, le=4.0)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "text": "Hello from the text-to-speech gateway.",
                "provider": "polly",
                "voice": "Joanna",
                "format": "mp3",
                "delivery": "s3",
            }
        }
    )


class DeliveryReceipt(BaseModel):
    """JSON answer for the file and s3 delivery modes."""

    message: str
    url: str


class ProviderInfo(BaseModel):
    """Readiness summary of a provider, as listed by GET /api/tts/providers."""

    name: str
    component_instance: str
    is_ready: bool
    native_formats: list[AudioFormat]


# -----------------------------------------------------------------------------
# Output Model
# -----------------------------------------------------------------------------


class AudioAsset(BaseModel):
    """Synthesized speech audio with metadata."""

    asset_id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        description="Globally unique identifier for this audio",
    )
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Timestamp of synthesis",
    )

    # Component identification
    component: str = Field(default="tts", description="Always 'tts' for this asset type")
    component_instance: str = Field(
        ..., description="Provider identifier (e.g., 'polly-standard')"
    )

    # Audio
    audio_format: AudioFormat = Field(..., description="Audio encoding format")
    audio_bytes: bytes = Field(default=b"", description="Encoded audio bytes")
    sample_rate_hz: int | None = Field(default=None, description="Sample rate, when known")
    duration_ms: int | None = Field(default=None, ge=0, description="Duration, when known")

    # Text
    language: str = Field(..., description="Synthesis language")
    text: str = Field(default="", description="Text actually sent to the engine")

    # Status and errors
    status: AudioStatus = Field(..., description="Overall synthesis status")
    errors: list[TTSError] = Field(
        default_factory=list,
        description="List of errors encountered during processing",
    )
    processing_time_ms: int | None = Field(
        default=None, ge=0, description="Total processing time in milliseconds"
    )

    @property
    def has_errors(self) -> bool:
        """Whether any errors occurred during processing."""
        return len(self.errors) > 0

    @property
    def is_retryable(self) -> bool:
        """Whether this result should be retried.

        Returns True if status is FAILED and any error is retryable.
        """
        return self.status == AudioStatus.FAILED and any(
            e.retryable for e in self.errors
        )

    @property
    def media_type(self) -> str:
        return self.audio_format.media_type

    @property
    def filename(self) -> str:
        return f"tts-{self.asset_id}.{self.audio_format.extension}"
