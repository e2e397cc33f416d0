"""
TTS Component Interface Contract.

This module defines the interface that all TTS providers must follow. Vendor
providers (gTTS, Google Cloud TTS, AWS Polly, pyttsx3, macOS say) and the mock
implementations all conform to this contract.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Protocol, runtime_checkable

from .encoding import EncodingError, convert_audio, probe_duration_ms
from .errors import TTSError, TTSErrorType, classify_error
from .models import AudioAsset, AudioFormat, AudioStatus, TTSConfig, VoiceProfile
from .preprocessing import preprocess_text

logger = logging.getLogger(__name__)


@runtime_checkable
class TTSComponent(Protocol):
    """Protocol defining the TTS component contract."""

    @property
    def component_name(self) -> str:
        """Return the component name (always 'tts')."""
        ...

    @property
    def component_instance(self) -> str:
        """Return the provider identifier (e.g., 'polly-neural')."""
        ...

    @property
    def is_ready(self) -> bool:
        """Check if the component can serve requests.

        Returns True if the vendor SDK (or binary) is importable. Cloud
        credentials are resolved on the first call; when they are missing the
        call fails with PROVIDER_UNAVAILABLE.
        """
        ...

    @property
    def native_formats(self) -> tuple[AudioFormat, ...]:
        """Formats the vendor produces without transcoding."""
        ...

    def synthesize(
        self,
        text: str,
        voice_profile: VoiceProfile | None = None,
        output_format: AudioFormat | None = None,
    ) -> AudioAsset:
        """Synthesize speech audio from text.

        Args:
            text: Text to speak
            voice_profile: Optional voice configuration override
            output_format: Desired audio format (defaults to config)

        Returns:
            AudioAsset with synthesized speech audio

        The component MUST:
        - Return SUCCESS status with non-empty audio for successful synthesis
        - Return FAILED status with retryable=True for transient errors
        - Return FAILED status with retryable=False for permanent errors
        - Never raise for vendor failures
        """
        ...

    def shutdown(self) -> None:
        """Release resources (clients, engines, etc.)."""
        ...


class BaseTTSComponent(ABC):
    """Abstract base class for TTS component implementations.

    Implements ``synthesize`` once: validation, preprocessing, transcoding and
    error capture. Subclasses only talk to their vendor in ``_synthesize``
    and map vendor exceptions in ``_classify_error``.
    """

    _component_name: str = "tts"
    _native_formats: tuple[AudioFormat, ...] = (AudioFormat.MP3,)

    def __init__(self, config: TTSConfig | None = None):
        self._config = config or TTSConfig()

    @property
    def component_name(self) -> str:
        """Return the component name (always 'tts')."""
        return self._component_name

    @property
    def native_formats(self) -> tuple[AudioFormat, ...]:
        return self._native_formats

    @property
    @abstractmethod
    def component_instance(self) -> str:
        """Subclasses must provide their instance identifier."""
        pass

    @property
    @abstractmethod
    def is_ready(self) -> bool:
        """Subclasses must indicate readiness."""
        pass

    @abstractmethod
    def _synthesize(
        self,
        text: str,
        voice_profile: VoiceProfile,
        output_format: AudioFormat,
    ) -> tuple[bytes, AudioFormat]:
        """Call the vendor and return (audio bytes, format of those bytes).

        ``output_format`` is a hint: providers return it directly when it is
        one of their native formats and any native format otherwise.
        """
        pass

    def _classify_error(self, error: Exception) -> TTSError:
        """Map a vendor exception to a TTSError. Override per vendor."""
        return classify_error(
            TTSErrorType.UNKNOWN,
            f"{self.component_instance} synthesis failed: {error}",
            details={"exception_type": type(error).__name__},
        )

    def _pick_native_format(self, output_format: AudioFormat) -> AudioFormat:
        if output_format in self._native_formats:
            return output_format
        return self._native_formats[0]

    def synthesize(
        self,
        text: str,
        voice_profile: VoiceProfile | None = None,
        output_format: AudioFormat | None = None,
    ) -> AudioAsset:
        """Synthesize speech audio from text.

        Args:
            text: Text to speak
            voice_profile: Voice configuration
            output_format: Desired audio format (defaults to config)

        Returns:
            AudioAsset with synthesized speech audio
        """
        start_time = datetime.now(timezone.utc)
        voice_profile = voice_profile or VoiceProfile()
        output_format = output_format or self._config.output_format

        # Input validation
        if not text or not text.strip():
            error = classify_error(
                TTSErrorType.INVALID_INPUT,
                "Empty text input - cannot synthesize empty text",
            )
            return self._create_failed_asset(
                text, voice_profile, output_format, [error], start_time
            )

        if len(text) > self._config.max_text_length:
            error = classify_error(
                TTSErrorType.INVALID_INPUT,
                f"Text too long: {len(text)} characters "
                f"(limit {self._config.max_text_length})",
                details={"length": len(text), "limit": self._config.max_text_length},
            )
            return self._create_failed_asset(
                text, voice_profile, output_format, [error], start_time
            )

        if not self.is_ready:
            error = classify_error(
                TTSErrorType.PROVIDER_UNAVAILABLE,
                f"Provider {self.component_instance} is not ready "
                "(missing SDK, binary or credentials)",
            )
            return self._create_failed_asset(
                text, voice_profile, output_format, [error], start_time
            )

        preprocessed_text = preprocess_text(text)
        if not preprocessed_text:
            error = classify_error(
                TTSErrorType.INVALID_INPUT,
                "Text has no speakable characters after preprocessing",
            )
            return self._create_failed_asset(
                text, voice_profile, output_format, [error], start_time
            )

        try:
            audio_bytes, produced_format = self._synthesize(
                preprocessed_text, voice_profile, output_format
            )
        except EncodingError as e:
            logger.warning(f"{self.component_instance} produced unusable audio: {e.message}")
            error = classify_error(
                TTSErrorType.ENCODING_FAILED,
                f"{self.component_instance} produced unusable audio: {e.message}",
                details=e.details,
            )
            return self._create_failed_asset(
                preprocessed_text, voice_profile, output_format, [error], start_time
            )
        except Exception as e:
            logger.exception(f"{self.component_instance} synthesis failed: {e}")
            error = self._classify_error(e)
            return self._create_failed_asset(
                preprocessed_text, voice_profile, output_format, [error], start_time
            )

        if not audio_bytes:
            error = classify_error(
                TTSErrorType.SYNTHESIS_FAILED,
                f"{self.component_instance} returned no audio",
            )
            return self._create_failed_asset(
                preprocessed_text, voice_profile, output_format, [error], start_time
            )

        try:
            audio_bytes = convert_audio(audio_bytes, produced_format, output_format)
        except EncodingError as e:
            logger.warning(f"Transcoding failed: {e.message}")
            error = classify_error(
                TTSErrorType.ENCODING_FAILED,
                f"Could not convert {produced_format.value} to {output_format.value}: "
                f"{e.message}",
                details=e.details,
            )
            return self._create_failed_asset(
                preprocessed_text, voice_profile, output_format, [error], start_time
            )

        return AudioAsset(
            component_instance=self.component_instance,
            audio_format=output_format,
            audio_bytes=audio_bytes,
            duration_ms=probe_duration_ms(audio_bytes, output_format),
            language=voice_profile.language,
            text=preprocessed_text,
            status=AudioStatus.SUCCESS,
            processing_time_ms=self._elapsed_ms(start_time),
        )

    def _create_failed_asset(
        self,
        text: str,
        voice_profile: VoiceProfile,
        output_format: AudioFormat,
        errors: list[TTSError],
        start_time: datetime,
    ) -> AudioAsset:
        """Create an AudioAsset with FAILED status and no audio."""
        return AudioAsset(
            component_instance=self.component_instance,
            audio_format=output_format,
            language=voice_profile.language,
            text=text or "",
            status=AudioStatus.FAILED,
            errors=errors,
            processing_time_ms=self._elapsed_ms(start_time),
        )

    @staticmethod
    def _elapsed_ms(start_time: datetime) -> int:
        end_time = datetime.now(timezone.utc)
        return max(0, int((end_time - start_time).total_seconds() * 1000))

    def shutdown(self) -> None:
        """Default implementation does nothing. Override if cleanup needed."""
        return  # noqa: B027 - intentionally empty default implementation
