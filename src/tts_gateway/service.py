"""
Speech service: resolves a SynthesisRequest into an AudioAsset.

Owns the provider components (created lazily, one per provider name),
applies the default-text fallback, retries retryable failures and records
metrics.
"""

import threading
import time

from tts_gateway.config import GatewayConfig
from tts_gateway.observability import get_logger
from tts_gateway.observability.metrics import (
    record_retry,
    record_synthesis_failure,
    record_synthesis_success,
)
from tts_gateway.tts.errors import TTSError
from tts_gateway.tts.factory import SUPPORTED_PROVIDERS, create_tts_component
from tts_gateway.tts.interface import TTSComponent
from tts_gateway.tts.models import (
    AudioAsset,
    AudioFormat,
    AudioStatus,
    ProviderInfo,
    SynthesisRequest,
    VoiceProfile,
)
from tts_gateway.tts.preprocessing import preprocess_text

logger = get_logger(__name__)


class SynthesisFailedError(Exception):
    """Raised when synthesis fails after all attempts."""

    def __init__(self, error: TTSError, provider: str, attempts: int):
        super().__init__(error.message)
        self.error = error
        self.provider = provider
        self.attempts = attempts


class SpeechService:
    """Synthesizes speech for HTTP requests using the configured providers."""

    def __init__(self, config: GatewayConfig):
        self._config = config
        self._tts_config = config.synthesis.to_tts_config()
        self._components: dict[str, TTSComponent] = {}
        self._lock = threading.Lock()

    @property
    def config(self) -> GatewayConfig:
        return self._config

    def get_component(self, provider: str) -> TTSComponent:
        """Return the cached component for ``provider``, creating it on first use.

        Raises:
            ValueError: If the provider is not supported
        """
        name = provider.strip().lower()
        with self._lock:
            component = self._components.get(name)
            if component is None:
                component = create_tts_component(provider=name, config=self._tts_config)
                self._components[name] = component
        return component

    def register_component(self, provider: str, component: TTSComponent) -> None:
        """Install a pre-built component for ``provider``."""
        with self._lock:
            self._components[provider.strip().lower()] = component

    def resolve_text(self, text: str | None) -> str:
        """Return the request text, or the default text when nothing speakable remains."""
        if text is None or not preprocess_text(text):
            return self._config.synthesis.default_text
        return text

    def build_voice_profile(self, request: SynthesisRequest) -> VoiceProfile:
        profile = {
            "language": request.language or self._config.synthesis.default_language,
            "voice_id": request.voice,
        }
        if request.speaking_rate is not None:
            profile["speaking_rate"] = request.speaking_rate
        return VoiceProfile(**profile)

    def synthesize(self, request: SynthesisRequest) -> AudioAsset:
        """Synthesize the request, retrying retryable failures.

        Args:
            request: Parsed HTTP request body

        Returns:
            Successful AudioAsset

        Raises:
            ValueError: If the requested provider is not supported
            SynthesisFailedError: If every attempt failed
        """
        provider = (request.provider or self._config.synthesis.provider).strip().lower()
        component = self.get_component(provider)

        text = self.resolve_text(request.text)
        voice_profile = self.build_voice_profile(request)
        output_format = request.format or AudioFormat(self._config.synthesis.output_format)
        max_attempts = self._config.synthesis.max_retries + 1

        log = logger.bind(provider=provider, output_format=output_format.value)
        log.info(
            "synthesis_started",
            text_length=len(text),
            used_default_text=text is not request.text,
            language=voice_profile.language,
        )

        start = time.monotonic()
        attempt = 0
        while True:
            attempt += 1
            asset = component.synthesize(
                text, voice_profile=voice_profile, output_format=output_format
            )
            if not asset.is_retryable or attempt >= max_attempts:
                break

            record_retry(provider)
            log.warning(
                "synthesis_retry",
                attempt=attempt,
                error_type=asset.errors[0].error_type.value,
                error=asset.errors[0].message,
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)

        if asset.status == AudioStatus.FAILED:
            error = asset.errors[0]
            record_synthesis_failure(provider, error.error_type.value, elapsed_ms)
            log.error(
                "synthesis_failed",
                attempts=attempt,
                error_type=error.error_type.value,
                error=error.message,
                retryable=error.retryable,
            )
            raise SynthesisFailedError(error, provider=provider, attempts=attempt)

        record_synthesis_success(
            provider, elapsed_ms, asset.audio_format.value, len(asset.audio_bytes)
        )
        log.info(
            "synthesis_completed",
            attempts=attempt,
            asset_id=asset.asset_id,
            audio_bytes=len(asset.audio_bytes),
            duration_ms=asset.duration_ms,
            elapsed_ms=elapsed_ms,
        )
        return asset

    def list_providers(self) -> list[ProviderInfo]:
        """Describe every supported provider (aliases excluded)."""
        providers = []
        for name in SUPPORTED_PROVIDERS:
            if name == "mock":
                continue
            component = self.get_component(name)
            providers.append(
                ProviderInfo(
                    name=name,
                    component_instance=component.component_instance,
                    is_ready=component.is_ready,
                    native_formats=list(component.native_formats),
                )
            )
        return providers

    def shutdown(self) -> None:
        """Shut down every cached component."""
        with self._lock:
            components = list(self._components.values())
            self._components.clear()

        for component in components:
            component.shutdown()
        logger.info("speech_service_shutdown", components=len(components))
