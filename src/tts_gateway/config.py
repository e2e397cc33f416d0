"""Environment-based configuration for the TTS gateway.

All configuration is loaded from environment variables with sensible defaults.
Invalid combinations cause startup to fail fast.
"""

import os
from dataclasses import dataclass, field

from tts_gateway.tts.factory import SUPPORTED_PROVIDERS
from tts_gateway.tts.models import AudioFormat, DeliveryMode, TTSConfig

DEFAULT_TEXT = "Hello! This is a text-to-speech sample."


def _split_csv(value: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclass(frozen=True)
class ServerConfig:
    """HTTP server configuration."""

    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8000")))
    cors_origins: tuple[str, ...] = field(
        default_factory=lambda: _split_csv(os.getenv("CORS_ORIGINS", "*"))
    )


@dataclass(frozen=True)
class ObservabilityConfig:
    """Observability configuration for logging."""

    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_json: bool = field(
        default_factory=lambda: os.getenv("LOG_JSON", "true").lower() == "true"
    )


@dataclass(frozen=True)
class SynthesisConfig:
    """Provider selection and synthesis limits."""

    provider: str = field(default_factory=lambda: os.getenv("TTS_PROVIDER", "gtts"))
    default_text: str = field(
        default_factory=lambda: os.getenv("TTS_DEFAULT_TEXT", DEFAULT_TEXT)
    )
    default_language: str = field(
        default_factory=lambda: os.getenv("TTS_DEFAULT_LANGUAGE", "en")
    )
    output_format: str = field(
        default_factory=lambda: os.getenv("TTS_OUTPUT_FORMAT", "mp3").lower()
    )
    max_text_length: int = field(
        default_factory=lambda: int(os.getenv("TTS_MAX_TEXT_LENGTH", "5000"))
    )
    max_retries: int = field(default_factory=lambda: int(os.getenv("TTS_MAX_RETRIES", "1")))
    timeout_ms: int = field(default_factory=lambda: int(os.getenv("TTS_TIMEOUT_MS", "30000")))

    def validate(self) -> None:
        """Validate synthesis settings.

        Raises:
            ValueError: If a value is out of range.
        """
        if self.provider.strip().lower() not in SUPPORTED_PROVIDERS:
            raise ValueError(
                f"TTS_PROVIDER must be one of {list(SUPPORTED_PROVIDERS)}, got {self.provider!r}"
            )
        formats = [f.value for f in AudioFormat]
        if self.output_format not in formats:
            raise ValueError(
                f"TTS_OUTPUT_FORMAT must be one of {formats}, got {self.output_format!r}"
            )
        if self.max_text_length < 1:
            raise ValueError(
                f"TTS_MAX_TEXT_LENGTH must be at least 1, got {self.max_text_length}"
            )
        if self.max_retries < 0:
            raise ValueError(f"TTS_MAX_RETRIES must not be negative, got {self.max_retries}")
        if self.timeout_ms < 1000:
            raise ValueError(f"TTS_TIMEOUT_MS must be at least 1000, got {self.timeout_ms}")
        if not self.default_text.strip():
            raise ValueError("TTS_DEFAULT_TEXT must not be blank")

    def to_tts_config(self) -> TTSConfig:
        """Build the per-component TTSConfig from these settings."""
        return TTSConfig(
            output_format=AudioFormat(self.output_format),
            max_text_length=self.max_text_length,
            timeout_ms=self.timeout_ms,
        )


@dataclass(frozen=True)
class StorageConfig:
    """Delivery mode and storage targets for produced audio."""

    delivery: str = field(default_factory=lambda: os.getenv("TTS_DELIVERY", "download").lower())
    output_dir: str = field(default_factory=lambda: os.getenv("TTS_OUTPUT_DIR", "./audio"))
    s3_bucket: str | None = field(default_factory=lambda: os.getenv("S3_BUCKET"))
    s3_region: str = field(default_factory=lambda: os.getenv("S3_REGION", "us-east-1"))
    s3_prefix: str = field(default_factory=lambda: os.getenv("S3_PREFIX", "tts/"))
    url_expiry_seconds: int = field(
        default_factory=lambda: int(os.getenv("S3_URL_EXPIRY_SECONDS", "3600"))
    )

    def validate(self) -> None:
        """Validate storage settings.

        Raises:
            ValueError: If the delivery mode is unknown or S3 is misconfigured.
        """
        modes = [m.value for m in DeliveryMode]
        if self.delivery not in modes:
            raise ValueError(f"TTS_DELIVERY must be one of {modes}, got {self.delivery!r}")
        if self.delivery == DeliveryMode.S3.value and not self.s3_bucket:
            raise ValueError("S3_BUCKET environment variable is required when TTS_DELIVERY=s3")
        if self.url_expiry_seconds < 0:
            raise ValueError(
                f"S3_URL_EXPIRY_SECONDS must not be negative, got {self.url_expiry_seconds}"
            )


@dataclass(frozen=True)
class GatewayConfig:
    """Complete configuration for the TTS gateway.

    Combines all configuration sections with validation.
    """

    server: ServerConfig
    observability: ObservabilityConfig
    synthesis: SynthesisConfig
    storage: StorageConfig

    def validate(self) -> None:
        self.synthesis.validate()
        self.storage.validate()

    @classmethod
    def from_env(cls) -> "GatewayConfig":
        """Create configuration from environment variables.

        Raises:
            ValueError: If configuration is invalid.
        """
        config = cls(
            server=ServerConfig(),
            observability=ObservabilityConfig(),
            synthesis=SynthesisConfig(),
            storage=StorageConfig(),
        )
        config.validate()
        return config


# Global singleton configuration
_config: GatewayConfig | None = None


def get_config() -> GatewayConfig:
    """Get the global configuration instance.

    Raises:
        ValueError: If configuration validation fails.
    """
    global _config
    if _config is None:
        _config = GatewayConfig.from_env()
    return _config


def reset_config() -> None:
    """Reset the global configuration (for testing)."""
    global _config
    _config = None


def set_config(config: GatewayConfig) -> None:
    """Set the global configuration (for testing)."""
    global _config
    _config = config
