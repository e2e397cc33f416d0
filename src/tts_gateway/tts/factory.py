"""
TTS Component Factory.

Creates TTS component instances based on provider configuration.
Supports gTTS, Google Cloud TTS, AWS Polly, pyttsx3, macOS say, and mock
providers for testing.

The default provider is controlled by the TTS_PROVIDER environment variable.
Default: "gtts" (no credentials required).
"""

import os
from typing import Any, Literal

from .interface import TTSComponent
from .models import TTSConfig

ProviderType = Literal[
    "gtts", "google", "polly", "pyttsx3", "say", "mock", "mock_tone", "mock_fail_once"
]

SUPPORTED_PROVIDERS: tuple[str, ...] = (
    "gtts",
    "google",
    "polly",
    "pyttsx3",
    "say",
    "mock",
    "mock_tone",
    "mock_fail_once",
)

# Default provider (can be overridden by TTS_PROVIDER env var)
DEFAULT_PROVIDER: ProviderType = "gtts"


def create_tts_component(
    provider: ProviderType | str | None = None,
    config: TTSConfig | None = None,
    **kwargs: Any,
) -> TTSComponent:
    """Create a TTS component instance.

    Args:
        provider: The TTS provider to use. If None, uses TTS_PROVIDER env var
                  or defaults to "gtts".
            - "gtts": Google Translate TTS via gTTS (MP3)
            - "google": Google Cloud Text-to-Speech (MP3/WAV)
            - "polly": AWS Polly (MP3/WAV)
            - "pyttsx3": Offline platform speech engine (WAV)
            - "say": macOS say command (WAV)
            - "mock": Alias for "mock_tone"
            - "mock_tone": Produces deterministic 440Hz tone
            - "mock_fail_once": Fails first call, succeeds on retry
        config: Optional TTS configuration
        **kwargs: Additional provider-specific arguments:
            For google:
                - credentials_path: Service account JSON path
                - client: Pre-built TextToSpeechClient
            For polly:
                - region_name: AWS region
                - client: Pre-built boto3 Polly client
            For pyttsx3:
                - driver_name: pyttsx3 driver name
            For say:
                - binary: Name or path of the say executable

    Returns:
        TTSComponent instance

    Raises:
        ValueError: If provider is not supported
    """
    if provider is None:
        provider = os.environ.get("TTS_PROVIDER", DEFAULT_PROVIDER)

    if config is None:
        config = TTSConfig()

    provider = provider.strip().lower()

    if provider == "gtts":
        from .gtts_provider import GTTSComponent

        return GTTSComponent(config=config, **kwargs)

    elif provider == "google":
        from .google_provider import GoogleTTSComponent

        return GoogleTTSComponent(config=config, **kwargs)

    elif provider == "polly":
        from .polly_provider import PollyTTSComponent

        return PollyTTSComponent(config=config, **kwargs)

    elif provider == "pyttsx3":
        from .pyttsx3_provider import Pyttsx3TTSComponent

        return Pyttsx3TTSComponent(config=config, **kwargs)

    elif provider == "say":
        from .say_provider import SayTTSComponent

        return SayTTSComponent(config=config, **kwargs)

    elif provider in ("mock", "mock_tone"):
        from .mock import MockTTSFixedTone

        return MockTTSFixedTone(config=config, **kwargs)

    elif provider == "mock_fail_once":
        from .mock import MockTTSFailOnce

        return MockTTSFailOnce(config=config, **kwargs)

    else:
        supported = ", ".join(SUPPORTED_PROVIDERS)
        raise ValueError(f"Unknown TTS provider: {provider}. Supported providers: {supported}")
