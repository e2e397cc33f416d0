"""
TTS (Text-to-Speech) Provider Module.

Wraps third-party text-to-speech vendors behind one component interface:
gTTS, Google Cloud Text-to-Speech, AWS Polly, pyttsx3 and the macOS say
command.

Key Components:
- TTSComponent: Protocol defining the TTS interface
- BaseTTSComponent: Abstract base class for implementations
- AudioAsset: Output model with synthesized audio and metadata
- VoiceProfile: Configuration for voice selection
- create_tts_component: Factory function for creating TTS instances

Usage:
    from tts_gateway.tts import create_tts_component

    tts = create_tts_component(provider="polly")
    audio_asset = tts.synthesize("Hello world")
"""

from .errors import (
    TTSError,
    TTSErrorType,
    classify_error,
    classify_status_code,
    is_retryable_error_type,
)
from .factory import SUPPORTED_PROVIDERS, create_tts_component
from .interface import BaseTTSComponent, TTSComponent
from .models import (
    ALLOWED_SAMPLE_RATES,
    AudioAsset,
    AudioFormat,
    AudioStatus,
    DeliveryMode,
    DeliveryReceipt,
    ProviderInfo,
    SynthesisRequest,
    TTSConfig,
    VoiceProfile,
)

__all__ = [
    # Interface
    "TTSComponent",
    "BaseTTSComponent",
    # Models
    "AudioAsset",
    "AudioFormat",
    "AudioStatus",
    "DeliveryMode",
    "DeliveryReceipt",
    "ProviderInfo",
    "SynthesisRequest",
    "VoiceProfile",
    "TTSConfig",
    # Errors
    "TTSError",
    "TTSErrorType",
    "classify_error",
    "classify_status_code",
    "is_retryable_error_type",
    # Factory
    "create_tts_component",
    "SUPPORTED_PROVIDERS",
    # Constants
    "ALLOWED_SAMPLE_RATES",
]
