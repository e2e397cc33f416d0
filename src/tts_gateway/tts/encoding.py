"""
Audio Encoding Module for TTS Output.

Converts vendor audio into the format requested by the caller using pydub.
WAV is read and written natively; MP3 goes through ffmpeg, which pydub
locates on PATH.
"""

import io
import logging

from pydub import AudioSegment
from pydub.exceptions import CouldntDecodeError, CouldntEncodeError

from .models import AudioFormat

logger = logging.getLogger(__name__)


class EncodingError(Exception):
    """Raised when audio encoding fails."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


def convert_audio(
    audio_data: bytes,
    source_format: AudioFormat,
    target_format: AudioFormat,
    bitrate_kbps: int = 128,
) -> bytes:
    """Transcode audio bytes between supported formats.

    Args:
        audio_data: Encoded input audio
        source_format: Format of ``audio_data``
        target_format: Desired output format
        bitrate_kbps: MP3 bitrate when encoding to MP3

    Returns:
        Encoded audio bytes in ``target_format`` (the input itself when the
        formats already match)

    Raises:
        EncodingError: If input is empty, cannot be decoded, or ffmpeg fails
    """
    if not audio_data:
        raise EncodingError("Empty audio data provided")

    if source_format == target_format:
        return audio_data

    try:
        segment = AudioSegment.from_file(io.BytesIO(audio_data), format=source_format.value)

        buffer = io.BytesIO()
        export_kwargs = {"format": target_format.value}
        if target_format == AudioFormat.MP3:
            export_kwargs["bitrate"] = f"{bitrate_kbps}k"
        segment.export(buffer, **export_kwargs)
    except CouldntDecodeError as e:
        raise EncodingError(
            f"Could not decode {source_format.value} audio",
            {"source_format": source_format.value, "error": str(e)[:500]},
        ) from e
    except CouldntEncodeError as e:
        # ffmpeg ran but exited non-zero, e.g. built without an MP3 encoder
        raise EncodingError(
            f"Could not encode {target_format.value} audio",
            {"target_format": target_format.value, "error": str(e)[:500]},
        ) from e
    except FileNotFoundError as e:
        raise EncodingError(
            "ffmpeg not available",
            {"hint": "Install ffmpeg: brew install ffmpeg (macOS) or apt install ffmpeg (Linux)"},
        ) from e

    encoded = buffer.getvalue()
    logger.debug(
        f"Transcoded {source_format.value} -> {target_format.value}: "
        f"{len(audio_data)} bytes -> {len(encoded)} bytes"
    )
    return encoded


def pcm_to_wav(
    pcm_data: bytes,
    sample_rate_hz: int,
    channels: int = 1,
    sample_width: int = 2,
) -> bytes:
    """Wrap raw little-endian PCM samples in a WAV container.

    Args:
        pcm_data: Raw PCM bytes (signed 16-bit by default)
        sample_rate_hz: Sample rate in Hz
        channels: Number of audio channels
        sample_width: Bytes per sample

    Returns:
        WAV file bytes

    Raises:
        EncodingError: If the PCM data is empty, not frame-aligned, or
            cannot be written as WAV
    """
    if not pcm_data:
        raise EncodingError("Empty PCM data provided")

    frame_size = sample_width * channels
    if len(pcm_data) % frame_size != 0:
        raise EncodingError(
            f"PCM data length {len(pcm_data)} is not a multiple of frame size {frame_size}"
        )

    segment = AudioSegment(
        data=pcm_data,
        sample_width=sample_width,
        frame_rate=sample_rate_hz,
        channels=channels,
    )
    buffer = io.BytesIO()
    try:
        segment.export(buffer, format="wav")
    except CouldntEncodeError as e:
        raise EncodingError("Could not write PCM data as WAV", {"error": str(e)[:500]}) from e
    return buffer.getvalue()


def ensure_wav(audio_data: bytes) -> bytes:
    """Return WAV bytes for engine output that may be WAV or AIFF.

    Offline engines write whatever container the platform speech API
    prefers: espeak writes RIFF/WAV, macOS NSSpeechSynthesizer writes AIFF.

    Raises:
        EncodingError: If the container is neither WAV nor AIFF
    """
    if audio_data.startswith(b"RIFF"):
        return audio_data

    if audio_data.startswith(b"FORM"):
        try:
            segment = AudioSegment.from_file(io.BytesIO(audio_data), format="aiff")
            buffer = io.BytesIO()
            segment.export(buffer, format="wav")
        except (CouldntDecodeError, CouldntEncodeError, FileNotFoundError) as e:
            raise EncodingError("Could not convert AIFF output to WAV", {"error": str(e)[:500]}) from e
        return buffer.getvalue()

    raise EncodingError(
        "Unrecognized audio container",
        {"header": audio_data[:4].hex()},
    )


def probe_duration_ms(audio_data: bytes, audio_format: AudioFormat) -> int | None:
    """Get duration of encoded audio in milliseconds.

    Args:
        audio_data: Encoded audio bytes
        audio_format: Format of ``audio_data``

    Returns:
        Duration in milliseconds, or None if unable to determine
    """
    if not audio_data:
        return None

    try:
        segment = AudioSegment.from_file(io.BytesIO(audio_data), format=audio_format.value)
    except (CouldntDecodeError, FileNotFoundError, OSError) as e:
        logger.debug(f"Could not probe {audio_format.value} duration: {e}")
        return None

    return len(segment)
