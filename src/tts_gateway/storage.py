"""
Audio storage for the ``file`` and ``s3`` delivery modes.

Both stores take a synthesized AudioAsset, persist its bytes and return the
URL the caller should fetch the audio from.
"""

import logging
import re
from pathlib import Path
from typing import Protocol, runtime_checkable

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from tts_gateway.config import StorageConfig
from tts_gateway.tts.models import AudioAsset, AudioFormat, DeliveryMode

logger = logging.getLogger(__name__)

_AUDIO_EXTENSIONS = "|".join(f.extension for f in AudioFormat)
SAFE_FILENAME = re.compile(rf"^[A-Za-z0-9][A-Za-z0-9_.-]*\.({_AUDIO_EXTENSIONS})$")


class StorageError(Exception):
    """Raised when audio cannot be stored."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


@runtime_checkable
class AudioStore(Protocol):
    """Persists synthesized audio and returns a URL for it."""

    def save(self, asset: AudioAsset) -> str:
        ...


class LocalAudioStore:
    """Writes audio files into a local directory served under ``url_prefix``."""

    def __init__(self, output_dir: str | Path, url_prefix: str = "/audio"):
        self._output_dir = Path(output_dir)
        self._url_prefix = url_prefix.rstrip("/")

    @property
    def output_dir(self) -> Path:
        return self._output_dir

    def save(self, asset: AudioAsset) -> str:
        """Write the asset to ``<output_dir>/<asset.filename>``.

        Raises:
            StorageError: If the file cannot be written
        """
        try:
            self._output_dir.mkdir(parents=True, exist_ok=True)
            path = self._output_dir / asset.filename
            path.write_bytes(asset.audio_bytes)
        except OSError as e:
            raise StorageError(
                f"Could not write audio file: {e}",
                {"output_dir": str(self._output_dir)},
            ) from e

        logger.info(f"Saved {len(asset.audio_bytes)} bytes to {path}")
        return f"{self._url_prefix}/{asset.filename}"

    def resolve(self, filename: str) -> Path | None:
        """Return the path of a stored file, or None if it is invalid or missing.

        Only plain file names with an audio extension are accepted, so a
        request can never address anything outside the output directory.
        """
        if not SAFE_FILENAME.match(filename):
            return None

        path = self._output_dir / filename
        if not path.is_file():
            return None
        return path


class S3AudioStore:
    """Uploads audio to an S3 bucket and returns a presigned or public URL."""

    def __init__(
        self,
        bucket: str,
        region: str = "us-east-1",
        prefix: str = "tts/",
        url_expiry_seconds: int = 3600,
        client=None,
    ):
        if not bucket:
            raise ValueError("S3 bucket name is required")

        self._bucket = bucket
        self._region = region
        self._prefix = prefix
        self._url_expiry_seconds = url_expiry_seconds
        self._client = client

    def _get_client(self):
        if self._client is None:
            self._client = boto3.client("s3", region_name=self._region)
        return self._client

    def _public_url(self, key: str) -> str:
        return f"https://{self._bucket}.s3.{self._region}.amazonaws.com/{key}"

    def save(self, asset: AudioAsset) -> str:
        """Upload the asset under ``<prefix><asset.filename>``.

        Raises:
            StorageError: If the upload or URL generation fails
        """
        key = f"{self._prefix}{asset.filename}"
        client = self._get_client()

        try:
            client.put_object(
                Bucket=self._bucket,
                Key=key,
                Body=asset.audio_bytes,
                ContentType=asset.media_type,
            )

            if self._url_expiry_seconds == 0:
                url = self._public_url(key)
            else:
                url = client.generate_presigned_url(
                    "get_object",
                    Params={"Bucket": self._bucket, "Key": key},
                    ExpiresIn=self._url_expiry_seconds,
                )
        except (BotoCoreError, ClientError) as e:
            raise StorageError(
                f"S3 upload failed: {e}",
                {"bucket": self._bucket, "key": key, "exception_type": type(e).__name__},
            ) from e

        logger.info(f"Uploaded {len(asset.audio_bytes)} bytes to s3://{self._bucket}/{key}")
        return url


def create_audio_store(
    config: StorageConfig, delivery: DeliveryMode | None = None
) -> AudioStore | None:
    """Create the store for a delivery mode.

    Args:
        config: Storage configuration
        delivery: Delivery mode (defaults to ``config.delivery``)

    Returns:
        LocalAudioStore for ``file``, S3AudioStore for ``s3``, None for ``download``

    Raises:
        ValueError: If ``s3`` is requested without a bucket
    """
    delivery = delivery or DeliveryMode(config.delivery)

    if delivery == DeliveryMode.FILE:
        return LocalAudioStore(config.output_dir)

    if delivery == DeliveryMode.S3:
        if not config.s3_bucket:
            raise ValueError("S3 delivery requested but S3_BUCKET is not configured")
        return S3AudioStore(
            bucket=config.s3_bucket,
            region=config.s3_region,
            prefix=config.s3_prefix,
            url_expiry_seconds=config.url_expiry_seconds,
        )

    return None
