"""
Text-to-speech HTTP endpoints.

POST /tts and POST /api/tts accept ``{"text": ...}`` (plus optional overrides)
and answer with the audio file, or with ``{"message", "url"}`` when the audio
is delivered through the local store or S3.
"""

import asyncio

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import FileResponse, Response
from starlette.concurrency import run_in_threadpool

from tts_gateway.observability import get_logger
from tts_gateway.observability.metrics import record_timeout
from tts_gateway.service import SpeechService, SynthesisFailedError
from tts_gateway.storage import LocalAudioStore, StorageError, create_audio_store
from tts_gateway.tts.errors import TTSErrorType
from tts_gateway.tts.models import (
    DeliveryMode,
    DeliveryReceipt,
    ProviderInfo,
    SynthesisRequest,
)

router = APIRouter()
logger = get_logger(__name__)

_ERROR_STATUS: dict[TTSErrorType, int] = {
    TTSErrorType.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    TTSErrorType.PROVIDER_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
}

_DELIVERY_MESSAGES: dict[DeliveryMode, str] = {
    DeliveryMode.FILE: "Audio file saved successfully",
    DeliveryMode.S3: "Audio file uploaded successfully",
}


def _get_service(request: Request) -> SpeechService:
    return request.app.state.service


def _error_detail(message: str, error_type: str, retryable: bool = False) -> dict:
    return {"message": message, "error_type": error_type, "retryable": retryable}


@router.post("/tts", response_model=None)
@router.post("/api/tts", response_model=None)
async def synthesize_speech(
    request: Request,
    body: SynthesisRequest | None = None,
) -> Response | DeliveryReceipt:
    """
    Convert text to speech.

    A missing body or blank ``text`` speaks the configured default text.

    Returns:
        The audio file (delivery ``download``) or a DeliveryReceipt
        (delivery ``file`` or ``s3``)

    Raises:
        HTTPException: 400 for invalid input, unknown provider or s3 without a bucket,
            503 when the provider is unavailable, 504 on timeout, 500 otherwise
    """
    service = _get_service(request)
    config = service.config
    body = body or SynthesisRequest()
    delivery = body.delivery or DeliveryMode(config.storage.delivery)

    try:
        store = create_audio_store(config.storage, delivery)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=_error_detail(str(e), TTSErrorType.INVALID_INPUT.value),
        ) from e

    timeout_s = config.synthesis.timeout_ms / 1000
    try:
        asset = await asyncio.wait_for(
            run_in_threadpool(service.synthesize, body),
            timeout=timeout_s,
        )
    except ValueError as e:
        # Unknown provider
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=_error_detail(str(e), TTSErrorType.INVALID_INPUT.value),
        ) from e
    except SynthesisFailedError as e:
        raise HTTPException(
            status_code=_ERROR_STATUS.get(
                e.error.error_type, status.HTTP_500_INTERNAL_SERVER_ERROR
            ),
            detail=_error_detail(e.error.message, e.error.error_type.value, e.error.retryable),
        ) from e
    except asyncio.TimeoutError as e:
        # wait_for cannot stop the worker thread; it runs to completion and
        # records its own outcome after this 504 is sent.
        provider = (body.provider or config.synthesis.provider).strip().lower()
        record_timeout(provider)
        logger.error("synthesis_timeout", provider=provider, timeout_s=timeout_s)
        raise HTTPException(
            status_code=status.HTTP_504_GATEWAY_TIMEOUT,
            detail=_error_detail(
                f"Synthesis did not finish within {timeout_s:g}s",
                TTSErrorType.TIMEOUT.value,
                retryable=True,
            ),
        ) from e
    except Exception as e:
        logger.exception("synthesis_unexpected_error")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=_error_detail("Internal server error", TTSErrorType.UNKNOWN.value),
        ) from e

    if store is None:
        return Response(
            content=asset.audio_bytes,
            media_type=asset.media_type,
            headers={
                "Content-Disposition": f'attachment; filename="{asset.filename}"',
                "X-TTS-Provider": asset.component_instance,
            },
        )

    try:
        url = await run_in_threadpool(store.save, asset)
    except StorageError as e:
        logger.error("audio_storage_failed", delivery=delivery.value, error=e.message)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=_error_detail(e.message, "storage_failed", retryable=True),
        ) from e

    logger.info("audio_delivered", delivery=delivery.value, url=url)
    return DeliveryReceipt(message=_DELIVERY_MESSAGES[delivery], url=url)


@router.get("/api/tts/providers", response_model=list[ProviderInfo])
async def list_providers(request: Request) -> list[ProviderInfo]:
    """List supported providers and whether each one can serve requests."""
    service = _get_service(request)
    return await run_in_threadpool(service.list_providers)


@router.get("/audio/{filename}")
async def get_audio_file(request: Request, filename: str) -> FileResponse:
    """Serve an audio file written by the ``file`` delivery mode."""
    config = _get_service(request).config
    path = LocalAudioStore(config.storage.output_dir).resolve(filename)
    if path is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Audio file not found")

    media_type = "audio/mpeg" if path.suffix == ".mp3" else "audio/wav"
    return FileResponse(path, media_type=media_type, filename=path.name)
