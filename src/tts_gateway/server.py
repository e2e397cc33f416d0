"""FastAPI application setup for the TTS gateway."""

import uuid
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from tts_gateway.api import router
from tts_gateway.config import GatewayConfig, get_config
from tts_gateway.observability import get_logger, setup_logging
from tts_gateway.service import SpeechService

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def create_app(
    config: GatewayConfig | None = None,
    service: SpeechService | None = None,
) -> FastAPI:
    """Create the FastAPI application.

    Args:
        config: Gateway configuration (defaults to the environment)
        service: Pre-built SpeechService (defaults to one built from config)

    Returns:
        Configured FastAPI app.
    """
    config = config or get_config()
    service = service or SpeechService(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "tts_gateway_started",
            provider=config.synthesis.provider,
            delivery=config.storage.delivery,
        )
        yield
        app.state.service.shutdown()

    app = FastAPI(
        title="TTS Gateway",
        description="Text-to-speech over Google Cloud TTS, AWS Polly, gTTS, pyttsx3 and say",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.server.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        """Bind a request id to every log event and echo it back."""
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)
        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.unbind_contextvars("request_id")
        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "service": "tts-gateway"}

    @app.get("/metrics")
    async def metrics_endpoint():
        """Prometheus metrics endpoint."""
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(router)

    return app


def build_app() -> FastAPI:
    """Configure logging from the environment and create the app."""
    config = get_config()
    setup_logging(config.observability.log_level, config.observability.log_json)
    return create_app(config)
