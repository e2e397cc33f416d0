"""Main entry point for the TTS gateway.

Starts the FastAPI server with uvicorn.
"""

import uvicorn

from tts_gateway.config import get_config
from tts_gateway.observability import get_logger
from tts_gateway.server import build_app

logger = get_logger(__name__)


def main() -> None:
    """Main entry point for the TTS gateway."""
    app = build_app()
    server_config = get_config().server

    logger.info("starting_tts_gateway", host=server_config.host, port=server_config.port)

    config = uvicorn.Config(
        app,
        host=server_config.host,
        port=server_config.port,
        log_level="info",
        access_log=True,
    )

    server = uvicorn.Server(config)
    server.run()


if __name__ == "__main__":
    main()
