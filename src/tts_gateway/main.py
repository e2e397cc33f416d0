"""ASGI entrypoint for the TTS gateway.

Usage with uvicorn:
    uvicorn tts_gateway.main:app --host 0.0.0.0 --port 8000
"""

from tts_gateway.server import build_app

app = build_app()
