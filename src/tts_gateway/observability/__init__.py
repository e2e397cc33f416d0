"""Observability: structured logging and Prometheus metrics."""

from .logger import get_logger, setup_logging

__all__ = ["setup_logging", "get_logger"]
