"""Logging setup and log context for cachestore."""

from cachestore.logging.context import clear_context, log_context
from cachestore.logging.logger import get_logger, setup_logging

__all__ = ["clear_context", "get_logger", "log_context", "setup_logging"]
