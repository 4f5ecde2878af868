# lutracss.log - Diagnostic logging setup
"""
Logging configuration for the lutracss logger hierarchy.
"""
import logging
import sys
from datetime import datetime, timezone
from typing import Optional, TextIO

LOGGER_NAME = "lutracss"


class _IsoFormatter(logging.Formatter):
    """Formats records as ``[<ISO timestamp>] <message>``."""

    def formatTime(self, record, datefmt=None):
        return datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()


def configure_logging(enabled: bool, stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Configure the lutracss logger.

    Args:
        enabled: Emit diagnostic (debug/info) output
        stream: Output stream, defaults to stderr

    Returns:
        The package logger
    """
    logger = logging.getLogger(LOGGER_NAME)

    for handler in list(logger.handlers):
        if getattr(handler, "_lutracss", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(_IsoFormatter("[%(asctime)s] %(message)s"))
    handler._lutracss = True
    logger.addHandler(handler)

    logger.setLevel(logging.DEBUG if enabled else logging.WARNING)
    return logger
