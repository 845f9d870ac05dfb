"""Logging configuration for Comfydeck."""

import logging
import sys
from typing import IO

# Create logger for Comfydeck
logger = logging.getLogger("comfydeck")


def setup_logger(level: int = logging.INFO, stream: IO[str] | None = None) -> None:
    """Setup the Comfydeck logger with default configuration.

    Calling it again adjusts the level and, if given, moves output to the
    new stream. Commands that print data to stdout pass sys.stderr so log
    lines never mix with their output.

    Args:
        level: Logging level (default: INFO)
        stream: Stream log lines are written to (default: sys.stdout)
    """
    if logger.handlers:
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)
            if stream is not None and isinstance(handler, logging.StreamHandler):
                handler.setStream(stream)
        return

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setLevel(level)

    formatter = logging.Formatter("comfydeck: %(message)s")
    handler.setFormatter(formatter)

    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False


# Initialize logger on import
setup_logger()
