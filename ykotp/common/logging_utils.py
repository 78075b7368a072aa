"""
Logging helpers shared by the client and the command line tool.
"""

from __future__ import annotations

import logging
from typing import IO

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(
    logger: logging.Logger | str, log_level: int, stream: IO[str] | None = None
) -> logging.Logger:
    """
    Attach a StreamHandler with the standard formatter to a logger.

    Calling it again for the same logger only adjusts the levels, so repeated
    client construction never duplicates output.

    Args:
        logger: The logger instance (or its name) to configure
        log_level: The logging level to set
        stream: Stream for the handler, stderr by default

    Returns:
        The configured logger
    """
    if isinstance(logger, str):
        logger = logging.getLogger(logger)

    logger.setLevel(log_level)
    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(log_level)
        return logger

    handler = logging.StreamHandler(stream)
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger
