"""
Logging setup for crudstore using loguru.

JSON lines are emitted when ``json_format`` is true or LOG_FORMAT=json is set;
otherwise a human-readable, colorized format goes to stderr. Records from the
standard ``logging`` module (uvicorn's, mostly) are routed into loguru.
"""

import logging
import os
import sys
from typing import Optional

from loguru import logger

_CONFIGURED = False

_TEXT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


class InterceptHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def configure_logging(
    level: Optional[str] = None,
    json_format: Optional[bool] = None,
    *,
    sink=None,
) -> None:
    """
    Configure loguru for the server process.

    Args:
        level: Log level name. Falls back to LOG_LEVEL, then INFO.
        json_format: Serialize records as JSON. Falls back to LOG_FORMAT=json.
        sink: Optional file path or stream. Defaults to stderr.
    """
    global _CONFIGURED

    if level is None:
        level = os.environ.get("LOG_LEVEL", "INFO")
    if json_format is None:
        json_format = os.environ.get("LOG_FORMAT", "").lower() == "json"

    logger.remove()
    if json_format:
        logger.add(
            sink or sys.stderr,
            level=level.upper(),
            serialize=True,
            enqueue=True,
        )
    else:
        logger.add(
            sink or sys.stderr,
            level=level.upper(),
            format=_TEXT_FORMAT,
            colorize=sink is None,
            enqueue=True,
            backtrace=True,
            diagnose=False,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).handlers = []
        logging.getLogger(name).propagate = True
        logging.getLogger(name).setLevel(level.upper())

    _CONFIGURED = True
    logger.debug(f"Logging configured: level={level}, json_format={json_format}")


def is_configured() -> bool:
    return _CONFIGURED


__all__ = ["configure_logging", "is_configured", "logger"]
