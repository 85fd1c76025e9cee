"""
Logging configuration for News Curator.

All output goes through loguru. Libraries that log through the standard
``logging`` module (the Flask dev server, httpx, SQLAlchemy) are routed into
loguru so provider calls and requests share one format and one file.
"""

import logging
import sys
from pathlib import Path
from typing import Iterable, Optional

from loguru import logger as _logger

from news_curator.config import LoggingConfig, get_config

# Standard-library loggers forwarded into loguru by default
ROUTED_LOGGERS = ("werkzeug", "httpx", "httpcore", "sqlalchemy.engine")


class InterceptHandler(logging.Handler):
    """Forward standard-library log records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = _logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Skip logging's own frames so loguru reports the real caller
        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        _logger.bind(name=record.name).opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def route_std_logging(names: Iterable[str] = ROUTED_LOGGERS, level: str = "WARNING") -> None:
    """Send the named standard-library loggers through loguru.

    Args:
        names: Logger names to intercept
        level: Minimum level forwarded from those loggers
    """
    handler = InterceptHandler()
    for name in names:
        std_logger = logging.getLogger(name)
        std_logger.handlers = [handler]
        std_logger.setLevel(level)
        std_logger.propagate = False


def setup_logger(
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    rotation: Optional[str] = None,
    retention: Optional[str] = None,
    format: Optional[str] = None,
    config: Optional[LoggingConfig] = None,
) -> None:
    """Configure console and file sinks.

    Explicit arguments override the matching ``LoggingConfig`` values.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ...)
        log_file: Path of the rotating log file
        rotation: Rotation threshold (e.g. "100 MB")
        retention: How long rotated files are kept (e.g. "30 days")
        format: Loguru format string
        config: Logging section to read defaults from
    """
    config = config or get_config().logging

    level = level or config.level
    format = format or config.format

    _logger.remove()

    if config.console_enabled:
        _logger.add(
            sys.stderr,
            format=format,
            level=level,
            colorize=sys.stderr.isatty(),
            backtrace=True,
            diagnose=True,
        )

    if config.file_enabled:
        path = Path(log_file or config.file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        _logger.add(
            str(path),
            format=format,
            level=level,
            rotation=rotation or config.rotation,
            retention=retention or config.retention,
            compression="zip",
            encoding="utf-8",
            enqueue=True,  # sinks are shared by request threads
            backtrace=True,
            # Tracebacks may include provider API keys held in locals
            diagnose=False,
        )

    route_std_logging(level="DEBUG" if level in ("TRACE", "DEBUG") else "WARNING")


def get_logger(name: Optional[str] = None):
    """Get a logger, bound to ``name`` when given (usually ``__name__``)."""
    if name:
        return _logger.bind(name=name)
    return _logger


logger = _logger

__all__ = [
    "InterceptHandler",
    "route_std_logging",
    "setup_logger",
    "get_logger",
    "logger",
]
