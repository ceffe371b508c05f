"""Root logger setup for the sonarr-client CLI."""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from sonarr_client.logging.handlers import JSONFormatter
from sonarr_client.logging.redaction import RedactingFilter

if TYPE_CHECKING:
    from sonarr_client.config.models import LoggingConfig

TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def _formatter(config: LoggingConfig) -> logging.Formatter:
    if config.format.casefold() == "json":
        return JSONFormatter()
    return logging.Formatter(TEXT_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S%z")


def _file_handler(config: LoggingConfig) -> logging.Handler | None:
    """Open the rotating log file, or return None if it cannot be opened."""
    path = Path(config.file).expanduser()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        return RotatingFileHandler(
            path,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"Warning: Could not open log file {path}: {e}\n")
        return None


def configure_logging(config: LoggingConfig) -> None:
    """Replace the root logger's handlers according to config.

    Every installed handler carries a RedactingFilter, so a registered API
    key never reaches the log file or stderr. Stderr is used when no file
    is configured, when the file cannot be opened, or when
    config.include_stderr is set.

    Args:
        config: Logging configuration.
    """
    level = logging.getLevelName(config.level.upper())
    formatter = _formatter(config)
    redacting_filter = RedactingFilter()

    handlers: list[logging.Handler] = []
    file_handler = _file_handler(config) if config.file else None
    if file_handler is not None:
        handlers.append(file_handler)
    if config.include_stderr or file_handler is None:
        handlers.append(logging.StreamHandler(sys.stderr))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        handler.addFilter(redacting_filter)
        root_logger.addHandler(handler)
