"""Structured logging module for sonarr-client.

Provides configurable logging with JSON format support, file rotation,
and redaction of registered secrets.
"""

from sonarr_client.logging.config import configure_logging
from sonarr_client.logging.handlers import JSONFormatter
from sonarr_client.logging.redaction import (
    REDACTED,
    RedactingFilter,
    clear_secrets,
    redact,
    register_secret,
    unregister_secret,
)

__all__ = [
    "JSONFormatter",
    "REDACTED",
    "RedactingFilter",
    "clear_secrets",
    "configure_logging",
    "redact",
    "register_secret",
    "unregister_secret",
]
