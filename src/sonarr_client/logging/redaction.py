"""Secret redaction for log records and error messages.

Credentials are registered once, when the authentication headers are built,
and masked everywhere text leaves the process afterwards: in log records
(via RedactingFilter) and in error messages (via redact()).
"""

from __future__ import annotations

import logging
import threading
from collections import Counter

REDACTED = "***"

# Secret -> number of live registrations
_secrets: Counter[str] = Counter()
_secrets_lock = threading.Lock()


def register_secret(value: str) -> None:
    """Register a value that must never appear in rendered output.

    Registrations are counted; the value stays masked until every
    registration has been released with unregister_secret().

    Args:
        value: Secret to mask. Empty values are ignored.
    """
    if not value:
        return
    with _secrets_lock:
        _secrets[value] += 1


def unregister_secret(value: str) -> None:
    """Release one registration of a secret.

    Args:
        value: Secret previously passed to register_secret().
    """
    with _secrets_lock:
        if _secrets[value] > 1:
            _secrets[value] -= 1
        else:
            _secrets.pop(value, None)


def clear_secrets() -> None:
    """Forget all registered secrets (used by tests)."""
    with _secrets_lock:
        _secrets.clear()


def redact(text: str) -> str:
    """Replace every registered secret in text with a placeholder.

    Args:
        text: Text to scrub.

    Returns:
        Text with secrets masked.
    """
    with _secrets_lock:
        # Longest first so a secret containing another is masked whole
        secrets = sorted(_secrets, key=len, reverse=True)
    for secret in secrets:
        if secret in text:
            text = text.replace(secret, REDACTED)
    return text


class RedactingFilter(logging.Filter):
    """Logging filter that masks registered secrets in log records.

    The message is rendered once with its args and scrubbed, so secrets
    passed as %-style arguments are caught as well as literal ones.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """Scrub the record in place.

        Args:
            record: The log record to process.

        Returns:
            Always True (does not filter, only rewrites).
        """
        if not _secrets:
            return True
        try:
            message = record.getMessage()
        except (TypeError, ValueError):
            message = str(record.msg)
        record.msg = redact(message)
        record.args = None
        for key, value in list(record.__dict__.items()):
            if key not in ("msg", "args") and isinstance(value, str):
                record.__dict__[key] = redact(value)
        return True
