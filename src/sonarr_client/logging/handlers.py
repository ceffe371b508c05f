"""JSON log output with secrets masked after rendering."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

from sonarr_client.logging.redaction import redact

# Attributes every LogRecord carries; anything else came in through extra=
_RECORD_ATTRS: frozenset[str] = frozenset(vars(logging.makeLogRecord({}))) | {
    "message",
    "asctime",
}


def record_extras(record: logging.LogRecord) -> dict[str, Any]:
    """Return the fields passed to a logging call through extra=.

    The client logs "method", "endpoint" and "params" this way.
    """
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _RECORD_ATTRS and not key.startswith("_")
    }


class JSONFormatter(logging.Formatter):
    """Render a record as one JSON object per line.

    RedactingFilter only scrubs string attributes. Extras such as the query
    params dict and exception tracebacks become text here, so the rendered
    line is redacted once more as a whole.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        extras = record_extras(record)
        if extras:
            entry["context"] = extras
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return redact(json.dumps(entry, default=str))
