"""
Logging configuration.

Text output for local runs; structured JSON lines (timestamp, level, logger,
message, request_id plus workflow fields) when LOG_JSON is enabled.
"""

import json
import logging
from datetime import datetime, timezone

from backoffice.middleware.request_context import get_request_id

# Extra attributes copied into the JSON line when a log call supplies them.
_EXTRA_FIELDS = ("duration_ms", "application_id", "from_status", "to_status", "reason", "actor")

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """Emit each log record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": get_request_id(),
        }

        for name in _EXTRA_FIELDS:
            if hasattr(record, name):
                log_entry[name] = getattr(record, name)

        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def configure_logging(log_level: str = "INFO", json_output: bool = False) -> None:
    """Replace the root logger's handlers with a single stream handler."""
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter() if json_output else logging.Formatter(TEXT_FORMAT))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, log_level.upper(), logging.INFO))
