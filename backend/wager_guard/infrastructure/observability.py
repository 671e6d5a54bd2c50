"""Structured Logging — JSON formatter and setup for instruction observability.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (session_id, instruction, error_code, error_number, guard_state) surfaced when present
    - JSON format in production, human-readable text otherwise

Design Decisions:
    - JSONFormatter over third-party libs: stdlib logging, no extra dependency
    - setup_logging called once by the embedding process; WAGER_LOG_LEVEL and
      WAGER_LOG_FORMAT apply when it is called without arguments
"""

import json
import logging
from datetime import datetime, timezone

from wager_guard.config import get_settings


_EXTRA_FIELDS = (
    "session_id", "instruction", "error_code", "error_number",
    "guard_state",
)


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(
    level: str | None = None, fmt: str | None = None,
) -> logging.Handler:
    """Configure the root logger. Unset arguments come from Settings. Returns the handler."""
    settings = get_settings()
    level = level or settings.log_level
    fmt = fmt or settings.log_format
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
