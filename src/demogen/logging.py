"""Structured logging for demogen.

DEMOGEN_LOG_FORMAT selects "json" (default) or "text". JSON records carry
the run's demo mode, and any ``demogen_*`` extras passed by the
generators are grouped under "context" with the prefix stripped:

    {"ts": ..., "level": "INFO", "logger": "demogen.engine",
     "msg": "Generated demo user", "mode": "demo",
     "context": {"seed": 42, "profile_id": "demo_...", "session_count": 27}}
"""

import json
import logging
import sys
from datetime import datetime, timezone

from demogen.config import Config

CONTEXT_PREFIX = "demogen_"
TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Libraries that log every request at INFO
QUIET_LOGGERS = ("httpx", "httpcore")


def record_context(record: logging.LogRecord) -> dict:
    return {
        key[len(CONTEXT_PREFIX):]: value
        for key, value in record.__dict__.items()
        if key.startswith(CONTEXT_PREFIX)
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per line, Hebrew left unescaped."""

    def __init__(self, mode: str | None = None):
        super().__init__()
        self.mode = mode

    def format(self, record: logging.LogRecord) -> str:
        entry: dict = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if self.mode:
            entry["mode"] = self.mode

        context = record_context(record)
        if context:
            entry["context"] = context

        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str, ensure_ascii=False)


def setup_logging(config: Config) -> None:
    """Route all records to stderr in the configured format and level."""
    handler = logging.StreamHandler(sys.stderr)
    if config.log_format == "json":
        handler.setFormatter(JSONFormatter(config.mode))
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(config.log_level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(logging.WARNING, root.level))
