"""Structured Logging — one JSON object per log line, correlation ids as fields.

Invariants:
    - Every line carries timestamp, level, logger, service and message
    - Correlation fields (user_id, team_id, league_id, account_id) and request
      fields (error_code, path, method, status_code) appear only when set via extra=
    - LOG_FORMAT=text switches to a plain formatter for local runs and tests

Design Decisions:
    - stdlib logging with a custom Formatter, configured once from the lifespan
    - SQLAlchemy engine and httpx loggers pinned to WARNING so request logs stay readable
"""

import json
import logging
from datetime import datetime, timezone

SERVICE_NAME = "f1companion-api"

EXTRA_FIELDS = (
    "user_id", "team_id", "league_id", "account_id",
    "error_code", "path", "method", "status_code",
)

NOISY_LOGGERS = ("sqlalchemy.engine", "httpx", "httpcore")


class JSONFormatter(logging.Formatter):

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "service": SERVICE_NAME,
            "message": record.getMessage(),
        }
        entry.update({
            key: getattr(record, key)
            for key in EXTRA_FIELDS
            if getattr(record, key, None) is not None
        })
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)-7s %(name)s: %(message)s",
        ))
    logging.root.handlers = [handler]
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
