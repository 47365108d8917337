"""
Root-logger setup for the ``career-vector`` CLI.

``configure_logging(config)`` runs once per command, after the config is
loaded.  Library modules only ever do ``logging.getLogger(__name__)``.

Console output goes to stderr: ``recommend`` and ``listings`` print their JSON
results on stdout and the two streams must not mix.

With ``json_format = true`` each record becomes one JSON object::

    {"ts": "2026-10-17T15:00:00Z", "level": "INFO",
     "logger": "career_vector.catalog.loader", "msg": "Loaded role catalog ..."}

Keys passed through ``extra=`` are added to the object as-is.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from career_vector.config import LoggingConfig

TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s | %(message)s"
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

# Loggers of the HTTP stack; per-request INFO lines from them are noise.
QUIET_LOGGERS = ("httpx", "httpcore")

_STANDARD_ATTRS: frozenset[str] = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime"}


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": _utc_timestamp(record.created),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        entry.update(
            (k, v)
            for k, v in vars(record).items()
            if k not in _STANDARD_ATTRS and not k.startswith("_")
        )
        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class _UtcFormatter(logging.Formatter):
    """Plain-text formatter with UTC ``asctime``."""

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        return _utc_timestamp(record.created)


def configure_logging(config: "LoggingConfig") -> None:
    """Install stderr (and optional file) handlers on the root logger.

    Replaces any handlers already on the root logger, so calling it twice
    does not duplicate output.
    """
    level = logging.getLevelName(config.level)
    formatter = _JsonFormatter() if config.json_format else _UtcFormatter(TEXT_FORMAT)

    handlers = [_handler(logging.StreamHandler(sys.stderr), level, formatter)]
    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            _handler(logging.FileHandler(log_path, encoding="utf-8"), level, formatter)
        )

    logging.basicConfig(level=level, handlers=handlers, force=True)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def _handler(
    handler: logging.Handler, level: int, formatter: logging.Formatter
) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _utc_timestamp(created: float) -> str:
    return datetime.fromtimestamp(created, tz=timezone.utc).strftime(TIMESTAMP_FORMAT)
