"""
Logging setup for Watchlist Radar.

Call ``configure_logging(config)`` once at CLI entry. Library modules only
ever do ``logging.getLogger(__name__)``.

Loggers and what they emit
--------------------------
watchlist_radar.ingestion.loaders   INFO  files loaded
                                    WARNING  skipped dividend rows (``source``)
watchlist_radar.ranking.ranker      DEBUG  ranking size
watchlist_radar.schedule.inferencer DEBUG  dropped events, chosen ``frequency``
watchlist_radar.schedule.resolver   DEBUG  resolved schedule per ``symbol``
watchlist_radar.cache               DEBUG  hits and misses per ``cache_key``

The names in backticks are passed as ``extra=`` context. Both formatters
render exactly those fields (``CONTEXT_FIELDS``); other extras are ignored.

Text format::

    2026-02-24T15:00:00Z [DEBUG] watchlist_radar.cache: Cache miss [cache_key=schedule/KO/0.5/3f...]

JSON format (``json_format = true`` under ``[logging]``)::

    {"ts": "2026-02-24T15:00:00Z", "level": "DEBUG", "logger": "watchlist_radar.cache",
     "msg": "Cache miss", "cache_key": "schedule/KO/0.5/3f..."}
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from watchlist_radar.config import LoggingConfig

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

CONTEXT_FIELDS: tuple[str, ...] = ("symbol", "frequency", "cache_key", "source")


def record_context(record: logging.LogRecord) -> dict[str, Any]:
    """The ``CONTEXT_FIELDS`` present on ``record``, in declaration order."""
    return {
        name: getattr(record, name)
        for name in CONTEXT_FIELDS
        if getattr(record, name, None) is not None
    }


class _ContextFormatter(logging.Formatter):
    """Plain-text lines with a trailing ``[key=value ...]`` context block."""

    def __init__(self) -> None:
        super().__init__(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = record_context(record)
        if not context:
            return line
        pairs = " ".join(f"{k}={v}" for k, v in context.items())
        return f"{line} [{pairs}]"


class _JsonFormatter(logging.Formatter):
    """One JSON object per line: ``ts``, ``level``, ``logger``, ``msg``, context."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).strftime(
                LOG_DATE_FORMAT
            ),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        payload.update(record_context(record))
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def _handler(
    handler: logging.Handler,
    level: int,
    formatter: logging.Formatter,
) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def configure_logging(config: "LoggingConfig", stream: Optional[Any] = None) -> None:
    """Configure the root logger from a ``LoggingConfig`` instance.

    Args:
        config: Logging section of ``AppConfig``.
        stream: Console stream; defaults to ``sys.stdout``.
    """
    level = getattr(logging, config.level.upper(), logging.INFO)
    formatter = _JsonFormatter() if config.json_format else _ContextFormatter()

    handlers = [_handler(logging.StreamHandler(stream or sys.stdout), level, formatter)]

    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            _handler(logging.FileHandler(log_path, encoding="utf-8"), level, formatter)
        )

    logging.basicConfig(level=level, handlers=handlers, force=True)
