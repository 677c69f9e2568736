"""Logging pipeline: console plus a JSON-lines file per benchmark or game run."""

from __future__ import annotations

import json
import logging
import os
import queue
from dataclasses import dataclass
from datetime import UTC, datetime
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path

from battleships.game.infra.app_data import resolve_logs_dir

__all__ = [
    "JsonFormatter",
    "LoggingConfig",
    "build_logging_config",
    "configure_logging",
    "setup_logging",
    "shutdown_logging",
]

_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
# Attributes every LogRecord carries; anything else arrived through `extra=`.
_RECORD_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}

_listener: QueueListener | None = None


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Where log records go and how they are rendered."""

    level_name: str = "INFO"
    console_format: str = "text"  # text|json
    file_path: str | None = None
    file_format: str = "json"  # text|json


class JsonFormatter(logging.Formatter):
    """One JSON object per record.

    Messages written as ``event key=value ...`` are split so the event name and its
    fields can be filtered without parsing the text again.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        payload: dict[str, object] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": message,
        }
        event, fields = _split_event(message)
        if event:
            payload["event"] = event
        fields.update({k: v for k, v in record.__dict__.items() if k not in _RECORD_ATTRS})
        if fields:
            payload["fields"] = fields
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def configure_logging(config: LoggingConfig) -> None:
    """Replace root handlers; with a file configured, handlers run behind a queue listener."""
    global _listener

    shutdown_logging()
    handlers = _build_handlers(config)
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(getattr(logging, config.level_name.upper(), logging.INFO))

    if len(handlers) == 1:
        root.addHandler(handlers[0])
        return

    records: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
    root.addHandler(QueueHandler(records))
    _listener = QueueListener(records, *handlers, respect_handler_level=True)
    _listener.start()


def shutdown_logging() -> None:
    """Flush and stop the file listener, if one is running."""
    global _listener

    if _listener is None:
        return
    _listener.stop()
    for handler in _listener.handlers:
        handler.close()
    _listener = None


def build_logging_config() -> LoggingConfig:
    """Read BATTLESHIPS_LOG_LEVEL (or LOG_LEVEL) and LOG_FORMAT."""
    level_name = os.getenv("BATTLESHIPS_LOG_LEVEL") or os.getenv("LOG_LEVEL") or "INFO"
    return LoggingConfig(
        level_name=level_name.strip().upper(),
        console_format=os.getenv("LOG_FORMAT", "text").strip().lower(),
        file_path=str(_run_log_path()),
    )


def setup_logging() -> None:
    config = build_logging_config()
    configure_logging(config)
    logging.getLogger(__name__).info("logging_ready level=%s file=%s", config.level_name, config.file_path)


def _build_handlers(config: LoggingConfig) -> list[logging.Handler]:
    console = logging.StreamHandler()
    console.setFormatter(_formatter(config.console_format))
    handlers: list[logging.Handler] = [console]
    if config.file_path:
        path = Path(config.file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        run_file = logging.FileHandler(path, mode="a", encoding="utf-8", delay=True)
        run_file.setFormatter(_formatter(config.file_format))
        handlers.append(run_file)
    return handlers


def _formatter(kind: str) -> logging.Formatter:
    return JsonFormatter() if kind.strip().lower() == "json" else logging.Formatter(_TEXT_FORMAT)


def _run_log_path() -> Path:
    logs = resolve_logs_dir()
    logs.mkdir(parents=True, exist_ok=True)
    return logs / f"battleships_run_{datetime.now(UTC):%Y%m%dT%H%M%S}.jsonl"


def _split_event(message: str) -> tuple[str | None, dict[str, object]]:
    head, _, rest = message.partition(" ")
    if not head or "=" in head or not head.replace("_", "").isalnum():
        return None, {}
    fields: dict[str, object] = {}
    for token in rest.split():
        key, sep, value = token.partition("=")
        if sep and key:
            fields[key] = value
    return head, fields
