"""Logging pipeline implementation."""

from __future__ import annotations

import json
import logging
import queue
import re
from collections.abc import Iterator, Mapping
from datetime import UTC, datetime
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path

from vlist.api.logging import LoggingConfig
from vlist.runtime.config import load_config

_QUEUE_LISTENER: QueueListener | None = None
_EVENT_NAME = re.compile(r"[a-z][a-z0-9_]*")

_STANDARD_RECORD_FIELDS = frozenset(
    {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "message",
        "asctime",
    }
)


class JsonFormatter(logging.Formatter):
    """JSON formatter for `event_name key=value` messages.

    The leading event name and each `key=value` token become structured
    fields; `extra=` attributes are merged over them.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        event, _, rest = message.partition(" ")
        payload: dict[str, object] = {
            "ts": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": message,
        }
        if _EVENT_NAME.fullmatch(event):
            payload["event"] = event
        fields: dict[str, object] = dict(_message_fields(rest))
        fields.update((k, v) for k, v in record.__dict__.items() if k not in _STANDARD_RECORD_FIELDS)
        if fields:
            payload["fields"] = fields
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def configure_vlist_logging(config: LoggingConfig) -> None:
    """Configure root logging with optional async file streaming."""
    global _QUEUE_LISTENER

    if _QUEUE_LISTENER is not None:
        _QUEUE_LISTENER.stop()
        _QUEUE_LISTENER = None

    level = getattr(logging, config.level_name.upper(), logging.INFO)
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(_resolve_formatter(config.console_format))
    handlers: list[logging.Handler] = [console_handler]

    if config.file_path:
        file_path = Path(config.file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(file_path, mode="a", encoding="utf-8", delay=True)
        file_handler.setFormatter(_resolve_formatter(config.file_format))
        handlers.append(file_handler)

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)

    if len(handlers) == 1:
        root.addHandler(handlers[0])
        return

    log_queue: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
    root.addHandler(QueueHandler(log_queue))
    _QUEUE_LISTENER = QueueListener(log_queue, *handlers, respect_handler_level=True)
    _QUEUE_LISTENER.start()


def shutdown_logging() -> None:
    """Flush and stop the queued file pipeline if one is running."""
    global _QUEUE_LISTENER

    if _QUEUE_LISTENER is None:
        return
    _QUEUE_LISTENER.stop()
    _QUEUE_LISTENER = None


def load_logging_config(*, env: Mapping[str, str] | None = None) -> LoggingConfig:
    """Build the pipeline config from `VLIST_LOG_*` settings; files are always JSON."""
    cfg = load_config(env=env).logging
    return LoggingConfig(
        level_name=cfg.level_name,
        console_format=cfg.console_format,
        file_path=cfg.file_path,
        file_format="json",
    )


def setup_logging() -> None:
    """Configure logging from environment if no handlers are present."""
    if logging.getLogger().handlers:
        return
    configure_vlist_logging(load_logging_config())


def _message_fields(text: str) -> Iterator[tuple[str, str]]:
    for token in text.split():
        key, sep, value = token.partition("=")
        if sep and key.isidentifier():
            yield key, value


def _resolve_formatter(kind: str) -> logging.Formatter:
    if kind.strip().lower() == "json":
        return JsonFormatter()
    return logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
