"""Public logging API."""

from __future__ import annotations

import logging
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Logging pipeline configuration."""

    level_name: str = "INFO"
    console_format: str = "text"  # text|json
    file_path: str | None = None
    file_format: str = "json"  # text|json


def configure_logging(config: LoggingConfig) -> None:
    """Configure root logging with optional queued file streaming."""
    from vlist.runtime.logging import configure_vlist_logging

    configure_vlist_logging(config)


def get_logger(name: str) -> logging.Logger:
    """Return namespaced logger instance."""
    return logging.getLogger(name)


__all__ = ["LoggingConfig", "configure_logging", "get_logger"]
