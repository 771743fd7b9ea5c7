"""Centralized configuration for virtual list defaults, sourced from environment."""

from __future__ import annotations

import os
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Mapping

from vlist.api.options import DEFAULT_BUFFER_SIZE, RENDER_FAILURE_POLICIES, RenderFailurePolicy


@dataclass(frozen=True, slots=True)
class VirtualListLoggingConfig:
    level_name: str
    console_format: str
    file_path: str | None


@dataclass(frozen=True, slots=True)
class VirtualListConfig:
    buffer_size: int
    nominal_item_height: float
    render_failure_policy: RenderFailurePolicy
    logging: VirtualListLoggingConfig


_CONFIG: ContextVar[VirtualListConfig | None] = ContextVar("vlist_config", default=None)


def _raw(name: str, *, env: Mapping[str, str] | None = None) -> str | None:
    value = os.getenv(name) if env is None else env.get(name)
    return None if value is None else str(value)


def _int(
    name: str,
    default: int,
    *,
    minimum: int | None = None,
    env: Mapping[str, str] | None = None,
) -> int:
    raw = _raw(name, env=env)
    if raw is None:
        value = int(default)
    else:
        try:
            value = int(raw.strip())
        except ValueError:
            value = int(default)
    if minimum is None:
        return value
    return max(int(minimum), value)


def _float(
    name: str,
    default: float,
    *,
    minimum: float | None = None,
    env: Mapping[str, str] | None = None,
) -> float:
    raw = _raw(name, env=env)
    if raw is None:
        value = float(default)
    else:
        try:
            value = float(raw.strip())
        except ValueError:
            value = float(default)
    if minimum is None:
        return value
    return max(float(minimum), value)


def _text(name: str, default: str, *, env: Mapping[str, str] | None = None) -> str:
    raw = _raw(name, env=env)
    if raw is None:
        return str(default)
    value = raw.strip()
    return value if value else str(default)


def normalize_failure_policy(raw: str, fallback: RenderFailurePolicy = "abort") -> RenderFailurePolicy:
    value = str(raw).strip().lower()
    for policy in RENDER_FAILURE_POLICIES:
        if value == policy:
            return policy
    return fallback


def resolve_log_level_name(default: str = "INFO", *, env: Mapping[str, str] | None = None) -> str:
    """Resolve log level with package-prefixed override."""
    value = _raw("VLIST_LOG_LEVEL", env=env)
    if value is None:
        value = _raw("LOG_LEVEL", env=env) or default
    return value.strip().upper()


def load_config(*, env: Mapping[str, str] | None = None) -> VirtualListConfig:
    """Load immutable configuration from env vars."""
    log_file = _text("VLIST_LOG_FILE", "", env=env)
    console_format = _text("VLIST_LOG_FORMAT", "text", env=env).lower()
    if console_format not in {"text", "json"}:
        console_format = "text"
    return VirtualListConfig(
        buffer_size=_int("VLIST_BUFFER_SIZE", DEFAULT_BUFFER_SIZE, minimum=0, env=env),
        # 0 means unknown extent, back-filled from the first measured node.
        nominal_item_height=_float("VLIST_NOMINAL_ITEM_HEIGHT", 0.0, minimum=0.0, env=env),
        render_failure_policy=normalize_failure_policy(
            _text("VLIST_RENDER_FAILURE_POLICY", "abort", env=env)
        ),
        logging=VirtualListLoggingConfig(
            level_name=resolve_log_level_name(env=env),
            console_format=console_format,
            file_path=log_file or None,
        ),
    )


def initialize_config(*, env: Mapping[str, str] | None = None) -> VirtualListConfig:
    config = load_config(env=env)
    _CONFIG.set(config)
    return config


def set_config(config: VirtualListConfig) -> VirtualListConfig:
    _CONFIG.set(config)
    return config


def get_config() -> VirtualListConfig:
    config = _CONFIG.get()
    if config is not None:
        return config
    return initialize_config()


__all__ = [
    "VirtualListConfig",
    "VirtualListLoggingConfig",
    "get_config",
    "initialize_config",
    "load_config",
    "normalize_failure_policy",
    "resolve_log_level_name",
    "set_config",
]
