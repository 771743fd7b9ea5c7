"""Virtual list error taxonomy and exception policy helpers."""

from __future__ import annotations

import logging
from typing import TypeAlias


class VirtualListError(Exception):
    """Base class for virtual list failures."""


class InvalidOptionsError(VirtualListError, ValueError):
    """Construction options are missing or out of range."""


class DisposedError(VirtualListError, RuntimeError):
    """Operation attempted on a disposed virtual list."""


class ItemRenderError(VirtualListError):
    """Item renderer failed while the abort policy is active.

    Raised before the surface is touched, so the rendered set and window state
    are left exactly as they were before the pass.
    """

    def __init__(self, key: str, index: int, reason: str, cause: BaseException | None = None) -> None:
        super().__init__(f"item render failed key={key} index={index}: {reason}")
        self.key = key
        self.index = index
        self.reason = reason
        self.cause = cause


# Errors a surface backend may raise while measuring a node that is being torn down.
RecoverableSurfaceErrors: TypeAlias = tuple[type[BaseException], ...]
RECOVERABLE_SURFACE_ERRORS: RecoverableSurfaceErrors = (
    RuntimeError,
    ValueError,
    TypeError,
    AttributeError,
)


def log_recoverable(
    logger: logging.Logger,
    message: str,
    *,
    level: int = logging.DEBUG,
) -> None:
    """Emit structured observability for tolerated recoverable exceptions."""
    logger.log(level, message, exc_info=True)
