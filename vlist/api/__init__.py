"""Public contracts for surfaces, options, events and logging."""

from vlist.api.events import EventBus, ScrollChanged, Subscription, ViewportResized, create_event_bus
from vlist.api.logging import LoggingConfig, configure_logging, get_logger
from vlist.api.options import (
    DEFAULT_BUFFER_SIZE,
    RENDER_FAILURE_POLICIES,
    ItemKeyFn,
    ItemRenderer,
    RenderFailure,
    RenderFailurePolicy,
    RenderResult,
    VirtualListOptions,
)
from vlist.api.surface import RenderSurface, ResizeSource

__all__ = [
    "DEFAULT_BUFFER_SIZE",
    "EventBus",
    "ItemKeyFn",
    "ItemRenderer",
    "LoggingConfig",
    "RENDER_FAILURE_POLICIES",
    "RenderFailure",
    "RenderFailurePolicy",
    "RenderResult",
    "RenderSurface",
    "ResizeSource",
    "ScrollChanged",
    "Subscription",
    "ViewportResized",
    "VirtualListOptions",
    "configure_logging",
    "create_event_bus",
    "get_logger",
]
