"""Virtualized list core: windowing, keyed reconciliation and spacer control."""

from vlist.api.events import ScrollChanged, Subscription, ViewportResized
from vlist.api.options import RenderFailure, VirtualListOptions
from vlist.runtime.errors import (
    DisposedError,
    InvalidOptionsError,
    ItemRenderError,
    VirtualListError,
)
from vlist.ui_runtime.virtual_list import ListState, RenderStats, VirtualList, create_virtual_list
from vlist.ui_runtime.window import WindowRange

__all__ = [
    "DisposedError",
    "InvalidOptionsError",
    "ItemRenderError",
    "ListState",
    "RenderFailure",
    "RenderStats",
    "ScrollChanged",
    "Subscription",
    "ViewportResized",
    "VirtualList",
    "VirtualListError",
    "VirtualListOptions",
    "WindowRange",
    "create_virtual_list",
]
