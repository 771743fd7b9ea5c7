"""Windowing, caching, reconciliation and spacing for virtual lists."""

from vlist.ui_runtime.extent_index import ExtentIndex
from vlist.ui_runtime.height_cache import HeightCache
from vlist.ui_runtime.item_store import ItemStore, default_item_key
from vlist.ui_runtime.reconciler import ReconcileResult, Reconciler, RenderedEntry, SkippedItem
from vlist.ui_runtime.scroll import ScrollOutcome, apply_wheel_scroll, clamp_scroll_offset
from vlist.ui_runtime.spacer import SpacerController, Spacing, sum_leading, sum_trailing
from vlist.ui_runtime.window import (
    EMPTY_WINDOW,
    WindowRange,
    compute_window,
    cover_end,
    find_anchor_index,
    visible_count,
)

__all__ = [
    "EMPTY_WINDOW",
    "ExtentIndex",
    "HeightCache",
    "ItemStore",
    "ReconcileResult",
    "Reconciler",
    "RenderedEntry",
    "ScrollOutcome",
    "SkippedItem",
    "SpacerController",
    "Spacing",
    "WindowRange",
    "apply_wheel_scroll",
    "clamp_scroll_offset",
    "compute_window",
    "cover_end",
    "default_item_key",
    "find_anchor_index",
    "sum_leading",
    "sum_trailing",
    "visible_count",
]
