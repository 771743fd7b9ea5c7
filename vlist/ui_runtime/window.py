"""Window calculation for virtualized list viewports."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from vlist.ui_runtime.extent_index import ExtentIndex


@dataclass(frozen=True, slots=True)
class WindowRange:
    """Half-open index range of materialized items."""

    start: int = 0
    end: int = 0

    def __len__(self) -> int:
        return self.end - self.start

    def __contains__(self, index: object) -> bool:
        return isinstance(index, int) and self.start <= index < self.end


EMPTY_WINDOW = WindowRange(0, 0)


def find_anchor_index(scroll_offset: float, extents: Sequence[float]) -> int:
    """Linear scan for the first item whose bottom edge passes ``scroll_offset``.

    Returns ``0`` when no item reaches past the offset.
    """
    found = _scan_anchor(max(0.0, float(scroll_offset)), extents)
    return 0 if found is None else found


def _scan_anchor(offset: float, extents: Sequence[float]) -> int | None:
    accumulated = 0.0
    for index, extent in enumerate(extents):
        accumulated += max(0.0, float(extent))
        if accumulated > offset:
            return index
    return None


def cover_end(viewport_bottom: float, extents: Sequence[float] | ExtentIndex) -> int:
    """Return one past the last item whose top edge lies above ``viewport_bottom``."""
    if isinstance(extents, ExtentIndex):
        found = extents.find_anchor(viewport_bottom)
        if found is None:
            return len(extents)
        return found if extents.prefix(found) >= viewport_bottom else found + 1
    found = _scan_anchor(viewport_bottom, extents)
    if found is None:
        return len(extents)
    top = sum(max(0.0, float(extent)) for extent in extents[:found])
    return found if top >= viewport_bottom else found + 1


def visible_count(viewport_height: float, nominal_item_height: float) -> int:
    """Approximate number of items needed to cover the viewport."""
    if viewport_height <= 0 or nominal_item_height <= 0:
        return 0
    return math.ceil(viewport_height / nominal_item_height)


def compute_window(
    scroll_offset: float,
    viewport_height: float,
    item_extents: Sequence[float] | ExtentIndex,
    buffer_size: int,
    item_count: int,
    nominal_item_height: float,
) -> WindowRange:
    """Return the ``[start, end)`` range that must be rendered."""
    if item_count <= 0:
        return EMPTY_WINDOW
    offset = max(0.0, float(scroll_offset))
    if isinstance(item_extents, ExtentIndex):
        found = item_extents.find_anchor(offset)
    else:
        found = _scan_anchor(offset, item_extents)
    anchor = 0 if found is None else min(found, item_count - 1)
    buffer = max(0, int(buffer_size))
    reach = anchor + visible_count(viewport_height, nominal_item_height)
    if viewport_height > 0 and found is not None:
        # Nominal sizing undercounts when measured items are shorter than nominal.
        reach = max(reach, cover_end(offset + viewport_height, item_extents))
    start = max(0, anchor - buffer)
    end = min(item_count, reach + buffer)
    return WindowRange(start, max(start, end))
