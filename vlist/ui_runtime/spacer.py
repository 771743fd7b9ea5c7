"""Leading/trailing spacer extents for off-window items."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from vlist.ui_runtime.extent_index import ExtentIndex


@dataclass(frozen=True, slots=True)
class Spacing:
    """Padding applied around the materialized window."""

    leading: float = 0.0
    trailing: float = 0.0


def sum_leading(start: int, extents: Sequence[float]) -> float:
    """Naive O(n) sum of extents strictly before ``start``."""
    return float(sum(max(0.0, float(value)) for value in extents[: max(0, start)]))


def sum_trailing(end: int, extents: Sequence[float]) -> float:
    """Naive O(n) sum of extents at or after ``end``."""
    return float(sum(max(0.0, float(value)) for value in extents[max(0, end) :]))


class SpacerController:
    """Leading/trailing space queries over the cumulative extent index."""

    def __init__(self, index: ExtentIndex) -> None:
        self._index = index
        self._applied: Spacing | None = None

    @property
    def applied(self) -> Spacing | None:
        return self._applied

    def compute_leading_space(self, start: int) -> float:
        return self._index.prefix(start)

    def compute_trailing_space(self, end: int, item_count: int) -> float:
        return self._index.range_sum(end, item_count)

    def total_height(self) -> float:
        return self._index.total()

    def spacing_for(self, start: int, end: int, item_count: int) -> Spacing:
        return Spacing(
            leading=self.compute_leading_space(start),
            trailing=self.compute_trailing_space(end, item_count),
        )

    def mark_applied(self, spacing: Spacing) -> bool:
        """Record spacing pushed to the surface; return whether it changed."""
        if spacing == self._applied:
            return False
        self._applied = spacing
        return True

    def reset(self) -> None:
        self._applied = None
