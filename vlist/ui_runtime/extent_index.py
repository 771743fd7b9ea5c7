"""Fenwick-tree cumulative extent index over item positions."""

from __future__ import annotations

from collections.abc import Iterable


class ExtentIndex:
    """Prefix sums over non-negative per-position extents in O(log n)."""

    def __init__(self, extents: Iterable[float] = ()) -> None:
        self._values: list[float] = []
        self._tree: list[float] = [0.0]
        self.rebuild(extents)

    def __len__(self) -> int:
        return len(self._values)

    def rebuild(self, extents: Iterable[float]) -> None:
        """Replace all extents; linear-time construction."""
        values = [max(0.0, float(value)) for value in extents]
        tree = [0.0] * (len(values) + 1)
        for i, value in enumerate(values, start=1):
            tree[i] += value
            parent = i + (i & -i)
            if parent <= len(values):
                tree[parent] += tree[i]
        self._values = values
        self._tree = tree

    def value_at(self, index: int) -> float:
        return self._values[index]

    def set(self, index: int, extent: float) -> None:
        """Set the extent at one position."""
        value = max(0.0, float(extent))
        delta = value - self._values[index]
        if delta == 0.0:
            return
        self._values[index] = value
        i = index + 1
        n = len(self._values)
        while i <= n:
            self._tree[i] += delta
            i += i & -i

    def prefix(self, count: int) -> float:
        """Return the sum of extents over ``[0, count)``."""
        i = max(0, min(count, len(self._values)))
        total = 0.0
        while i > 0:
            total += self._tree[i]
            i -= i & -i
        return total

    def range_sum(self, start: int, end: int) -> float:
        """Return the sum of extents over ``[start, end)``."""
        if end <= start:
            return 0.0
        return self.prefix(end) - self.prefix(start)

    def total(self) -> float:
        return self.prefix(len(self._values))

    def find_anchor(self, offset: float) -> int | None:
        """Return the first position whose extent reaches past ``offset``.

        That is the smallest ``i`` with ``prefix(i + 1) > offset``, or ``None``
        when the whole list ends at or before ``offset``.
        """
        n = len(self._values)
        if n == 0:
            return None
        remaining = max(0.0, float(offset))
        pos = 0
        step = 1 << (n.bit_length() - 1)
        while step:
            nxt = pos + step
            if nxt <= n and self._tree[nxt] <= remaining:
                pos = nxt
                remaining -= self._tree[nxt]
            step >>= 1
        return pos if pos < n else None
