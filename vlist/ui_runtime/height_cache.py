"""Per-key measured extent cache with nominal fallback."""

from __future__ import annotations

from collections.abc import Callable

type CacheWriteListener = Callable[[str, float], None]
type CacheResetListener = Callable[[], None]


class HeightCache:
    """Set-if-absent extent cache keyed by stable item key.

    Entries are never overwritten while valid, so an in-place content change is
    only picked up after ``invalidate_all``.
    """

    def __init__(self, nominal: float = 0.0) -> None:
        self._extents: dict[str, float] = {}
        self._nominal = max(0.0, float(nominal))
        self._write_listeners: list[CacheWriteListener] = []
        self._reset_listeners: list[CacheResetListener] = []

    def __len__(self) -> int:
        return len(self._extents)

    def __contains__(self, key: object) -> bool:
        return key in self._extents

    @property
    def nominal(self) -> float:
        return self._nominal

    @property
    def nominal_known(self) -> bool:
        return self._nominal > 0.0

    def set_nominal(self, value: float) -> None:
        """Replace the fallback extent and notify reset listeners."""
        self._nominal = max(0.0, float(value))
        for listener in tuple(self._reset_listeners):
            listener()

    def get(self, key: str) -> float:
        """Return the cached extent, falling back to the nominal extent."""
        return self._extents.get(key, self._nominal)

    def cached(self, key: str) -> float | None:
        return self._extents.get(key)

    def set_if_absent(self, key: str, extent: float) -> bool:
        """Store a measurement unless one exists; return whether it was stored."""
        if key in self._extents:
            return False
        value = float(extent)
        if value <= 0.0:
            return False
        self._extents[key] = value
        for listener in tuple(self._write_listeners):
            listener(key, value)
        return True

    def invalidate_all(self) -> None:
        """Drop every measurement synchronously."""
        self._extents.clear()
        for listener in tuple(self._reset_listeners):
            listener()

    def on_write(self, listener: CacheWriteListener) -> None:
        self._write_listeners.append(listener)

    def on_reset(self, listener: CacheResetListener) -> None:
        self._reset_listeners.append(listener)
