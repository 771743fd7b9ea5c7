"""Ordered item storage with key lookup."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence

from vlist.api.options import ItemKeyFn


def default_item_key(item: object, index: int) -> str:
    """Derive identity from an ``id`` or ``key`` field, else the position."""
    for name in ("id", "key"):
        if isinstance(item, Mapping):
            value = item.get(name)
        else:
            value = getattr(item, name, None)
        if value is not None:
            return str(value)
    return str(index)


class ItemStore[T]:
    """Ordered items plus a key -> item mapping, rebuilt atomically."""

    def __init__(self, key_fn: ItemKeyFn[T] | None = None) -> None:
        self._key_fn: ItemKeyFn[T] = key_fn if key_fn is not None else default_item_key
        self._items: tuple[T, ...] = ()
        self._keys: tuple[str, ...] = ()
        self._by_key: dict[str, T] = {}
        self._positions: dict[str, tuple[int, ...]] = {}

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    @property
    def items(self) -> tuple[T, ...]:
        return self._items

    @property
    def keys(self) -> tuple[str, ...]:
        return self._keys

    @property
    def duplicate_keys(self) -> tuple[str, ...]:
        return tuple(key for key, positions in self._positions.items() if len(positions) > 1)

    def replace(self, items: Sequence[T]) -> None:
        """Replace the whole sequence, recomputing keys from current positions."""
        snapshot = tuple(items)
        keys = tuple(self._key_fn(item, index) for index, item in enumerate(snapshot))
        by_key: dict[str, T] = {}
        positions: dict[str, list[int]] = {}
        for index, (key, item) in enumerate(zip(keys, snapshot, strict=True)):
            # Last write wins for colliding keys.
            by_key[key] = item
            positions.setdefault(key, []).append(index)
        self._items = snapshot
        self._keys = keys
        self._by_key = by_key
        self._positions = {key: tuple(indices) for key, indices in positions.items()}

    def key_at(self, index: int) -> str:
        return self._keys[index]

    def get(self, key: str) -> T | None:
        return self._by_key.get(key)

    def positions_of(self, key: str) -> tuple[int, ...]:
        return self._positions.get(key, ())

    def window(self, start: int, end: int) -> list[tuple[int, str, T]]:
        """Return ``(index, key, item)`` triples for ``[start, end)``."""
        lo = max(0, start)
        hi = min(len(self._items), end)
        return [(index, self._keys[index], self._items[index]) for index in range(lo, hi)]
