"""Keyed reconciliation of the materialized window against rendered nodes."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from vlist.api.options import ItemRenderer, RenderFailure, RenderFailurePolicy
from vlist.api.surface import RenderSurface
from vlist.runtime.errors import ItemRenderError

_LOG = logging.getLogger("vlist.reconcile")


@dataclass(frozen=True, slots=True)
class RenderedEntry[N]:
    """One node attached to the surface, tagged with its item key."""

    key: str
    node: N


@dataclass(frozen=True, slots=True)
class SkippedItem:
    """Windowed item left out because its render failed."""

    key: str
    index: int
    failure: RenderFailure


@dataclass(frozen=True, slots=True)
class ReconcileResult[N]:
    """Outcome of one reconciliation pass."""

    rendered: tuple[RenderedEntry[N], ...]
    created: tuple[RenderedEntry[N], ...] = ()
    removed: tuple[RenderedEntry[N], ...] = ()
    skipped: tuple[SkippedItem, ...] = ()
    duplicates: tuple[str, ...] = ()


class Reconciler[T, N]:
    """Diffs windowed items against rendered entries by key.

    Only this class mutates the surface's child set. Every node is produced
    before the surface is touched, so an aborted pass leaves it unchanged.
    """

    def __init__(
        self,
        surface: RenderSurface[N],
        renderer: ItemRenderer[T, N],
        *,
        policy: RenderFailurePolicy = "abort",
    ) -> None:
        self._surface = surface
        self._renderer = renderer
        self._policy: RenderFailurePolicy = policy

    def reconcile(
        self,
        window_items: Sequence[tuple[int, str, T]],
        rendered: Sequence[RenderedEntry[N]],
    ) -> ReconcileResult[N]:
        """Reuse, create and remove nodes so the surface matches the window."""
        prior = {entry.key: entry for entry in rendered}
        claimed = {id(entry.node) for entry in rendered}
        next_entries: list[RenderedEntry[N]] = []
        created: list[RenderedEntry[N]] = []
        skipped: list[SkippedItem] = []
        duplicates: list[str] = []
        seen: set[str] = set()

        for index, key, item in window_items:
            if key in seen:
                duplicates.append(key)
                continue
            seen.add(key)
            existing = prior.get(key)
            if existing is not None:
                next_entries.append(existing)
                continue
            outcome = self._render(item)
            if not isinstance(outcome, RenderFailure) and id(outcome) in claimed:
                outcome = RenderFailure("renderer returned a node that is already attached")
            if isinstance(outcome, RenderFailure):
                if self._policy == "abort":
                    raise ItemRenderError(key, index, outcome.reason, outcome.error) from outcome.error
                _LOG.warning("item_render_skipped key=%s index=%d reason=%s", key, index, outcome.reason)
                skipped.append(SkippedItem(key=key, index=index, failure=outcome))
                continue
            entry = RenderedEntry(key=key, node=outcome)
            claimed.add(id(outcome))
            next_entries.append(entry)
            created.append(entry)

        if duplicates:
            _LOG.warning("duplicate_item_keys count=%d keys=%s", len(duplicates), ",".join(duplicates[:5]))

        kept_keys = {entry.key for entry in next_entries}
        removed = tuple(entry for entry in rendered if entry.key not in kept_keys)
        for entry in removed:
            self._surface.detach(entry.node)
        self._surface.attach_batch([entry.node for entry in next_entries])

        _LOG.debug(
            "reconciled kept=%d created=%d removed=%d skipped=%d",
            len(next_entries) - len(created),
            len(created),
            len(removed),
            len(skipped),
        )
        return ReconcileResult(
            rendered=tuple(next_entries),
            created=tuple(created),
            removed=removed,
            skipped=tuple(skipped),
            duplicates=tuple(duplicates),
        )

    def _render(self, item: T) -> N | RenderFailure:
        try:
            return self._renderer(item)
        except Exception as exc:
            return RenderFailure(reason=f"{type(exc).__name__}: {exc}", error=exc)
