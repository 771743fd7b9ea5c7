"""Virtualized list controller: windowing, reconciliation and spacing."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum, auto
from types import TracebackType

from vlist.api.events import ScrollChanged, Subscription, ViewportResized
from vlist.api.options import (
    RENDER_FAILURE_POLICIES,
    ItemKeyFn,
    ItemRenderer,
    RenderFailurePolicy,
    VirtualListOptions,
)
from vlist.api.surface import RenderSurface, ResizeSource
from vlist.runtime.config import VirtualListConfig, get_config
from vlist.runtime.errors import (
    RECOVERABLE_SURFACE_ERRORS,
    DisposedError,
    InvalidOptionsError,
    ItemRenderError,
    log_recoverable,
)
from vlist.ui_runtime.extent_index import ExtentIndex
from vlist.ui_runtime.height_cache import HeightCache
from vlist.ui_runtime.item_store import ItemStore
from vlist.ui_runtime.reconciler import Reconciler, RenderedEntry
from vlist.ui_runtime.spacer import Spacing, SpacerController
from vlist.ui_runtime.window import EMPTY_WINDOW, WindowRange, compute_window

_LOG = logging.getLogger("vlist.runtime")

# Extra passes absorb nominal back-fill and scroll clamping after a render.
_MAX_RENDER_PASSES = 3


class ListState(Enum):
    """Update state machine states."""

    IDLE = auto()
    RENDERING = auto()
    DISPOSED = auto()


@dataclass(slots=True)
class RenderStats:
    """Counters for render work performed by one list."""

    reconciliations: int = 0
    nodes_created: int = 0
    nodes_removed: int = 0
    render_failures: int = 0
    cache_invalidations: int = 0
    skipped_passes: int = 0


class VirtualList[T, N]:
    """Materializes only the windowed slice of ``items`` on a render surface.

    Construction measures the container, renders the first window and
    subscribes to scroll notifications on the container and resize
    notifications on the viewport. ``dispose`` releases both subscriptions.
    """

    def __init__(self, options: VirtualListOptions[T, N]) -> None:
        _validate_options(options)
        self._surface: RenderSurface[N] = options.container
        self._viewport: ResizeSource = options.viewport if options.viewport is not None else options.container
        self._buffer_size = int(options.buffer_size)
        self._store: ItemStore[T] = ItemStore(options.item_key)
        self._cache = HeightCache(options.nominal_item_height or 0.0)
        self._index = ExtentIndex()
        self._spacer = SpacerController(self._index)
        self._reconciler: Reconciler[T, N] = Reconciler(
            self._surface,
            options.item_renderer,
            policy=options.render_failure_policy,
        )
        self._window: WindowRange = EMPTY_WINDOW
        self._rendered: tuple[RenderedEntry[N], ...] = ()
        self._viewport_height = 0.0
        self._state = ListState.IDLE
        self._stats = RenderStats()
        self._stale = False
        self._skipped_extent = 0.0
        self._subscriptions: list[tuple[ResizeSource, Subscription]] = []
        self._cache.on_write(self._on_cache_write)
        self._cache.on_reset(self._rebuild_index)

        self._surface.configure_scroll_owner()
        self._store.replace(options.items)
        self._rebuild_index()
        self._refresh_viewport_height()
        with self._rendering():
            self._run_passes(force=True)
        self._subscriptions.append((self._surface, self._surface.subscribe(ScrollChanged, self._on_scroll)))
        self._subscriptions.append((self._viewport, self._viewport.subscribe(ViewportResized, self._on_resize)))
        _LOG.debug(
            "virtual_list_created items=%d buffer=%d nominal=%.1f viewport=%.1f",
            len(self._store),
            self._buffer_size,
            self._cache.nominal,
            self._viewport_height,
        )

    def __enter__(self) -> VirtualList[T, N]:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.dispose()

    @property
    def state(self) -> ListState:
        return self._state

    @property
    def window(self) -> WindowRange:
        return self._window

    @property
    def item_count(self) -> int:
        return len(self._store)

    @property
    def items(self) -> tuple[T, ...]:
        return self._store.items

    @property
    def buffer_size(self) -> int:
        return self._buffer_size

    @property
    def viewport_height(self) -> float:
        return self._viewport_height

    @property
    def nominal_item_height(self) -> float:
        return self._cache.nominal

    @property
    def rendered_keys(self) -> tuple[str, ...]:
        return tuple(entry.key for entry in self._rendered)

    @property
    def rendered_nodes(self) -> tuple[N, ...]:
        return tuple(entry.node for entry in self._rendered)

    @property
    def spacing(self) -> Spacing:
        return self._spacer.applied or Spacing()

    @property
    def stats(self) -> RenderStats:
        return self._stats

    @property
    def is_disposed(self) -> bool:
        return self._state is ListState.DISPOSED

    def node_for(self, key: str) -> N | None:
        for entry in self._rendered:
            if entry.key == key:
                return entry.node
        return None

    def cached_extent(self, key: str) -> float | None:
        return self._cache.cached(key)

    def total_height(self) -> float:
        """Return the full scrollable extent from cached or nominal heights."""
        return self._spacer.total_height()

    def update_items(self, items: Sequence[T]) -> None:
        """Replace the data set, reset scroll to the top and force a render."""
        self._ensure_alive("update_items")
        with self._rendering():
            self._store.replace(items)
            self._rebuild_index()
            self._surface.set_scroll_offset(0.0)
            self._refresh_viewport_height()
            self._run_passes(force=True)
        _LOG.debug("items_updated count=%d window=%d:%d", len(self._store), self._window.start, self._window.end)

    def refresh(self) -> None:
        """Force a render of the current window."""
        self._ensure_alive("refresh")
        with self._rendering():
            self._refresh_viewport_height()
            self._run_passes(force=True)

    def dispose(self) -> None:
        """Release scroll and resize subscriptions; safe to call twice."""
        if self._state is ListState.DISPOSED:
            return
        for source, subscription in self._subscriptions:
            source.unsubscribe(subscription)
        self._subscriptions.clear()
        self._state = ListState.DISPOSED
        _LOG.debug("virtual_list_disposed rendered=%d", len(self._rendered))

    def _on_scroll(self, event: ScrollChanged) -> None:
        # The render's own scroll restore re-enters here while RENDERING.
        if self._state is not ListState.IDLE:
            return
        with self._rendering():
            self._run_passes(force=False)

    def _on_resize(self, event: ViewportResized) -> None:
        if self._state is not ListState.IDLE:
            return
        with self._rendering():
            self._refresh_viewport_height()
            self._cache.invalidate_all()
            self._stats.cache_invalidations += 1
            self._measure_rendered()
            _LOG.debug("viewport_resized height=%.1f cached=%d", self._viewport_height, len(self._cache))
            self._run_passes(force=False, refresh_spacing=True)

    @contextmanager
    def _rendering(self) -> Iterator[None]:
        self._state = ListState.RENDERING
        try:
            yield
        finally:
            if self._state is ListState.RENDERING:
                self._state = ListState.IDLE

    def _run_passes(self, *, force: bool, refresh_spacing: bool = False) -> None:
        # Surface lags the store after an aborted pass.
        force = force or self._stale
        rendered = False
        for _ in range(_MAX_RENDER_PASSES):
            window = self._compute_window()
            if not force and window == self._window:
                break
            self._render_window(window, forced=force)
            rendered = True
            force = False
        if rendered:
            return
        self._stats.skipped_passes += 1
        if refresh_spacing:
            self._apply_spacing(self._surface.scroll_offset())

    def _compute_window(self) -> WindowRange:
        return compute_window(
            self._surface.scroll_offset(),
            self._viewport_height,
            self._index,
            self._buffer_size,
            len(self._store),
            self._cache.nominal,
        )

    def _render_window(self, window: WindowRange, *, forced: bool) -> None:
        saved_offset = self._surface.scroll_offset()
        try:
            result = self._reconciler.reconcile(self._store.window(window.start, window.end), self._rendered)
        except ItemRenderError:
            self._stale = True
            raise
        self._stale = False
        self._window = window
        self._rendered = result.rendered
        self._stats.reconciliations += 1
        self._stats.nodes_created += len(result.created)
        self._stats.nodes_removed += len(result.removed)
        self._stats.render_failures += len(result.skipped)
        self._measure_rendered()
        self._backfill_nominal()
        self._skipped_extent = sum(self._cache.get(item.key) for item in result.skipped)
        self._apply_spacing(saved_offset)
        _LOG.debug(
            "window_rendered start=%d end=%d forced=%s created=%d removed=%d",
            window.start,
            window.end,
            forced,
            len(result.created),
            len(result.removed),
        )

    def _apply_spacing(self, restore_offset: float) -> None:
        spacing = self._spacer.spacing_for(self._window.start, self._window.end, len(self._store))
        if self._skipped_extent:
            # Skipped items keep their extent in the trailing spacer.
            spacing = Spacing(spacing.leading, spacing.trailing + self._skipped_extent)
        if self._spacer.mark_applied(spacing):
            self._surface.set_padding(spacing.leading, spacing.trailing)
        self._surface.set_scroll_offset(restore_offset)

    def _measure_rendered(self) -> None:
        for entry in self._rendered:
            if entry.key in self._cache:
                continue
            try:
                extent = self._surface.measure(entry.node)
            except RECOVERABLE_SURFACE_ERRORS:
                log_recoverable(_LOG, f"measure_failed key={entry.key}")
                continue
            self._cache.set_if_absent(entry.key, extent)

    def _backfill_nominal(self) -> None:
        if self._cache.nominal_known or not self._rendered:
            return
        measured = self._cache.cached(self._rendered[0].key)
        if measured is None:
            return
        self._cache.set_nominal(measured)
        _LOG.debug("nominal_item_height_backfilled value=%.1f", measured)

    def _refresh_viewport_height(self) -> None:
        self._viewport_height = max(0.0, float(self._surface.viewport_height()))

    def _rebuild_index(self) -> None:
        self._index.rebuild(self._cache.get(key) for key in self._store.keys)
        self._spacer.reset()

    def _on_cache_write(self, key: str, extent: float) -> None:
        for position in self._store.positions_of(key):
            self._index.set(position, extent)

    def _ensure_alive(self, operation: str) -> None:
        if self._state is ListState.DISPOSED:
            raise DisposedError(f"{operation} called on a disposed virtual list")


def _validate_options[T, N](options: VirtualListOptions[T, N]) -> None:
    if options.container is None:
        raise InvalidOptionsError("container is required")
    if not callable(options.item_renderer):
        raise InvalidOptionsError("item_renderer must be callable")
    if options.item_key is not None and not callable(options.item_key):
        raise InvalidOptionsError("item_key must be callable")
    if int(options.buffer_size) < 0:
        raise InvalidOptionsError(f"buffer_size must be >= 0, got {options.buffer_size}")
    if options.render_failure_policy not in RENDER_FAILURE_POLICIES:
        raise InvalidOptionsError(f"unknown render_failure_policy {options.render_failure_policy!r}")


def create_virtual_list[T, N](
    container: RenderSurface[N],
    item_renderer: ItemRenderer[T, N],
    *,
    items: Sequence[T] = (),
    nominal_item_height: float | None = None,
    item_key: ItemKeyFn[T] | None = None,
    buffer_size: int | None = None,
    render_failure_policy: RenderFailurePolicy | None = None,
    viewport: ResizeSource | None = None,
    config: VirtualListConfig | None = None,
) -> VirtualList[T, N]:
    """Build a list, filling unset options from environment configuration."""
    cfg = config if config is not None else get_config()
    return VirtualList(
        VirtualListOptions(
            container=container,
            item_renderer=item_renderer,
            items=items,
            nominal_item_height=cfg.nominal_item_height if nominal_item_height is None else nominal_item_height,
            item_key=item_key,
            buffer_size=cfg.buffer_size if buffer_size is None else buffer_size,
            render_failure_policy=(
                cfg.render_failure_policy if render_failure_policy is None else render_failure_policy
            ),
            viewport=viewport,
        )
    )
