"""Rendering surface contracts consumed by the virtual list core.

A surface owns the scrollable viewport and the node tree inside it. The core
decides which nodes must exist and in which order; the surface only knows how
to attach, detach and measure them.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Protocol, TypeVar

from vlist.api.events import Subscription

TEvent = TypeVar("TEvent")


class ResizeSource(Protocol):
    """Source of viewport resize notifications."""

    def subscribe(
        self,
        event_type: type[TEvent],
        handler: Callable[[TEvent], None],
    ) -> Subscription:
        """Subscribe handler for event type."""

    def unsubscribe(self, subscription: Subscription) -> None:
        """Unsubscribe token."""


class RenderSurface[N](ResizeSource, Protocol):
    """Scrollable container holding rendered item nodes."""

    def configure_scroll_owner(self) -> None:
        """Make the container the scroll owner and clip its overflow."""

    def viewport_height(self) -> float:
        """Return the measured visible height, 0 when not laid out yet."""

    def scroll_offset(self) -> float:
        """Return the current vertical scroll offset."""

    def set_scroll_offset(self, offset: float) -> None:
        """Move the scroll position; implementations clamp to content."""

    def set_padding(self, leading: float, trailing: float) -> None:
        """Apply spacer extents before and after the attached nodes."""

    def attach_batch(self, nodes: Sequence[N]) -> None:
        """Attach nodes in order, moving already attached ones in place."""

    def detach(self, node: N) -> None:
        """Remove one node from the surface."""

    def measure(self, node: N) -> float:
        """Return the laid-out extent of an attached node."""
