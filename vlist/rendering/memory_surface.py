"""Headless in-memory rendering surface."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Literal, TypeVar

from vlist.api.events import ScrollChanged, Subscription, ViewportResized
from vlist.runtime.events import RuntimeEventBus
from vlist.ui_runtime.scroll import ScrollOutcome, apply_wheel_scroll, clamp_scroll_offset

TEvent = TypeVar("TEvent")

type SurfaceOpKind = Literal["attach", "detach", "padding"]


@dataclass(eq=False, slots=True)
class MemoryNode:
    """Plain node with a mutable laid-out height; compared by identity."""

    label: str
    height: float


@dataclass(frozen=True, slots=True)
class SurfaceOp:
    """One recorded mutation of the surface."""

    kind: SurfaceOpKind
    node: object | None = None
    leading: float = 0.0
    trailing: float = 0.0


def _node_height(node: object) -> float:
    return float(getattr(node, "height"))


class MemorySurface[N]:
    """Render surface that keeps nodes in a list and measures them with a callable.

    Scroll offsets are clamped to the content extent (padding plus attached
    node heights), and scroll/resize notifications go through an in-process bus.
    """

    def __init__(
        self,
        viewport_height: float = 0.0,
        *,
        measure: Callable[[N], float] | None = None,
    ) -> None:
        self._bus = RuntimeEventBus()
        self._measure: Callable[[N], float] = measure if measure is not None else _node_height
        self._viewport_height = max(0.0, float(viewport_height))
        self._children: list[N] = []
        self._leading = 0.0
        self._trailing = 0.0
        self._offset = 0.0
        self._scroll_owner = False
        self.ops: list[SurfaceOp] = []

    @property
    def children(self) -> tuple[N, ...]:
        return tuple(self._children)

    @property
    def padding(self) -> tuple[float, float]:
        return self._leading, self._trailing

    @property
    def is_scroll_owner(self) -> bool:
        return self._scroll_owner

    @property
    def subscriber_count(self) -> int:
        return self._bus.subscriber_count

    def count_ops(self, kind: SurfaceOpKind) -> int:
        return sum(1 for op in self.ops if op.kind == kind)

    def clear_ops(self) -> None:
        self.ops.clear()

    def subscribe(self, event_type: type[TEvent], handler: Callable[[TEvent], None]) -> Subscription:
        return self._bus.subscribe(event_type, handler)

    def unsubscribe(self, subscription: Subscription) -> None:
        self._bus.unsubscribe(subscription)

    def configure_scroll_owner(self) -> None:
        self._scroll_owner = True

    def viewport_height(self) -> float:
        return self._viewport_height

    def scroll_offset(self) -> float:
        return self._offset

    def content_height(self) -> float:
        return self._leading + sum(self._measure(node) for node in self._children) + self._trailing

    def set_scroll_offset(self, offset: float) -> None:
        clamped = clamp_scroll_offset(offset, self.content_height(), self._viewport_height)
        if clamped == self._offset:
            return
        self._offset = clamped
        self._bus.publish(ScrollChanged(offset=clamped))

    def scroll_to(self, offset: float) -> None:
        """Simulate the user dragging the scrollbar to ``offset``."""
        self.set_scroll_offset(offset)

    def wheel(self, dy: float, *, step: float = 40.0) -> ScrollOutcome:
        """Simulate one wheel notch."""
        outcome = apply_wheel_scroll(
            dy,
            self._offset,
            self.content_height(),
            self._viewport_height,
            step=step,
        )
        if outcome.handled:
            self.set_scroll_offset(outcome.next_offset)
        return outcome

    def resize(self, viewport_height: float) -> None:
        """Change the visible height and notify resize subscribers."""
        self._viewport_height = max(0.0, float(viewport_height))
        self._bus.publish(ViewportResized(height=self._viewport_height))

    def set_padding(self, leading: float, trailing: float) -> None:
        self._leading = max(0.0, float(leading))
        self._trailing = max(0.0, float(trailing))
        self.ops.append(SurfaceOp(kind="padding", leading=self._leading, trailing=self._trailing))

    def attach_batch(self, nodes: Sequence[N]) -> None:
        batch_ids = {id(node) for node in nodes}
        attached_ids = {id(node) for node in self._children}
        remaining = [node for node in self._children if id(node) not in batch_ids]
        for node in nodes:
            if id(node) not in attached_ids:
                self.ops.append(SurfaceOp(kind="attach", node=node))
        self._children = remaining + list(nodes)

    def detach(self, node: N) -> None:
        for position, child in enumerate(self._children):
            if child is node:
                del self._children[position]
                self.ops.append(SurfaceOp(kind="detach", node=node))
                return

    def measure(self, node: N) -> float:
        if not any(child is node for child in self._children):
            raise ValueError("cannot measure a node that is not attached")
        return float(self._measure(node))
