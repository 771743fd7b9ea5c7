"""Public event contracts for scroll and resize notifications."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol, TypeVar

TEvent = TypeVar("TEvent")


@dataclass(frozen=True, slots=True)
class Subscription:
    """Opaque subscription token."""

    id: int


@dataclass(frozen=True, slots=True)
class ScrollChanged:
    """Scroll container moved to a new vertical offset."""

    offset: float


@dataclass(frozen=True, slots=True)
class ViewportResized:
    """Viewport changed its visible height."""

    height: float


class EventBus(Protocol):
    """Public in-process pub/sub contract."""

    def subscribe(
        self,
        event_type: type[TEvent],
        handler: Callable[[TEvent], None],
    ) -> Subscription:
        """Subscribe handler for event type."""

    def unsubscribe(self, subscription: Subscription) -> None:
        """Unsubscribe token."""

    def publish(self, event: object) -> int:
        """Publish event and return invocation count."""


def create_event_bus() -> EventBus:
    """Create default event bus implementation."""
    from vlist.runtime.events import RuntimeEventBus

    return RuntimeEventBus()
