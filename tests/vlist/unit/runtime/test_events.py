from __future__ import annotations

from dataclasses import dataclass

from vlist.api.events import ScrollChanged, create_event_bus
from vlist.runtime.events import RuntimeEventBus


@dataclass(frozen=True, slots=True)
class BaseEvent:
    name: str


@dataclass(frozen=True, slots=True)
class DerivedEvent(BaseEvent):
    code: int


def test_event_bus_publish_invokes_subscribers() -> None:
    bus = RuntimeEventBus()
    seen: list[str] = []
    bus.subscribe(BaseEvent, lambda event: seen.append(event.name))

    invoked = bus.publish(BaseEvent(name="hello"))

    assert invoked == 1
    assert seen == ["hello"]


def test_event_bus_supports_polymorphic_subscription() -> None:
    bus = RuntimeEventBus()
    seen: list[str] = []
    bus.subscribe(BaseEvent, lambda event: seen.append(event.name))

    invoked = bus.publish(DerivedEvent(name="child", code=42))

    assert invoked == 1
    assert seen == ["child"]


def test_event_bus_unsubscribe_stops_dispatch() -> None:
    bus = RuntimeEventBus()
    seen: list[str] = []
    subscription = bus.subscribe(BaseEvent, lambda event: seen.append(event.name))
    bus.unsubscribe(subscription)
    bus.unsubscribe(subscription)

    invoked = bus.publish(BaseEvent(name="ignored"))

    assert invoked == 0
    assert seen == []
    assert bus.subscriber_count == 0


def test_handler_may_unsubscribe_during_publish() -> None:
    bus = RuntimeEventBus()
    seen: list[float] = []
    holder: list[object] = []

    def once(event: ScrollChanged) -> None:
        seen.append(event.offset)
        bus.unsubscribe(holder[0])  # type: ignore[arg-type]

    holder.append(bus.subscribe(ScrollChanged, once))
    bus.publish(ScrollChanged(offset=1.0))
    bus.publish(ScrollChanged(offset=2.0))

    assert seen == [1.0]


def test_create_event_bus_returns_runtime_bus() -> None:
    bus = create_event_bus()

    assert isinstance(bus, RuntimeEventBus)
    assert bus.publish(ScrollChanged(offset=0.0)) == 0


def test_runtime_events_module_does_not_shadow_public_protocol() -> None:
    from vlist.runtime import events as runtime_events

    assert not hasattr(runtime_events, "EventBus")
