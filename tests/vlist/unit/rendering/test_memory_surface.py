from __future__ import annotations

import pytest

from vlist.api.events import ScrollChanged, ViewportResized
from vlist.rendering.memory_surface import MemoryNode, MemorySurface


def _surface(viewport: float = 100.0) -> MemorySurface[MemoryNode]:
    return MemorySurface(viewport)


def test_attach_batch_orders_children_and_records_new_nodes_only() -> None:
    surface = _surface()
    a, b, c = MemoryNode("a", 10.0), MemoryNode("b", 20.0), MemoryNode("c", 30.0)

    surface.attach_batch([a, b])
    surface.attach_batch([c, a, b])

    assert surface.children == (c, a, b)
    assert [op.node for op in surface.ops if op.kind == "attach"] == [a, b, c]


def test_detach_removes_by_identity() -> None:
    surface = _surface()
    twin_a, twin_b = MemoryNode("same", 10.0), MemoryNode("same", 10.0)
    surface.attach_batch([twin_a, twin_b])

    surface.detach(twin_b)
    surface.detach(twin_b)

    assert surface.children == (twin_a,)
    assert surface.count_ops("detach") == 1


def test_measure_requires_attached_node() -> None:
    surface = _surface()
    node = MemoryNode("a", 42.0)

    with pytest.raises(ValueError):
        surface.measure(node)
    surface.attach_batch([node])
    assert surface.measure(node) == 42.0


def test_custom_measure_callable() -> None:
    surface: MemorySurface[MemoryNode] = MemorySurface(100.0, measure=lambda node: 2 * node.height)
    node = MemoryNode("a", 5.0)
    surface.attach_batch([node])

    assert surface.measure(node) == 10.0
    assert surface.content_height() == 10.0


def test_scroll_offset_is_clamped_and_published_on_change() -> None:
    surface = _surface(100.0)
    surface.attach_batch([MemoryNode("a", 50.0)])
    surface.set_padding(0.0, 200.0)
    seen: list[float] = []
    surface.subscribe(ScrollChanged, lambda event: seen.append(event.offset))

    surface.scroll_to(500.0)
    surface.scroll_to(900.0)
    surface.scroll_to(-10.0)

    assert seen == [150.0, 0.0]
    assert surface.scroll_offset() == 0.0


def test_wheel_scrolls_by_step() -> None:
    surface = _surface(100.0)
    surface.set_padding(0.0, 400.0)

    outcome = surface.wheel(1.0, step=40.0)

    assert outcome.handled
    assert surface.scroll_offset() == 40.0


def test_resize_publishes_new_height() -> None:
    surface = _surface(100.0)
    seen: list[float] = []
    subscription = surface.subscribe(ViewportResized, lambda event: seen.append(event.height))

    surface.resize(250.0)
    surface.unsubscribe(subscription)
    surface.resize(300.0)

    assert seen == [250.0]
    assert surface.viewport_height() == 300.0
    assert surface.subscriber_count == 0


def test_padding_and_scroll_owner_are_recorded() -> None:
    surface = _surface()
    surface.configure_scroll_owner()
    surface.set_padding(-5.0, 12.0)

    assert surface.is_scroll_owner
    assert surface.padding == (0.0, 12.0)
    assert surface.ops[-1].kind == "padding"
    surface.clear_ops()
    assert surface.ops == []
