from __future__ import annotations

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
QtWidgets = pytest.importorskip("PyQt6.QtWidgets")

from PyQt6.QtCore import QSize  # noqa: E402
from PyQt6.QtGui import QResizeEvent  # noqa: E402

from vlist.api.events import ScrollChanged, ViewportResized  # noqa: E402
from vlist.qt.surface import QtScrollSurface  # noqa: E402
from vlist.ui_runtime.virtual_list import create_virtual_list  # noqa: E402


@pytest.fixture(scope="module")
def qapp():  # type: ignore[no-untyped-def]
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    yield app


def _label(text: str):  # type: ignore[no-untyped-def]
    label = QtWidgets.QLabel(text)
    label.setFixedHeight(30)
    return label


def test_attach_batch_orders_widgets_before_stretch(qapp) -> None:  # type: ignore[no-untyped-def]
    surface = QtScrollSurface()
    a, b, c = _label("a"), _label("b"), _label("c")

    surface.attach_batch([a, b])
    surface.attach_batch([c, a, b])

    assert surface.attached_widgets() == [c, a, b]
    assert a.parent() is surface.content
    surface.close()


def test_detach_removes_widget_from_layout(qapp) -> None:  # type: ignore[no-untyped-def]
    surface = QtScrollSurface()
    a, b = _label("a"), _label("b")
    surface.attach_batch([a, b])

    surface.detach(a)

    assert surface.attached_widgets() == [b]
    assert a.parent() is None
    surface.close()


def test_padding_maps_to_layout_margins(qapp) -> None:  # type: ignore[no-untyped-def]
    surface = QtScrollSurface()

    surface.set_padding(120.4, 60.6)

    margins = surface.content.layout().contentsMargins()
    assert (margins.top(), margins.bottom()) == (120, 61)
    surface.close()


def test_measure_uses_size_hint_for_hidden_widgets(qapp) -> None:  # type: ignore[no-untyped-def]
    surface = QtScrollSurface()
    label = _label("row")
    surface.attach_batch([label])

    assert surface.measure(label) == 30.0
    surface.close()


def test_scrollbar_and_resize_notifications_are_published(qapp) -> None:  # type: ignore[no-untyped-def]
    surface = QtScrollSurface()
    offsets: list[float] = []
    heights: list[float] = []
    surface.subscribe(ScrollChanged, lambda event: offsets.append(event.offset))
    surface.subscribe(ViewportResized, lambda event: heights.append(event.height))
    scrollbar = surface.area.verticalScrollBar()
    scrollbar.setRange(0, 1000)

    scrollbar.setValue(300)
    surface.eventFilter(surface.area.viewport(), QResizeEvent(QSize(100, 200), QSize(100, 100)))

    assert offsets == [300.0]
    assert len(heights) == 1
    surface.close()
    scrollbar.setValue(400)
    assert offsets == [300.0]


def test_virtual_list_drives_qt_surface(qapp) -> None:  # type: ignore[no-untyped-def]
    surface = QtScrollSurface()
    surface.configure_scroll_owner()
    rows = [f"row-{i}" for i in range(500)]

    vl = create_virtual_list(surface, _label, items=rows, item_key=lambda row, _index: row, nominal_item_height=30.0)

    assert 0 < len(vl.rendered_nodes) < len(rows)
    assert surface.attached_widgets() == list(vl.rendered_nodes)
    vl.dispose()
    surface.close()
