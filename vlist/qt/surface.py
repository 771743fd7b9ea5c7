"""PyQt6 render surface backed by a QScrollArea."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TypeVar

from vlist.api.events import ScrollChanged, Subscription, ViewportResized
from vlist.runtime.events import RuntimeEventBus

try:
    from PyQt6.QtCore import QEvent, QObject, Qt
    from PyQt6.QtWidgets import QScrollArea, QVBoxLayout, QWidget
except Exception as exc:  # pragma: no cover
    raise RuntimeError("PyQt6 is required for the Qt surface. Install dependency 'PyQt6'.") from exc

TEvent = TypeVar("TEvent")

_LOG = logging.getLogger("vlist.qt")


class QtScrollSurface(QObject):
    """Hosts item widgets in a zero-spacing column inside a scroll area.

    Spacer extents are applied as top/bottom layout margins. A trailing stretch
    keeps items packed to the top when the list is shorter than the viewport.
    """

    def __init__(self, scroll_area: QScrollArea | None = None, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._bus = RuntimeEventBus()
        self._area = scroll_area if scroll_area is not None else QScrollArea()
        self._content = QWidget()
        self._content.setObjectName("virtualListContent")
        self._layout = QVBoxLayout(self._content)
        self._layout.setContentsMargins(0, 0, 0, 0)
        self._layout.setSpacing(0)
        self._layout.addStretch(1)
        self._area.setWidget(self._content)
        self._area.setWidgetResizable(True)
        self._scrollbar = self._area.verticalScrollBar()
        self._scrollbar.valueChanged.connect(self._on_value_changed)
        self._area.viewport().installEventFilter(self)
        self._closed = False

    @property
    def area(self) -> QScrollArea:
        return self._area

    @property
    def content(self) -> QWidget:
        return self._content

    def attached_widgets(self) -> list[QWidget]:
        widgets: list[QWidget] = []
        for position in range(self._layout.count()):
            item = self._layout.itemAt(position)
            widget = item.widget() if item is not None else None
            if widget is not None:
                widgets.append(widget)
        return widgets

    def subscribe(self, event_type: type[TEvent], handler: Callable[[TEvent], None]) -> Subscription:
        return self._bus.subscribe(event_type, handler)

    def unsubscribe(self, subscription: Subscription) -> None:
        self._bus.unsubscribe(subscription)

    def configure_scroll_owner(self) -> None:
        self._area.setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAsNeeded)
        self._area.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)

    def viewport_height(self) -> float:
        return float(self._area.viewport().height())

    def scroll_offset(self) -> float:
        return float(self._scrollbar.value())

    def set_scroll_offset(self, offset: float) -> None:
        self._layout.activate()
        self._scrollbar.setValue(int(round(offset)))

    def set_padding(self, leading: float, trailing: float) -> None:
        self._layout.setContentsMargins(0, int(round(leading)), 0, int(round(trailing)))
        self._layout.activate()

    def attach_batch(self, nodes: Sequence[QWidget]) -> None:
        for position, node in enumerate(nodes):
            current = self._layout.indexOf(node)
            if current == position:
                continue
            if current >= 0:
                # Reorder in place; the widget keeps its parent and state.
                self._layout.removeWidget(node)
            self._layout.insertWidget(position, node)
            node.show()
        self._layout.activate()

    def detach(self, node: QWidget) -> None:
        self._layout.removeWidget(node)
        node.hide()
        node.setParent(None)
        node.deleteLater()

    def measure(self, node: QWidget) -> float:
        if node.isVisible() and node.height() > 0:
            return float(node.height())
        hint = max(node.sizeHint().height(), node.minimumHeight())
        return float(min(hint, node.maximumHeight()))

    def close(self) -> None:
        """Disconnect Qt signal and event filter hooks."""
        if self._closed:
            return
        self._closed = True
        self._scrollbar.valueChanged.disconnect(self._on_value_changed)
        self._area.viewport().removeEventFilter(self)

    def eventFilter(self, obj: QObject | None, event: QEvent | None) -> bool:  # type: ignore[override]
        if obj is self._area.viewport() and event is not None and event.type() == QEvent.Type.Resize:
            height = float(self._area.viewport().height())
            _LOG.debug("qt_viewport_resized height=%.1f", height)
            self._bus.publish(ViewportResized(height=height))
        return False

    def _on_value_changed(self, value: int) -> None:
        self._bus.publish(ScrollChanged(offset=float(value)))
