"""Demo window showing a large virtualized list of variable-height rows."""

from __future__ import annotations

import argparse
import logging
import random
from collections.abc import Sequence
from dataclasses import replace

from vlist.api.logging import configure_logging
from vlist.qt.surface import QtScrollSurface
from vlist.runtime.config import load_config
from vlist.runtime.logging import load_logging_config, setup_logging
from vlist.ui_runtime.virtual_list import VirtualList, create_virtual_list

try:
    from PyQt6.QtWidgets import (
        QApplication,
        QHBoxLayout,
        QLabel,
        QMainWindow,
        QPushButton,
        QVBoxLayout,
        QWidget,
    )
except Exception as exc:  # pragma: no cover
    raise RuntimeError("PyQt6 is required for the UI. Install dependency 'PyQt6'.") from exc

_LOG = logging.getLogger("vlist.qt.demo")

type DemoRow = dict[str, object]


def build_rows(count: int, *, seed: int = 7) -> list[DemoRow]:
    rng = random.Random(seed)
    return [{"id": f"row-{i}", "title": f"Row {i}", "lines": rng.randint(1, 3)} for i in range(count)]


def render_row(row: DemoRow) -> QWidget:
    lines = int(str(row["lines"]))
    text = "\n".join([str(row["title"])] + [f"detail line {n}" for n in range(1, lines)])
    label = QLabel(text)
    label.setObjectName("virtualListRow")
    label.setWordWrap(True)
    label.setContentsMargins(8, 6, 8, 6)
    return label


class DemoWindow(QMainWindow):
    def __init__(self, rows: Sequence[DemoRow], *, nominal_height: float, buffer_size: int) -> None:
        super().__init__()
        self._rows = list(rows)
        self._surface = QtScrollSurface()
        root = QWidget()
        layout = QVBoxLayout(root)
        controls = QHBoxLayout()
        self._status = QLabel("")
        shuffle = QPushButton("Shuffle")
        shuffle.clicked.connect(self._shuffle)
        controls.addWidget(shuffle)
        controls.addWidget(self._status, 1)
        layout.addLayout(controls)
        layout.addWidget(self._surface.area, 1)
        self.setCentralWidget(root)
        self.setWindowTitle("Virtual List Demo")
        self.resize(480, 640)
        self._list: VirtualList[DemoRow, QWidget] = create_virtual_list(
            self._surface,
            render_row,
            items=self._rows,
            nominal_item_height=nominal_height,
            buffer_size=buffer_size,
        )
        self._surface.subscribe(object, lambda _event: self._sync_status())
        self._sync_status()

    def _shuffle(self) -> None:
        random.shuffle(self._rows)
        self._list.update_items(self._rows)
        self._sync_status()

    def _sync_status(self) -> None:
        window = self._list.window
        self._status.setText(f"rendering {window.start}-{window.end} of {self._list.item_count}")

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._list.dispose()
        self._surface.close()
        super().closeEvent(event)


def main(argv: Sequence[str] | None = None) -> int:
    cfg = load_config()
    parser = argparse.ArgumentParser(description="Virtualized list demo.")
    parser.add_argument("--count", type=int, default=10_000)
    parser.add_argument("--nominal-height", type=float, default=cfg.nominal_item_height)
    parser.add_argument("--buffer", type=int, default=cfg.buffer_size)
    parser.add_argument("--log-level", default=None, help="Override VLIST_LOG_LEVEL for this run.")
    args = parser.parse_args(argv)

    if args.log_level:
        configure_logging(replace(load_logging_config(), level_name=args.log_level.upper()))
    else:
        setup_logging()
    app = QApplication.instance() or QApplication([])
    window = DemoWindow(build_rows(max(0, args.count)), nominal_height=args.nominal_height, buffer_size=args.buffer)
    window.show()
    _LOG.info("demo_started count=%d buffer=%d", args.count, args.buffer)
    return int(app.exec())


if __name__ == "__main__":
    raise SystemExit(main())
