from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QWidget, QSplitter, QVBoxLayout

from phaseflow.app.state import Store
from phaseflow.app.ui.panels.system import SystemPanel
from phaseflow.app.ui.portrait import PortraitView


class WorkArea(QWidget):
    """The main work area with a splitter between the system panel and the phase portrait."""
    def __init__(self, store: Store, parent: QWidget | None = None) -> None:
        super().__init__(parent)

        v = QVBoxLayout(self)
        split = QSplitter(Qt.Orientation.Horizontal, self)
        split.setChildrenCollapsible(False)
        v.addWidget(split, 1)

        self.panel = SystemPanel(store, split)
        self.portrait = PortraitView(split)

        split.addWidget(self.panel)
        split.addWidget(self.portrait)
        split.setStretchFactor(0, 0)
        split.setStretchFactor(1, 1)
