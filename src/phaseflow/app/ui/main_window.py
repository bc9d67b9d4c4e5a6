from __future__ import annotations

import logging

from PySide6.QtCore import QSettings, Slot, QT_TRANSLATE_NOOP
from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import QMainWindow, QWidget, QVBoxLayout, QTabBar

from phaseflow.analysis.field import Point
from phaseflow.app.application import SETTINGS_GEOMETRY, VISIBLE_APP_NAME, VISIBLE_SUBTITLE
from phaseflow.app.state import Store
from phaseflow.app.ui.workarea import WorkArea
from phaseflow.model.systems import ModelType

logger = logging.getLogger(__name__)

# Model order of the tabs. Display text is translated on creation.
MODEL_ORDER = [ModelType.LINEAR, ModelType.LOTKA_VOLTERRA, ModelType.CUSTOM]

MODEL_LABELS = {
    ModelType.LINEAR: QT_TRANSLATE_NOOP("Models", "Linear"),
    ModelType.LOTKA_VOLTERRA: QT_TRANSLATE_NOOP("Models", "Lotka Volterra"),
    ModelType.CUSTOM: QT_TRANSLATE_NOOP("Models", "Custom"),
}


class MainWindow(QMainWindow):
    def __init__(self, store: Store | None = None):
        super().__init__()
        self.setWindowTitle(f"{VISIBLE_APP_NAME}: {VISIBLE_SUBTITLE}")
        self.resize(1200, 760)
        geometry = QSettings().value(SETTINGS_GEOMETRY)
        if geometry is not None:
            self.restoreGeometry(geometry)

        # Global store
        self.store = store or Store()

        # ---- Central: TabBar on top + WorkArea below ----
        central = QWidget(self)
        v = QVBoxLayout(central)
        v.setContentsMargins(0, 0, 0, 0)
        v.setSpacing(0)

        self.tabs = QTabBar(central)
        self.tabs.setExpanding(True)
        self.tabs.setMovable(False)
        self.tabs.setTabsClosable(False)
        self.tabs.setDrawBase(True)
        self.tabs.setShape(QTabBar.Shape.RoundedNorth)
        for model_type in MODEL_ORDER:
            self.tabs.addTab(self.tr(MODEL_LABELS[model_type]))
        v.addWidget(self.tabs, 0)

        self.work_area = WorkArea(self.store, central)
        v.addWidget(self.work_area, 1)

        self.setCentralWidget(central)

        # wiring
        self.tabs.currentChanged.connect(self._on_tab_changed)
        self.work_area.portrait.point_clicked.connect(self._on_point_clicked)

        self.store.model_changed.connect(self._on_model_changed)
        self.store.system_changed.connect(lambda *_: self._render_system())
        self.store.trajectories_changed.connect(self._render_trajectories)

        self.tabs.setCurrentIndex(MODEL_ORDER.index(self.store.model_type()))
        self._render_system()
        self._render_trajectories(self.store.trajectories())

    @Slot(int)
    def _on_tab_changed(self, idx: int) -> None:
        self.store.set_model(MODEL_ORDER[idx])

    @Slot(object)
    def _on_model_changed(self, model_type: ModelType) -> None:
        """Keep the tab in sync when the model changes outside the tab bar (reset)."""
        self.tabs.blockSignals(True)
        self.tabs.setCurrentIndex(MODEL_ORDER.index(model_type))
        self.tabs.blockSignals(False)
        self._render_system()

    @Slot(object)
    def _on_point_clicked(self, point: Point) -> None:
        trajectory = self.store.add_trajectory(point)
        self.statusBar().showMessage(
            self.tr("Traced {n} points from ({x:.2f}, {y:.2f})").format(
                n=len(trajectory.points), x=point.x, y=point.y
            ),
            4000,
        )

    def _render_system(self) -> None:
        """Update viewport, direction field and eigenvector overlay from the store."""
        state = self.store.state
        portrait = self.work_area.portrait

        portrait.set_viewport(state.viewport())
        portrait.set_field(state.vector_field())

        analysis = state.linear_analysis()
        portrait.set_eigenvectors(analysis.eigenvectors if analysis is not None else ())

    @Slot(object)
    def _render_trajectories(self, trajectories) -> None:
        self.work_area.portrait.set_trajectories(trajectories)

    def closeEvent(self, event: QCloseEvent) -> None:
        QSettings().setValue(SETTINGS_GEOMETRY, self.saveGeometry())
        super().closeEvent(event)
