from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Optional

import numpy as np
import pyqtgraph as pg
from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QLabel

from phaseflow.analysis.field import Point, VectorField
from phaseflow.config import DIRECTION_FIELD_STEPS, DIRECTION_SEGMENT_FRACTION
from phaseflow.model.geometry import arrow_heads, direction_field, eigenvector_segment

if TYPE_CHECKING:
    from phaseflow.model.state import Trajectory
    from phaseflow.model.systems import Viewport

logger = logging.getLogger(__name__)

FIELD_COLOR = (59, 130, 246, 64)
AXIS_COLOR = (100, 116, 139, 80)
EIGENVECTOR_COLOR = "#f59e0b"

# -------------------------------------------------------------------------------
# Portrait widget
# -------------------------------------------------------------------------------

class PortraitView(QWidget):
    """
    pyqtgraph phase portrait with:
      - a fixed viewport per model (no pan/zoom),
      - light grid and axes through the origin,
      - direction-field segments,
      - dashed eigenvector lines,
      - trajectories with arrow heads.

    A left click inside the plot emits `point_clicked` in phase-plane coordinates.
    """
    point_clicked = Signal(object)  # Point

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent=parent)

        layout = QVBoxLayout(self)

        self.plot_widget = pg.PlotWidget(self)
        self.plot_widget.setBackground('w')
        self.plot_widget.showGrid(x=True, y=True, alpha=0.1)
        self.plot_widget.setMouseEnabled(x=False, y=False)
        self.plot_widget.setMenuEnabled(False)
        self.plot_widget.hideButtons()
        self.plot_widget.setAspectLocked(True)
        self.plot_widget.setLabel('bottom', 'x')
        self.plot_widget.setLabel('left', 'y')
        self.plot_widget.setCursor(Qt.CursorShape.CrossCursor)
        layout.addWidget(self.plot_widget, 1)

        footer = QHBoxLayout()
        self.label_eigen = QLabel(f"<span style='color:{EIGENVECTOR_COLOR}'>- - Eigenvectors</span>", self)
        self.label_eigen.setVisible(False)
        footer.addStretch()
        footer.addWidget(self.label_eigen)
        footer.addWidget(QLabel(self.tr("Click to trace path"), self))
        layout.addLayout(footer)

        # axes through the origin
        axis_pen = pg.mkPen(color=AXIS_COLOR, width=1)
        self.plot_widget.addItem(pg.InfiniteLine(pos=0, angle=0, pen=axis_pen))
        self.plot_widget.addItem(pg.InfiniteLine(pos=0, angle=90, pen=axis_pen))

        # persistent items
        self._field_item = pg.PlotDataItem(pen=pg.mkPen(color=FIELD_COLOR, width=1), connect="finite")
        self.plot_widget.addItem(self._field_item)

        # replaced on every update
        self._eigen_items: list[pg.PlotDataItem] = []
        self._trajectory_items: list[pg.GraphicsObject] = []

        self._viewport: Optional[Viewport] = None

        self.plot_widget.scene().sigMouseClicked.connect(self._on_mouse_clicked)

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def set_viewport(self, viewport: Viewport) -> None:
        self._viewport = viewport
        self.plot_widget.disableAutoRange()
        self.plot_widget.setXRange(viewport.min_x, viewport.max_x, padding=0)
        self.plot_widget.setYRange(viewport.min_y, viewport.max_y, padding=0)

    def set_field(self, field: VectorField) -> None:
        """Redraw the direction field for the current viewport."""
        if self._viewport is None:
            return
        sampled = direction_field(field, self._viewport, DIRECTION_FIELD_STEPS)
        spacing = min(self._viewport.width, self._viewport.height) / DIRECTION_FIELD_STEPS
        length = DIRECTION_SEGMENT_FRACTION * spacing

        starts = sampled.positions
        ends = starts + sampled.directions * length
        n = starts.shape[0]

        # start, end, NaN break per segment
        xs = np.empty(3 * n)
        ys = np.empty(3 * n)
        xs[0::3], xs[1::3], xs[2::3] = starts[:, 0], ends[:, 0], np.nan
        ys[0::3], ys[1::3], ys[2::3] = starts[:, 1], ends[:, 1], np.nan
        self._field_item.setData(xs, ys, connect="finite")

    def set_eigenvectors(self, eigenvectors: tuple[Point, ...] | list[Point]) -> None:
        for item in self._eigen_items:
            self.plot_widget.removeItem(item)
        self._eigen_items.clear()

        if self._viewport is not None:
            pen = pg.mkPen(color=EIGENVECTOR_COLOR, width=1.5, style=Qt.PenStyle.DashLine)
            for vector in eigenvectors:
                p1, p2 = eigenvector_segment(vector, self._viewport)
                item = pg.PlotDataItem([p1.x, p2.x], [p1.y, p2.y], pen=pen)
                self.plot_widget.addItem(item)
                self._eigen_items.append(item)

        self.label_eigen.setVisible(bool(self._eigen_items))

    def set_trajectories(self, trajectories: list[Trajectory]) -> None:
        for item in self._trajectory_items:
            self.plot_widget.removeItem(item)
        self._trajectory_items.clear()

        for trajectory in trajectories:
            pts = trajectory.points
            curve = pg.PlotDataItem(pts[:, 0], pts[:, 1], pen=pg.mkPen(color=trajectory.color, width=2.5))
            self.plot_widget.addItem(curve)
            self._trajectory_items.append(curve)

            for x, y, angle in arrow_heads(pts):
                head = pg.ArrowItem(
                    pos=(x, y),
                    angle=self._screen_angle(angle),
                    headLen=10,
                    tipAngle=60,
                    pen=None,
                    brush=trajectory.color,
                )
                self.plot_widget.addItem(head)
                self._trajectory_items.append(head)

    # ------------------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------------------

    @staticmethod
    def _screen_angle(angle: float) -> float:
        """
        ArrowItem angle in degrees for a heading given in phase-plane radians.

        ArrowItem points along -x at 0 degrees and rotates clockwise on screen,
        where the y axis is flipped.
        """
        return 180.0 - math.degrees(angle)

    def _on_mouse_clicked(self, event) -> None:
        if event.button() != Qt.MouseButton.LeftButton:
            return
        view_box = self.plot_widget.getPlotItem().getViewBox()
        scene_pos = event.scenePos()
        if not view_box.sceneBoundingRect().contains(scene_pos):
            return
        pos = view_box.mapSceneToView(scene_pos)
        point = Point(float(pos.x()), float(pos.y()))
        logger.debug(f"Clicked at ({point.x:.3f}, {point.y:.3f})")
        self.point_clicked.emit(point)
