from __future__ import annotations

import logging
from typing import Mapping, Optional

from PySide6.QtCore import QObject, Signal

from phaseflow.analysis.field import Point
from phaseflow.analysis.linear import LinearAnalysis
from phaseflow.model.state import PortraitState, Trajectory
from phaseflow.model.systems import ModelType

logger = logging.getLogger(__name__)


class Store(QObject):
    """Central state store with signals for panel/portrait sync."""
    model_changed = Signal(object)         # ModelType
    system_changed = Signal(object)        # PortraitState
    trajectories_changed = Signal(object)  # list[Trajectory]

    def __init__(self, state: Optional[PortraitState] = None) -> None:
        super().__init__()
        self.state = state or PortraitState()

    # ---- reads ----

    def model_type(self) -> ModelType:
        return self.state.model_type

    def linear_analysis(self) -> Optional[LinearAnalysis]:
        return self.state.linear_analysis()

    def trajectories(self) -> list[Trajectory]:
        return list(self.state.trajectories)

    # ---- writes ----

    def set_model(self, model_type: ModelType) -> None:
        if model_type == self.state.model_type:
            return
        self.state.set_model(model_type)
        self.model_changed.emit(self.state.model_type)
        self.system_changed.emit(self.state)
        self.trajectories_changed.emit(self.trajectories())

    def set_coefficients(self, values: Mapping[str, float]) -> None:
        for name, value in values.items():
            self.state.set_coefficient(name, value)
        self.system_changed.emit(self.state)

    def set_expressions(self, dx: str, dy: str) -> None:
        self.state.set_expression("dx", dx)
        self.state.set_expression("dy", dy)
        self.system_changed.emit(self.state)

    def add_trajectory(self, initial: Point) -> Trajectory:
        trajectory = self.state.add_trajectory(initial)
        self.trajectories_changed.emit(self.trajectories())
        return trajectory

    def clear_trajectories(self) -> None:
        self.state.clear()
        self.trajectories_changed.emit(self.trajectories())

    def reset(self) -> None:
        """Restore the defaults of every model; listeners redraw everything."""
        self.state.reset()
        self.model_changed.emit(self.state.model_type)
        self.system_changed.emit(self.state)
        self.trajectories_changed.emit(self.trajectories())
