"""
Portrait State (Data Model)
===========================
This module defines the central data structure for the running application.

Why is this file needed?
------------------------
1. State Management: It holds the active model, the parameters of every
   model family and the drawn trajectories in one place.
2. Bounded history: Only the most recent trajectories are kept; adding one
   beyond the limit evicts the oldest.
3. Decoupling: Views read from this object; the Qt store writes to it.

Classes:
    Trajectory: One integrated solution curve, ready for display.
    PortraitState: The main container class.
"""
from __future__ import annotations

import colorsys
import logging
import random
import uuid
from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

import numpy as np

from phaseflow.analysis.field import Point, VectorField
from phaseflow.analysis.integrator import integrate
from phaseflow.analysis.linear import LinearAnalysis, analyze_linear
from phaseflow.config import (
    MAX_TRAJECTORIES, TRAJECTORY_LIGHTNESS, TRAJECTORY_SATURATION, TRAJECTORY_STEP_SIZE, TRAJECTORY_STEPS
)
from phaseflow.model.systems import (
    CustomParams, LinearParams, ModelType, SystemParams, Viewport, build_field, default_params,
    parameter_names, viewport_for
)

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


def random_color(rng: random.Random | None = None) -> str:
    """Random hue at fixed saturation and lightness, as '#rrggbb'."""
    hue = (rng or random).random()
    r, g, b = colorsys.hls_to_rgb(hue, TRAJECTORY_LIGHTNESS, TRAJECTORY_SATURATION)
    return "#{:02x}{:02x}{:02x}".format(round(r * 255), round(g * 255), round(b * 255))


@dataclass(frozen=True, eq=False)
class Trajectory:
    id: str
    points: npt.NDArray[np.float64]
    initial: Point
    color: str


def _all_defaults() -> dict[ModelType, SystemParams]:
    return {model_type: default_params(model_type) for model_type in ModelType}


@dataclass
class PortraitState:
    """
    Holds the state of the open portrait.
    Pass this instance to the Qt store; it is the single owner of the history.
    """
    model_type: ModelType = ModelType.LINEAR
    parameters: dict[ModelType, SystemParams] = field(default_factory=_all_defaults)

    step_count: int = TRAJECTORY_STEPS
    step_size: float = TRAJECTORY_STEP_SIZE

    trajectories: deque[Trajectory] = field(default_factory=lambda: deque(maxlen=MAX_TRAJECTORIES))

    _field_cache: Optional[VectorField] = field(default=None, init=False, repr=False, compare=False)

    # ---- derived data ----

    @property
    def params(self) -> SystemParams:
        """Parameters of the active model."""
        return self.parameters[self.model_type]

    def vector_field(self) -> VectorField:
        if self._field_cache is None:
            self._field_cache = build_field(self.params)
        return self._field_cache

    def linear_analysis(self) -> Optional[LinearAnalysis]:
        """Spectral analysis of the linear model, None for the other models."""
        if self.model_type != ModelType.LINEAR:
            return None
        p = self.params
        assert isinstance(p, LinearParams)
        return analyze_linear(p.a, p.b, p.c, p.d)

    def viewport(self) -> Viewport:
        return viewport_for(self.model_type)

    # ---- mutations ----

    def set_model(self, model_type: ModelType) -> None:
        """Switch the active model. The trajectories of the previous model are dropped."""
        model_type = ModelType(model_type)
        if model_type == self.model_type:
            return
        self.model_type = model_type
        self._field_cache = None
        self.clear()
        logger.info(f"Active model: {model_type.value}")

    def set_coefficient(self, name: str, value: float) -> None:
        """
        Set one numeric parameter of the active model.

        Raises:
            KeyError: If the active model has no numeric parameter of that name.
        """
        p = self.params
        if isinstance(p, CustomParams) or name not in parameter_names(p):
            raise KeyError(f"Model '{self.model_type.value}' has no coefficient '{name}'.")
        setattr(p, name, float(value))
        self._field_cache = None

    def set_expression(self, which: str, text: str) -> None:
        """
        Set the dx or dy expression of the custom model.

        Raises:
            KeyError: If `which` is not 'dx' or 'dy'.
        """
        if which not in ("dx", "dy"):
            raise KeyError(f"Unknown expression '{which}', expected 'dx' or 'dy'.")
        p = self.parameters[ModelType.CUSTOM]
        assert isinstance(p, CustomParams)
        setattr(p, which, text)
        if self.model_type == ModelType.CUSTOM:
            self._field_cache = None

    def add_trajectory(self, initial: Point, rng: random.Random | None = None) -> Trajectory:
        """
        Integrate from `initial` with the active field and append to the history.

        Args:
            initial: Starting point in phase-plane coordinates.
            rng: Optional random source for the id and color.

        Returns:
            The new trajectory.
        """
        initial = Point(float(initial[0]), float(initial[1]))
        points = integrate(self.vector_field(), initial, self.step_count, self.step_size)
        source = rng or random
        trajectory = Trajectory(
            id=uuid.UUID(int=source.getrandbits(128)).hex[:9],
            points=points,
            initial=initial,
            color=random_color(rng),
        )
        self.trajectories.append(trajectory)
        logger.debug(f"Trajectory {trajectory.id} from ({initial.x:.3f}, {initial.y:.3f}): {len(points)} points")
        return trajectory

    def clear(self) -> None:
        self.trajectories.clear()

    def reset(self) -> None:
        """Restore every model to its defaults and clear the history."""
        self.model_type = ModelType.LINEAR
        self.parameters = _all_defaults()
        self.step_count = TRAJECTORY_STEPS
        self.step_size = TRAJECTORY_STEP_SIZE
        self._field_cache = None
        self.clear()
        logger.info("Portrait state has been reset.")
