from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

import numpy as np

from phaseflow.analysis.field import Point, VectorField
from phaseflow.config import DIVERGENCE_BOUND, MAX_STEP_COUNT

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


def rk4_step(field: VectorField, point: Point, step_size: float) -> Point:
    """
    Perform one step of classical 4th-order Runge-Kutta integration.

    Args:
        field: Vector field giving (dx/dt, dy/dt).
        point: Current state.
        step_size: Integration step h.

    Returns:
        The state after one step.
    """
    h = step_size
    x, y = point

    k1 = field(point)
    k2 = field(Point(x + (h / 2) * k1.x, y + (h / 2) * k1.y))
    k3 = field(Point(x + (h / 2) * k2.x, y + (h / 2) * k2.y))
    k4 = field(Point(x + h * k3.x, y + h * k3.y))

    return Point(
        x + (h / 6) * (k1.x + 2 * k2.x + 2 * k3.x + k4.x),
        y + (h / 6) * (k1.y + 2 * k2.y + 2 * k3.y + k4.y),
    )


def _is_diverged(point: Point) -> bool:
    if not (math.isfinite(point.x) and math.isfinite(point.y)):
        return True
    return abs(point.x) > DIVERGENCE_BOUND or abs(point.y) > DIVERGENCE_BOUND


def integrate(
    field: VectorField,
    initial_point: Point,
    step_count: int,
    step_size: float,
) -> npt.NDArray[np.float64]:
    """
    Integrate a trajectory with fixed-step RK4.

    The trajectory always starts with `initial_point`. Integration stops early,
    without an error, as soon as a step produces a non-finite coordinate or a
    coordinate whose absolute value exceeds `DIVERGENCE_BOUND`; that point is
    not part of the result.

    Args:
        field: Vector field giving (dx/dt, dy/dt).
        initial_point: Starting state.
        step_count: Maximum number of steps. Values above `MAX_STEP_COUNT` are clamped.
        step_size: Integration step h.

    Raises:
        ValueError: If `step_count` is negative or `step_size` is not a positive finite number.

    Returns:
        Read-only (N, 2) array of points, 1 <= N <= step_count + 1.
    """
    if step_count < 0:
        raise ValueError(f"'step_count' must be non-negative, got {step_count}.")
    if not (math.isfinite(step_size) and step_size > 0):
        raise ValueError(f"'step_size' must be a positive finite number, got {step_size}.")

    if step_count > MAX_STEP_COUNT:
        logger.warning(f"Requested {step_count} steps, clamping to {MAX_STEP_COUNT}.")
        step_count = MAX_STEP_COUNT

    current = Point(float(initial_point[0]), float(initial_point[1]))
    points: list[Point] = [current]

    for _ in range(step_count):
        current = rk4_step(field, current, step_size)
        if _is_diverged(current):
            logger.debug(f"Trajectory left the domain after {len(points) - 1} steps.")
            break
        points.append(current)

    trajectory = np.array(points, dtype=np.float64).reshape(-1, 2)
    trajectory.flags.writeable = False
    return trajectory
