from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

import numpy as np

from phaseflow.analysis.field import Point, VectorField
from phaseflow.config import (
    ARROW_HEAD_FRACTIONS, DIRECTION_FIELD_STEPS, EIGENVECTOR_SPAN_FACTOR, MIN_POINTS_FOR_ARROWS
)

if TYPE_CHECKING:
    import numpy.typing as npt

    from phaseflow.model.systems import Viewport


@dataclass(frozen=True, eq=False)
class DirectionField:
    """
    Samples of a vector field on a regular grid.

    Attributes:
        positions: (N, 2) grid points.
        directions: (N, 2) unit directions, zero where the field vanishes or is undefined.
        magnitudes: (N,) field magnitudes (NaN where the field is undefined).
    """
    positions: npt.NDArray[np.float64]
    directions: npt.NDArray[np.float64]
    magnitudes: npt.NDArray[np.float64]


def direction_field(
    field: VectorField,
    viewport: Viewport,
    steps: int = DIRECTION_FIELD_STEPS
) -> DirectionField:
    """
    Sample a vector field on a (steps + 1) x (steps + 1) grid covering the viewport.

    Args:
        field: The vector field.
        viewport: Sampled rectangle, edges included.
        steps: Number of grid intervals per axis.

    Raises:
        ValueError: If `steps` is smaller than 1.

    Returns:
        The sampled direction field.
    """
    if steps < 1:
        raise ValueError(f"'steps' must be at least 1, got {steps}.")

    xs = np.linspace(viewport.min_x, viewport.max_x, steps + 1)
    ys = np.linspace(viewport.min_y, viewport.max_y, steps + 1)
    gx, gy = np.meshgrid(xs, ys, indexing="ij")
    positions = np.c_[gx.ravel(), gy.ravel()]

    velocities = np.array([field(Point(float(x), float(y))) for x, y in positions], dtype=np.float64)
    magnitudes = np.hypot(velocities[:, 0], velocities[:, 1])

    valid = np.isfinite(magnitudes) & (magnitudes > 0)
    directions = np.zeros_like(velocities)
    directions[valid] = velocities[valid] / magnitudes[valid, None]

    return DirectionField(positions=positions, directions=directions, magnitudes=magnitudes)


def arrow_heads(
    points: npt.NDArray[np.float64] | Sequence[Point],
    fractions: Sequence[float] = ARROW_HEAD_FRACTIONS
) -> npt.NDArray[np.float64]:
    """
    Positions and headings of the arrow heads drawn along a trajectory.

    Short trajectories (fewer than `MIN_POINTS_FOR_ARROWS` points) get no arrows.

    Args:
        points: (N, 2) trajectory points.
        fractions: Relative positions along the point sequence.

    Returns:
        (K, 3) array of (x, y, angle), angle in radians measured counterclockwise
        from the +x axis in phase-plane coordinates.
    """
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    n = pts.shape[0]
    if n < MIN_POINTS_FOR_ARROWS:
        return np.empty((0, 3), dtype=np.float64)

    heads = []
    for fraction in fractions:
        idx = int(np.floor(n * fraction))
        p1 = pts[idx]
        p2 = pts[min(idx + 1, n - 1)]
        angle = np.arctan2(p2[1] - p1[1], p2[0] - p1[0])
        heads.append((p1[0], p1[1], angle))

    return np.array(heads, dtype=np.float64)


def eigenvector_segment(vector: Point, viewport: Viewport) -> tuple[Point, Point]:
    """
    Endpoints of the invariant line through the origin along an eigenvector.

    The segment is long enough to cross the whole viewport; the view clips it.
    """
    scale = max(viewport.width, viewport.height) * EIGENVECTOR_SPAN_FACTOR
    return (
        Point(-vector.x * scale, -vector.y * scale),
        Point(vector.x * scale, vector.y * scale),
    )
