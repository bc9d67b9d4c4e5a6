"""
Configuration & Numeric Constants
=================================
This module serves as the central registry for global constants.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (step sizes, bounds, tolerances)
   from being scattered throughout the solver and the views.
2. Consistency: The integrator, the analysis and the portrait view agree on
   the same limits.

Exports:
    TRAJECTORY_STEPS (int): Number of RK4 steps per clicked trajectory.
    TRAJECTORY_STEP_SIZE (float): RK4 step size per clicked trajectory.
    DIVERGENCE_BOUND (float): Absolute coordinate limit that ends a trajectory.
    MAX_STEP_COUNT (int): Hard cap on the number of steps of one integration.
    EIGEN_TOLERANCE (float): Zero threshold of the linear analysis.
    MAX_TRAJECTORIES (int): Number of trajectories kept in the history.
"""
from __future__ import annotations

# Integration
TRAJECTORY_STEPS: int = 1500
TRAJECTORY_STEP_SIZE: float = 0.03
DIVERGENCE_BOUND: float = 1000.0
MAX_STEP_COUNT: int = 20_000

# Linear analysis
EIGEN_TOLERANCE: float = 1e-9
EIGENVALUE_DISPLAY_TOLERANCE: float = 1e-4

# Trajectory history
MAX_TRAJECTORIES: int = 5

# Portrait rendering
DIRECTION_FIELD_STEPS: int = 18
DIRECTION_SEGMENT_FRACTION: float = 0.36  # of the grid spacing
ARROW_HEAD_FRACTIONS: tuple[float, ...] = (0.15, 0.45, 0.75)
MIN_POINTS_FOR_ARROWS: int = 20
EIGENVECTOR_SPAN_FACTOR: float = 2.0
TRAJECTORY_SATURATION: float = 0.65
TRAJECTORY_LIGHTNESS: float = 0.45
