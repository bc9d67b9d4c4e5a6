"""
Numeric core: vector fields, RK4 integration and linear-system analysis.

Note: This package is pure Python/NumPy/SymPy and should NOT import PySide6.
"""
from phaseflow.analysis.field import Point, VectorField, make_field, linear_field, zero_field
from phaseflow.analysis.integrator import integrate, rk4_step
from phaseflow.analysis.linear import LinearAnalysis, analyze_linear, format_eigenvalue

__all__ = [
    "Point",
    "VectorField",
    "make_field",
    "linear_field",
    "zero_field",
    "integrate",
    "rk4_step",
    "LinearAnalysis",
    "analyze_linear",
    "format_eigenvalue",
]
