from __future__ import annotations

import math
from dataclasses import dataclass
from enum import StrEnum

from phaseflow.analysis.field import Point
from phaseflow.config import EIGEN_TOLERANCE, EIGENVALUE_DISPLAY_TOLERANCE


class Classification(StrEnum):
    """Type of the equilibrium at the origin of a linear system."""
    NON_ISOLATED = "non-isolated"
    SADDLE = "saddle"
    NODE = "node"
    DEGENERATE_NODE = "degenerate node"
    SPIRAL = "spiral"
    CENTER = "center"


class Stability(StrEnum):
    ASYMPTOTICALLY_STABLE = "asymptotically stable"
    NEUTRALLY_STABLE = "neutrally stable"
    UNSTABLE = "unstable"


@dataclass(frozen=True)
class LinearAnalysis:
    """
    Spectral analysis of the matrix A = [[a, b], [c, d]].

    Attributes:
        trace: a + d
        determinant: ad - bc
        discriminant: trace^2 - 4 * determinant
        eigenvalues: Always two values, a real pair (zero imaginary part) or a complex-conjugate pair.
        eigenvectors: Unit eigenvectors, only for real eigenvalues (0, 1 or 2 of them).
    """
    trace: float
    determinant: float
    discriminant: float
    eigenvalues: tuple[complex, complex]
    eigenvectors: tuple[Point, ...]

    @property
    def classification(self) -> Classification:
        if abs(self.determinant) <= EIGEN_TOLERANCE:
            return Classification.NON_ISOLATED
        if self.determinant < 0:
            return Classification.SADDLE
        # before the sign test, rounding can leave a tiny negative residue
        if abs(self.discriminant) <= EIGEN_TOLERANCE:
            return Classification.DEGENERATE_NODE
        if self.discriminant < 0:
            if abs(self.trace) <= EIGEN_TOLERANCE:
                return Classification.CENTER
            return Classification.SPIRAL
        return Classification.NODE

    @property
    def stability(self) -> Stability:
        if self.determinant < 0 or self.trace > EIGEN_TOLERANCE:
            return Stability.UNSTABLE
        if self.determinant > 0 and self.trace < -EIGEN_TOLERANCE:
            return Stability.ASYMPTOTICALLY_STABLE
        return Stability.NEUTRALLY_STABLE


def _eigenvector_candidate(a: float, b: float, c: float, d: float, eigenvalue: float) -> Point:
    """Direction v with (A - lambda*I) v = 0, picked by case analysis on the matrix."""
    if abs(b) > EIGEN_TOLERANCE:
        return Point(b, eigenvalue - a)
    if abs(c) > EIGEN_TOLERANCE:
        return Point(eigenvalue - d, c)
    # diagonal matrix
    if eigenvalue == a:
        return Point(1.0, 0.0)
    if eigenvalue == d:
        return Point(0.0, 1.0)
    return Point(0.0, 0.0)


def _normalized(vector: Point) -> Point | None:
    magnitude = math.hypot(vector.x, vector.y)
    if magnitude <= EIGEN_TOLERANCE:
        return None
    return Point(vector.x / magnitude, vector.y / magnitude)


def analyze_linear(a: float, b: float, c: float, d: float) -> LinearAnalysis:
    """
    Compute trace, determinant, eigenvalues and eigenvectors of [[a, b], [c, d]].

    For a repeated real eigenvalue only one eigenvector is reported, even for
    a multiple of the identity.

    Args:
        a, b, c, d: Matrix coefficients.

    Returns:
        The analysis result.
    """
    trace = a + d
    determinant = a * d - b * c
    discriminant = trace * trace - 4 * determinant

    if discriminant < 0:
        real = trace / 2
        imag = math.sqrt(-discriminant) / 2
        return LinearAnalysis(
            trace=trace,
            determinant=determinant,
            discriminant=discriminant,
            eigenvalues=(complex(real, imag), complex(real, -imag)),
            eigenvectors=(),
        )

    root = math.sqrt(discriminant)
    l1 = (trace + root) / 2
    l2 = (trace - root) / 2

    eigenvectors: list[Point] = []
    v1 = _normalized(_eigenvector_candidate(a, b, c, d, l1))
    v2 = _normalized(_eigenvector_candidate(a, b, c, d, l2))
    if v1 is not None:
        eigenvectors.append(v1)
    if v2 is not None and abs(l1 - l2) > EIGEN_TOLERANCE:
        eigenvectors.append(v2)

    return LinearAnalysis(
        trace=trace,
        determinant=determinant,
        discriminant=discriminant,
        eigenvalues=(complex(l1, 0.0), complex(l2, 0.0)),
        eigenvectors=tuple(eigenvectors),
    )


def format_eigenvalue(value: complex) -> str:
    """Format as '1.000' or '0.000+1.000i', hiding negligible imaginary parts."""
    text = f"{value.real:.3f}"
    if abs(value.imag) > EIGENVALUE_DISPLAY_TOLERANCE:
        sign = "+" if value.imag > 0 else ""
        text += f"{sign}{value.imag:.3f}i"
    return text
