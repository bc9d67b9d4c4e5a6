"""
Model Catalogue
===============
The ODE families the user can explore and their default configuration.

Classes:
    ModelType: linear | lotka-volterra | custom.
    LinearParams, LotkaVolterraParams, CustomParams: Parameters per family.
    Viewport: Visible phase-plane rectangle.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from enum import StrEnum
from typing import Union

from phaseflow.analysis.field import Point, VectorField, linear_field, make_field


class ModelType(StrEnum):
    LINEAR = "linear"
    LOTKA_VOLTERRA = "lotka-volterra"
    CUSTOM = "custom"


@dataclass
class LinearParams:
    """x' = ax + by, y' = cx + dy"""
    a: float = 0.0
    b: float = -1.0
    c: float = 1.0
    d: float = 0.0


@dataclass
class LotkaVolterraParams:
    """x' = ax - bxy, y' = cxy - dy"""
    a: float = 1.5   # prey growth
    b: float = 0.1   # predation
    c: float = 0.02  # reproduction
    d: float = 0.5   # predator death


@dataclass
class CustomParams:
    dx: str = "y"
    dy: str = "-x - 0.2*y"


SystemParams = Union[LinearParams, LotkaVolterraParams, CustomParams]

LOTKA_VOLTERRA_DX = "a*x - b*x*y"
LOTKA_VOLTERRA_DY = "c*x*y - d*y"

EQUATIONS: dict[ModelType, str] = {
    ModelType.LINEAR: "x' = ax + by, y' = cx + dy",
    ModelType.LOTKA_VOLTERRA: "x' = ax - bxy, y' = cxy - dy",
    ModelType.CUSTOM: "Enter custom expressions using x and y.",
}


@dataclass(frozen=True)
class Viewport:
    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def contains(self, point: Point) -> bool:
        return self.min_x <= point[0] <= self.max_x and self.min_y <= point[1] <= self.max_y


DEFAULT_VIEWPORT = Viewport(-10.0, 10.0, -10.0, 10.0)
POPULATION_VIEWPORT = Viewport(0.0, 50.0, 0.0, 50.0)


def default_params(model_type: ModelType) -> SystemParams:
    """Fresh default parameters for a model family."""
    match model_type:
        case ModelType.LINEAR:
            return LinearParams()
        case ModelType.LOTKA_VOLTERRA:
            return LotkaVolterraParams()
        case ModelType.CUSTOM:
            return CustomParams()
    raise KeyError(f"Unknown model type: {model_type!r}")


def viewport_for(model_type: ModelType) -> Viewport:
    """Populations are non-negative, so the predator-prey model gets the first quadrant."""
    if model_type == ModelType.LOTKA_VOLTERRA:
        return POPULATION_VIEWPORT
    return DEFAULT_VIEWPORT


def parameter_names(params: SystemParams) -> list[str]:
    return [f.name for f in fields(params)]


def build_field(params: SystemParams) -> VectorField:
    """
    Create the vector field of a model family with the given parameters.

    Args:
        params: Parameters of one of the model families.

    Returns:
        The vector field. An invalid custom expression yields the zero field.
    """
    if isinstance(params, LinearParams):
        return linear_field(params.a, params.b, params.c, params.d)
    if isinstance(params, LotkaVolterraParams):
        return make_field(LOTKA_VOLTERRA_DX, LOTKA_VOLTERRA_DY, asdict(params))
    if isinstance(params, CustomParams):
        return make_field(params.dx, params.dy)
    raise TypeError(f"Unsupported parameters: {type(params).__name__}")
