"""
Vector Fields
=============
Builds callable two-dimensional vector fields from user expressions.

Expressions are parsed with sympy once, then compiled with ``lambdify`` to
plain ``math`` calls, so evaluating the field inside the integrator loop does
not touch the symbolic engine.

Parsing evaluates the tokenized text against sympy's namespace only. Python
builtins (``__import__``, ``open``, ...) are not reachable from an expression;
unknown names become symbols and are rejected.

A field that cannot be built (syntax error, unknown name, function without a
``math`` counterpart) degrades to the constant zero field. The session keeps
running with inert visuals instead of failing on a typo.
"""
from __future__ import annotations

import logging
import math
from typing import Any, Callable, Mapping, NamedTuple, Optional

import sympy as sp
from sympy.core.function import AppliedUndef
from sympy.parsing.sympy_parser import convert_xor, parse_expr, standard_transformations

logger = logging.getLogger(__name__)

_TRANSFORMATIONS = standard_transformations + (convert_xor,)

_X = sp.Symbol("x")
_Y = sp.Symbol("y")
_RESERVED_NAMES = frozenset({"x", "y"})

# Calculator-style names on top of sympy's own namespace
_BUILTIN_NAMES: dict[str, sp.Basic] = {
    "e": sp.E,
    "pi": sp.pi,
}

# Namespace for parse_expr: sympy names, no Python builtins
_GLOBAL_DICT: dict[str, Any] = {name: getattr(sp, name) for name in sp.__all__}
_GLOBAL_DICT.update({"abs": sp.Abs, "max": sp.Max, "min": sp.Min, "__builtins__": {}})


class Point(NamedTuple):
    """A point (or velocity) in the phase plane."""
    x: float
    y: float


VectorField = Callable[[Point], Point]


class ExpressionError(ValueError):
    """Raised when an expression cannot be turned into a scalar function."""


def zero_field(point: Point) -> Point:
    """The field with no motion anywhere."""
    return Point(0.0, 0.0)


def linear_field(a: float, b: float, c: float, d: float) -> VectorField:
    """
    Field of the linear system x' = ax + by, y' = cx + dy.

    Args:
        a, b, c, d: Coefficients of the matrix [[a, b], [c, d]].

    Returns:
        The vector field as a callable.
    """
    def field(point: Point) -> Point:
        return Point(a * point.x + b * point.y, c * point.x + d * point.y)

    return field


def compile_expression(
    expression: str,
    constant_names: tuple[str, ...] = (),
) -> Callable[..., float]:
    """
    Compile a scalar expression of ``x``, ``y`` and named constants.

    Blank expressions compile to the constant ``0``. The returned function takes
    ``x``, ``y`` and then the constants in the order of ``constant_names``.

    Args:
        expression: Expression text, e.g. ``"a*x - b*x*y"`` or ``"sin(x)^2"``.
        constant_names: Names of the constants the expression may reference.

    Returns:
        A plain Python function returning a float.

    Raises:
        ExpressionError: If the expression cannot be parsed, references
            unknown names, uses a function with no ``math`` counterpart, or a
            constant is named ``x`` or ``y`` (or given twice).
    """
    text = expression.strip() or "0"

    clashing = _RESERVED_NAMES.intersection(constant_names)
    if clashing:
        raise ExpressionError(f"Constant name(s) clash with the state variables: {', '.join(sorted(clashing))}")
    if len(set(constant_names)) != len(constant_names):
        raise ExpressionError(f"Duplicate constant names: {', '.join(constant_names)}")

    constant_symbols = tuple(sp.Symbol(name) for name in constant_names)
    local_dict: dict[str, sp.Basic] = dict(_BUILTIN_NAMES)
    local_dict.update({"x": _X, "y": _Y})
    local_dict.update({s.name: s for s in constant_symbols})

    try:
        parsed = parse_expr(
            text, local_dict=local_dict, global_dict=_GLOBAL_DICT, transformations=_TRANSFORMATIONS
        )
    except Exception as e:
        raise ExpressionError(f"Cannot parse expression '{text}': {e}") from e

    if not isinstance(parsed, sp.Expr):
        raise ExpressionError(f"Expression '{text}' is not a scalar expression.")

    unknown = parsed.free_symbols - {_X, _Y, *constant_symbols}
    if unknown:
        names = ", ".join(sorted(str(s) for s in unknown))
        raise ExpressionError(f"Unknown name(s) in expression '{text}': {names}")

    undefined = parsed.atoms(AppliedUndef)
    if undefined:
        names = ", ".join(sorted({str(f.func) for f in undefined}))
        raise ExpressionError(f"Unknown function(s) in expression '{text}': {names}")

    try:
        function = sp.lambdify((_X, _Y, *constant_symbols), parsed, modules="math")
    except Exception as e:
        raise ExpressionError(f"Cannot compile expression '{text}': {e}") from e

    # Functions the math printer cannot translate (log10, re, besselj)
    # compile to code that fails with NameError on every call.
    try:
        function(*([1.0] * (2 + len(constant_symbols))))
    except NameError as e:
        raise ExpressionError(f"Unsupported function in expression '{text}': {e}") from e
    except (ArithmeticError, ValueError, TypeError):
        pass  # depends on the sample point, handled per evaluation

    return function


def _evaluate(function: Callable[..., float], args: tuple[float, ...]) -> float:
    """Evaluate a compiled expression, mapping arithmetic failures to NaN."""
    try:
        return float(function(*args))
    except (ArithmeticError, ValueError, TypeError):
        # 1/0, log(-1), complex results: the integrator stops on NaN
        return math.nan


def make_field(
    dx_expression: str,
    dy_expression: str,
    constants: Optional[Mapping[str, float]] = None,
) -> VectorField:
    """
    Create a vector field from two user-defined expressions.

    Both expressions are compiled once. Each evaluation binds ``x``, ``y`` and
    every entry of ``constants``.

    Args:
        dx_expression: Expression for dx/dt.
        dy_expression: Expression for dy/dt.
        constants: Named constants available to both expressions.

    Returns:
        The vector field. If either expression is invalid, the zero field.
    """
    values = dict(constants or {})
    names = tuple(sorted(values))
    bound = tuple(float(values[name]) for name in names)

    try:
        dx_function = compile_expression(dx_expression, names)
        dy_function = compile_expression(dy_expression, names)
    except ExpressionError as e:
        logger.warning(f"Falling back to the zero field: {e}")
        return zero_field

    def field(point: Point) -> Point:
        args = (point.x, point.y) + bound
        return Point(_evaluate(dx_function, args), _evaluate(dy_function, args))

    return field
