"""
Tests for vector-field construction from expressions.
"""

import math

import numpy as np
import pytest

from phaseflow.analysis.field import (
    ExpressionError, Point, compile_expression, linear_field, make_field, zero_field
)
from phaseflow.analysis.integrator import integrate


class TestMakeField:
    """Fields compiled from expression text."""

    def test_simple_expressions(self):
        field = make_field("y", "-x")
        assert field(Point(1.0, 2.0)) == pytest.approx((2.0, -1.0))

    def test_returns_point(self):
        result = make_field("x", "y")(Point(1.0, 2.0))
        assert isinstance(result, Point)

    def test_blank_expressions_are_zero(self):
        field = make_field("", "   ")
        assert field(Point(3.0, 4.0)) == (0.0, 0.0)

    def test_constants_are_bound(self):
        field = make_field("a*x", "b*y", {"a": 2.0, "b": 3.0})
        assert field(Point(1.0, 2.0)) == pytest.approx((2.0, 6.0))

    def test_constants_are_copied(self):
        constants = {"k": 1.0}
        field = make_field("k*x", "0", constants)
        constants["k"] = 5.0
        assert field(Point(2.0, 0.0)).x == pytest.approx(2.0)

    def test_caret_is_power(self):
        field = make_field("x^2", "2^y")
        assert field(Point(3.0, 3.0)) == pytest.approx((9.0, 8.0))

    def test_functions_and_constants(self):
        field = make_field("sin(x) + pi", "exp(y) - e")
        assert field(Point(0.0, 1.0)) == pytest.approx((math.pi, 0.0), abs=1e-12)

    def test_lotka_volterra_equations(self):
        field = make_field("a*x - b*x*y", "c*x*y - d*y", {"a": 1.5, "b": 0.1, "c": 0.02, "d": 0.5})
        assert field(Point(10.0, 5.0)) == pytest.approx((10.0, -1.5))

    def test_unbalanced_parentheses_fall_back_to_zero_field(self):
        field = make_field("(x + 1", "y")
        assert field(Point(1.0, 1.0)) == (0.0, 0.0)
        assert field(Point(-7.5, 100.0)) == (0.0, 0.0)

    def test_garbage_falls_back_to_zero_field(self):
        field = make_field("x +* y", "y")
        assert field(Point(1.0, 1.0)) == (0.0, 0.0)

    def test_unknown_name_falls_back_to_zero_field(self):
        field = make_field("q*x", "y")
        assert field is zero_field

    def test_division_by_zero_yields_nan(self):
        field = make_field("1/x", "y")
        dx, dy = field(Point(0.0, 2.0))
        assert math.isnan(dx)
        assert dy == pytest.approx(2.0)

    def test_domain_error_yields_nan(self):
        dx, _ = make_field("sqrt(x)", "0")(Point(-1.0, 0.0))
        assert math.isnan(dx)

    def test_field_is_pure(self):
        field = make_field("x*y", "x - y")
        first = field(Point(1.5, -2.0))
        for _ in range(10):
            assert field(Point(1.5, -2.0)) == first


class TestCompileExpression:

    def test_argument_order(self):
        fn = compile_expression("a*x + b*y", ("a", "b"))
        assert fn(1.0, 2.0, 10.0, 100.0) == pytest.approx(210.0)

    @pytest.mark.parametrize("text", ["(x", "x +* y", "unknown_name", "x,"])
    def test_invalid_expression_raises(self, text):
        with pytest.raises(ExpressionError):
            compile_expression(text)


class TestBuiltinFields:

    def test_zero_field(self):
        assert zero_field(Point(12.0, -4.0)) == (0.0, 0.0)

    def test_linear_field(self):
        field = linear_field(1.0, 2.0, 3.0, 4.0)
        assert field(Point(1.0, 1.0)) == (3.0, 7.0)


class TestUnsupportedInput:
    """Expressions that parse but cannot be evaluated fall back at build time."""

    @pytest.mark.parametrize("text", ["log10(x)", "re(x)", "besselj(0, x)", "f(x)"])
    def test_untranslatable_function_raises(self, text):
        with pytest.raises(ExpressionError):
            compile_expression(text)

    def test_untranslatable_function_gives_zero_field(self):
        field = make_field("log10(x)", "y")
        assert field is zero_field
        assert field(Point(2.0, 1.0)) == (0.0, 0.0)

    def test_integrating_fallback_field_does_not_raise(self):
        traj = integrate(make_field("log10(x)", "y"), Point(1.0, 1.0), 10, 0.1)
        assert np.all(traj == [1.0, 1.0])

    @pytest.mark.parametrize("name", ["x", "y"])
    def test_constant_named_like_state_variable(self, name):
        with pytest.raises(ExpressionError):
            compile_expression("x + y", (name,))
        assert make_field("x + y", "1", {name: 2.0}) is zero_field

    def test_duplicate_constant_names(self):
        with pytest.raises(ExpressionError):
            compile_expression("a*x", ("a", "a"))

    def test_python_builtins_are_not_reachable(self):
        """Builtin names parse as undefined functions instead of being called."""
        with pytest.raises(ExpressionError, match="Unknown function"):
            compile_expression("__import__(x)")

    def test_abs_max_min(self):
        field = make_field("abs(x) + max(x, y)", "min(x, y)")
        assert field(Point(-3.0, 1.0)) == pytest.approx((4.0, -3.0))

    def test_point_dependent_failure_is_not_rejected(self):
        """An expression undefined at the trial point still compiles."""
        fn = compile_expression("1/(x - 1)")
        assert fn(3.0, 0.0) == pytest.approx(0.5)
