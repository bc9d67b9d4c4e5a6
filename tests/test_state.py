"""
Tests for the portrait state and its bounded trajectory history.
"""

import random
import re

import numpy as np
import pytest

from phaseflow.analysis.field import Point
from phaseflow.config import MAX_TRAJECTORIES, TRAJECTORY_STEPS
from phaseflow.model.state import PortraitState, random_color
from phaseflow.model.systems import CustomParams, LinearParams, ModelType


@pytest.fixture
def state():
    return PortraitState()


class TestTrajectoryHistory:

    def test_add_trajectory(self, state):
        trajectory = state.add_trajectory(Point(1.0, 0.0), rng=random.Random(1))

        assert trajectory.initial == (1.0, 0.0)
        np.testing.assert_array_equal(trajectory.points[0], [1.0, 0.0])
        assert len(trajectory.points) == TRAJECTORY_STEPS + 1
        assert len(trajectory.id) == 9
        assert list(state.trajectories) == [trajectory]

    def test_default_linear_orbit_is_circular(self, state):
        trajectory = state.add_trajectory(Point(0.0, 2.0))
        radius = np.hypot(trajectory.points[:, 0], trajectory.points[:, 1])
        np.testing.assert_allclose(radius, 2.0, atol=1e-2)

    def test_history_is_bounded(self, state):
        """Only the newest trajectories survive; the oldest are evicted first."""
        added = [state.add_trajectory(Point(float(i), 0.0)) for i in range(MAX_TRAJECTORIES + 3)]

        assert len(state.trajectories) == MAX_TRAJECTORIES
        assert [t.id for t in state.trajectories] == [t.id for t in added[-MAX_TRAJECTORIES:]]

    def test_clear(self, state):
        state.add_trajectory(Point(1.0, 1.0))
        state.clear()
        assert len(state.trajectories) == 0

    def test_seeded_rng_is_reproducible(self):
        a = PortraitState().add_trajectory(Point(1.0, 0.0), rng=random.Random(7))
        b = PortraitState().add_trajectory(Point(1.0, 0.0), rng=random.Random(7))
        assert (a.id, a.color) == (b.id, b.color)


class TestModelSwitching:

    def test_switching_model_clears_history(self, state):
        state.add_trajectory(Point(1.0, 0.0))
        state.set_model(ModelType.LOTKA_VOLTERRA)

        assert state.model_type == ModelType.LOTKA_VOLTERRA
        assert len(state.trajectories) == 0

    def test_same_model_keeps_history(self, state):
        state.add_trajectory(Point(1.0, 0.0))
        state.set_model(ModelType.LINEAR)
        assert len(state.trajectories) == 1

    def test_accepts_model_value(self, state):
        state.set_model("custom")
        assert state.model_type == ModelType.CUSTOM

    def test_linear_analysis_only_for_linear(self, state):
        assert state.linear_analysis() is not None
        state.set_model(ModelType.CUSTOM)
        assert state.linear_analysis() is None

    def test_viewport_follows_model(self, state):
        state.set_model(ModelType.LOTKA_VOLTERRA)
        assert state.viewport().min_x == 0.0


class TestParameters:

    def test_set_coefficient_updates_field(self, state):
        before = state.vector_field()(Point(1.0, 0.0))
        state.set_coefficient("a", 2.0)
        after = state.vector_field()(Point(1.0, 0.0))

        assert before == pytest.approx((0.0, 1.0))
        assert after == pytest.approx((2.0, 1.0))
        assert state.params == LinearParams(a=2.0, b=-1.0, c=1.0, d=0.0)

    def test_set_coefficient_updates_analysis(self, state):
        state.set_coefficient("a", 1.0)
        state.set_coefficient("b", 0.0)
        state.set_coefficient("c", 0.0)
        state.set_coefficient("d", -1.0)
        assert len(state.linear_analysis().eigenvectors) == 2

    def test_unknown_coefficient(self, state):
        with pytest.raises(KeyError):
            state.set_coefficient("z", 1.0)

    def test_custom_model_has_no_coefficients(self, state):
        state.set_model(ModelType.CUSTOM)
        with pytest.raises(KeyError):
            state.set_coefficient("a", 1.0)

    def test_set_expression(self, state):
        state.set_model(ModelType.CUSTOM)
        state.set_expression("dx", "x")
        state.set_expression("dy", "2*y")

        assert state.params == CustomParams(dx="x", dy="2*y")
        assert state.vector_field()(Point(1.0, 1.0)) == pytest.approx((1.0, 2.0))

    def test_invalid_expression_gives_still_trajectory(self, state):
        state.set_model(ModelType.CUSTOM)
        state.set_expression("dx", "x +")
        trajectory = state.add_trajectory(Point(3.0, 4.0))
        assert np.all(trajectory.points == [3.0, 4.0])

    def test_untranslatable_expression_gives_still_trajectory(self, state):
        state.set_model(ModelType.CUSTOM)
        state.set_expression("dx", "log10(x)")
        trajectory = state.add_trajectory(Point(2.0, 1.0))
        assert np.all(trajectory.points == [2.0, 1.0])

    def test_unknown_expression_slot(self, state):
        with pytest.raises(KeyError):
            state.set_expression("dz", "x")

    def test_reset(self, state):
        state.set_model(ModelType.CUSTOM)
        state.set_expression("dx", "x")
        state.add_trajectory(Point(1.0, 1.0))
        state.reset()

        assert state.model_type == ModelType.LINEAR
        assert state.parameters[ModelType.CUSTOM] == CustomParams()
        assert len(state.trajectories) == 0


class TestRandomColor:

    def test_hex_format(self):
        assert re.fullmatch(r"#[0-9a-f]{6}", random_color(random.Random(3)))

    def test_colors_vary(self):
        rng = random.Random(11)
        assert len({random_color(rng) for _ in range(20)}) > 1
