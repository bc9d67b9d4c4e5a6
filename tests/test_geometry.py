"""
Tests for the plot geometry helpers.
"""

import math

import numpy as np
import pytest

from phaseflow.analysis.field import Point, linear_field, make_field, zero_field
from phaseflow.config import MIN_POINTS_FOR_ARROWS
from phaseflow.model.geometry import arrow_heads, direction_field, eigenvector_segment
from phaseflow.model.systems import DEFAULT_VIEWPORT, POPULATION_VIEWPORT


class TestDirectionField:

    def test_grid_covers_viewport(self):
        result = direction_field(zero_field, DEFAULT_VIEWPORT, steps=18)

        assert result.positions.shape == (19 * 19, 2)
        np.testing.assert_array_equal(result.positions[0], [-10.0, -10.0])
        np.testing.assert_array_equal(result.positions[-1], [10.0, 10.0])

    def test_population_grid(self):
        result = direction_field(zero_field, POPULATION_VIEWPORT, steps=5)

        assert result.positions.shape == (36, 2)
        assert result.positions[:, 0].min() == 0.0
        assert result.positions[:, 1].max() == 50.0

    def test_zero_field_has_no_directions(self):
        result = direction_field(zero_field, DEFAULT_VIEWPORT)
        assert not result.directions.any()

    def test_directions_are_unit_length(self):
        result = direction_field(linear_field(0.0, -1.0, 1.0, 0.0), DEFAULT_VIEWPORT, steps=4)

        lengths = np.hypot(result.directions[:, 0], result.directions[:, 1])
        at_origin = np.all(result.positions == 0.0, axis=1)
        np.testing.assert_allclose(lengths[~at_origin], 1.0)
        assert lengths[at_origin].tolist() == [0.0]

    def test_undefined_samples_have_no_direction(self):
        result = direction_field(make_field("1/x", "1"), DEFAULT_VIEWPORT, steps=2)

        on_axis = result.positions[:, 0] == 0.0
        assert np.all(np.isnan(result.magnitudes[on_axis]))
        assert not result.directions[on_axis].any()

    def test_invalid_steps(self):
        with pytest.raises(ValueError):
            direction_field(zero_field, DEFAULT_VIEWPORT, steps=0)


class TestArrowHeads:

    def test_short_trajectory_has_no_arrows(self):
        points = np.zeros((MIN_POINTS_FOR_ARROWS - 1, 2))
        assert arrow_heads(points).shape == (0, 3)

    def test_positions_along_trajectory(self):
        points = np.c_[np.arange(100.0), np.zeros(100)]
        heads = arrow_heads(points)

        np.testing.assert_array_equal(heads[:, 0], [15.0, 45.0, 75.0])
        np.testing.assert_array_equal(heads[:, 2], 0.0)

    def test_heading_follows_motion(self):
        points = np.c_[np.zeros(40), np.arange(40.0)]
        heads = arrow_heads(points)
        np.testing.assert_allclose(heads[:, 2], math.pi / 2)

    def test_accepts_point_sequence(self):
        points = [Point(float(i), float(i)) for i in range(MIN_POINTS_FOR_ARROWS)]
        heads = arrow_heads(points, fractions=(0.5,))

        assert heads.shape == (1, 3)
        assert heads[0, 2] == pytest.approx(math.pi / 4)


class TestEigenvectorSegment:

    def test_segment_spans_viewport(self):
        start, end = eigenvector_segment(Point(1.0, 0.0), DEFAULT_VIEWPORT)
        assert start == (-40.0, 0.0)
        assert end == (40.0, 0.0)

    def test_segment_passes_through_origin(self):
        start, end = eigenvector_segment(Point(0.6, 0.8), POPULATION_VIEWPORT)
        assert (start.x + end.x, start.y + end.y) == pytest.approx((0.0, 0.0))
