"""Tests for the color ramp interpolator."""

import math

import pytest

from isochart.core.grid import ValueExtent
from isochart.visualization.color_system import (
    color_for,
    hex_to_rgb,
    hex_to_rgb255,
    interpolate_color,
)

STOPS = ["#ff0000", "#00ff00", "#0000ff"]


class TestInterpolateColor:
    def test_endpoints_return_first_and_last_stop(self):
        assert interpolate_color(0.0, STOPS) == "#ff0000"
        assert interpolate_color(1.0, STOPS) == "#0000ff"

    def test_single_stop_is_constant(self):
        for t in (0.0, 0.3, 0.5, 1.0):
            assert interpolate_color(t, ["#123456"]) == "#123456"

    def test_empty_ramp_is_black(self):
        assert interpolate_color(0.4, []) == "#000000"

    def test_midpoint_of_two_stops_rounds_half_up(self):
        assert interpolate_color(0.5, ["#000000", "#ffffff"]) == "#808080"

    def test_interior_stop_is_hit_exactly(self):
        assert interpolate_color(0.5, STOPS) == "#00ff00"

    def test_local_weight_inside_segment(self):
        # t = 0.75 is halfway through the second segment
        assert interpolate_color(0.75, STOPS) == "#008080"
        assert interpolate_color(0.25, STOPS) == "#808000"

    def test_output_is_lowercase(self):
        assert interpolate_color(0.0, ["#FFF022", "#FF0099"]) == "#fff022"
        assert interpolate_color(1.0, ["#FFF022", "#FF0099"]) == "#ff0099"

    def test_out_of_range_t_is_clamped(self):
        assert interpolate_color(-2.0, STOPS) == "#ff0000"
        assert interpolate_color(7.5, STOPS) == "#0000ff"

    def test_non_finite_t_reads_as_zero(self):
        assert interpolate_color(math.nan, STOPS) == "#ff0000"


class TestHexHelpers:
    def test_hex_to_rgb255(self):
        assert hex_to_rgb255("#FF8000") == (255, 128, 0)

    def test_hex_to_rgb_range(self):
        assert hex_to_rgb("#ffffff") == (1.0, 1.0, 1.0)

    def test_bad_hex_raises(self):
        with pytest.raises(ValueError):
            hex_to_rgb255("#12")
        with pytest.raises(ValueError):
            hex_to_rgb255("#gggggg")


class TestColorFor:
    def test_extent_normalization(self):
        extent = ValueExtent(4.0, 0.0)
        assert color_for(2.5, extent, ["#FFF022", "#FF0099"]) == "#ff5a6c"

    def test_degenerate_extent_is_deterministic(self):
        extent = ValueExtent(3.0, 3.0)
        assert color_for(3.0, extent, ["#000000", "#ffffff"]) == "#808080"
