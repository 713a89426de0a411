"""Tests for the isometric projection."""

import math

import numpy as np
import pytest

from isochart import config
from isochart.config import ChartOptions
from isochart.core.grid import as_sample_array, value_extent
from isochart.core.projection import ProjectionContext, RenderState, project


def _context(grid, state, **option_changes):
    samples = as_sample_array(grid)
    options = ChartOptions(**option_changes).validate()
    return ProjectionContext.build(state, value_extent(samples), samples.shape, options)


class TestRenderState:
    def test_defaults(self):
        state = RenderState()
        assert state.tilt == config.DEFAULT_TILT
        assert state.azimuth == config.DEFAULT_AZIMUTH

    def test_clamped(self):
        state = RenderState(tilt=3.0, azimuth=-2.0).clamped()
        assert state.tilt == pytest.approx(math.pi / 2)
        assert state.azimuth == pytest.approx(-math.pi / 4)


class TestLegacyFit:
    def test_flat_view_of_small_grid(self, small_grid):
        ctx = _context(small_grid, RenderState(tilt=0.0, azimuth=0.0))
        assert ctx.step_x == pytest.approx(320.0)
        assert ctx.step_y == pytest.approx(0.0)
        assert ctx.max_value == 4.0

        assert project(ctx, 0, 0, 0) == pytest.approx((0.0, 240.0))
        assert project(ctx, 0, 1, 2) == pytest.approx((320.0, 180.0))
        assert project(ctx, 1, 0, 3) == pytest.approx((320.0, 150.0))
        assert project(ctx, 1, 1, 4) == pytest.approx((640.0, 120.0))

    def test_margin_shifts_x(self, small_grid):
        state = RenderState(tilt=0.0, azimuth=0.0)
        plain = _context(small_grid, state)
        shifted = _context(small_grid, state, margin=20.0)
        x0, _ = project(plain, 0, 0, 0)
        x1, _ = project(shifted, 0, 0, 0)
        # Narrower fit, then shifted right by the margin
        assert shifted.step_x == pytest.approx(300.0)
        assert x1 == pytest.approx(20.0 + 20.0)
        assert x0 == pytest.approx(0.0)

    def test_single_sample_grid_is_finite(self):
        ctx = _context([[5]], RenderState())
        assert ctx.step_x == 0.0 and ctx.step_y == 0.0
        x, y = project(ctx, 0, 0, 5)
        assert x == pytest.approx(320.0)
        assert y == pytest.approx(240.0 - math.cos(config.DEFAULT_TILT) * 120.0)

    def test_height_follows_value_over_max(self, surface_grid):
        state = RenderState(tilt=0.3, azimuth=0.1)
        ctx = _context(surface_grid, state)
        _, ground = project(ctx, 2, 1, 0.0)
        _, top = project(ctx, 2, 1, ctx.max_value)
        assert ground - top == pytest.approx(math.cos(0.3) * config.DEFAULT_VERTICAL_SCALE)


class TestTightFit:
    @pytest.mark.parametrize("tilt", np.linspace(0.0, math.pi / 2, 5))
    @pytest.mark.parametrize("azimuth", np.linspace(-math.pi / 4, math.pi / 4, 5))
    def test_ground_plane_stays_inside_viewport(self, tilt, azimuth):
        grid = np.ones((7, 4))
        width, height, margin, vertical_scale = 400.0, 300.0, 10.0, 50.0
        ctx = _context(grid, RenderState(tilt=tilt, azimuth=azimuth), width=width, height=height,
                       margin=margin, vertical_scale=vertical_scale, fit_mode='tight')

        cols = np.array([0, 6, 0, 6], dtype=float)
        rows = np.array([0, 0, 3, 3], dtype=float)
        xs, ys = project(ctx, cols, rows, np.zeros(4))

        eps = 1e-6
        assert xs.min() >= margin - eps
        assert xs.max() <= width - margin + eps
        assert ys.min() >= margin + vertical_scale * math.cos(tilt) - eps
        assert ys.max() <= height - margin + eps

    def test_empty_grid(self):
        ctx = _context([], RenderState(), fit_mode='tight')
        assert ctx.step_x == 0.0
        assert np.isfinite(ctx.origin_y)


class TestVectorizedProjection:
    def test_arrays_match_scalars(self, surface_grid):
        ctx = _context(surface_grid, RenderState(tilt=0.7, azimuth=-0.4))
        cols = np.array([0.0, 1.5, 3.0])
        rows = np.array([2.0, 0.25, 1.0])
        values = np.array([1.0, 2.0, 6.0])
        xs, ys = project(ctx, cols, rows, values)
        for i in range(3):
            x, y = project(ctx, cols[i], rows[i], values[i])
            assert xs[i] == pytest.approx(x)
            assert ys[i] == pytest.approx(y)

    def test_context_method(self, surface_grid):
        ctx = _context(surface_grid, RenderState())
        assert ctx.project(1, 2, 3) == project(ctx, 1, 2, 3)
