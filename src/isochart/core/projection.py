"""
Isometric projection for isochart.

Maps (column, row, value) grid coordinates onto the 2-D drawing surface for a
given rotation. Everything derived from the viewport, the rotation and the
grid shape (step lengths, origin, value extent) is gathered once per render
into a ``ProjectionContext``; ``project`` itself is a pure function of that
context and its arguments.
"""

import logging
import math
from dataclasses import dataclass

import numpy as np

from .. import config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderState:
    """Current rotation: tilt (phi, elevation) and azimuth (psi, in-plane spin)."""

    tilt: float = config.DEFAULT_TILT
    azimuth: float = config.DEFAULT_AZIMUTH

    def clamped(self):
        """Copy with both angles clamped to their valid ranges."""
        tilt_lo, tilt_hi = config.TILT_RANGE
        az_lo, az_hi = config.AZIMUTH_RANGE
        return RenderState(
            tilt=min(max(self.tilt, tilt_lo), tilt_hi),
            azimuth=min(max(self.azimuth, az_lo), az_hi),
        )


@dataclass(frozen=True)
class ProjectionContext:
    """Per-render projection parameters shared by every projected point."""

    tilt: float
    azimuth: float
    width: float
    height: float
    margin: float
    vertical_scale: float
    columns: int
    rows: int
    max_value: float
    step_x: float
    step_y: float
    origin_x: float
    origin_y: float
    fit_mode: str = 'legacy'

    @classmethod
    def build(cls, state, extent, shape, options):
        """
        Compute step lengths and origin for one render pass.

        Args:
            state (RenderState): rotation to render
            extent (ValueExtent): value extent of the grid
            shape (tuple): (columns, rows) of the sample grid
            options (ChartOptions): viewport size, margin, vertical scale, fit mode

        Returns:
            ProjectionContext
        """
        columns, rows = shape
        tilt, azimuth = state.tilt, state.azimuth
        width, height = float(options.width), float(options.height)
        margin, vertical_scale = float(options.margin), float(options.vertical_scale)

        if options.fit_mode == 'tight':
            step_x, step_y, origin_x, origin_y = _tight_fit(
                tilt, azimuth, columns, rows, width, height, margin, vertical_scale)
        else:
            step_x, step_y, origin_x, origin_y = _legacy_fit(
                tilt, azimuth, columns, rows, width, height, margin, vertical_scale)

        logger.debug("Projection context: tilt=%.3f azimuth=%.3f steps=(%.3f, %.3f) origin=(%.2f, %.2f)",
                     tilt, azimuth, step_x, step_y, origin_x, origin_y)

        return cls(
            tilt=tilt, azimuth=azimuth, width=width, height=height, margin=margin,
            vertical_scale=vertical_scale, columns=columns, rows=rows,
            max_value=extent.maximum, step_x=step_x, step_y=step_y,
            origin_x=origin_x, origin_y=origin_y, fit_mode=options.fit_mode,
        )

    @property
    def height_multiplier(self):
        return math.cos(self.tilt)

    def project(self, column, row, value):
        return project(self, column, row, value)


def _step_length(limits):
    """Smallest of the (available, span) ratios whose span is non-zero; 0 if none."""
    candidates = [available / span for available, span in limits if span > 1e-12]
    if not candidates:
        return 0.0
    return max(min(candidates), 0.0)


def _legacy_fit(tilt, azimuth, columns, rows, width, height, margin, vertical_scale):
    """Fit the unrotated grid span and center the rotated, unscaled box."""
    x_component = math.cos(tilt / 2.0)
    y_component = math.sin(tilt / 2.0)
    diagonal = columns + rows - 2

    length = _step_length([
        (height - margin * 2 - vertical_scale * math.cos(tilt), diagonal * y_component),
        (width - margin * 2, diagonal * x_component),
    ])
    step_x, step_y = x_component * length, y_component * length

    unscaled_width = diagonal * math.cos(azimuth) - (columns - rows) * math.sin(azimuth)
    unscaled_height = diagonal * math.sin(azimuth) + (columns - rows) * math.cos(azimuth)

    origin_x = (width - unscaled_width * step_x) / 2
    origin_y = (height - unscaled_height * step_y) / 2
    return step_x, step_y, origin_x, origin_y


def _tight_fit(tilt, azimuth, columns, rows, width, height, margin, vertical_scale):
    """
    Fit the rotated bounding box of the ground plane exactly.

    The margin is folded into the origin, so ``project`` adds it only in
    legacy mode.
    """
    x_component = math.cos(tilt / 2.0)
    y_component = math.sin(tilt / 2.0)
    reserve = vertical_scale * math.cos(tilt)

    if columns == 0 or rows == 0:
        return 0.0, 0.0, width / 2, (height + reserve) / 2

    corners_col = np.array([0, columns - 1, 0, columns - 1], dtype=float)
    corners_row = np.array([0, 0, rows - 1, rows - 1], dtype=float)
    rot_x, rot_y = _rotate(corners_col + corners_row, corners_col - corners_row, azimuth)
    span_x = float(rot_x.max() - rot_x.min())
    span_y = float(rot_y.max() - rot_y.min())

    length = _step_length([
        (height - margin * 2 - reserve, span_y * y_component),
        (width - margin * 2, span_x * x_component),
    ])
    step_x, step_y = x_component * length, y_component * length

    # Center the scaled box in [m, width - m] x [m + reserve, height - m]
    center_x = width / 2
    center_y = (height + reserve) / 2
    origin_x = center_x - (rot_x.max() + rot_x.min()) / 2 * step_x
    origin_y = center_y - (rot_y.max() + rot_y.min()) / 2 * step_y
    return step_x, step_y, float(origin_x), float(origin_y)


def _rotate(iso_x, iso_y, azimuth):
    cos_a, sin_a = math.cos(azimuth), math.sin(azimuth)
    return iso_x * cos_a - iso_y * sin_a, iso_x * sin_a + iso_y * cos_a


def project(ctx, column, row, value):
    """
    Project a grid coordinate onto the drawing surface.

    Accepts scalars or numpy arrays (broadcast together).

    Args:
        ctx (ProjectionContext): per-render parameters
        column: grid column index (may be fractional)
        row: grid row index (may be fractional)
        value: sample value; height is ``value / max`` of the grid extent

    Returns:
        tuple: (x, y) drawing-surface coordinates, y growing downward
    """
    iso_x = column + row
    iso_y = column - row
    rot_x, rot_y = _rotate(iso_x, iso_y, ctx.azimuth)
    z_height = value / ctx.max_value

    offset_x = ctx.margin if ctx.fit_mode == 'legacy' else 0.0
    x = ctx.origin_x + offset_x + rot_x * ctx.step_x
    y = ctx.origin_y + rot_y * ctx.step_y - ctx.height_multiplier * ctx.vertical_scale * z_height
    return x, y
