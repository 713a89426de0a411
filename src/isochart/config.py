"""
Configuration module for isochart.

This module contains global constants, default parameters, and configuration
settings used throughout the isometric surface chart. ``ChartOptions`` is the
per-chart configuration surface and is seeded from the constants below.
"""

import math
from dataclasses import dataclass, field, replace
from typing import List, Optional

from .visualization.blending import BLEND_FUNCTIONS
from .visualization.color_system import hex_to_rgb255

# Default canvas size (drawing-surface units, pixels for raster output)
DEFAULT_WIDTH = 640
DEFAULT_HEIGHT = 480
DEFAULT_MARGIN = 0.0
DEFAULT_VERTICAL_SCALE = 120.0

# Default rotation (radians)
DEFAULT_TILT = math.pi / 4
DEFAULT_AZIMUTH = 0.0

# Rotation limits enforced by the interaction layer
TILT_RANGE = (0.0, math.pi / 2)
AZIMUTH_RANGE = (-math.pi / 4, math.pi / 4)

# Pointer travel (pixels) per radian of rotation while dragging
DRAG_SENSITIVITY = 200.0

# Color ramp used when no stops are given
DEFAULT_COLORS = ["#FFF022", "#FF0099"]

# Value extent seeds: max never falls below VALUE_EPSILON, min never rises above 0
VALUE_EPSILON = 1e-32

# Tile edge curvature (0 = straight edges)
DEFAULT_HANDLE_RATIO = 0.0

# Radial overlay: fraction of each corner gradient spent blending toward the tile average
RADIAL_GRADIENT_RADIUS = 1.0

# Compositing of corner gradients over the base fill.
# Supported: 'normal', 'multiply', 'screen', 'overlay', 'darken', 'lighten', 'difference'
BLEND_MODE = 'normal'

# Projection fit mode
#  - 'legacy': step length from the unrotated grid span, margin added after centering
#  - 'tight' : step length from the rotated bounding box of the ground plane
FIT_MODE = 'legacy'
FIT_MODES = ('legacy', 'tight')

# Gridlines, tile outlines and point markers
SHOW_GRID = True
SHOW_POINTS = True
SHOW_LABELS = False
GRID_COLOR = "#000000"
GRID_STROKE_WIDTH = 1.0
POINT_DOT_RADIUS = 2.0

# Label anchor offset from the projected axis position
LABEL_OFFSET = 5.0
LABEL_FONTSIZE = 9

# Samples per axis used to raster the per-tile gradient overlay
GRADIENT_RESOLUTION = 24

# Output
DPI = 100  # 1 canvas unit = 1 pixel at this DPI
DEFAULT_OUTPUT_DIR = 'output'

# UI hotkeys
# Press this key while the figure is focused to save a snapshot of the chart
SNAPSHOT_HOTKEY = 'a'
# Reset tilt and azimuth to their defaults
RESET_ROTATION_HOTKEY = 'r'

WINDOW_TITLE = "isochart"


@dataclass
class ChartOptions:
    """Per-chart configuration: viewport, color ramp, styling and toggles."""

    width: float = DEFAULT_WIDTH
    height: float = DEFAULT_HEIGHT
    margin: float = DEFAULT_MARGIN
    vertical_scale: float = DEFAULT_VERTICAL_SCALE
    colors: List[str] = field(default_factory=lambda: list(DEFAULT_COLORS))
    handle_ratio: float = DEFAULT_HANDLE_RATIO
    show_grid: bool = SHOW_GRID
    show_points: bool = SHOW_POINTS
    show_labels: bool = SHOW_LABELS
    grid_color: str = GRID_COLOR
    grid_stroke_width: float = GRID_STROKE_WIDTH
    point_radius: Optional[float] = None
    x_labels: Optional[List[str]] = None
    y_labels: Optional[List[str]] = None
    blend_mode: str = BLEND_MODE
    fit_mode: str = FIT_MODE
    gradient_resolution: int = GRADIENT_RESOLUTION

    @property
    def hit_radius(self):
        """Radius of the invisible hover target around each sample point."""
        if self.point_radius:
            return self.point_radius
        return 2 * self.grid_stroke_width

    def validate(self):
        """
        Check option values, raising ``ValueError`` on the first bad one.

        Returns:
            ChartOptions: self, to allow chaining
        """
        if not self.colors:
            raise ValueError("At least one color stop is required")
        for color in self.colors:
            hex_to_rgb255(color)
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Canvas size must be positive, got {self.width}x{self.height}")
        if self.margin < 0 or self.vertical_scale < 0:
            raise ValueError("margin and vertical_scale must be non-negative")
        if self.grid_stroke_width < 0:
            raise ValueError("grid_stroke_width must be non-negative")
        if self.blend_mode not in BLEND_FUNCTIONS:
            raise ValueError(f"Unknown blend mode '{self.blend_mode}'. "
                             f"Choose one of: {', '.join(sorted(BLEND_FUNCTIONS))}")
        if self.fit_mode not in FIT_MODES:
            raise ValueError(f"Unknown fit mode '{self.fit_mode}'. Choose one of: {', '.join(FIT_MODES)}")
        if self.gradient_resolution < 2:
            raise ValueError("gradient_resolution must be at least 2")
        return self

    def updated(self, **changes):
        """Return a validated copy with ``changes`` applied."""
        return replace(self, **changes).validate()
