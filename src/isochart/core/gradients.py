"""
Corner gradient overlays for isochart.

Every tile carries four radial gradients, one centered on each corner and
reaching exactly to the tile centroid. A gradient starts at the corner's own
color and fades, both in color and opacity, toward the color of the tile
average, which gives the surface its heat-map look. The order in which the
four gradients are painted alternates with the parity of ``x + y``.
"""

from dataclasses import dataclass
from typing import List, NamedTuple, Tuple

import numpy as np

from .. import config
from ..visualization.color_system import color_for

# Paint order of the corner gradients, by (x + y) % 2
EVEN_CORNER_ORDER = (1, 3, 0, 2)
ODD_CORNER_ORDER = (0, 2, 1, 3)


class GradientStop(NamedTuple):
    offset: float
    color: str
    opacity: float


@dataclass(frozen=True)
class RadialGradient:
    """A radial gradient anchored at one tile corner."""

    corner: int
    center: Tuple[float, float]
    radius: float
    stops: List[GradientStop]


def corner_order(face):
    """Corner indices in paint order for ``face``."""
    x, y = face
    return EVEN_CORNER_ORDER if (x + y) % 2 == 0 else ODD_CORNER_ORDER


def gradient_stops(corner_value, average, colors, extent, radius_fraction=config.RADIAL_GRADIENT_RADIUS):
    """
    Stops of one corner gradient.

    With ``N = len(colors)`` there are ``N + 1`` stops. Stop ``j`` sits at
    offset ``j / N`` with opacity ``(N - j) / N`` and the color of a value
    blended from the corner value toward the tile average.

    Args:
        corner_value (float): sample value at the corner
        average (float): tile average value
        colors (list): hex color stops (at least one)
        extent (ValueExtent): value extent of the grid
        radius_fraction (float): share of the gradient spent blending toward the average

    Returns:
        list[GradientStop]
    """
    n_colors = len(colors)
    if n_colors == 0:
        raise ValueError("At least one color stop is required")

    stops = []
    for j in range(n_colors + 1):
        my_weight = radius_fraction * (n_colors - j) / n_colors + (1 - radius_fraction)
        opposite_weight = 1 - my_weight
        value = my_weight * corner_value + opposite_weight * average
        stops.append(GradientStop(
            offset=j / n_colors,
            color=color_for(value, extent, colors),
            opacity=(n_colors - j) / n_colors,
        ))
    return stops


def build_gradient_overlay(mesh, colors, extent):
    """
    Build the four corner gradients of a tile in paint order.

    Args:
        mesh (TileMesh): tile geometry and values
        colors (list): hex color stops
        extent (ValueExtent): value extent of the grid

    Returns:
        list[RadialGradient]: four gradients, ordered by ``corner_order``
    """
    centroid = mesh.centroid
    gradients = []
    for corner in corner_order(mesh.face):
        center = mesh.corners[corner]
        radius = float(np.hypot(*(center - centroid)))
        gradients.append(RadialGradient(
            corner=corner,
            center=(float(center[0]), float(center[1])),
            radius=radius,
            stops=gradient_stops(mesh.values[corner], mesh.average, colors, extent),
        ))
    return gradients
