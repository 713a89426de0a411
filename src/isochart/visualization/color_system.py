"""
Color system module for isochart.

Piecewise-linear color ramps over evenly spaced hex stops, used for tile
fills and for every stop of the radial corner gradients.
"""

import math


def hex_to_rgb255(hex_color):
    """Convert a '#rrggbb' hex color to an integer RGB tuple (0-255 range)."""
    hex_color = hex_color.lstrip('#')
    if len(hex_color) < 6:
        raise ValueError(f"Expected a '#rrggbb' color, got '#{hex_color}'")
    return tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))


def hex_to_rgb(hex_color):
    """Convert hex color to RGB tuple (0-1 range)."""
    return tuple(c / 255.0 for c in hex_to_rgb255(hex_color))


def interpolate_color(t, colors):
    """
    Evaluate a color ramp at ``t``.

    The stops are spread evenly over [0, 1]; ``t`` selects a segment and each
    channel is linearly interpolated inside it, then rounded to the nearest
    integer.

    Args:
        t: float, position on the ramp; clamped to [0, 1], non-finite values read as 0
        colors: list of '#rrggbb' hex stops

    Returns:
        str: lowercase '#rrggbb' color ('#000000' for an empty ramp)
    """
    n_stops = len(colors)
    if n_stops == 0:
        return "#000000"
    if n_stops == 1:
        return '#{:02x}{:02x}{:02x}'.format(*hex_to_rgb255(colors[0]))

    t = float(t)
    if not math.isfinite(t):
        t = 0.0
    t = min(max(t, 0.0), 1.0)

    scaled = t * (n_stops - 1)
    start = min(int(math.floor(scaled)), n_stops - 2)
    local_t = scaled - start

    left = hex_to_rgb255(colors[start])
    right = hex_to_rgb255(colors[start + 1])
    # Half-up rounding
    channels = [int(math.floor(a * (1 - local_t) + b * local_t + 0.5)) for a, b in zip(left, right)]
    return '#{:02x}{:02x}{:02x}'.format(*channels)


def color_for(value, extent, colors):
    """
    Color of a sample value under the grid's value extent.

    Args:
        value: float, sample value
        extent: ValueExtent of the grid
        colors: list of hex stops

    Returns:
        str: hex color
    """
    return interpolate_color(extent.normalize(value), colors)
