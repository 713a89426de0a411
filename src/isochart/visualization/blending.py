"""
Separable color blend modes used when compositing corner gradients.

Each function takes backdrop and source RGB arrays in [0, 1] and returns the
blended color; ``composite`` then mixes it in by the source alpha over an
opaque backdrop.
"""

import numpy as np


def _overlay(backdrop, source):
    return np.where(backdrop <= 0.5,
                    2 * backdrop * source,
                    1 - 2 * (1 - backdrop) * (1 - source))


BLEND_FUNCTIONS = {
    'normal': lambda backdrop, source: source,
    'multiply': lambda backdrop, source: backdrop * source,
    'screen': lambda backdrop, source: backdrop + source - backdrop * source,
    'overlay': _overlay,
    'darken': np.minimum,
    'lighten': np.maximum,
    'difference': lambda backdrop, source: np.abs(backdrop - source),
}


def composite(backdrop_rgb, source_rgb, source_alpha, mode='normal'):
    """
    Composite a translucent source layer over an opaque backdrop.

    Args:
        backdrop_rgb (np.ndarray): (..., 3) backdrop colors
        source_rgb (np.ndarray): (..., 3) source colors
        source_alpha (np.ndarray): (...) source opacity in [0, 1]
        mode (str): key of ``BLEND_FUNCTIONS``

    Returns:
        np.ndarray: (..., 3) composited colors
    """
    try:
        blend = BLEND_FUNCTIONS[mode]
    except KeyError:
        raise ValueError(f"Unknown blend mode '{mode}'") from None
    alpha = np.clip(source_alpha, 0.0, 1.0)[..., None]
    blended = blend(backdrop_rgb, source_rgb)
    return np.clip((1 - alpha) * backdrop_rgb + alpha * blended, 0.0, 1.0)
