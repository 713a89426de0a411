"""
isochart: isometric surface charts for 2-D grids of samples.

This package renders a grid of scalar samples as a rotatable pseudo-3-D
surface of curved, color-ramped tiles with heat-map corner gradients.
"""

__version__ = "0.1.0"
__author__ = "isochart developers"

__all__ = ['config', 'core', 'visualization', 'ui', 'preprocessing']
