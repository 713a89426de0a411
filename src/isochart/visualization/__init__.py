"""
Visualization components for isochart.

This module contains the color ramp, blend modes, scene construction and the
matplotlib drawing backend.
"""

__all__ = ['color_system', 'blending', 'scene', 'renderer']
