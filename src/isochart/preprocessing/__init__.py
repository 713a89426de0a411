"""
Input handling for isochart.

Grid file loading and demo surface generation.
"""

__all__ = ['data_loading']
