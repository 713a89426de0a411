"""
Core computation modules for isochart.

This module contains the rendering-data pipeline: sample grid handling,
projection, face extraction, tile meshes and corner gradients.
"""

__all__ = ['grid', 'projection', 'faces', 'mesh', 'gradients']
