"""
Interactive components for isochart.

Drag-to-rotate and hover state, and their matplotlib event wiring.
"""

__all__ = ['interaction', 'ui_controls']
