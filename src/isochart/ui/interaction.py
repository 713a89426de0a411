"""
Pointer interaction state for isochart.

Backend-free state machines: ``DragRotation`` maps pointer drags to new tilt
and azimuth values, ``HoverTracker`` keeps the single hovered sample. The
matplotlib wiring lives in ``ui_controls``.
"""

import logging

import numpy as np
from scipy.spatial import cKDTree

from .. import config
from ..core.projection import RenderState

logger = logging.getLogger(__name__)


def _clamp(value, bounds):
    lo, hi = bounds
    return max(lo, min(value, hi))


class DragRotation:
    """
    Drag-to-rotate tracking.

    Pointer positions are page coordinates (y grows downward). Dragging down
    raises the tilt, dragging right lowers the azimuth, one radian per
    ``sensitivity`` pixels, clamped to the configured ranges.
    """

    def __init__(self, on_tilt_change=None, on_azimuth_change=None, sensitivity=config.DRAG_SENSITIVITY):
        self.on_tilt_change = on_tilt_change
        self.on_azimuth_change = on_azimuth_change
        self.sensitivity = sensitivity
        self.active = False
        self.origin = (0.0, 0.0)
        self.original_state = RenderState()

    def press(self, px, py, state):
        """Start tracking from pointer position (px, py) and the current rotation."""
        self.active = True
        self.origin = (px, py)
        self.original_state = state

    def move(self, px, py):
        """
        Rotation for the current pointer position while pressed.

        Returns:
            RenderState or None when not tracking
        """
        if not self.active:
            return None
        dx = px - self.origin[0]
        dy = py - self.origin[1]
        tilt = _clamp(self.original_state.tilt + dy / self.sensitivity, config.TILT_RANGE)
        azimuth = _clamp(self.original_state.azimuth - dx / self.sensitivity, config.AZIMUTH_RANGE)

        if self.on_tilt_change is not None:
            self.on_tilt_change(tilt)
        if self.on_azimuth_change is not None:
            self.on_azimuth_change(azimuth)
        return RenderState(tilt=tilt, azimuth=azimuth)

    def release(self):
        """Stop tracking (pointer up or pointer left the render area)."""
        self.active = False


class HoverTracker:
    """Holds at most one hovered sample index."""

    def __init__(self, on_change=None):
        self.on_change = on_change
        self.hover = None
        self._tree = None
        self._indices = []
        self._radius = 0.0

    def enter(self, x, y):
        """Pointer entered the hit target of sample (x, y)."""
        self._set((x, y))

    def leave(self):
        """Pointer left the hovered hit target."""
        self._set(None)

    def _set(self, hover):
        if hover == self.hover:
            return
        previous, self.hover = self.hover, hover
        logger.debug("Hover %s -> %s", previous, hover)
        if self.on_change is not None:
            self.on_change(previous, hover)

    def set_targets(self, markers, radius=None):
        """
        Index the hit targets of a scene's point markers.

        Args:
            markers (list[PointMarker]): markers of the current scene
            radius (float): hit radius, defaults to the markers' own
        """
        self._indices = [marker.index for marker in markers]
        if not markers:
            self._tree = None
            self._radius = 0.0
            return
        positions = np.array([marker.position for marker in markers], dtype=float)
        self._tree = cKDTree(positions)
        self._radius = radius if radius is not None else max(marker.hit_radius for marker in markers)

    def nearest(self, px, py):
        """Index of the nearest sample whose hit target contains (px, py), or None."""
        if self._tree is None:
            return None
        distance, i = self._tree.query([px, py], distance_upper_bound=self._radius)
        if not np.isfinite(distance):
            return None
        return self._indices[i]

    def update(self, px, py):
        """Enter or leave hit targets for a pointer at (px, py); returns the hover state."""
        target = self.nearest(px, py)
        if target is None:
            self.leave()
        else:
            self.enter(*target)
        return self.hover
