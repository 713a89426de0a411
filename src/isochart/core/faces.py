"""
Visible-face enumeration for isochart.

A face (tile) is identified by its upper-left grid coordinate ``(x, y)`` and
covers the samples ``(x, y), (x, y-1), (x+1, y-1), (x+1, y)``. Faces are
produced columns ascending and, within a column, rows descending. That order
is the draw order: later faces are nearer the viewer and are painted over
earlier ones, so no depth sort follows.
"""

from typing import NamedTuple

import numpy as np

from .grid import present_mask


class Face(NamedTuple):
    x: int
    y: int


def tile_mask(samples):
    """
    Boolean mask of complete tiles.

    Args:
        samples (np.ndarray): shape (W, H), NaN where missing

    Returns:
        np.ndarray: shape (W-1, H-1); entry [x, y-1] is True when the tile
        with upper-left corner (x, y) has all four samples present
    """
    present = present_mask(samples)
    if present.shape[0] < 2 or present.shape[1] < 2:
        return np.zeros((max(present.shape[0] - 1, 0), max(present.shape[1] - 1, 0)), dtype=bool)
    return present[:-1, 1:] & present[:-1, :-1] & present[1:, :-1] & present[1:, 1:]


def iter_faces(samples):
    """Yield complete faces back to front (columns ascending, rows descending)."""
    mask = tile_mask(samples)
    columns, rows = samples.shape
    for x in range(columns - 1):
        # Row 0 can never be an upper-left corner
        for y in range(rows - 1, 0, -1):
            if mask[x, y - 1]:
                yield Face(x, y)


def extract_faces(samples):
    """
    List the complete faces of a grid in draw order.

    Args:
        samples (np.ndarray): output of ``as_sample_array``

    Returns:
        list[Face]
    """
    return list(iter_faces(samples))
