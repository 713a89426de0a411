"""
Tile mesh construction for isochart.

Each face becomes a closed path of four cubic Bezier segments running
p1 -> p2 -> p3 -> p4 -> p1, where the corners are the projections of
(x, y), (x, y-1), (x+1, y-1) and (x+1, y). The control points of an edge are
projected from positions pulled ``handle_ratio`` along that edge, at the
heights of the samples bounding it, so a ratio of 0 gives straight edges.
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np
from matplotlib.path import Path

from ..visualization.color_system import color_for
from .faces import Face


@dataclass(frozen=True, eq=False)
class TileMesh:
    """Projected geometry and base color of one tile."""

    face: Face
    index: int
    corners: np.ndarray     # shape (4, 2): p1..p4
    controls: np.ndarray    # shape (4, 2, 2): two control points per edge, edge k runs corner k -> k+1
    values: Tuple[float, float, float, float]
    average: float
    fill: str

    @property
    def centroid(self):
        """Mean of the four projected corners."""
        return self.corners.mean(axis=0)

    def path_vertices(self):
        """Vertices of the closed path: start point plus 4 x (control, control, end)."""
        vertices = [self.corners[0]]
        for edge in range(4):
            vertices.extend([self.controls[edge, 0], self.controls[edge, 1], self.corners[(edge + 1) % 4]])
        return np.array(vertices, dtype=float)

    def to_path(self):
        """matplotlib Path of the tile outline, usable as patch and clip path."""
        vertices = self.path_vertices()
        vertices = np.vstack([vertices, vertices[:1]])
        codes = [Path.MOVETO] + [Path.CURVE4] * 12 + [Path.CLOSEPOLY]
        return Path(vertices, codes)

    def path_data(self):
        """SVG-style path description: 'M x y C ... C ... C ... C ... Z'."""
        vertices = self.path_vertices()
        parts = ["M {:g} {:g}".format(*vertices[0])]
        for edge in range(4):
            c1, c2, end = vertices[1 + edge * 3: 4 + edge * 3]
            parts.append("C {:g} {:g} {:g} {:g} {:g} {:g}".format(*c1, *c2, *end))
        parts.append("Z")
        return " ".join(parts)


def corner_values(samples, face):
    """Sample values at the four corners of ``face`` in path order."""
    x, y = face
    return (
        float(samples[x, y]),
        float(samples[x, y - 1]),
        float(samples[x + 1, y - 1]),
        float(samples[x + 1, y]),
    )


def build_tile_mesh(face, samples, ctx, colors, handle_ratio, extent, index=0):
    """
    Build the curved quadrilateral for one face.

    Args:
        face (Face): upper-left grid coordinate of the tile
        samples (np.ndarray): sample grid, shape (W, H)
        ctx (ProjectionContext): projection parameters of this render
        colors (list): hex color stops
        handle_ratio (float): edge curvature, 0 for straight edges
        extent (ValueExtent): value extent used for the fill color
        index (int): position of the tile in draw order

    Returns:
        TileMesh
    """
    x, y = face
    h = handle_ratio
    v0, v1, v2, v3 = corner_values(samples, face)

    # Corner positions in grid space, in path order
    corner_cols = np.array([x, x, x + 1, x + 1], dtype=float)
    corner_rows = np.array([y, y - 1, y - 1, y], dtype=float)
    corner_vals = np.array([v0, v1, v2, v3], dtype=float)

    # Control point positions: [edge][first, second] -> (col, row, value)
    control_grid = np.array([
        [(x, y - h, v0), (x, y - 1 + h, v1)],
        [(x + h, y - 1, v1), (x + 1 - h, y - 1, v2)],
        [(x + 1, y - 1 + h, v2), (x + 1, y - h, v3)],
        [(x + 1 - h, y, v3), (x + h, y, v0)],
    ], dtype=float)

    corners = np.column_stack(ctx.project(corner_cols, corner_rows, corner_vals))
    ctrl_x, ctrl_y = ctx.project(control_grid[..., 0], control_grid[..., 1], control_grid[..., 2])
    controls = np.stack([ctrl_x, ctrl_y], axis=-1)

    average = (v0 + v1 + v2 + v3) / 4.0
    return TileMesh(
        face=face,
        index=index,
        corners=corners,
        controls=controls,
        values=(v0, v1, v2, v3),
        average=average,
        fill=color_for(average, extent, colors),
    )


def build_tile_meshes(faces, samples, ctx, colors, handle_ratio, extent):
    """Build meshes for ``faces``, preserving their draw order."""
    return [
        build_tile_mesh(face, samples, ctx, colors, handle_ratio, extent, index=i)
        for i, face in enumerate(faces)
    ]
