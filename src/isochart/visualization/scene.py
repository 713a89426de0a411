"""
Scene construction for isochart.

Runs the rendering-data pipeline for one render pass (grid validation, value
extent, projection context, faces, tile meshes, corner gradients) and adds
the declarative items around it: axis labels, gridlines and sample markers.
The resulting ``Scene`` is backend-neutral; ``renderer`` draws it with
matplotlib.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from .. import config
from ..core.faces import extract_faces
from ..core.gradients import RadialGradient, build_gradient_overlay
from ..core.grid import ValueExtent, as_sample_array, present_mask, value_extent
from ..core.mesh import TileMesh, build_tile_meshes
from ..core.projection import ProjectionContext, RenderState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GridLine:
    start: Tuple[float, float]
    end: Tuple[float, float]
    color: str
    width: float
    axis: str  # 'x' for column lines, 'y' for row lines
    index: int


@dataclass(frozen=True)
class AxisLabel:
    position: Tuple[float, float]
    text: str
    ha: str
    va: str
    axis: str
    index: int


@dataclass(frozen=True)
class PointMarker:
    """A sample point: invisible hover target plus a small visible dot."""

    index: Tuple[int, int]
    position: Tuple[float, float]
    value: float
    hit_radius: float
    dot_radius: float
    color: str
    hovered: bool = False


@dataclass(frozen=True, eq=False)
class TileItem:
    mesh: TileMesh
    gradients: List[RadialGradient]
    stroke_color: str
    stroke_width: float
    blend_mode: str


@dataclass(eq=False)
class Scene:
    """Everything one render pass draws, in paint order within each list."""

    width: float
    height: float
    state: RenderState
    extent: ValueExtent
    context: ProjectionContext
    labels: List[AxisLabel] = field(default_factory=list)
    grid_lines: List[GridLine] = field(default_factory=list)
    tiles: List[TileItem] = field(default_factory=list)
    markers: List[PointMarker] = field(default_factory=list)
    hover: Optional[Tuple[int, int]] = None

    @property
    def faces(self):
        return [tile.mesh.face for tile in self.tiles]


def build_grid_lines(ctx, options):
    """Row gridlines followed by column gridlines, on the zero-height plane."""
    columns, rows = ctx.columns, ctx.rows
    lines = []
    if columns == 0 or rows == 0:
        return lines
    for i in range(rows):
        start = ctx.project(0, i, 0)
        end = ctx.project(columns - 1, i, 0)
        lines.append(GridLine(start, end, options.grid_color, options.grid_stroke_width, 'y', i))
    for i in range(columns):
        start = ctx.project(i, 0, 0)
        end = ctx.project(i, rows - 1, 0)
        lines.append(GridLine(start, end, options.grid_color, options.grid_stroke_width, 'x', i))
    return lines


def build_axis_labels(ctx, options):
    """
    Labels along the row axis (column 0) and the column axis (row 0).

    Default label text is the index; ``options.y_labels`` / ``options.x_labels``
    replace both the text and the number of labels.
    """
    offset = config.LABEL_OFFSET
    labels = []

    y_texts = options.y_labels if options.y_labels is not None else [str(i) for i in range(ctx.rows)]
    for i, text in enumerate(y_texts):
        px, py = ctx.project(0, i, 0)
        labels.append(AxisLabel((px - offset, py - offset), str(text), 'right', 'baseline', 'y', i))

    x_texts = options.x_labels if options.x_labels is not None else [str(i) for i in range(ctx.columns)]
    for i, text in enumerate(x_texts):
        px, py = ctx.project(i, 0, 0)
        labels.append(AxisLabel((px - offset, py + offset), str(text), 'right', 'top', 'x', i))
    return labels


def build_point_markers(samples, ctx, options, hover=None):
    """One marker per present sample, at its projected height."""
    present = present_mask(samples)
    xs, ys = np.nonzero(present)
    if xs.size == 0:
        return []
    values = samples[xs, ys]
    px, py = ctx.project(xs.astype(float), ys.astype(float), values)
    return [
        PointMarker(
            index=(int(x), int(y)),
            position=(float(sx), float(sy)),
            value=float(v),
            hit_radius=options.hit_radius,
            dot_radius=config.POINT_DOT_RADIUS,
            color=options.grid_color,
            hovered=hover == (int(x), int(y)),
        )
        for x, y, v, sx, sy in zip(xs, ys, values, px, py)
    ]


def build_scene(data, state=None, options=None, hover=None):
    """
    Build the full scene for one render pass.

    Args:
        data: grid indexed [column][row] (nested sequences or 2-D array), None/NaN for missing
        state (RenderState): rotation to render; defaults to the configured rotation
        options (ChartOptions): chart configuration; defaults to ``ChartOptions()``
        hover (tuple): (x, y) index of the hovered sample, or None

    Returns:
        Scene

    Raises:
        GridShapeError: if ``data`` is not rectangular or holds non-numeric samples
        ValueError: if ``options`` are invalid
    """
    if options is None:
        options = config.ChartOptions()
    options.validate()
    if state is None:
        state = RenderState()

    samples = as_sample_array(data)
    extent = value_extent(samples)
    ctx = ProjectionContext.build(state, extent, samples.shape, options)

    faces = extract_faces(samples)
    meshes = build_tile_meshes(faces, samples, ctx, options.colors, options.handle_ratio, extent)
    tiles = [
        TileItem(
            mesh=mesh,
            gradients=build_gradient_overlay(mesh, options.colors, extent),
            stroke_color=options.grid_color,
            stroke_width=options.grid_stroke_width,
            blend_mode=options.blend_mode,
        )
        for mesh in meshes
    ]

    scene = Scene(
        width=options.width,
        height=options.height,
        state=state,
        extent=extent,
        context=ctx,
        tiles=tiles,
        hover=hover,
    )
    if options.show_labels:
        scene.labels = build_axis_labels(ctx, options)
    if options.show_grid:
        scene.grid_lines = build_grid_lines(ctx, options)
    if options.show_points:
        scene.markers = build_point_markers(samples, ctx, options, hover)

    logger.debug("Built scene: %dx%d grid, %d tiles, %d markers, extent=(%g, %g)",
                 samples.shape[0], samples.shape[1], len(tiles), len(scene.markers),
                 extent.maximum, extent.minimum)
    return scene
