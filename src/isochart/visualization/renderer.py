"""
Matplotlib drawing backend for isochart.

Turns a ``Scene`` into axes artists. The axes span the whole figure with
data limits equal to the canvas, y pointing down, so one canvas unit is one
pixel at the figure DPI. Corner gradients are composited per tile into a
small RGB image over the tile's base fill and clipped to the tile path.
"""

import logging
import os

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.patches import Circle, PathPatch

from .. import config
from .blending import composite
from .color_system import hex_to_rgb

logger = logging.getLogger(__name__)

# Z-order of each scene section; items within a section keep insertion order
LABEL_ZORDER = 1
GRID_ZORDER = 2
TILE_ZORDER = 3
POINT_ZORDER = 4


def setup_figure_layout(width, height, dpi=None):
    """
    Create a figure whose single axes covers the whole canvas.

    Args:
        width (float): canvas width in pixels
        height (float): canvas height in pixels
        dpi (int): figure DPI, defaults to ``config.DPI``

    Returns:
        tuple: (fig, ax)
    """
    dpi = dpi or config.DPI
    fig = plt.figure(figsize=(width / dpi, height / dpi), dpi=dpi)
    ax = fig.add_axes([0.0, 0.0, 1.0, 1.0])
    prepare_axes(ax, width, height)
    return fig, ax


def prepare_axes(ax, width, height):
    """Canvas coordinates: x right in [0, width], y down in [0, height]."""
    ax.set_xlim(0, width)
    ax.set_ylim(height, 0)
    ax.set_aspect('equal')
    ax.axis('off')


def _points_per_unit(ax):
    """Line widths are given in canvas units; matplotlib wants points."""
    return 72.0 / ax.figure.dpi


def render_tile_image(tile, resolution=config.GRADIENT_RESOLUTION):
    """
    Composite the corner gradients of a tile over its base fill.

    Args:
        tile (TileItem): tile with mesh, ordered gradients and blend mode
        resolution (int): samples per axis across the tile's bounding box

    Returns:
        tuple: (rgb image of shape (resolution, resolution, 3), extent
        (x0, x1, y0, y1)), or None for a degenerate tile
    """
    vertices = tile.mesh.path_vertices()
    x0, y0 = vertices.min(axis=0)
    x1, y1 = vertices.max(axis=0)
    if not (x1 - x0 > 1e-9 and y1 - y0 > 1e-9):
        return None

    xs = np.linspace(x0, x1, resolution)
    ys = np.linspace(y0, y1, resolution)
    grid_x, grid_y = np.meshgrid(xs, ys)

    image = np.empty((resolution, resolution, 3), dtype=float)
    image[...] = hex_to_rgb(tile.mesh.fill)

    for gradient in tile.gradients:
        if gradient.radius <= 0:
            continue
        cx, cy = gradient.center
        distance = np.hypot(grid_x - cx, grid_y - cy) / gradient.radius

        offsets = np.array([stop.offset for stop in gradient.stops])
        stop_rgb = np.array([hex_to_rgb(stop.color) for stop in gradient.stops])
        opacity = np.array([stop.opacity for stop in gradient.stops])

        # Beyond the last stop the gradient pads with its last (transparent) stop
        layer_rgb = np.stack([np.interp(distance, offsets, stop_rgb[:, c]) for c in range(3)], axis=-1)
        layer_alpha = np.interp(distance, offsets, opacity)
        image = composite(image, layer_rgb, layer_alpha, tile.blend_mode)

    return image, (x0, x1, y0, y1)


def draw_tile(ax, tile, resolution=config.GRADIENT_RESOLUTION):
    """Base fill, clipped gradient image and outline of one tile."""
    path = tile.mesh.to_path()
    scale = _points_per_unit(ax)

    base = PathPatch(path, facecolor=tile.mesh.fill, edgecolor='none', linewidth=0, zorder=TILE_ZORDER)
    ax.add_patch(base)

    artists = [base]
    rendered = render_tile_image(tile, resolution)
    if rendered is not None:
        image, extent = rendered
        im = ax.imshow(image, extent=extent, origin='lower', interpolation='bilinear',
                       zorder=TILE_ZORDER, aspect='equal')
        im.set_clip_path(base)
        artists.append(im)

    if tile.stroke_width > 0:
        outline = PathPatch(path, facecolor='none', edgecolor=tile.stroke_color,
                            linewidth=tile.stroke_width * scale, zorder=TILE_ZORDER)
        ax.add_patch(outline)
        artists.append(outline)
    return artists


def draw_scene(ax, scene, resolution=config.GRADIENT_RESOLUTION):
    """
    Draw a scene onto ``ax``, replacing whatever the axes held.

    Args:
        ax: matplotlib axes
        scene (Scene): output of ``build_scene``
        resolution (int): gradient raster resolution per tile

    Returns:
        dict: drawn artists, with 'markers' mapping sample index to
        (hit_circle, dot) for hover updates
    """
    ax.cla()
    scale = _points_per_unit(ax)
    artists = {'labels': [], 'grid': [], 'tiles': [], 'markers': {}}

    for label in scene.labels:
        text = ax.text(label.position[0], label.position[1], label.text,
                       ha=label.ha, va=label.va, fontsize=config.LABEL_FONTSIZE,
                       zorder=LABEL_ZORDER, clip_on=False)
        artists['labels'].append(text)

    for line in scene.grid_lines:
        (artist,) = ax.plot([line.start[0], line.end[0]], [line.start[1], line.end[1]],
                            color=line.color, linewidth=line.width * scale,
                            zorder=GRID_ZORDER, solid_capstyle='butt')
        artists['grid'].append(artist)

    for tile in scene.tiles:
        artists['tiles'].extend(draw_tile(ax, tile, resolution))

    for marker in scene.markers:
        hit = Circle(marker.position, marker.hit_radius,
                     facecolor=marker.color if marker.hovered else 'none',
                     edgecolor='none', zorder=POINT_ZORDER)
        dot = Circle(marker.position, marker.dot_radius, facecolor=marker.color,
                     edgecolor='none', zorder=POINT_ZORDER)
        ax.add_patch(hit)
        ax.add_patch(dot)
        artists['markers'][marker.index] = (hit, dot)

    # imshow autoscales; restore the canvas frame
    prepare_axes(ax, scene.width, scene.height)
    return artists


def set_marker_hover(artists, index, hovered, color):
    """Fill or clear the hover target of the marker at ``index``."""
    pair = artists['markers'].get(index)
    if pair is None:
        return False
    hit, _ = pair
    hit.set_facecolor(color if hovered else 'none')
    return True


def save_scene(scene, output_path, dpi=None, resolution=config.GRADIENT_RESOLUTION):
    """
    Render a scene to an image file; the format follows the file extension.

    Args:
        scene (Scene): scene to draw
        output_path (str): destination (.svg, .png, .pdf, ...)
        dpi (int): figure DPI, defaults to ``config.DPI``

    Returns:
        str: the path written
    """
    dpi = dpi or config.DPI
    out_dir = os.path.dirname(os.path.abspath(output_path))
    os.makedirs(out_dir, exist_ok=True)

    fig, ax = setup_figure_layout(scene.width, scene.height, dpi)
    try:
        draw_scene(ax, scene, resolution)
        fig.savefig(output_path, dpi=dpi, transparent=True)
    finally:
        plt.close(fig)
    logger.info("Saved chart with %d tiles to %s", len(scene.tiles), output_path)
    return output_path
