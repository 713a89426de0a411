#!/usr/bin/env python3
"""
isochart command-line entry point.

Loads a sample grid (or builds a demo surface), renders it as an isometric
surface chart and writes it to an image file and/or opens an interactive
window where dragging rotates the chart.

Usage:
    isochart --demo --output output/demo.svg
    isochart --data grid.json --tilt 0.6 --azimuth -0.2 --output chart.png
    isochart --data grid.csv --colors "#2c7bb6,#ffffbf,#d7191c" --interactive
"""

import argparse
import logging
import sys

from . import config
from .core.grid import GridShapeError
from .core.projection import RenderState
from .logging_config import setup_logging
from .preprocessing import data_loading
from .ui.ui_controls import launch_interactive
from .visualization import renderer
from .visualization.scene import build_scene

logger = logging.getLogger(__name__)


def parse_arguments(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description='isochart - Render a grid of samples as an isometric surface',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  isochart --demo --output output/demo.svg
  isochart --data grid.json --tilt 0.6 --azimuth -0.2 --output chart.png
  isochart --data grid.csv --handle-ratio 0.3 --labels --interactive
        """
    )

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument('--data', '-d', type=str, default=None,
                        help='Path to a grid file (.json or .csv)')
    source.add_argument('--demo', action='store_true',
                        help='Render a synthetic demo surface')

    parser.add_argument('--demo-size', type=int, nargs=2, default=(12, 10), metavar=('COLUMNS', 'ROWS'),
                        help='Demo grid size (default: 12 10)')
    parser.add_argument('--demo-holes', type=int, default=0,
                        help='Number of missing samples in the demo grid')
    parser.add_argument('--seed', type=int, default=None, help='Random seed for demo holes')

    parser.add_argument('--output', '-o', type=str, default=None,
                        help='Output image path; format follows the extension (.svg, .png, .pdf)')
    parser.add_argument('--interactive', '-i', action='store_true',
                        help='Open an interactive window (drag to rotate)')

    parser.add_argument('--tilt', type=float, default=config.DEFAULT_TILT,
                        help='Tilt in radians, [0, pi/2]')
    parser.add_argument('--azimuth', type=float, default=config.DEFAULT_AZIMUTH,
                        help='Azimuth in radians, [-pi/4, pi/4]')

    parser.add_argument('--width', type=float, default=config.DEFAULT_WIDTH)
    parser.add_argument('--height', type=float, default=config.DEFAULT_HEIGHT)
    parser.add_argument('--margin', type=float, default=config.DEFAULT_MARGIN)
    parser.add_argument('--vertical-scale', type=float, default=config.DEFAULT_VERTICAL_SCALE,
                        help='Height in pixels of the tallest sample at zero tilt')
    parser.add_argument('--colors', type=str, default=','.join(config.DEFAULT_COLORS),
                        help='Comma-separated hex color stops')
    parser.add_argument('--handle-ratio', type=float, default=config.DEFAULT_HANDLE_RATIO,
                        help='Tile edge curvature, 0 for straight edges')
    parser.add_argument('--no-grid', action='store_true', help='Hide gridlines')
    parser.add_argument('--no-points', action='store_true', help='Hide sample points')
    parser.add_argument('--labels', action='store_true', help='Show axis labels')
    parser.add_argument('--x-labels', type=str, default=None, help='Comma-separated column labels')
    parser.add_argument('--y-labels', type=str, default=None, help='Comma-separated row labels')
    parser.add_argument('--grid-color', type=str, default=config.GRID_COLOR)
    parser.add_argument('--grid-stroke-width', type=float, default=config.GRID_STROKE_WIDTH)
    parser.add_argument('--point-radius', type=float, default=None,
                        help='Hover target radius (default: 2 x grid stroke width)')
    parser.add_argument('--blend-mode', type=str, default=config.BLEND_MODE,
                        help='Corner gradient blend mode')
    parser.add_argument('--fit', type=str, default=config.FIT_MODE, choices=config.FIT_MODES,
                        help='Projection fit mode')
    parser.add_argument('--gradient-resolution', type=int, default=config.GRADIENT_RESOLUTION)
    parser.add_argument('--dpi', type=int, default=config.DPI)

    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')
    parser.add_argument('--log-file', type=str, default=None, help='Also write logs to this file')

    return parser.parse_args(argv)


def _split(text):
    if text is None:
        return None
    return [part.strip() for part in text.split(',') if part.strip()]


def build_options(args, x_labels=None, y_labels=None):
    """ChartOptions from parsed arguments; CLI label lists win over file labels."""
    return config.ChartOptions(
        width=args.width,
        height=args.height,
        margin=args.margin,
        vertical_scale=args.vertical_scale,
        colors=_split(args.colors) or list(config.DEFAULT_COLORS),
        handle_ratio=args.handle_ratio,
        show_grid=not args.no_grid,
        show_points=not args.no_points,
        show_labels=args.labels,
        grid_color=args.grid_color,
        grid_stroke_width=args.grid_stroke_width,
        point_radius=args.point_radius,
        x_labels=_split(args.x_labels) or x_labels,
        y_labels=_split(args.y_labels) or y_labels,
        blend_mode=args.blend_mode,
        fit_mode=args.fit,
        gradient_resolution=args.gradient_resolution,
    ).validate()


def main(argv=None):
    """Main function orchestrating the isochart rendering."""
    args = parse_arguments(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO, args.log_file)

    try:
        if args.demo:
            columns, rows = args.demo_size
            grid = data_loading.generate_demo_grid(columns, rows, args.demo_holes, args.seed)
            x_labels = y_labels = None
        else:
            grid, x_labels, y_labels = data_loading.load_grid(args.data)
        options = build_options(args, x_labels, y_labels)
        state = RenderState(tilt=args.tilt, azimuth=args.azimuth)
        if state != state.clamped():
            logger.warning("Rotation (tilt=%.3f, azimuth=%.3f) is outside tilt %s / azimuth %s",
                           args.tilt, args.azimuth, config.TILT_RANGE, config.AZIMUTH_RANGE)
        scene = build_scene(grid, state, options)
    except (FileNotFoundError, GridShapeError, ValueError) as exc:
        logger.error("%s", exc)
        return 2

    logger.info("Rendered %d tiles from a %dx%d grid", len(scene.tiles),
                scene.context.columns, scene.context.rows)

    if args.output:
        renderer.save_scene(scene, args.output, dpi=args.dpi, resolution=options.gradient_resolution)
    elif not args.interactive:
        logger.warning("Nothing to do: pass --output and/or --interactive")

    if args.interactive:
        launch_interactive(grid, options, state)

    return 0


if __name__ == "__main__":
    sys.exit(main())
