"""
Data loading module for isochart.

Reads sample grids from JSON or CSV files and builds synthetic demo surfaces.
Grids are returned column-major (``grid[column][row]``) with ``None`` for
missing samples.
"""

import json
import logging
import os

import numpy as np
import pandas as pd

from ..core.grid import as_sample_array

logger = logging.getLogger(__name__)


def _from_array(array):
    """Nested lists from a (columns, rows) float array, NaN -> None."""
    return [[None if np.isnan(v) else float(v) for v in column] for column in array]


def _labels(payload, key, path):
    """Label list stored under ``key``, or None when absent."""
    labels = payload.get(key)
    if labels is None:
        return None
    if not isinstance(labels, list):
        raise ValueError(f"'{key}' in '{path}' must be a list of labels, got {type(labels).__name__}")
    return [str(label) for label in labels]


def load_grid(path):
    """
    Load a sample grid and optional axis labels.

    Supported formats:
        - ``.json``: a list of columns, or an object with ``"data"`` and
          optional ``"x_labels"`` / ``"y_labels"``; ``null`` marks a missing sample
        - ``.csv``: no header; each CSV row is a grid row and each CSV column
          a grid column; empty cells are missing

    Args:
        path (str): file to read

    Returns:
        tuple: (grid, x_labels, y_labels); labels are None when absent

    Raises:
        FileNotFoundError: if ``path`` does not exist
        ValueError: on an unsupported extension or malformed content
            (``GridShapeError`` when the grid is not a rectangular list of columns)
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Grid file not found: '{path}'")

    ext = os.path.splitext(path)[1].lower()
    x_labels = y_labels = None

    if ext == '.json':
        with open(path, "r") as f:
            payload = json.loads(f.read())
        if isinstance(payload, dict):
            if 'data' not in payload:
                raise ValueError(f"JSON grid file '{path}' has no 'data' entry")
            grid = payload['data']
            x_labels = _labels(payload, 'x_labels', path)
            y_labels = _labels(payload, 'y_labels', path)
        elif isinstance(payload, list):
            grid = payload
        else:
            raise ValueError(f"JSON grid file '{path}' must hold a list of columns or an object")
    elif ext == '.csv':
        try:
            frame = pd.read_csv(path, header=None)
        except pd.errors.EmptyDataError:
            frame = pd.DataFrame()
        try:
            values = frame.to_numpy(dtype=float)
        except ValueError as exc:
            raise ValueError(f"CSV grid file '{path}' contains non-numeric cells") from exc
        grid = _from_array(values.T) if values.size else []
    else:
        raise ValueError(f"Unsupported grid file type '{ext}' (expected .json or .csv)")

    columns, rows = as_sample_array(grid).shape
    logger.info("Loaded %dx%d grid from %s", columns, rows, path)
    return grid, x_labels, y_labels


def generate_demo_grid(columns=12, rows=10, holes=0, seed=None):
    """
    Build a smooth synthetic surface for demos.

    Args:
        columns (int): number of grid columns
        rows (int): number of grid rows
        holes (int): number of samples to knock out (set to None)
        seed (int): random seed for hole placement

    Returns:
        list: grid indexed [column][row]
    """
    xs = np.linspace(0, 2 * np.pi, columns)
    ys = np.linspace(0, 2 * np.pi, rows)
    grid_x, grid_y = np.meshgrid(xs, ys, indexing='ij')
    surface = 1.0 + np.sin(grid_x) * np.cos(grid_y) + 0.25 * np.cos(2 * grid_x + grid_y)
    surface = np.clip(surface, 0.0, None)

    if holes > 0:
        rng = np.random.default_rng(seed)
        picks = rng.choice(columns * rows, size=min(holes, columns * rows), replace=False)
        surface.flat[picks] = np.nan

    return _from_array(surface)
