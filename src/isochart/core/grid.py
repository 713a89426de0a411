"""
Sample grid handling for isochart.

Converts the caller's column-major grid of optional scalars into a float
array with NaN marking missing samples, and derives the value extent used to
normalize heights and colors.
"""

import math
from collections.abc import Sequence
from typing import NamedTuple

import numpy as np

from .. import config


class GridShapeError(ValueError):
    """Raised when the input grid is not a rectangular grid of numbers."""


class ValueExtent(NamedTuple):
    """Largest and smallest present sample, seeded at (epsilon, 0)."""

    maximum: float
    minimum: float

    @property
    def span(self):
        return self.maximum - self.minimum

    def normalize(self, value):
        """
        Map a sample value into [0, 1] for color lookup.

        A zero or non-finite span maps every value to the ramp midpoint.
        """
        span = self.span
        if not math.isfinite(span) or span <= 0:
            return 0.5
        t = (value - self.minimum) / span
        if not math.isfinite(t):
            return 0.0
        return min(max(t, 0.0), 1.0)


def is_missing(value):
    """True for ``None`` and NaN samples; zero is a present sample."""
    if value is None:
        return True
    try:
        return math.isnan(value)
    except TypeError:
        return False


def _is_sequence(value):
    return isinstance(value, (Sequence, np.ndarray)) and not isinstance(value, (str, bytes))


def as_sample_array(data):
    """
    Convert a grid indexed ``[column][row]`` into a float array.

    Args:
        data: sequence of columns, each a sequence of numbers or None,
              or a 2-D numpy array of shape (columns, rows)

    Returns:
        np.ndarray: shape (W, H), dtype float, NaN where a sample is missing

    Raises:
        GridShapeError: if the grid is not a sequence of column sequences, the
            columns differ in length, or a sample is not numeric
    """
    if isinstance(data, np.ndarray):
        if data.size == 0:
            return np.empty(data.shape if data.ndim == 2 else (0, 0), dtype=float)
        if data.ndim != 2:
            raise GridShapeError(f"Expected a 2-D grid, got an array with {data.ndim} dimension(s)")
        try:
            return np.array(data, dtype=float)
        except (TypeError, ValueError) as exc:
            raise GridShapeError(f"Grid contains non-numeric samples: {exc}") from exc

    if not _is_sequence(data):
        raise GridShapeError(f"Expected a sequence of columns, got {type(data).__name__}")
    for index, column in enumerate(data):
        if not _is_sequence(column):
            raise GridShapeError(
                f"Column {index} is not a sequence of samples: {column!r}"
            )
    columns = [list(column) for column in data]
    if not columns:
        return np.empty((0, 0), dtype=float)

    rows = len(columns[0])
    for index, column in enumerate(columns):
        if len(column) != rows:
            raise GridShapeError(
                f"Grid is not rectangular: column {index} has {len(column)} rows, expected {rows}"
            )
    if rows == 0:
        return np.empty((len(columns), 0), dtype=float)

    samples = np.full((len(columns), rows), np.nan, dtype=float)
    for x, column in enumerate(columns):
        for y, value in enumerate(column):
            if is_missing(value):
                continue
            if isinstance(value, bool):
                raise GridShapeError(f"Sample at ({x}, {y}) is not numeric: {value!r}")
            try:
                samples[x, y] = float(value)
            except (TypeError, ValueError) as exc:
                raise GridShapeError(f"Sample at ({x}, {y}) is not numeric: {value!r}") from exc
    return samples


def present_mask(samples):
    """Boolean mask of samples that are present (finite)."""
    return np.isfinite(samples)


def value_extent(samples):
    """
    Compute the (max, min) extent of the present samples.

    ``max`` starts at ``config.VALUE_EPSILON`` and ``min`` at 0, so an
    all-positive grid reports ``min == 0`` and an all-non-positive grid
    reports ``max == epsilon``.

    Args:
        samples (np.ndarray): output of ``as_sample_array``

    Returns:
        ValueExtent
    """
    maximum, minimum = config.VALUE_EPSILON, 0.0
    values = samples[np.isfinite(samples)]
    if values.size:
        maximum = max(maximum, float(values.max()))
        minimum = min(minimum, float(values.min()))
    return ValueExtent(maximum, minimum)
