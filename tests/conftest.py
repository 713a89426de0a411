"""Shared pytest setup: headless matplotlib and an importable src/ tree."""

import os
import sys

import matplotlib

matplotlib.use("Agg")

sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src'))

import pytest  # noqa: E402


@pytest.fixture
def small_grid():
    """The 2x2 grid [[1, 2], [3, 4]] indexed [column][row]."""
    return [[1, 2], [3, 4]]


@pytest.fixture
def surface_grid():
    """A complete 4-column, 3-row grid."""
    return [
        [1.0, 2.0, 3.0],
        [2.0, 3.0, 4.0],
        [3.0, 4.0, 5.0],
        [4.0, 5.0, 6.0],
    ]
