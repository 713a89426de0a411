"""Tests for gradient blend modes."""

import numpy as np
import pytest

from isochart.visualization.blending import BLEND_FUNCTIONS, composite

BACKDROP = np.array([[0.2, 0.4, 0.6]])
SOURCE = np.array([[0.8, 0.5, 0.1]])


class TestComposite:
    def test_opaque_normal_is_source(self):
        np.testing.assert_allclose(composite(BACKDROP, SOURCE, np.array([1.0])), SOURCE)

    def test_transparent_source_keeps_backdrop(self):
        for mode in BLEND_FUNCTIONS:
            np.testing.assert_allclose(composite(BACKDROP, SOURCE, np.array([0.0]), mode), BACKDROP)

    def test_half_alpha_normal(self):
        result = composite(BACKDROP, SOURCE, np.array([0.5]))
        np.testing.assert_allclose(result, (BACKDROP + SOURCE) / 2)

    def test_multiply_with_white_backdrop(self):
        white = np.ones((1, 3))
        np.testing.assert_allclose(composite(white, SOURCE, np.array([1.0]), 'multiply'), SOURCE)

    def test_screen_with_black_backdrop(self):
        black = np.zeros((1, 3))
        np.testing.assert_allclose(composite(black, SOURCE, np.array([1.0]), 'screen'), SOURCE)

    def test_darken_and_lighten(self):
        alpha = np.array([1.0])
        np.testing.assert_allclose(composite(BACKDROP, SOURCE, alpha, 'darken'), [[0.2, 0.4, 0.1]])
        np.testing.assert_allclose(composite(BACKDROP, SOURCE, alpha, 'lighten'), [[0.8, 0.5, 0.6]])

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            composite(BACKDROP, SOURCE, np.array([1.0]), 'dodge')
