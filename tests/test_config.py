"""Tests for chart options and logging setup."""

import logging

import pytest

from isochart import config
from isochart.config import ChartOptions
from isochart.logging_config import setup_logging


class TestChartOptions:
    def test_defaults_are_valid(self):
        options = ChartOptions().validate()
        assert options.colors == config.DEFAULT_COLORS
        assert options.colors is not config.DEFAULT_COLORS
        assert options.width == 640 and options.height == 480

    def test_hit_radius(self):
        assert ChartOptions().hit_radius == 2.0
        assert ChartOptions(grid_stroke_width=3.0).hit_radius == 6.0
        assert ChartOptions(point_radius=4.5).hit_radius == 4.5

    @pytest.mark.parametrize("changes", [
        {'colors': []},
        {'colors': ['#12']},
        {'width': 0},
        {'height': -10},
        {'margin': -1.0},
        {'vertical_scale': -5.0},
        {'grid_stroke_width': -1.0},
        {'blend_mode': 'dodge'},
        {'fit_mode': 'loose'},
        {'gradient_resolution': 1},
    ])
    def test_invalid_options(self, changes):
        with pytest.raises(ValueError):
            ChartOptions(**changes).validate()

    def test_updated_returns_validated_copy(self):
        options = ChartOptions()
        changed = options.updated(handle_ratio=0.2)
        assert changed.handle_ratio == 0.2
        assert options.handle_ratio == config.DEFAULT_HANDLE_RATIO
        with pytest.raises(ValueError):
            options.updated(blend_mode='nope')


class TestSetupLogging:
    def teardown_method(self):
        setup_logging(logging.WARNING)

    def test_handlers_are_not_duplicated(self):
        setup_logging(logging.INFO)
        logger = setup_logging(logging.DEBUG)
        assert logger.name == "isochart"
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_log_file_handler(self, tmp_path):
        log_file = tmp_path / "isochart.log"
        logger = setup_logging(logging.INFO, str(log_file))
        assert len(logger.handlers) == 2
        logging.getLogger("isochart.cli").info("hello from a child logger")
        logger.handlers[-1].flush()
        assert "hello from a child logger" in log_file.read_text()
