"""Tests for the command-line entry point."""

import json
import logging

import pytest

from isochart import cli
from isochart.logging_config import setup_logging


class TestParseArguments:
    def test_source_is_required(self):
        with pytest.raises(SystemExit):
            cli.parse_arguments([])

    def test_data_and_demo_are_exclusive(self):
        with pytest.raises(SystemExit):
            cli.parse_arguments(['--demo', '--data', 'grid.json'])

    def test_fit_mode_choices(self):
        with pytest.raises(SystemExit):
            cli.parse_arguments(['--demo', '--fit', 'loose'])


class TestBuildOptions:
    def test_flags_map_to_options(self):
        args = cli.parse_arguments([
            '--demo', '--colors', '#000000, #ffffff', '--no-grid', '--labels',
            '--handle-ratio', '0.3', '--fit', 'tight', '--blend-mode', 'screen',
        ])
        options = cli.build_options(args)
        assert options.colors == ['#000000', '#ffffff']
        assert options.show_grid is False
        assert options.show_points is True
        assert options.show_labels is True
        assert options.handle_ratio == 0.3
        assert options.fit_mode == 'tight'
        assert options.blend_mode == 'screen'

    def test_command_line_labels_override_file_labels(self):
        args = cli.parse_arguments(['--demo', '--x-labels', 'a,b'])
        options = cli.build_options(args, x_labels=['p', 'q'], y_labels=['r'])
        assert options.x_labels == ['a', 'b']
        assert options.y_labels == ['r']


class TestMain:
    @pytest.fixture(autouse=True)
    def _reset_logging(self):
        yield
        setup_logging(logging.WARNING)

    def test_demo_to_file(self, tmp_path):
        output = tmp_path / "demo.svg"
        code = cli.main(['--demo', '--demo-size', '5', '4', '--gradient-resolution', '4', '-o', str(output)])
        assert code == 0
        assert output.exists()

    def test_data_file_to_png(self, tmp_path):
        data = tmp_path / "grid.json"
        data.write_text(json.dumps({"data": [[1, 2, 3], [2, None, 4], [3, 4, 5]], "x_labels": ["a", "b", "c"]}))
        output = tmp_path / "grid.png"
        code = cli.main(['--data', str(data), '--labels', '--gradient-resolution', '4', '-o', str(output)])
        assert code == 0
        assert output.exists()

    def test_missing_file_returns_error(self, tmp_path):
        assert cli.main(['--data', str(tmp_path / "missing.json")]) == 2

    def test_jagged_grid_returns_error(self, tmp_path):
        data = tmp_path / "jagged.json"
        data.write_text(json.dumps([[1, 2], [3]]))
        assert cli.main(['--data', str(data), '-o', str(tmp_path / "out.svg")]) == 2
        assert not (tmp_path / "out.svg").exists()

    @pytest.mark.parametrize("payload", [[1, 2, 3], {"data": [1, 2]}, {"data": 3}])
    def test_flat_grid_returns_error(self, tmp_path, payload):
        data = tmp_path / "flat.json"
        data.write_text(json.dumps(payload))
        assert cli.main(['--data', str(data), '-o', str(tmp_path / "out.svg")]) == 2
        assert not (tmp_path / "out.svg").exists()

    def test_string_labels_return_error(self, tmp_path):
        data = tmp_path / "grid.json"
        data.write_text(json.dumps({"data": [[1, 2], [3, 4]], "x_labels": "ab"}))
        assert cli.main(['--data', str(data), '--labels', '-o', str(tmp_path / "out.svg")]) == 2

    def test_bad_color_returns_error(self, tmp_path):
        assert cli.main(['--demo', '--colors', 'zzz', '-o', str(tmp_path / "out.svg")]) == 2

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "run.log"
        output = tmp_path / "demo.png"
        code = cli.main(['--demo', '--demo-size', '3', '3', '--gradient-resolution', '4',
                         '-o', str(output), '--log-file', str(log_file)])
        assert code == 0
        logging.getLogger("isochart").handlers[-1].flush()
        assert "Saved chart" in log_file.read_text()
