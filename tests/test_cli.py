"""
Tests for the counting task and the command-line entry point.
"""

import json
import logging

import pytest

from wiring_paths.cli import _build_task_params_from_args, create_parser, main
from wiring_paths.controller import CountingTask
from wiring_paths.errors import ParseError, UnknownDeviceError
from wiring_paths.queries import PathQuery
from wiring_paths.utils.logger_setup import CleanFormatter, setup_logger


@pytest.fixture(autouse=True)
def restore_root_logger():
    root_logger = logging.getLogger()
    handlers, level = list(root_logger.handlers), root_logger.level
    yield
    for handler in root_logger.handlers:
        if handler not in handlers:
            handler.close()
    root_logger.handlers = handlers
    root_logger.setLevel(level)


class TestCountingTask:

    def test_runs_queries(self, waypoint_file):
        queries = [
            PathQuery(name="all", start="svr", end="out"),
            PathQuery(name="via", start="svr", end="out", required=("dac", "fft")),
        ]
        task = CountingTask(str(waypoint_file), queries=queries)
        assert task.run() == {"all": 8, "via": 2}
        assert task.metrics['device_count'] == 14

    def test_skips_missing_devices(self, sample_file):
        task = CountingTask(str(sample_file), skip_missing=True)
        assert task.run() == {"part_1": 5}

    def test_missing_devices_raise(self, sample_file):
        task = CountingTask(str(sample_file))
        with pytest.raises(UnknownDeviceError):
            task.run()

    def test_parse_error_propagates(self, tmp_path):
        path = tmp_path / "bad.txt"
        path.write_text("you: out\nbroken line\n", encoding="utf-8")
        with pytest.raises(ParseError):
            CountingTask(str(path)).run()

    def test_saves_report(self, waypoint_file, tmp_path):
        output_dir = tmp_path / "results"
        task = CountingTask(str(waypoint_file), output_dir=str(output_dir), skip_missing=True)
        assert task.run() == {"part_2": 2}

        data = json.loads((output_dir / "waypoints_paths_recursive.json").read_text(encoding="utf-8"))
        assert data['results']['part_2']['count'] == 2
        assert data['metadata']['metrics']['is_dag'] is True
        assert (output_dir / "waypoints_paths_recursive.dot").exists()

    def test_invalid_configuration(self, sample_file):
        with pytest.raises(ValueError):
            CountingTask(str(sample_file), queries=[])
        with pytest.raises(ValueError):
            CountingTask(str(sample_file), workers=0)


class TestParser:

    def test_count_arguments(self):
        args = create_parser().parse_args(["count", "in.txt", "--start", "svr", "--via", "dac", "fft"])
        params = _build_task_params_from_args(args)
        assert params['input_path'] == "in.txt"
        assert params['strategy'] == "auto"
        assert params['queries'] == [PathQuery(name="count", start="svr", end="out", required=("dac", "fft"))]

    def test_solve_skips_missing(self):
        args = create_parser().parse_args(["solve", "in.txt", "--strategy", "worklist"])
        params = _build_task_params_from_args(args)
        assert params['skip_missing'] is True
        assert params['strategy'] == "worklist"

    def test_command_required(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args([])


class TestMain:

    def test_solve(self, sample_file, capsys):
        assert main(["solve", str(sample_file)]) == 0
        out = capsys.readouterr().out
        assert "part_1 (you -> out): 5" in out
        assert "Skipping part_2" in out

    def test_count(self, waypoint_file, capsys):
        assert main(["count", str(waypoint_file), "--start", "svr", "--via", "dac", "fft"]) == 0
        assert "count (svr -> out via dac, fft): 2" in capsys.readouterr().out

    def test_count_with_workers(self, waypoint_file, capsys):
        assert main(["count", str(waypoint_file), "--start", "svr", "--workers", "2"]) == 0
        assert "count (svr -> out): 8" in capsys.readouterr().out

    def test_unknown_device(self, sample_file, capsys):
        assert main(["count", str(sample_file), "--start", "svr"]) == 1
        out = capsys.readouterr().out
        assert "Unknown device: 'svr'" in out
        assert out.count("Unknown device") == 1

    def test_log_file(self, sample_file, tmp_path):
        log_path = tmp_path / "run.log"
        assert main(["count", str(sample_file), "--start", "you", "--log-file", str(log_path)]) == 0
        content = log_path.read_text(encoding="utf-8")
        assert "[INFO] wiring_paths.controller: count (you -> out): 5" in content
        assert "\x1b[" not in content

    def test_missing_file(self, tmp_path, capsys):
        assert main(["solve", str(tmp_path / "missing.txt")]) == 1
        assert "Cannot read" in capsys.readouterr().out

    def test_nothing_to_solve(self, tmp_path):
        path = tmp_path / "other.txt"
        path.write_text("a: b\n", encoding="utf-8")
        assert main(["solve", str(path)]) == 1

    def test_analyze(self, cyclic_file, capsys):
        assert main(["analyze", str(cyclic_file)]) == 0
        out = capsys.readouterr().out
        assert "device_count: 4" in out
        assert "cycle" in out


class TestLoggerSetup:

    def test_verbose_sets_debug(self):
        root_logger = setup_logger(verbose=True)
        assert root_logger.level == logging.DEBUG
        assert len(root_logger.handlers) == 1
        assert isinstance(root_logger.handlers[0].formatter, CleanFormatter)

    def test_info_is_plain(self):
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "hello", None, None)
        assert CleanFormatter().format(record) == "hello"

    def test_warning_without_color(self):
        record = logging.LogRecord("x", logging.WARNING, __file__, 1, "careful", None, None)
        assert CleanFormatter(use_color=False).format(record) == "[WARNING] careful"
        assert CleanFormatter(use_color=True).format(record).startswith("\x1b[33;20m")

    def test_log_file_handler(self, tmp_path):
        root_logger = setup_logger(log_file=str(tmp_path / "run.log"))
        assert len(root_logger.handlers) == 2
        assert isinstance(root_logger.handlers[1], logging.FileHandler)
