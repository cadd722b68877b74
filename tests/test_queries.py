"""
Tests for the label-based query interface.
"""

import pytest

from wiring_paths import count_paths
from wiring_paths.counting.path_counter import PathCounter
from wiring_paths.errors import SchematicError, UnknownDeviceError
from wiring_paths.queries import DEFAULT_QUERIES, PathQuery, resolve_device, resolve_devices


class TestCountPaths:

    def test_sample(self, sample_schematic):
        assert count_paths(sample_schematic, "you", "out") == 5

    def test_waypoints(self, waypoint_schematic):
        assert count_paths(waypoint_schematic, "svr", "out", ["dac", "fft"]) == 2
        assert count_paths(waypoint_schematic, "svr", "out", ("fft", "dac")) == 2

    @pytest.mark.parametrize("start,end,required,missing", [
        ("nope", "out", [], "nope"),
        ("svr", "nope", [], "nope"),
        ("svr", "out", ["dac", "nope"], "nope"),
    ])
    def test_unknown_labels(self, waypoint_schematic, start, end, required, missing):
        with pytest.raises(UnknownDeviceError) as exc_info:
            count_paths(waypoint_schematic, start, end, required)
        assert exc_info.value.label == missing
        assert isinstance(exc_info.value, SchematicError)
        assert isinstance(exc_info.value, KeyError)

    def test_resolve(self, sample_schematic):
        assert resolve_device(sample_schematic, "aaa") == 0
        assert resolve_devices(sample_schematic, ["you", "hhh"]) == [1, 2]


class TestPathQuery:

    def test_default_queries(self):
        names = [query.name for query in DEFAULT_QUERIES]
        assert names == ["part_1", "part_2"]
        assert DEFAULT_QUERIES[1].required == ("dac", "fft")

    def test_run(self, waypoint_schematic):
        query = PathQuery(name="q", start="svr", end="out", required=("dac", "fft"))
        assert query.run(waypoint_schematic) == 2

    def test_run_with_shared_counter(self, sample_schematic):
        counter = PathCounter(sample_schematic, strategy='worklist')
        query = PathQuery(name="q", start="you", end="out")
        assert query.run(sample_schematic, counter) == 5
        assert counter.last_memo is not None

    def test_missing_labels(self, sample_schematic):
        assert DEFAULT_QUERIES[0].missing_labels(sample_schematic) == []
        assert DEFAULT_QUERIES[1].missing_labels(sample_schematic) == ["svr", "dac", "fft"]

    def test_describe(self):
        assert DEFAULT_QUERIES[0].describe() == "you -> out"
        assert DEFAULT_QUERIES[1].describe() == "svr -> out via dac, fft"
