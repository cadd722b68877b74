"""Shared fixtures for the path counting tests."""

import random
from typing import Iterable, List

import pytest

from wiring_paths.architectures.builder import build
from wiring_paths.architectures.schematic import Schematic


SAMPLE = """
aaa: you hhh
you: bbb ccc
bbb: ddd eee
ccc: ddd eee fff
ddd: ggg
eee: out
fff: out
ggg: out
hhh: ccc fff iii
iii: out
"""

SAMPLE_WAYPOINTS = """
svr: aaa bbb
aaa: fft
fft: ccc
bbb: tty
tty: ccc
ccc: ddd eee
ddd: hub
hub: fff
eee: dac
dac: fff
fff: ggg hhh
ggg: out
hhh: out
"""

# you -> aaa -> bbb -> out, with bbb wired back into aaa
SAMPLE_CYCLE = """
you: aaa
aaa: bbb
bbb: aaa out
"""


@pytest.fixture
def sample_schematic() -> Schematic:
    return build(SAMPLE.strip())


@pytest.fixture
def waypoint_schematic() -> Schematic:
    return build(SAMPLE_WAYPOINTS.strip())


@pytest.fixture
def cyclic_schematic() -> Schematic:
    return build(SAMPLE_CYCLE.strip())


@pytest.fixture
def sample_file(tmp_path):
    path = tmp_path / "sample.txt"
    path.write_text(SAMPLE, encoding="utf-8")
    return path


@pytest.fixture
def waypoint_file(tmp_path):
    path = tmp_path / "waypoints.txt"
    path.write_text(SAMPLE_WAYPOINTS, encoding="utf-8")
    return path


def brute_force_count(schematic: Schematic, start: int, end: int, required: Iterable[int] = ()) -> int:
    """Enumerates every simple path without memoization."""
    required = set(required)

    def walk(node: int, visited: List[int]) -> int:
        if node in visited:
            return 0
        visited = visited + [node]
        if node == end:
            return 1 if required <= set(visited) else 0
        return sum(walk(output, visited) for output in schematic.out_edges(node))

    return walk(start, [])


def random_dag_text(seed: int, size: int = 10, max_fanout: int = 3) -> str:
    """Random acyclic schematic; wires only go to higher numbered devices."""
    rng = random.Random(seed)
    lines = []
    for index in range(size - 1):
        fanout = rng.randint(1, max_fanout)
        outputs = [f"d{rng.randint(index + 1, size - 1)}" for _ in range(fanout)]
        lines.append(f"d{index}: {' '.join(outputs)}")
    return "\n".join(lines)


@pytest.fixture
def cyclic_file(tmp_path):
    path = tmp_path / "cycle.txt"
    path.write_text(SAMPLE_CYCLE, encoding="utf-8")
    return path
