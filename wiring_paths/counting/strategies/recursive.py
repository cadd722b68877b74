# wiring_paths/counting/strategies/recursive.py

from typing import Hashable, Iterable, Set

from ...architectures.schematic import Schematic
from ..memo import MemoTable
from ..waypoints import WaypointTracker
from .base import CountingStrategy


class RecursiveStrategy(CountingStrategy):
    """
    Depth-first recursion with memoization.

    Recursion depth grows with the longest simple path, so very deep
    schematics should use WorklistStrategy instead.
    """

    def get_strategy_name(self) -> str:
        return "recursive"

    def count(
        self,
        schematic: Schematic,
        start: int,
        end: int,
        tracker: WaypointTracker,
        remaining: Hashable,
        memo: MemoTable,
        path: Iterable[int] = ()
    ) -> int:
        return self._visit(schematic, start, end, tracker, remaining, memo, set(path))

    def _visit(
        self,
        schematic: Schematic,
        node: int,
        end: int,
        tracker: WaypointTracker,
        remaining: Hashable,
        memo: MemoTable,
        on_path: Set[int]
    ) -> int:
        self.visits += 1
        if node in on_path:
            return self._loop_detected(schematic, node, memo)

        remaining = tracker.discard(remaining, node)
        key = (node, remaining)
        memorized = memo.lookup(key)
        if memorized is not None:
            return memorized

        if node == end:
            return 1 if tracker.is_empty(remaining) else 0

        on_path.add(node)
        path_count = 0
        try:
            for output in schematic.out_edges(node):
                path_count += self._visit(schematic, output, end, tracker, remaining, memo, on_path)
        finally:
            on_path.discard(node)

        memo.store(key, path_count)
        return path_count
