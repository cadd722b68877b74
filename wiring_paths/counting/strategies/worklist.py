# wiring_paths/counting/strategies/worklist.py

from dataclasses import dataclass
from typing import Hashable, Iterable, Iterator, List, Optional, Set, Tuple

from ...architectures.schematic import Schematic
from ..memo import MemoTable
from ..waypoints import WaypointTracker
from .base import CountingStrategy


@dataclass
class _Frame:
    node: int
    remaining: Hashable
    outputs: Iterator[int]
    total: int = 0


class WorklistStrategy(CountingStrategy):
    """
    Depth-first traversal on an explicit stack.

    Expands devices in exactly the order RecursiveStrategy does, so both
    return the same counts, but path length is not limited by the
    interpreter recursion limit.
    """

    def get_strategy_name(self) -> str:
        return "worklist"

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
        on_path = set(path)
        result, frame = self._enter(schematic, start, end, tracker, remaining, memo, on_path)
        if frame is None:
            return result

        stack: List[_Frame] = [frame]
        while stack:
            top = stack[-1]
            output = next(top.outputs, None)
            if output is not None:
                value, child = self._enter(schematic, output, end, tracker, top.remaining, memo, on_path)
                if child is None:
                    top.total += value
                else:
                    stack.append(child)
                continue

            # All wires of the top device counted
            stack.pop()
            on_path.discard(top.node)
            memo.store((top.node, top.remaining), top.total)
            if not stack:
                return top.total
            stack[-1].total += top.total

        raise AssertionError("worklist drained without a result")

    def _enter(
        self,
        schematic: Schematic,
        node: int,
        end: int,
        tracker: WaypointTracker,
        remaining: Hashable,
        memo: MemoTable,
        on_path: Set[int]
    ) -> Tuple[int, Optional[_Frame]]:
        """Resolves a device immediately or returns a frame to expand it."""
        self.visits += 1
        if node in on_path:
            return self._loop_detected(schematic, node, memo), None

        remaining = tracker.discard(remaining, node)
        memorized = memo.lookup((node, remaining))
        if memorized is not None:
            return memorized, None

        if node == end:
            return (1 if tracker.is_empty(remaining) else 0), None

        on_path.add(node)
        return 0, _Frame(node, remaining, iter(schematic.out_edges(node)))
