# wiring_paths/counting/path_counter.py

import logging
from concurrent.futures import ProcessPoolExecutor
from typing import Any, Dict, Iterable, Optional, Tuple

from ..architectures.schematic import Schematic
from .memo import MemoTable, combine_statistics
from .strategies import STRATEGIES, CountingStrategy, get_strategy
from .waypoints import make_tracker

logger = logging.getLogger(__name__)


class PathCounter:
    """
    Counts constrained paths through a schematic.

    A path qualifies when it leads from the start device to the end device,
    never revisits a device, and visits every required waypoint on the way.
    """

    def __init__(
        self,
        schematic: Schematic,
        strategy: str = 'auto',
        bitmask_limit: int = 64,
        recursion_threshold: int = 400
    ):
        """
        Args:
            schematic (Schematic): The wiring graph to query.
            strategy (str): 'recursive', 'worklist', or 'auto' to pick by size.
            bitmask_limit (int): Largest waypoint set encoded as a bitmask.
            recursion_threshold (int): Device count above which 'auto' picks
                the worklist traversal.
        """
        self.schematic = schematic
        self.bitmask_limit = bitmask_limit
        self.recursion_threshold = recursion_threshold
        self.strategy_name = self._resolve_strategy_name(strategy)
        self.strategy: CountingStrategy = get_strategy(self.strategy_name)
        self.last_memo: Optional[MemoTable] = None
        self.last_statistics: Optional[Dict[str, Any]] = None

    def _resolve_strategy_name(self, strategy: str) -> str:
        if strategy == 'auto':
            if self.schematic.device_count <= self.recursion_threshold:
                return 'recursive'
            return 'worklist'
        if strategy not in STRATEGIES:
            raise ValueError(f"Unknown strategy: {strategy}")
        return strategy

    def _check_ids(self, start: int, end: int, required: Iterable[int]) -> None:
        assert self.schematic.has_device(start), f"Invalid start device id: {start}"
        assert self.schematic.has_device(end), f"Invalid end device id: {end}"
        for waypoint in required:
            assert self.schematic.has_device(waypoint), f"Invalid waypoint device id: {waypoint}"

    def new_memo(self, end: int, universe: Iterable[int] = ()) -> MemoTable:
        """Creates a memo table reusable by queries to ``end`` within ``universe``."""
        return MemoTable(end, universe)

    def count(
        self,
        start: int,
        end: int,
        required: Iterable[int] = (),
        memo: Optional[MemoTable] = None
    ) -> int:
        """
        Counts the qualifying paths from ``start`` to ``end``.

        Args:
            start (int): Start device id.
            end (int): End device id.
            required (Iterable[int]): Waypoint ids that every path must visit.
            memo (MemoTable, optional): Table to reuse. Its end device must be
                ``end`` and its universe must contain ``required``. A fresh
                table is used when omitted.

        Returns:
            int: The number of paths. Zero when ``end`` is unreachable.
        """
        required = frozenset(required)
        self._check_ids(start, end, required)

        if memo is None:
            memo = MemoTable(end, required)
        elif memo.end != end or not required <= memo.universe:
            raise ValueError(f"{memo!r} cannot be reused for end={end}, required={sorted(required)}")

        # A reused table carries loop counts from earlier queries
        loops_before = memo.loops
        tracker = make_tracker(memo.universe, self.bitmask_limit)
        path_count = self.strategy.count(
            self.schematic, start, end, tracker, tracker.encode(required), memo
        )
        self.last_memo = memo
        self.last_statistics = memo.get_statistics()

        self._log_result(start, end, required, path_count)
        self._warn_loops(memo.loops - loops_before)
        return path_count

    def _log_result(self, start: int, end: int, required: frozenset, path_count: int) -> None:
        logger.debug(
            f"{self.strategy_name}: {self.schematic.label(start)} -> {self.schematic.label(end)} "
            f"via [{self.schematic.path_str(sorted(required))}] = {path_count} | {self.last_statistics}"
        )

    def _warn_loops(self, loops: int) -> None:
        if loops:
            logger.warning(f"{loops} loop(s) skipped while counting paths; the schematic has cycles.")

    def count_parallel(
        self,
        start: int,
        end: int,
        required: Iterable[int] = (),
        workers: Optional[int] = None
    ) -> int:
        """
        Counts each wire leaving ``start`` in its own worker process.

        Every branch gets an independent memo table, so branches share no
        mutable state. Results match ``count`` on acyclic schematics. The
        branch tables stay in the workers; ``last_statistics`` holds their
        summed statistics and ``last_memo`` is cleared.
        """
        required = frozenset(required)
        self._check_ids(start, end, required)

        branches = self.schematic.out_edges(start)
        if start == end or not branches:
            return self.count(start, end, required)

        logger.info(f"Counting {len(branches)} branches of '{self.schematic.label(start)}' in parallel")
        with ProcessPoolExecutor(max_workers=workers) as executor:
            futures = [
                executor.submit(
                    _count_branch, self.schematic, self.strategy_name, self.bitmask_limit,
                    start, branch, end, required
                )
                for branch in branches
            ]
            results = [future.result() for future in futures]

        path_count = sum(count for count, _ in results)
        self.last_memo = None
        self.last_statistics = combine_statistics(stats for _, stats in results)
        self.last_statistics['branches'] = len(results)

        self._log_result(start, end, required, path_count)
        self._warn_loops(self.last_statistics['loops'])
        return path_count

    def get_statistics(self) -> Dict[str, Any]:
        stats = self.strategy.get_statistics()
        if self.last_statistics is not None:
            stats['memo'] = dict(self.last_statistics)
        return stats


def _count_branch(
    schematic: Schematic,
    strategy_name: str,
    bitmask_limit: int,
    start: int,
    branch: int,
    end: int,
    required: frozenset
) -> Tuple[int, Dict[str, int]]:
    """Counts the paths that leave ``start`` through the wire to ``branch``.

    Returns:
        Tuple[int, Dict]: The branch count and its memo statistics.
    """
    tracker = make_tracker(required, bitmask_limit)
    remaining = tracker.discard(tracker.initial(), start)
    memo = MemoTable(end, required)
    path_count = get_strategy(strategy_name).count(
        schematic, branch, end, tracker, remaining, memo, path=(start,)
    )
    return path_count, memo.get_statistics()


def count_paths(
    schematic: Schematic,
    start: int,
    end: int,
    required: Iterable[int] = (),
    strategy: str = 'auto'
) -> int:
    """Counts paths between two device ids with a one-off counter."""
    return PathCounter(schematic, strategy=strategy).count(start, end, required)
