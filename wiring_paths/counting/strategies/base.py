# wiring_paths/counting/strategies/base.py

from abc import ABC, abstractmethod
from typing import Any, Dict, Hashable, Iterable
import logging

from ...architectures.schematic import Schematic
from ..memo import MemoTable
from ..waypoints import WaypointTracker

logger = logging.getLogger(__name__)


class CountingStrategy(ABC):
    """
    Base interface for path counting traversals.

    Every strategy walks the same implicit automaton whose state is
    (current device, remaining waypoints, devices on the current path):
    a device already on the path contributes 0, reaching the end device
    contributes 1 only when no waypoint remains, and every other device
    contributes the sum over its outgoing wires. Sums are memoized by
    (device, remaining waypoints).
    """

    def __init__(self, **config):
        """
        Args:
            **config: Strategy-specific parameters stored for statistics/logging.
        """
        self.config = config
        self.visits = 0

    @abstractmethod
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
        """
        Counts the paths from ``start`` to ``end``.

        Args:
            schematic (Schematic): The wiring graph.
            start (int): Device id the traversal begins at.
            end (int): Output device id.
            tracker (WaypointTracker): Encoder for the remaining waypoints.
            remaining (Hashable): Waypoints not yet visited, as a tracker key.
            memo (MemoTable): Table shared by the whole traversal.
            path (Iterable[int]): Devices already on the path before ``start``.

        Returns:
            int: Number of qualifying paths, never negative.
        """
        pass

    @abstractmethod
    def get_strategy_name(self) -> str:
        """Returns the unique identifier name of the strategy."""
        pass

    def _loop_detected(self, schematic: Schematic, node: int, memo: MemoTable) -> int:
        memo.loops += 1
        logger.debug(f"Loop detected at '{schematic.label(node)}'")
        return 0

    def get_statistics(self) -> Dict[str, Any]:
        """Returns internal statistics of the strategy."""
        return {
            'strategy': self.get_strategy_name(),
            'config': self.config,
            'visits': self.visits
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.config})"
