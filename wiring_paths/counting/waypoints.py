# wiring_paths/counting/waypoints.py

from abc import ABC, abstractmethod
from typing import Dict, FrozenSet, Hashable, Iterable, Tuple


class WaypointTracker(ABC):
    """
    Encodes the set of waypoints still to be visited as a hashable key.

    The key is part of the memo key, so it must be cheap to hash and compare.
    A tracker is bound to one waypoint universe; keys from different trackers
    are not interchangeable.
    """

    def __init__(self, required: Iterable[int]):
        self.universe: FrozenSet[int] = frozenset(required)

    @abstractmethod
    def encode(self, ids: Iterable[int]) -> Hashable:
        """Returns the key for a subset of the universe."""
        pass

    @abstractmethod
    def discard(self, key: Hashable, node: int) -> Hashable:
        """Returns the key with ``node`` removed (unchanged if absent)."""
        pass

    @abstractmethod
    def is_empty(self, key: Hashable) -> bool:
        pass

    @abstractmethod
    def decode(self, key: Hashable) -> FrozenSet[int]:
        pass

    def initial(self) -> Hashable:
        """Key for the full universe, i.e. nothing visited yet."""
        return self.encode(self.universe)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({sorted(self.universe)})"


class BitmaskWaypoints(WaypointTracker):
    """Stores remaining waypoints as bits of an int, one bit per waypoint."""

    def __init__(self, required: Iterable[int]):
        super().__init__(required)
        self._bits: Dict[int, int] = {node: 1 << index for index, node in enumerate(sorted(self.universe))}

    def encode(self, ids: Iterable[int]) -> int:
        mask = 0
        for node in ids:
            mask |= self._bits[node]
        return mask

    def discard(self, key: int, node: int) -> int:
        bit = self._bits.get(node)
        if bit is None:
            return key
        return key & ~bit

    def is_empty(self, key: int) -> bool:
        return key == 0

    def decode(self, key: int) -> FrozenSet[int]:
        return frozenset(node for node, bit in self._bits.items() if key & bit)


class SortedWaypoints(WaypointTracker):
    """Stores remaining waypoints as a sorted tuple of ids."""

    def encode(self, ids: Iterable[int]) -> Tuple[int, ...]:
        ids = set(ids)
        unknown = ids - self.universe
        if unknown:
            raise KeyError(f"Not in waypoint universe: {sorted(unknown)}")
        return tuple(sorted(ids))

    def discard(self, key: Tuple[int, ...], node: int) -> Tuple[int, ...]:
        if node not in self.universe or node not in key:
            return key
        return tuple(n for n in key if n != node)

    def is_empty(self, key: Tuple[int, ...]) -> bool:
        return not key

    def decode(self, key: Tuple[int, ...]) -> FrozenSet[int]:
        return frozenset(key)


def make_tracker(required: Iterable[int], bitmask_limit: int = 64) -> WaypointTracker:
    """
    Picks a tracker for a waypoint set.

    Args:
        required (Iterable[int]): Mandatory waypoint ids.
        bitmask_limit (int): Largest set size encoded as a bitmask.

    Returns:
        WaypointTracker: BitmaskWaypoints for small sets, SortedWaypoints otherwise.
    """
    required = frozenset(required)
    if len(required) <= bitmask_limit:
        return BitmaskWaypoints(required)
    return SortedWaypoints(required)
