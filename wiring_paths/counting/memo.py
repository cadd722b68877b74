# wiring_paths/counting/memo.py

from typing import Any, Dict, FrozenSet, Hashable, Iterable, Optional, Tuple

MemoKey = Tuple[int, Hashable]


class MemoTable:
    """
    Path counts keyed by (current device, remaining waypoints key).

    A table is only valid for one end device and one waypoint universe,
    since the remaining-waypoint keys are relative to a tracker built from
    that universe.
    """

    def __init__(self, end: int, universe: Iterable[int] = ()):
        self.end = end
        self.universe: FrozenSet[int] = frozenset(universe)
        self.entries: Dict[MemoKey, int] = {}
        self.hits = 0
        self.misses = 0
        self.loops = 0

    def matches(self, end: int, universe: Iterable[int]) -> bool:
        return self.end == end and self.universe == frozenset(universe)

    def lookup(self, key: MemoKey) -> Optional[int]:
        count = self.entries.get(key)
        if count is None:
            self.misses += 1
        else:
            self.hits += 1
        return count

    def store(self, key: MemoKey, count: int) -> None:
        self.entries[key] = count

    def get_statistics(self) -> Dict[str, Any]:
        return {
            'entries': len(self.entries),
            'hits': self.hits,
            'misses': self.misses,
            'loops': self.loops,
        }

    def __len__(self) -> int:
        return len(self.entries)

    def __repr__(self) -> str:
        return f"MemoTable(end={self.end}, universe={sorted(self.universe)}, entries={len(self.entries)})"


def combine_statistics(statistics: Iterable[Dict[str, int]]) -> Dict[str, int]:
    """Sums per-table statistics, e.g. from independently counted branches."""
    combined = {'entries': 0, 'hits': 0, 'misses': 0, 'loops': 0}
    for stats in statistics:
        for key in combined:
            combined[key] += stats.get(key, 0)
    return combined
