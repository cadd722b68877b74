# wiring_paths/counting/__init__.py

"""Memoized path counting over a built schematic."""

from .memo import MemoTable
from .path_counter import PathCounter, count_paths
from .waypoints import BitmaskWaypoints, SortedWaypoints, WaypointTracker, make_tracker

__all__ = [
    'MemoTable',
    'PathCounter',
    'count_paths',
    'WaypointTracker',
    'BitmaskWaypoints',
    'SortedWaypoints',
    'make_tracker',
]
