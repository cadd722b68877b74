"""Constrained path counting over device wiring schematics."""

from .architectures import Device, Schematic, SchematicBuilder, build, load_schematic
from .counting import MemoTable, PathCounter
from .errors import ParseError, SchematicError, UnknownDeviceError
from .queries import DEFAULT_QUERIES, PathQuery, count_paths

__all__ = [
    "Device",
    "Schematic",
    "SchematicBuilder",
    "build",
    "load_schematic",
    "MemoTable",
    "PathCounter",
    "PathQuery",
    "DEFAULT_QUERIES",
    "count_paths",
    "ParseError",
    "SchematicError",
    "UnknownDeviceError",
]
