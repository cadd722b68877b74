# wiring_paths/architectures/__init__.py

"""Schematic data model and the text builder that produces it."""

from .schematic import Device, Schematic
from .builder import SchematicBuilder, build, load_schematic

__all__ = ['Device', 'Schematic', 'SchematicBuilder', 'build', 'load_schematic']
