# wiring_paths/architectures/builder.py

import logging
from typing import Dict, List, Optional

from ..errors import ParseError
from .schematic import Schematic

logger = logging.getLogger(__name__)


class SchematicBuilder:
    """Builds a Schematic from ``NAME: OUT1 OUT2 ...`` lines.

    Owns the label registry while the schematic is being assembled. Ids are
    assigned on first sighting, whether the label appears as a device name or
    as one of its outputs.
    """

    SEPARATOR = ":"

    def __init__(self) -> None:
        self._labels: List[str] = []
        self._registry: Dict[str, int] = {}
        self._adjacency: Dict[int, List[int]] = {}
        self._built = False

    def register_device(self, label: str) -> int:
        """Returns the id of ``label``, allocating the next one if it is new."""
        existing_id = self._registry.get(label)
        if existing_id is not None:
            return existing_id

        device_id = len(self._labels)
        self._labels.append(label)
        self._registry[label] = device_id
        return device_id

    def add_line(self, line: str, line_number: int = 1) -> int:
        """
        Parses one schematic line and records its edges.

        Args:
            line (str): A line of the form ``NAME: OUT1 OUT2 ...``.
            line_number (int): Line position, used in error messages.

        Returns:
            int: The id of the device described by the line.

        Raises:
            ParseError: If the separator or the device name is missing.
        """
        if self._built:
            raise RuntimeError("Schematic already built; create a new builder.")

        name, separator, outputs_str = line.partition(self.SEPARATOR)
        if not separator:
            raise ParseError(line_number, line)
        name = name.strip()
        if not name:
            raise ParseError(line_number, line, "missing device name")
        if len(name.split()) > 1:
            raise ParseError(line_number, line, "device name contains whitespace")

        device_id = self.register_device(name)
        output_ids = [self.register_device(label) for label in outputs_str.split()]

        if device_id in self._adjacency:
            logger.warning(f"Device '{name}' redefined on line {line_number}; replacing its outputs.")
        self._adjacency[device_id] = output_ids
        return device_id

    def build(self) -> Schematic:
        """Freezes the collected devices into a Schematic."""
        self._built = True
        schematic = Schematic(self._labels, self._adjacency)
        logger.debug(f"Built {schematic!r}")
        return schematic


def build(text: str) -> Schematic:
    """
    Builds a schematic from its text description.

    Args:
        text (str): Newline separated ``NAME: OUT1 OUT2 ...`` lines.

    Returns:
        Schematic: The frozen wiring graph.

    Raises:
        ParseError: On the first malformed line. No partial schematic is returned.
    """
    builder = SchematicBuilder()
    for line_number, line in enumerate(text.splitlines(), start=1):
        builder.add_line(line, line_number)
    return builder.build()


def load_schematic(path: str, encoding: Optional[str] = "utf-8") -> Schematic:
    """Reads a schematic file, trimming surrounding blank lines."""
    with open(path, "r", encoding=encoding) as f:
        text = f.read()
    logger.debug(f"Loaded schematic text from {path}")
    return build(text.strip())
