# wiring_paths/queries.py

"""Label-level query interface on top of the id-based path counter."""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .architectures.schematic import Schematic
from .counting.path_counter import PathCounter

logger = logging.getLogger(__name__)


def resolve_device(schematic: Schematic, label: str) -> int:
    """Maps a device label to its id, raising UnknownDeviceError if absent."""
    return schematic.device_id(label)


def resolve_devices(schematic: Schematic, labels: Iterable[str]) -> List[int]:
    return [resolve_device(schematic, label) for label in labels]


def count_paths(
    schematic: Schematic,
    start_label: str,
    end_label: str,
    required_labels: Iterable[str] = (),
    strategy: str = 'auto'
) -> int:
    """
    Counts paths between two labelled devices.

    Every label is resolved before the traversal starts.

    Args:
        schematic (Schematic): The wiring graph.
        start_label (str): Label of the input device.
        end_label (str): Label of the output device.
        required_labels (Iterable[str]): Labels of the mandatory waypoints.
        strategy (str): Counting strategy name.

    Raises:
        UnknownDeviceError: If any label is not in the schematic.
    """
    start = resolve_device(schematic, start_label)
    end = resolve_device(schematic, end_label)
    required = resolve_devices(schematic, required_labels)
    return PathCounter(schematic, strategy=strategy).count(start, end, required)


@dataclass(frozen=True)
class PathQuery:
    """A named path counting request expressed with device labels."""
    name: str
    start: str
    end: str
    required: Tuple[str, ...] = ()

    def labels(self) -> Tuple[str, ...]:
        return (self.start, self.end, *self.required)

    def missing_labels(self, schematic: Schematic) -> List[str]:
        return [label for label in self.labels() if label not in schematic]

    def run(self, schematic: Schematic, counter: Optional[PathCounter] = None, workers: Optional[int] = None) -> int:
        """Runs the query, in parallel when ``workers`` is given."""
        counter = counter or PathCounter(schematic)
        start = resolve_device(schematic, self.start)
        end = resolve_device(schematic, self.end)
        required = resolve_devices(schematic, self.required)
        if workers:
            return counter.count_parallel(start, end, required, workers=workers)
        return counter.count(start, end, required)

    def describe(self) -> str:
        via = f" via {', '.join(self.required)}" if self.required else ""
        return f"{self.start} -> {self.end}{via}"


DEFAULT_QUERIES = (
    PathQuery(name='part_1', start='you', end='out'),
    PathQuery(name='part_2', start='svr', end='out', required=('dac', 'fft')),
)
