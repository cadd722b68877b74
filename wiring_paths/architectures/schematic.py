# wiring_paths/architectures/schematic.py

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, Mapping, Tuple

import networkx as nx

from ..errors import UnknownDeviceError


@dataclass(frozen=True)
class Device:
    """A single device of the schematic."""
    id: int
    label: str


class Schematic:
    """Immutable directed wiring graph of devices.

    Devices are addressed by dense integer ids assigned in order of first
    appearance in the source text. Each device owns an ordered tuple of
    outgoing edges; duplicate edges are kept because every wire is a
    distinct continuation of a path.
    """

    def __init__(self, labels: Iterable[str], adjacency: Mapping[int, Iterable[int]]):
        """
        Args:
            labels (Iterable[str]): Device labels indexed by id.
            adjacency (Mapping[int, Iterable[int]]): Outgoing edges per device id.
                Devices without an entry are sinks.
        """
        self._labels: Tuple[str, ...] = tuple(labels)
        self._label_to_id = MappingProxyType({label: idx for idx, label in enumerate(self._labels)})
        if len(self._label_to_id) != len(self._labels):
            raise ValueError("Device labels must be unique.")

        frozen: Dict[int, Tuple[int, ...]] = {}
        for device_id, outputs in adjacency.items():
            outputs = tuple(outputs)
            for target in (device_id, *outputs):
                if not 0 <= target < len(self._labels):
                    raise ValueError(f"Edge references unknown device id {target}.")
            frozen[device_id] = outputs
        self._adjacency = MappingProxyType(frozen)

    @property
    def label_to_id(self) -> Mapping[str, int]:
        return self._label_to_id

    @property
    def adjacency(self) -> Mapping[int, Tuple[int, ...]]:
        return self._adjacency

    @property
    def labels(self) -> Tuple[str, ...]:
        return self._labels

    @property
    def device_count(self) -> int:
        return len(self._labels)

    @property
    def edge_count(self) -> int:
        return sum(len(outputs) for outputs in self._adjacency.values())

    def has_device(self, device_id) -> bool:
        return isinstance(device_id, int) and 0 <= device_id < len(self._labels)

    def device_id(self, label: str) -> int:
        """Returns the id of ``label``, raising UnknownDeviceError if absent."""
        try:
            return self._label_to_id[label]
        except KeyError:
            raise UnknownDeviceError(label) from None

    def label(self, device_id: int) -> str:
        return self._labels[device_id]

    def device(self, device_id: int) -> Device:
        return Device(id=device_id, label=self._labels[device_id])

    def devices(self) -> Iterator[Device]:
        for device_id, label in enumerate(self._labels):
            yield Device(id=device_id, label=label)

    def out_edges(self, device_id: int) -> Tuple[int, ...]:
        """Returns the outgoing edges of a device; sinks yield an empty tuple."""
        return self._adjacency.get(device_id, ())

    def path_str(self, path: Iterable[int]) -> str:
        """Renders a sequence of device ids as comma separated labels."""
        return ",".join(self._labels[device_id] for device_id in path)

    def to_networkx(self) -> nx.MultiDiGraph:
        """Returns a NetworkX multigraph copy of the schematic.

        Nodes are device ids carrying a 'label' attribute. Parallel wires
        become parallel edges.
        """
        graph = nx.MultiDiGraph()
        for device_id, label in enumerate(self._labels):
            graph.add_node(device_id, label=label)
        for source, outputs in self._adjacency.items():
            for target in outputs:
                graph.add_edge(source, target)
        return graph

    def __reduce__(self):
        # MappingProxyType does not pickle; rebuild from plain containers
        return (Schematic, (self._labels, dict(self._adjacency)))

    def __contains__(self, label) -> bool:
        return label in self._label_to_id

    def __len__(self) -> int:
        return len(self._labels)

    def __repr__(self) -> str:
        return f"Schematic(devices={self.device_count}, edges={self.edge_count})"
