# wiring_paths/utils/schematic_analysis.py

import logging
from typing import Any, Dict, List, Set, Tuple

import networkx as nx

from ..architectures.schematic import Schematic

logger = logging.getLogger(__name__)


class SchematicValidator:
    """
    Structural checks run before counting.
    None of the findings stop a count; cycles are skipped by the cycle guard.
    """

    @staticmethod
    def validate(schematic: Schematic) -> Tuple[bool, List[str]]:
        """
        Runs the validation suite on the schematic.

        Returns:
            Tuple[bool, list]: (IsValid, List of findings).
        """
        errors = []
        graph = schematic.to_networkx()

        if graph.number_of_nodes() == 0:
            errors.append("Schematic has no devices.")
            return False, errors

        try:
            cycle = nx.find_cycle(graph)
            loop = [schematic.label(edge[0]) for edge in cycle]
            errors.append(f"Schematic contains a cycle: {' -> '.join(loop)} -> {loop[0]}")
        except nx.NetworkXNoCycle:
            pass

        for node in graph.nodes():
            if graph.degree(node) == 0:
                errors.append(f"Device '{schematic.label(node)}' has no wires.")
            if graph.has_edge(node, node):
                errors.append(f"Device '{schematic.label(node)}' is wired to itself.")

        return len(errors) == 0, errors


class SchematicMetrics:
    """Summary figures of a schematic, for logs and reports."""

    @staticmethod
    def calculate_all(schematic: Schematic) -> Dict[str, Any]:
        graph = schematic.to_networkx()
        is_dag = nx.is_directed_acyclic_graph(graph)
        return {
            'device_count': graph.number_of_nodes(),
            'edge_count': graph.number_of_edges(),
            'sources': sorted(schematic.label(n) for n in graph.nodes() if graph.in_degree(n) == 0),
            'sinks': sorted(schematic.label(n) for n in graph.nodes() if graph.out_degree(n) == 0),
            'is_dag': is_dag,
            'density': nx.density(nx.DiGraph(graph)) if graph.number_of_nodes() > 1 else 0.0,
            'longest_path': SchematicMetrics.longest_path_length(graph) if is_dag else None,
            'parallel_edges': SchematicMetrics.parallel_edge_count(schematic),
        }

    @staticmethod
    def longest_path_length(graph: nx.MultiDiGraph) -> int:
        """Number of wires on the longest path of an acyclic schematic."""
        try:
            return nx.dag_longest_path_length(nx.DiGraph(graph))
        except nx.NetworkXUnfeasible:
            return -1

    @staticmethod
    def parallel_edge_count(schematic: Schematic) -> int:
        """Wires that duplicate an earlier wire between the same two devices."""
        return sum(len(outputs) - len(set(outputs)) for outputs in schematic.adjacency.values())


def reachable_devices(schematic: Schematic, start: int) -> Set[int]:
    """Ids of every device reachable from ``start``, including itself."""
    graph = schematic.to_networkx()
    return nx.descendants(graph, start) | {start}
