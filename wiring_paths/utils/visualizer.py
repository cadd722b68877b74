# wiring_paths/utils/visualizer.py

import logging
from collections import defaultdict
from typing import Dict, Iterable, List

import networkx as nx

from ..architectures.schematic import Schematic

logger = logging.getLogger(__name__)


class SchematicVisualizer:
    """
    Exports schematics to DOT.
    """

    HIGHLIGHT_FILL = "#F1C40F"

    @staticmethod
    def _quote(label: str) -> str:
        """Quotes a device label as a DOT identifier."""
        escaped = label.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'

    @staticmethod
    def _levels(graph: nx.MultiDiGraph) -> Dict[int, List[int]]:
        """Groups devices by longest distance from a source; empty on cycles."""
        levels = defaultdict(list)
        depth = {}
        try:
            for node in nx.topological_sort(graph):
                level = 0
                for pred in graph.predecessors(node):
                    level = max(level, depth[pred] + 1)
                depth[node] = level
                levels[level].append(node)
        except nx.NetworkXUnfeasible:
            logger.warning("Schematic contains cycles; cannot calculate levels for alignment.")
            levels.clear()
        return levels

    @staticmethod
    def write_dot(schematic: Schematic, dot_filename: str, highlight: Iterable[str] = ()):
        """
        Writes the schematic to a .dot file with one rank per level.

        Args:
            schematic (Schematic): The wiring graph.
            dot_filename (str): Destination path.
            highlight (Iterable[str]): Device labels to fill (query devices).
        """
        if schematic.device_count == 0:
            logger.warning("Schematic is empty, no .dot file to generate.")
            return

        graph = schematic.to_networkx()
        levels = SchematicVisualizer._levels(graph)
        highlight = set(highlight)
        quote = SchematicVisualizer._quote

        with open(dot_filename, "w", encoding="utf-8") as f:
            f.write("digraph schematic {\n")
            f.write("    rankdir=LR;\n")
            f.write('    node [shape=box, style="rounded", fontname="Arial"];\n')
            for device in schematic.devices():
                if device.label in highlight:
                    f.write(f'    {quote(device.label)} [style="filled,rounded", fillcolor="{SchematicVisualizer.HIGHLIGHT_FILL}"];\n')
                else:
                    f.write(f'    {quote(device.label)};\n')
            f.write("\n")
            for src, dst, _ in graph.edges(keys=True):
                f.write(f'    {quote(schematic.label(src))} -> {quote(schematic.label(dst))};\n')
            for level in sorted(levels):
                if len(levels[level]) > 1:
                    same = " ".join(quote(schematic.label(n)) for n in levels[level])
                    f.write(f"    {{ rank = same; {same} }}\n")
            f.write("}\n")
        logger.debug(f"DOT written to {dot_filename}")
