# wiring_paths/utils/file_saver.py

import os
import json
import logging
from typing import Any, Dict, Optional

from ..architectures.schematic import Schematic
from .visualizer import SchematicVisualizer

logger = logging.getLogger(__name__)


class OutputPathManager:
    """
    Centralizes report naming rules.
    """

    @staticmethod
    def schematic_name(input_path: str) -> str:
        """Derives a report name from the schematic file name."""
        base = os.path.basename(input_path) or "schematic"
        return os.path.splitext(base)[0]

    @staticmethod
    def build_filename(schematic_name: str, strategy: str) -> str:
        """
        Format: {schematic}_paths_{strategy}
        """
        return f"{schematic_name}_paths_{strategy}"

    @staticmethod
    def build_metadata(
        input_path: str,
        strategy: str,
        metrics: Optional[Dict] = None,
        statistics: Optional[Dict] = None,
        **extra_fields
    ) -> Dict[str, Any]:
        metadata = {
            'input_path': input_path,
            'strategy': strategy,
        }
        if metrics:
            metadata['metrics'] = metrics
        if statistics:
            metadata['statistics'] = statistics
        metadata.update(extra_fields)
        return metadata


class ReportSaver:
    """
    Saves counting results as JSON, with a DOT rendering of the schematic.
    """

    def __init__(self, output_dir: str, no_dot: bool = False):
        """
        Args:
            output_dir (str): Directory for the report files.
            no_dot (bool): If True, skips the DOT export.
        """
        self.output_dir = output_dir
        self.no_dot = no_dot
        os.makedirs(output_dir, exist_ok=True)

    def save_report(
        self,
        schematic: Schematic,
        results: Dict[str, Dict[str, Any]],
        metadata: Dict[str, Any],
        filename_base: str
    ) -> Dict[str, str]:
        """
        Writes the report files.

        Args:
            schematic (Schematic): The counted schematic.
            results (Dict): Per query: description, devices and count.
            metadata (Dict): Run metadata (see OutputPathManager.build_metadata).
            filename_base (str): File name without extension.

        Returns:
            Dict: Paths to the saved files.
        """
        path_base = os.path.join(self.output_dir, filename_base)
        paths = {}

        try:
            json_path = f"{path_base}.json"
            self._save_json(schematic, results, metadata, json_path)
            paths['json'] = json_path

            if not self.no_dot:
                dot_path = f"{path_base}.dot"
                highlight = set()
                for result in results.values():
                    highlight.update(result.get('devices', []))
                SchematicVisualizer.write_dot(schematic, dot_path, highlight=highlight)
                paths['dot'] = dot_path

            logger.debug(f"Report saved: {filename_base}")
            return paths

        except OSError as e:
            logger.error(f"Error saving report {filename_base}: {e}", exc_info=True)
            raise

    def _save_json(self, schematic: Schematic, results: Dict, metadata: Dict, json_path: str):
        json_data = {
            'schematic': os.path.splitext(os.path.basename(json_path))[0],
            'metadata': metadata,
            'device_count': schematic.device_count,
            'edge_count': schematic.edge_count,
            'results': results,
        }
        with open(json_path, 'w', encoding='utf-8') as f:
            json.dump(json_data, f, indent=2)
