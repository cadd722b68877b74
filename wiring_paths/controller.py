# wiring_paths/controller.py

import logging
from typing import Any, Dict, Iterable, Optional

from .architectures.builder import load_schematic
from .architectures.schematic import Schematic
from .counting.path_counter import PathCounter
from .queries import DEFAULT_QUERIES, PathQuery
from .utils.file_saver import OutputPathManager, ReportSaver
from .utils.schematic_analysis import SchematicMetrics, SchematicValidator

logger = logging.getLogger(__name__)


class CountingTask:
    """
    Loads a schematic file and runs a series of path queries on it.
    """

    def __init__(
        self,
        input_path: str,
        queries: Iterable[PathQuery] = DEFAULT_QUERIES,
        strategy: str = 'auto',
        output_dir: Optional[str] = None,
        workers: Optional[int] = None,
        no_dot: bool = False,
        bitmask_limit: int = 64,
        recursion_threshold: int = 400,
        skip_missing: bool = False
    ):
        """
        Args:
            input_path (str): Path of the schematic text file.
            queries (Iterable[PathQuery]): Queries to run, in order.
            strategy (str): Counting strategy ('auto', 'recursive', 'worklist').
            output_dir (str, optional): If set, a JSON/DOT report is saved there.
            workers (int, optional): Count start branches in this many processes.
            no_dot (bool): Skip the DOT export of the report.
            bitmask_limit (int): Largest waypoint set encoded as a bitmask.
            recursion_threshold (int): Device count above which 'auto' uses the worklist.
            skip_missing (bool): Skip queries naming absent devices instead of failing.
        """
        self.input_path = input_path
        self.queries = list(queries)
        self.strategy = strategy
        self.output_dir = output_dir
        self.workers = workers
        self.no_dot = no_dot
        self.bitmask_limit = bitmask_limit
        self.recursion_threshold = recursion_threshold
        self.skip_missing = skip_missing
        self.schematic: Optional[Schematic] = None
        self.counter: Optional[PathCounter] = None
        self.metrics: Dict[str, Any] = {}
        self.report_paths: Dict[str, str] = {}
        self._validate_configuration()

    def _validate_configuration(self):
        if not self.queries:
            raise ValueError("At least one query is required.")
        if self.workers is not None and self.workers < 1:
            raise ValueError(f"Invalid worker count '{self.workers}'")
        if self.bitmask_limit < 0:
            raise ValueError(f"Invalid bitmask limit '{self.bitmask_limit}'")

    def load(self) -> Schematic:
        self.schematic = load_schematic(self.input_path)
        logger.info(
            f"Loaded {self.input_path}: {self.schematic.device_count} devices, "
            f"{self.schematic.edge_count} wires"
        )

        _, findings = SchematicValidator.validate(self.schematic)
        for finding in findings:
            logger.warning(finding)
        self.metrics = SchematicMetrics.calculate_all(self.schematic)
        return self.schematic

    def run(self) -> Dict[str, int]:
        """
        Runs every query.

        Returns:
            Dict[str, int]: Path count per query name.

        Raises:
            SchematicError: On parse errors or unknown devices.
        """
        schematic = self.load()
        self.counter = PathCounter(
            schematic,
            strategy=self.strategy,
            bitmask_limit=self.bitmask_limit,
            recursion_threshold=self.recursion_threshold
        )
        results = {}
        for query in self.queries:
            missing = query.missing_labels(schematic)
            if missing and self.skip_missing:
                logger.warning(f"Skipping {query.name}: missing device(s) {', '.join(missing)}")
                continue
            results[query.name] = query.run(schematic, self.counter, workers=self.workers)
            logger.info(f"{query.name} ({query.describe()}): {results[query.name]}")

        if self.output_dir:
            self._save_report(results)
        return results

    def _save_report(self, results: Dict[str, int]):
        by_name = {query.name: query for query in self.queries}
        report = {
            name: {
                'query': by_name[name].describe(),
                'devices': list(by_name[name].labels()),
                'count': count,
            }
            for name, count in results.items()
        }
        metadata = OutputPathManager.build_metadata(
            input_path=self.input_path,
            strategy=self.counter.strategy_name,
            metrics=self.metrics,
            statistics=self.counter.get_statistics(),
            workers=self.workers
        )
        filename = OutputPathManager.build_filename(
            OutputPathManager.schematic_name(self.input_path), self.counter.strategy_name
        )
        saver = ReportSaver(self.output_dir, no_dot=self.no_dot)
        self.report_paths = saver.save_report(self.schematic, report, metadata, filename)
        logger.info(f"Report saved to {self.report_paths['json']}")
