# wiring_paths/cli.py

import argparse
import logging
from typing import List, Optional

from .controller import CountingTask
from .errors import SchematicError
from .queries import DEFAULT_QUERIES, PathQuery
from .architectures.builder import load_schematic
from .utils.logger_setup import setup_logger
from .utils.schematic_analysis import SchematicMetrics, SchematicValidator

logger = logging.getLogger(__name__)


def _add_common_arguments(parser: argparse.ArgumentParser):
    parser.add_argument('input', type=str, help='Schematic file, one "NAME: OUT1 OUT2 ..." line per device.')
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Show detailed logs, including memo statistics.'
    )
    parser.add_argument('--log-file', type=str, default=None, help='Also write the log to this file.')


def _add_counting_arguments(parser: argparse.ArgumentParser):
    parser.add_argument(
        '--strategy',
        type=str,
        default='auto',
        choices=['auto', 'recursive', 'worklist'],
        help='Traversal strategy. "auto" switches to the worklist for large schematics.'
    )
    parser.add_argument('--workers', type=int, default=None, help='Count the branches of the start device in N processes.')
    parser.add_argument('--output-dir', type=str, default=None, help='Save a JSON report (and DOT file) to this directory.')
    parser.add_argument('--no-dot', action='store_true', help='Do not write the DOT file with the report.')
    parser.add_argument('--bitmask-limit', type=int, default=64, help='Largest waypoint set stored as a bitmask.')
    parser.add_argument(
        '--recursion-threshold',
        type=int,
        default=400,
        help='Device count above which "auto" uses the worklist strategy.'
    )


def create_parser():
    """
    Creates and configures the command-line argument parser.

    - solve: the two standard queries (you -> out, svr -> out via dac and fft)
    - count: one custom query
    - analyze: structural report only
    """
    parser = argparse.ArgumentParser(
        description="Constrained path counter for device wiring schematics.",
        formatter_class=argparse.RawTextHelpFormatter
    )
    subparsers = parser.add_subparsers(dest='command', required=True, help='Available commands')

    # --- SOLVE COMMAND ---
    parser_solve = subparsers.add_parser('solve', help='Run the standard queries.')
    _add_common_arguments(parser_solve)
    _add_counting_arguments(parser_solve)

    # --- COUNT COMMAND ---
    parser_count = subparsers.add_parser('count', help='Count paths between two devices.')
    _add_common_arguments(parser_count)
    _add_counting_arguments(parser_count)
    parser_count.add_argument('--start', type=str, required=True, help='Input device label.')
    parser_count.add_argument('--end', type=str, default='out', help='Output device label. Default: out')
    parser_count.add_argument(
        '--via',
        type=str,
        nargs='+',
        default=[],
        metavar='DEVICE',
        help='Devices every counted path must visit.'
    )

    # --- ANALYZE COMMAND ---
    parser_analyze = subparsers.add_parser('analyze', help='Show schematic metrics and findings.')
    _add_common_arguments(parser_analyze)

    return parser


def _build_task_params_from_args(args) -> dict:
    """Constructs the CountingTask parameter dictionary from arguments."""
    params = {
        'input_path': args.input,
        'strategy': args.strategy,
        'output_dir': args.output_dir,
        'workers': args.workers,
        'no_dot': args.no_dot,
        'bitmask_limit': args.bitmask_limit,
        'recursion_threshold': args.recursion_threshold,
    }

    if args.command == 'solve':
        params['queries'] = DEFAULT_QUERIES
        params['skip_missing'] = True
    elif args.command == 'count':
        params['queries'] = [
            PathQuery(name='count', start=args.start, end=args.end, required=tuple(args.via))
        ]

    return params


def run_analysis(args) -> int:
    schematic = load_schematic(args.input)
    metrics = SchematicMetrics.calculate_all(schematic)
    for key, value in metrics.items():
        logger.info(f"{key}: {value}")

    is_valid, findings = SchematicValidator.validate(schematic)
    for finding in findings:
        logger.warning(finding)
    if is_valid:
        logger.info("No structural findings.")
    return 0


def run_counting(args) -> int:
    task = CountingTask(**_build_task_params_from_args(args))
    results = task.run()
    if not results:
        logger.warning("No query could be run on this schematic.")
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logger(verbose=args.verbose, log_file=args.log_file)

    try:
        if args.command == 'analyze':
            return run_analysis(args)
        return run_counting(args)
    except SchematicError as e:
        logger.error(f"Counting failed for {args.input}: {e}")
        return 1
    except OSError as e:
        logger.error(f"Cannot read {args.input}: {e}")
        return 1
