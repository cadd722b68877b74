# scripts/runner.py

"""
Main script for counting paths through a wiring schematic.

Available commands:
- solve: the standard you -> out and svr -> out (via dac, fft) queries.
- count: one custom query.
- analyze: structural metrics and findings.
"""

import os
import sys

# Add parent directory to path immediately
current_dir = os.path.dirname(os.path.abspath(__file__))
parent_dir = os.path.dirname(current_dir)
sys.path.append(parent_dir)

from wiring_paths.cli import main

if __name__ == "__main__":
    sys.exit(main())
