# wiring_paths/counting/strategies/__init__.py

"""
Traversal strategies for path counting.

Available strategies:
- RecursiveStrategy: depth-first recursion (default for small schematics)
- WorklistStrategy: same traversal on an explicit stack, for deep schematics
"""

from .base import CountingStrategy
from .recursive import RecursiveStrategy
from .worklist import WorklistStrategy

STRATEGIES = {
    'recursive': RecursiveStrategy,
    'worklist': WorklistStrategy,
}


def get_strategy(name: str) -> CountingStrategy:
    """Instantiates a strategy by name."""
    try:
        return STRATEGIES[name]()
    except KeyError:
        raise ValueError(f"Unknown strategy: {name}") from None


__all__ = ['CountingStrategy', 'RecursiveStrategy', 'WorklistStrategy', 'STRATEGIES', 'get_strategy']
