"""Pure analysis package for bubble charts.

This package contains deterministic, testable computations that operate on
in-memory inputs and return plain data. It must not import Django.
"""

from .bubble_sizes import MINIMUM_BUBBLE_SIZE, normalize_symbol_size, size_bounds

__all__ = ["MINIMUM_BUBBLE_SIZE", "normalize_symbol_size", "size_bounds"]
