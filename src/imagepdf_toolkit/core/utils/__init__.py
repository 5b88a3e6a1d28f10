"""
Core Utilities Package

Helpers shared across the toolkit.
"""

from .natural_sort import natural_key, compare_natural, natural_sorted

__all__ = [
    "natural_key",
    "compare_natural",
    "natural_sorted",
]
