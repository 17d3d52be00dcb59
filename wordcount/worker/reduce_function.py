"""
Word count reduce function.
"""

from typing import Iterable


def reduce_function(values: Iterable[int]) -> int:
    """Sum all partial counts for a word. An empty list sums to 0."""
    return sum(values)
