"""
Utility functions for the filter list editor
"""

from .lines import (
    split_lines,
    join_lines,
    normalize_entries,
)

__all__ = [
    'split_lines',
    'join_lines',
    'normalize_entries',
]
