"""
Output utilities for transient wall histories.
"""

from .plotting import plot_wall_history, write_history_table

__all__ = [
    'plot_wall_history',
    'write_history_table',
]
