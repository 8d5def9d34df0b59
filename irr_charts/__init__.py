"""Visualization components for the coding assistant."""

from .charts import (
    plot_statistics,
    plot_coincidence_matrix,
    plot_conflict_status,
    color_by_coefficient,
)

__all__ = [
    'plot_statistics',
    'plot_coincidence_matrix',
    'plot_conflict_status',
    'color_by_coefficient',
]
