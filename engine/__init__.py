"""
Engine — revenue aggregation, goal tracking, ledger updates and the grid runner.
"""

from .revenue import annual_total, effective_baseline, monthly_total, running_total
from .goal import revenue_gap, tracking_status, strongest_month, weakest_month
from .runner import build_revenue_grid, grid_totals

__all__ = [
    "annual_total",
    "effective_baseline",
    "monthly_total",
    "running_total",
    "revenue_gap",
    "tracking_status",
    "strongest_month",
    "weakest_month",
    "build_revenue_grid",
    "grid_totals",
]
