"""
PM (planning) outputs — strategy metrics, scenario comparison, and flags.
"""

from .metrics import StrategyMetrics, compute_strategy_metrics
from .aggregator import compare_scenarios
from .decisions import StrategyReport, generate_strategy_report

__all__ = [
    "StrategyMetrics",
    "compute_strategy_metrics",
    "compare_scenarios",
    "StrategyReport",
    "generate_strategy_report",
]
