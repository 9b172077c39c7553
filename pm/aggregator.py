"""
Side-by-side comparison of scenarios.

Each scenario slot is an independent what-if plan; comparing them answers
"which plan gets me closest to the goal, and with how many deals?"
"""

from __future__ import annotations

from typing import Sequence

import pandas as pd

from core.config import SimulatorConfig
from core.schema import MONTHS, Scenario

from .metrics import compute_strategy_metrics


def compare_scenarios(
    scenarios: Sequence[Scenario],
    current_month: int,
    config: SimulatorConfig = SimulatorConfig(),
) -> pd.DataFrame:
    """
    One row per scenario with its headline metrics.

    Columns: scenario, annual_total, new_revenue, recurring_deals,
    one_off_deals, goal, gap, status, deals_needed, strongest_month,
    weakest_month. goal is NaN for scenarios without one.
    """
    rows = []
    for s in scenarios:
        m = compute_strategy_metrics(s, current_month, config)
        rows.append({
            "scenario": s.name,
            "annual_total": m.annual_total,
            "new_revenue": m.total_added,
            "recurring_deals": m.recurring_count,
            "one_off_deals": m.one_off_count,
            "goal": m.goal if m.has_goal else float("nan"),
            "gap": m.gap,
            "status": m.status,
            "deals_needed": m.deals_needed,
            "strongest_month": MONTHS[m.strongest_month],
            "weakest_month": MONTHS[m.weakest_month],
        })

    columns = [
        "scenario", "annual_total", "new_revenue", "recurring_deals", "one_off_deals",
        "goal", "gap", "status", "deals_needed", "strongest_month", "weakest_month",
    ]
    return pd.DataFrame(rows, columns=columns)
