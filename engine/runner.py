"""
Revenue grid runner — evaluates one scenario into a month-by-month table.

One row per calendar month with every intermediate figure the grid shows:
starting recurring, raw baseline, new / carryover / added recurring revenue,
one-off revenue, monthly and running totals, goal pace and the goal-tracking
status as of that month. grid_totals() derives the "Year Total" column.
"""

from __future__ import annotations

from typing import Dict

import numpy as np
import pandas as pd

from core.config import SimulatorConfig
from core.schema import MONTHS, NUM_MONTHS, Scenario

from .goal import goal_pace_curve, revenue_gap, tracking_status
from .revenue import (
    added_revenue,
    carryover_revenue,
    effective_baseline,
    monthly_totals,
    new_revenue_this_month,
    one_off_revenue,
    running_totals,
)

GRID_COLUMNS = (
    "month", "label", "starting_recurring", "baseline", "new", "carryover",
    "added", "one_off", "monthly_total", "running_total", "goal_pace", "status",
)


def build_revenue_grid(scenario: Scenario, config: SimulatorConfig = SimulatorConfig()) -> pd.DataFrame:
    """
    Evaluate a scenario for all 12 months.

    Returns
    -------
    DataFrame with GRID_COLUMNS, indexed 0-11. goal_pace is NaN and status is
    "none" on every row when the scenario has no goal.
    """
    eff = effective_baseline(scenario.baseline, scenario.starting_recurring)
    recurring = scenario.recurring
    one_offs = scenario.one_offs

    totals = monthly_totals(eff, recurring, one_offs)
    pace = goal_pace_curve(scenario.goal)

    statuses = [
        tracking_status(
            eff, recurring, scenario.goal, m, one_offs,
            on_track_ratio=config.on_track_ratio,
            behind_ratio=config.behind_ratio,
        )
        for m in range(NUM_MONTHS)
    ]

    return pd.DataFrame(
        {
            "month": np.arange(NUM_MONTHS),
            "label": list(MONTHS),
            "starting_recurring": np.full(NUM_MONTHS, scenario.starting_recurring, dtype=float),
            "baseline": np.asarray(scenario.baseline, dtype=float),
            "new": [new_revenue_this_month(recurring, m) for m in range(NUM_MONTHS)],
            "carryover": [carryover_revenue(recurring, m) for m in range(NUM_MONTHS)],
            "added": [added_revenue(recurring, m) for m in range(NUM_MONTHS)],
            "one_off": [one_off_revenue(one_offs, m) for m in range(NUM_MONTHS)],
            "monthly_total": totals,
            "running_total": running_totals(eff, recurring, one_offs),
            "goal_pace": pace if pace is not None else np.full(NUM_MONTHS, np.nan),
            "status": statuses,
        },
        columns=list(GRID_COLUMNS),
    )


def grid_totals(grid: pd.DataFrame, scenario: Scenario) -> Dict[str, float]:
    """
    "Year Total" figures for a grid built by build_revenue_grid().

    Note "added" is December's recurring revenue in effect (the run-rate the
    year ends on), not the sum over months.
    """
    eff = effective_baseline(scenario.baseline, scenario.starting_recurring)
    return {
        "starting_recurring": float(scenario.starting_recurring * NUM_MONTHS),
        "baseline": float(grid["baseline"].sum()),
        "new": float(grid["new"].sum()),
        "carryover": float(grid["carryover"].sum()),
        "added": float(grid["added"].iloc[-1]),
        "one_off": float(grid["one_off"].sum()),
        "annual_total": float(grid["running_total"].iloc[-1]),
        "goal": float(scenario.goal) if scenario.has_goal else 0.0,
        "gap": revenue_gap(eff, scenario.recurring, scenario.goal, scenario.one_offs),
    }
