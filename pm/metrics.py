"""
Strategy metrics for one scenario.

Condenses a scenario into the numbers a seller steers by:
annual total, how much of it is new business, the strongest and weakest
months, and, with a goal set, the gap plus how many average-sized deals
per remaining month would close it.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from core.config import SimulatorConfig
from core.schema import NUM_MONTHS, Scenario, TrackingStatus
from core.utils import require_month
from engine.goal import revenue_gap, strongest_month, tracking_status, weakest_month
from engine.revenue import annual_total, effective_baseline, monthly_total


@dataclass(frozen=True)
class StrategyMetrics:
    annual_total: float
    total_baseline: float  # effective baseline summed over the year
    total_added: float     # annual_total - total_baseline
    recurring_count: int
    one_off_count: int

    strongest_month: int
    strongest_value: float
    weakest_month: int
    weakest_value: float

    has_goal: bool
    goal: Optional[float]
    gap: float
    status: TrackingStatus

    current_month: int
    remaining_months: int  # at least 1
    deals_needed: int
    deals_per_month: int


def compute_strategy_metrics(
    scenario: Scenario,
    current_month: int,
    config: SimulatorConfig = SimulatorConfig(),
) -> StrategyMetrics:
    """
    Parameters
    ----------
    scenario : Scenario
        Scenario snapshot to evaluate
    current_month : int
        Month (0-11) goal tracking is measured through
    config : SimulatorConfig
        Supplies avg_deal_size and the tracking thresholds
    """
    require_month(current_month)

    eff = effective_baseline(scenario.baseline, scenario.starting_recurring)
    recurring = scenario.recurring
    one_offs = scenario.one_offs

    annual = annual_total(eff, recurring, one_offs)
    total_baseline = float(eff.sum())

    strong = strongest_month(eff, recurring, one_offs)
    weak = weakest_month(eff, recurring, one_offs)

    has_goal = scenario.has_goal
    gap = revenue_gap(eff, recurring, scenario.goal, one_offs) if has_goal else 0.0
    status = tracking_status(
        eff, recurring, scenario.goal, current_month, one_offs,
        on_track_ratio=config.on_track_ratio,
        behind_ratio=config.behind_ratio,
    )

    remaining = max(1, NUM_MONTHS - current_month)
    deals_needed = math.ceil(gap / config.avg_deal_size) if has_goal else 0
    deals_per_month = math.ceil(deals_needed / remaining) if has_goal else 0

    return StrategyMetrics(
        annual_total=annual,
        total_baseline=total_baseline,
        total_added=annual - total_baseline,
        recurring_count=len(recurring),
        one_off_count=len(one_offs),
        strongest_month=strong,
        strongest_value=monthly_total(eff, recurring, strong, one_offs),
        weakest_month=weak,
        weakest_value=monthly_total(eff, recurring, weak, one_offs),
        has_goal=has_goal,
        goal=scenario.goal if has_goal else None,
        gap=gap,
        status=status,
        current_month=current_month,
        remaining_months=remaining,
        deals_needed=deals_needed,
        deals_per_month=deals_per_month,
    )
