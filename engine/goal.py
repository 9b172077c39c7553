"""
Goal tracking — compare the revenue trajectory against a linear goal pace.

By the end of month m a goal G implies G * (m + 1) / 12 of cumulative revenue.
The running total divided by that pace gives a ratio that is classified as:
  ratio >= 0.95          → "on-track"
  0.70 <= ratio < 0.95   → "behind"
  ratio < 0.70           → "off-track"
A missing or non-positive goal yields "none". Nothing is remembered between
calls; every status is derived from scratch.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

import numpy as np

from core.config import BEHIND_RATIO, ON_TRACK_RATIO
from core.schema import NUM_MONTHS, DealRecord, TrackingStatus
from core.utils import require_month

from .revenue import annual_total, monthly_totals, running_total


def has_goal(goal: Optional[float]) -> bool:
    return goal is not None and goal > 0


def goal_pace(goal: float, month: int) -> float:
    """Cumulative revenue a goal implies by the end of `month`."""
    require_month(month)
    return goal * (month + 1) / NUM_MONTHS


def goal_pace_curve(goal: Optional[float]) -> Optional[List[float]]:
    """Goal pace for every month, or None when goal tracking is disabled."""
    if not has_goal(goal):
        return None
    return [goal_pace(goal, m) for m in range(NUM_MONTHS)]


def revenue_gap(
    baseline: Sequence[float],
    recurring: Iterable[DealRecord],
    goal: Optional[float],
    one_offs: Optional[Iterable[DealRecord]] = None,
) -> float:
    """Annual revenue still missing to reach the goal; never negative."""
    if not has_goal(goal):
        return 0.0
    return max(0.0, goal - annual_total(baseline, recurring, one_offs))


def classify_pace_ratio(
    ratio: float,
    *,
    on_track_ratio: float = ON_TRACK_RATIO,
    behind_ratio: float = BEHIND_RATIO,
) -> TrackingStatus:
    if ratio >= on_track_ratio:
        return "on-track"
    if ratio >= behind_ratio:
        return "behind"
    return "off-track"


def tracking_status(
    baseline: Sequence[float],
    recurring: Iterable[DealRecord],
    goal: Optional[float],
    current_month: int,
    one_offs: Optional[Iterable[DealRecord]] = None,
    *,
    on_track_ratio: float = ON_TRACK_RATIO,
    behind_ratio: float = BEHIND_RATIO,
) -> TrackingStatus:
    """Classify the running total through current_month against goal pace."""
    if not has_goal(goal):
        return "none"
    expected_pace = goal_pace(goal, current_month)
    if expected_pace <= 0:
        return "none"
    running = running_total(baseline, recurring, current_month, one_offs)
    return classify_pace_ratio(
        running / expected_pace,
        on_track_ratio=on_track_ratio,
        behind_ratio=behind_ratio,
    )


def strongest_month(
    baseline: Sequence[float],
    recurring: Iterable[DealRecord],
    one_offs: Optional[Iterable[DealRecord]] = None,
) -> int:
    """Month with the highest monthly total; the earliest month wins ties."""
    # argmax/argmin return the first occurrence of the extreme value
    return int(np.argmax(monthly_totals(baseline, recurring, one_offs)))


def weakest_month(
    baseline: Sequence[float],
    recurring: Iterable[DealRecord],
    one_offs: Optional[Iterable[DealRecord]] = None,
) -> int:
    """Month with the lowest monthly total; the earliest month wins ties."""
    return int(np.argmin(monthly_totals(baseline, recurring, one_offs)))
