"""
Revenue aggregation — per-month and cumulative figures from baseline + deal ledgers.

Two accumulation rules:
  Recurring deals: a deal closed in month m counts in m and every later month
                   (subscription revenue).
  One-off deals:   a deal counts only in the month it was recorded.

Every function here is pure. Callers pass the *effective* baseline
(baseline + starting recurring amount, see effective_baseline()).

Example (baseline all zero, one $5,000 recurring deal in March):
  monthly_total:  Jan=0, Feb=0, Mar..Dec=5,000
  annual_total:   10 x 5,000 = 50,000
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

import numpy as np

from core.schema import NUM_MONTHS, DealRecord
from core.utils import require_month


def new_revenue_this_month(ledger: Iterable[DealRecord], month: int) -> float:
    """Recurring revenue starting in exactly this month."""
    return sum((d.value for d in ledger if d.month == month), 0.0)


def carryover_revenue(ledger: Iterable[DealRecord], month: int) -> float:
    """Recurring revenue from deals started before this month, still active."""
    return sum((d.value for d in ledger if d.month < month), 0.0)


def added_revenue(ledger: Iterable[DealRecord], month: int) -> float:
    """All recurring revenue in effect this month (new + carryover)."""
    return sum((d.value for d in ledger if d.month <= month), 0.0)


def one_off_revenue(ledger: Optional[Iterable[DealRecord]], month: int) -> float:
    """One-off revenue recognized in this month only. No carryover."""
    if ledger is None:
        return 0.0
    return sum((d.value for d in ledger if d.month == month), 0.0)


def effective_baseline(baseline: Sequence[float], starting_amount: float) -> np.ndarray:
    """Baseline with the starting recurring amount added to every month."""
    return np.asarray(baseline, dtype=float) + float(starting_amount)


def _baseline_at(baseline: Sequence[float], month: int) -> float:
    return float(baseline[month]) if month < len(baseline) else 0.0


def monthly_total(
    baseline: Sequence[float],
    recurring: Iterable[DealRecord],
    month: int,
    one_offs: Optional[Iterable[DealRecord]] = None,
) -> float:
    """Effective baseline + recurring revenue in effect + one-offs for a month."""
    require_month(month)
    return (
        _baseline_at(baseline, month)
        + added_revenue(recurring, month)
        + one_off_revenue(one_offs, month)
    )


def running_total(
    baseline: Sequence[float],
    recurring: Iterable[DealRecord],
    upto_month: int,
    one_offs: Optional[Iterable[DealRecord]] = None,
) -> float:
    """
    Sum of monthly totals from January through upto_month inclusive.

    Non-decreasing in upto_month as long as every monthly total is >= 0.
    """
    require_month(upto_month)
    recurring = tuple(recurring)
    one_offs = tuple(one_offs) if one_offs is not None else None
    return sum(
        (monthly_total(baseline, recurring, m, one_offs) for m in range(upto_month + 1)),
        0.0,
    )


def annual_total(
    baseline: Sequence[float],
    recurring: Iterable[DealRecord],
    one_offs: Optional[Iterable[DealRecord]] = None,
) -> float:
    return running_total(baseline, recurring, NUM_MONTHS - 1, one_offs)


def monthly_totals(
    baseline: Sequence[float],
    recurring: Iterable[DealRecord],
    one_offs: Optional[Iterable[DealRecord]] = None,
) -> np.ndarray:
    """
    Vector of all 12 monthly totals.

    Shape (12,). Entry m equals monthly_total(baseline, recurring, m, one_offs).
    """
    recurring = tuple(recurring)
    one_offs = tuple(one_offs) if one_offs is not None else None
    return np.array(
        [monthly_total(baseline, recurring, m, one_offs) for m in range(NUM_MONTHS)],
        dtype=float,
    )


def running_totals(
    baseline: Sequence[float],
    recurring: Iterable[DealRecord],
    one_offs: Optional[Iterable[DealRecord]] = None,
) -> np.ndarray:
    """Cumulative sum of monthly_totals(); entry m equals running_total(..., m, ...)."""
    return np.cumsum(monthly_totals(baseline, recurring, one_offs))
