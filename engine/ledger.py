"""
Ledger and scenario updates.

Nothing is mutated in place: every function returns a new ledger or a new
Scenario, so a snapshot handed to the aggregation functions stays consistent.
"""

from __future__ import annotations

import math
import uuid
from dataclasses import replace
from typing import Iterable, List, Optional, Sequence

from core.logging_setup import get_logger
from core.schema import DealRecord, Ledger, Scenario
from core.utils import require_month, safe_num

logger = get_logger("revenue_simulator.ledger")


def next_id() -> str:
    return uuid.uuid4().hex


def add_deal(ledger: Iterable[DealRecord], month: int, value: float) -> Ledger:
    """Append a new record with a fresh id."""
    record = DealRecord(month=month, value=value, id=next_id())
    logger.debug("add deal id=%s month=%d value=%s", record.id, month, record.value)
    return tuple(ledger) + (record,)


def remove_deal(ledger: Iterable[DealRecord], deal_id: str) -> Ledger:
    """Drop the record with this id. Unknown ids leave the ledger unchanged."""
    return tuple(d for d in ledger if d.id != deal_id)


def deals_matching(ledger: Iterable[DealRecord], month: int, value: float) -> List[DealRecord]:
    return [d for d in ledger if d.month == month and d.value == value]


def count_deals(ledger: Iterable[DealRecord], month: int, value: float) -> int:
    return len(deals_matching(ledger, month, value))


def remove_last_deal(ledger: Iterable[DealRecord], month: int, value: float) -> Ledger:
    """Remove the most recently added record of this size in this month."""
    ledger = tuple(ledger)
    matches = deals_matching(ledger, month, value)
    if not matches:
        return ledger
    return remove_deal(ledger, matches[-1].id)


# ---------------------------------------------------------------------------
# Scenario updates
# ---------------------------------------------------------------------------
def create_scenarios(names: Sequence[str]) -> List[Scenario]:
    """One empty scenario per named slot."""
    return [Scenario(name=name) for name in names]


def add_recurring_deal(scenario: Scenario, month: int, value: float) -> Scenario:
    return replace(scenario, recurring=add_deal(scenario.recurring, month, value))


def remove_recurring_deal(scenario: Scenario, deal_id: str) -> Scenario:
    return replace(scenario, recurring=remove_deal(scenario.recurring, deal_id))


def add_one_off_deal(scenario: Scenario, month: int, value: float) -> Scenario:
    return replace(scenario, one_offs=add_deal(scenario.one_offs, month, value))


def remove_one_off_deal(scenario: Scenario, deal_id: str) -> Scenario:
    return replace(scenario, one_offs=remove_deal(scenario.one_offs, deal_id))


def remove_last_recurring_deal(scenario: Scenario, month: int, value: float) -> Scenario:
    return replace(scenario, recurring=remove_last_deal(scenario.recurring, month, value))


def remove_last_one_off_deal(scenario: Scenario, month: int, value: float) -> Scenario:
    return replace(scenario, one_offs=remove_last_deal(scenario.one_offs, month, value))


def set_baseline_month(scenario: Scenario, month: int, value: float) -> Scenario:
    require_month(month)
    baseline = list(scenario.baseline)
    baseline[month] = safe_num(value)
    return replace(scenario, baseline=tuple(baseline))


def set_starting_recurring(scenario: Scenario, value: float) -> Scenario:
    """Negative input is stored as 0."""
    return replace(scenario, starting_recurring=safe_num(value))


def set_goal(scenario: Scenario, goal: Optional[float]) -> Scenario:
    """Set the annual goal; None, non-numeric or non-finite input clears it."""
    if goal is None:
        return replace(scenario, goal=None)
    try:
        value = float(goal)
    except (TypeError, ValueError):
        return replace(scenario, goal=None)
    return replace(scenario, goal=value if math.isfinite(value) else None)


def reset_scenario(scenario: Scenario) -> Scenario:
    """Clear deals, goal, starting recurring and baseline; keep the name."""
    logger.info("reset scenario name=%s", scenario.name)
    return Scenario(name=scenario.name)


def replace_scenario(scenarios: Sequence[Scenario], index: int, scenario: Scenario) -> List[Scenario]:
    if not 0 <= index < len(scenarios):
        raise IndexError(f"Scenario index {index} out of range (0-{len(scenarios) - 1})")
    return [scenario if i == index else s for i, s in enumerate(scenarios)]
