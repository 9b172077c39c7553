from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Literal, Optional, Tuple

from .utils import ensure_baseline_12, require_month, safe_num

# Calendar month labels, index 0 = January.
MONTHS: Tuple[str, ...] = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)
NUM_MONTHS = len(MONTHS)

TrackingStatus = Literal["none", "on-track", "behind", "off-track"]


@dataclass(frozen=True)
class DealRecord:
    """
    One closed deal tagged to a month.

    Records are never mutated: ledgers only gain or lose whole records.
    `id` has no computational meaning, it only identifies a record for removal.
    """

    month: int
    value: float
    id: str

    def __post_init__(self) -> None:
        require_month(self.month)
        value = float(self.value)
        if not math.isfinite(value):
            raise ValueError(f"Deal value must be finite, got {self.value!r}")
        object.__setattr__(self, "value", value)


# A ledger is an order-irrelevant collection of records with unique ids.
Ledger = Tuple[DealRecord, ...]


@dataclass(frozen=True)
class Scenario:
    """
    Inputs for one what-if plan.

    baseline is always normalized to exactly 12 finite amounts.
    starting_recurring is never negative; bad or negative input becomes 0.
    goal of None (or <= 0) disables goal tracking.
    """

    name: str
    baseline: Tuple[float, ...] = field(default_factory=lambda: (0.0,) * NUM_MONTHS)
    starting_recurring: float = 0.0
    recurring: Ledger = ()
    one_offs: Ledger = ()
    goal: Optional[float] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "baseline", tuple(ensure_baseline_12(self.baseline)))
        object.__setattr__(self, "starting_recurring", max(0.0, safe_num(self.starting_recurring)))
        object.__setattr__(self, "recurring", tuple(self.recurring))
        object.__setattr__(self, "one_offs", tuple(self.one_offs))

    @property
    def has_goal(self) -> bool:
        return self.goal is not None and self.goal > 0

    @property
    def deal_count(self) -> int:
        return len(self.recurring)
