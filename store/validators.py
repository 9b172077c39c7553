"""
Sanitization of stored scenarios before they reach the engine.

Stored data may be hand-edited or written by an older build. Rather than
rejecting a whole scenario, each field is repaired:
- Deal records with a non-string id, a non-finite value or a month outside
  0-11 are dropped
- Baseline is forced to exactly 12 finite amounts
- A non-numeric or non-finite goal is cleared
- Starting recurring falls back to 0 when unreadable or negative
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from pydantic import ValidationError

from core.schema import DealRecord, Ledger, Scenario
from core.utils import ensure_baseline_12, safe_num

from .models import StoredDeal


@dataclass
class ValidationResult:
    """Collects everything sanitization had to repair."""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    @property
    def is_clean(self) -> bool:
        return self.is_valid and len(self.warnings) == 0

    def summary(self) -> str:
        lines = []
        if self.errors:
            lines.append(f"ERRORS ({len(self.errors)}):")
            for e in self.errors:
                lines.append(f"  ✗ {e}")
        if self.warnings:
            lines.append(f"WARNINGS ({len(self.warnings)}):")
            for w in self.warnings:
                lines.append(f"  ⚠ {w}")
        if not lines:
            lines.append("✓ All checks passed.")
        return "\n".join(lines)


def _sanitize_ledger(raw: Any, label: str, result: ValidationResult) -> Ledger:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        result.warnings.append(f"{label}: expected a list of deals, got {type(raw).__name__}; cleared.")
        return ()

    records: List[DealRecord] = []
    seen_ids = set()
    n_bad = 0
    for item in raw:
        try:
            deal = StoredDeal.model_validate(item)
        except ValidationError:
            n_bad += 1
            continue
        if deal.id in seen_ids:
            n_bad += 1
            continue
        seen_ids.add(deal.id)
        records.append(deal.to_record())

    if n_bad > 0:
        result.warnings.append(f"{label}: dropped {n_bad} malformed or duplicate deal record(s).")
    return tuple(records)


def _sanitize_goal(raw: Any) -> Optional[float]:
    if raw is None or isinstance(raw, bool):
        return None
    try:
        goal = float(raw)
    except (TypeError, ValueError):
        return None
    return goal if math.isfinite(goal) else None


def sanitize_scenario(raw: Any, fallback_name: str) -> Tuple[Scenario, ValidationResult]:
    """
    Repair one stored scenario.

    Returns the usable Scenario plus a ValidationResult listing what was fixed.
    Never raises on malformed input.
    """
    result = ValidationResult()
    if not isinstance(raw, dict):
        if raw is not None:
            result.warnings.append(f"{fallback_name}: stored entry is not an object; reset to empty.")
        return Scenario(name=fallback_name), result

    name = raw.get("name")
    if not isinstance(name, str):
        name = fallback_name

    baseline = raw.get("baseline")
    if not isinstance(baseline, list) or len(baseline) != 12:
        result.warnings.append(f"{name}: baseline normalized to 12 months.")

    goal = _sanitize_goal(raw.get("goal"))
    if raw.get("goal") is not None and goal is None:
        result.warnings.append(f"{name}: unreadable goal {raw.get('goal')!r} cleared.")

    starting = safe_num(raw.get("starting_recurring"))
    if starting < 0:
        result.warnings.append(f"{name}: negative starting recurring {starting:g} reset to 0.")
        starting = 0.0

    scenario = Scenario(
        name=name,
        baseline=tuple(ensure_baseline_12(baseline)),
        starting_recurring=starting,
        recurring=_sanitize_ledger(raw.get("recurring"), f"{name} recurring", result),
        one_offs=_sanitize_ledger(raw.get("one_offs"), f"{name} one-offs", result),
        goal=goal,
    )
    return scenario, result
