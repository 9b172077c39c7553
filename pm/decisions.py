"""
Strategy report — flags and a display table built from StrategyMetrics.

Answers the questions the strategy panel puts in front of the user:
  Q1: "Will I hit my goal?"            → tracking status + remaining gap
  Q2: "What does it take?"             → deals needed, deals per remaining month
  Q3: "Where is my year strong/weak?"  → strongest and weakest month
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

import pandas as pd

from core.config import BEHIND_RATIO, ON_TRACK_RATIO
from core.formatting import format_currency, format_deal_size, status_label
from core.schema import MONTHS

from .metrics import StrategyMetrics


@dataclass
class StrategyReport:
    """Structured strategy output for one scenario."""
    scenario_name: str
    metrics: StrategyMetrics
    avg_deal_size: float
    flags: List[str] = field(default_factory=list)

    @property
    def headline(self) -> str:
        """One-line goal summary; empty when no goal is set."""
        m = self.metrics
        if not m.has_goal:
            return ""
        if m.gap > 0:
            return f"{format_currency(m.gap)} remaining to goal"
        return "Goal achieved!"

    def to_dataframe(self) -> pd.DataFrame:
        """Convert to a display-friendly table."""
        m = self.metrics
        rows = [
            {"Metric": "Scenario", "Value": self.scenario_name},
            {"Metric": "Annual Revenue", "Value": format_currency(m.annual_total)},
            {
                "Metric": "New Revenue",
                "Value": f"+{format_currency(m.total_added)}" if m.total_added > 0 else "$0",
            },
            {"Metric": "Accounts Added", "Value": str(m.recurring_count)},
            {"Metric": "One-Off Deals", "Value": str(m.one_off_count)},
            {
                "Metric": "Strongest Month",
                "Value": f"{MONTHS[m.strongest_month]} · {format_currency(m.strongest_value)}",
            },
            {
                "Metric": "Weakest Month",
                "Value": f"{MONTHS[m.weakest_month]} · {format_currency(m.weakest_value)}",
            },
        ]
        if m.has_goal:
            rows.insert(1, {"Metric": "Annual Goal", "Value": format_currency(m.goal)})
            rows.append({"Metric": "Status", "Value": status_label(m.status)})
            if m.gap > 0:
                rows.extend([
                    {"Metric": "Revenue Gap", "Value": format_currency(m.gap)},
                    {
                        "Metric": f"Deals Needed (avg {format_deal_size(self.avg_deal_size)})",
                        "Value": str(m.deals_needed),
                    },
                    {"Metric": "Deals/Month Remaining", "Value": f"{m.deals_per_month}/mo"},
                ])
        if self.flags:
            rows.append({"Metric": "FLAGS", "Value": " | ".join(self.flags)})
        return pd.DataFrame(rows)


def generate_strategy_report(
    metrics: StrategyMetrics,
    *,
    scenario_name: str = "Scenario",
    avg_deal_size: float = 5_000,
    on_track_ratio: float = ON_TRACK_RATIO,
    behind_ratio: float = BEHIND_RATIO,
) -> StrategyReport:
    """
    Build a StrategyReport and raise flags.

    Parameters
    ----------
    metrics : StrategyMetrics
        Output of pm.metrics.compute_strategy_metrics()
    scenario_name : str
        Scenario identifier for the report
    avg_deal_size : float
        Deal size the "deals needed" figure was computed with (label only)
    on_track_ratio, behind_ratio : float
        Thresholds the status was classified with (flag text only)
    """
    m = metrics
    flags = []
    if m.has_goal and m.gap <= 0:
        flags.append("GOAL_ACHIEVED: projected annual revenue meets the goal")
    if m.status == "off-track":
        flags.append(f"GOAL_AT_RISK: running total below {behind_ratio:.0%} of goal pace")
    elif m.status == "behind":
        flags.append(
            f"GOAL_BEHIND: running total between {behind_ratio:.0%} and {on_track_ratio:.0%} of goal pace"
        )
    if m.total_added <= 0:
        flags.append("NO_NEW_REVENUE: no deals add revenue beyond the baseline")

    return StrategyReport(
        scenario_name=scenario_name,
        metrics=m,
        avg_deal_size=avg_deal_size,
        flags=flags,
    )
