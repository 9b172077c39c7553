"""
Core package — deal/scenario types, configuration, formatting and shared utilities.
No revenue calculations live here.
"""

from .schema import MONTHS, NUM_MONTHS, DealRecord, Ledger, Scenario, TrackingStatus
from .config import SimulatorConfig, load_config
from .utils import safe_num, ensure_baseline_12, require_month

__all__ = [
    "MONTHS",
    "NUM_MONTHS",
    "DealRecord",
    "Ledger",
    "Scenario",
    "TrackingStatus",
    "SimulatorConfig",
    "load_config",
    "safe_num",
    "ensure_baseline_12",
    "require_month",
]
