"""
Store — versioned JSON persistence and sanitization of scenario slots.
"""

from .scenario_store import ScenarioStore
from .validators import ValidationResult, sanitize_scenario

__all__ = [
    "ScenarioStore",
    "ValidationResult",
    "sanitize_scenario",
]
