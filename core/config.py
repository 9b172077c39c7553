"""
Simulator configuration.

Deal presets, scenario slots, goal-tracking thresholds and storage settings.
Defaults live on the dataclass; load_config() layers config.yaml and
environment variables (.env supported) on top.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Any, Dict, Tuple

import yaml
from dotenv import load_dotenv

# Goal-pace ratio at or above which a scenario is on track.
ON_TRACK_RATIO = 0.95
# Goal-pace ratio at or above which a scenario is only slightly behind.
BEHIND_RATIO = 0.70

STORAGE_VERSION = 2


@dataclass(frozen=True)
class SimulatorConfig:
    # preset deal sizes offered per month
    deal_sizes: Tuple[float, ...] = (1_500, 2_500, 5_000, 10_000)
    one_off_sizes: Tuple[float, ...] = (500, 1_000, 2_500, 5_000)

    scenario_names: Tuple[str, ...] = ("Scenario A", "Scenario B", "Scenario C")

    # average deal size used to translate a revenue gap into a deal count
    avg_deal_size: float = 5_000

    on_track_ratio: float = ON_TRACK_RATIO
    behind_ratio: float = BEHIND_RATIO

    storage_path: str = "data/scenarios.json"
    storage_version: int = STORAGE_VERSION

    log_level: str = "INFO"


def _deep_get(d: Dict[str, Any], path: str, default=None):
    cur = d
    for part in path.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return default
        cur = cur[part]
    return cur


def _env_or_cfg(cfg: Dict[str, Any], key: str, cfg_path: str, default):
    # empty env vars count as unset
    v = os.getenv(key)
    if v is None or v.strip() == "":
        return _deep_get(cfg, cfg_path, default)
    return v.strip()


def load_config(config_path: str = "config.yaml") -> SimulatorConfig:
    """
    Load config.yaml (if present) plus SIMULATOR_* overrides from .env/environment.
    """
    load_dotenv()

    cfg: Dict[str, Any] = {}
    if os.path.exists(config_path):
        with open(config_path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}

    base = SimulatorConfig()

    deal_sizes = _deep_get(cfg, "deals.recurring_sizes", base.deal_sizes)
    one_off_sizes = _deep_get(cfg, "deals.one_off_sizes", base.one_off_sizes)
    scenario_names = _deep_get(cfg, "scenarios.names", base.scenario_names)

    avg_deal_size = float(_env_or_cfg(cfg, "SIMULATOR_AVG_DEAL_SIZE", "deals.avg_size", base.avg_deal_size))
    on_track_ratio = float(_deep_get(cfg, "goal.on_track_ratio", base.on_track_ratio))
    behind_ratio = float(_deep_get(cfg, "goal.behind_ratio", base.behind_ratio))

    if not 0 < behind_ratio <= on_track_ratio:
        raise ValueError(
            f"Goal thresholds must satisfy 0 < behind_ratio <= on_track_ratio, "
            f"got behind={behind_ratio}, on_track={on_track_ratio}"
        )
    if avg_deal_size <= 0:
        raise ValueError(f"avg_deal_size must be positive, got {avg_deal_size}")

    storage_path = _env_or_cfg(cfg, "SIMULATOR_STORAGE_PATH", "storage.path", base.storage_path)
    storage_version = int(_deep_get(cfg, "storage.version", base.storage_version))
    log_level = str(_env_or_cfg(cfg, "SIMULATOR_LOG_LEVEL", "app.log_level", base.log_level)).upper()

    return replace(
        base,
        deal_sizes=tuple(deal_sizes),
        one_off_sizes=tuple(one_off_sizes),
        scenario_names=tuple(str(n) for n in scenario_names),
        avg_deal_size=avg_deal_size,
        on_track_ratio=on_track_ratio,
        behind_ratio=behind_ratio,
        storage_path=str(storage_path),
        storage_version=storage_version,
        log_level=log_level,
    )
