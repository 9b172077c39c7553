"""Shared fixtures: deal/scenario builders and an isolated storage location."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

import pytest

from core.schema import DealRecord, Scenario


@pytest.fixture
def deal() -> Callable[..., DealRecord]:
    """Build a DealRecord with a readable id."""
    counter = {"n": 0}

    def _make(month: int, value: float, id: Optional[str] = None) -> DealRecord:
        counter["n"] += 1
        return DealRecord(month=month, value=value, id=id or f"d{counter['n']}")

    return _make


@pytest.fixture
def zero_baseline():
    return [0.0] * 12


@pytest.fixture
def march_deal_scenario(deal) -> Scenario:
    """Zero baseline, one $5,000 recurring deal in March (month 2)."""
    return Scenario(name="Scenario A", recurring=(deal(2, 5_000),))


@pytest.fixture
def flat_scenario() -> Scenario:
    """$1,000 baseline every month plus $500 starting recurring, no deals."""
    return Scenario(name="Scenario B", baseline=[1_000] * 12, starting_recurring=500)


@pytest.fixture(autouse=True)
def _isolate_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep SIMULATOR_* variables and a stray .env from leaking into tests."""
    for key in ("SIMULATOR_STORAGE_PATH", "SIMULATOR_LOG_LEVEL", "SIMULATOR_AVG_DEAL_SIZE"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
