"""
JSON file store for the scenario slots.

Document layout:
    {"version": 2, "scenarios": [ {...}, {...}, {...} ]}

Loading never fails: a missing file, unreadable JSON, a version mismatch or a
document without a scenario list all fall back to empty scenarios (a
mismatched file is deleted first). Individual scenarios are repaired by
sanitize_scenario().
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import List, Sequence, Union

from core.config import STORAGE_VERSION
from core.logging_setup import get_logger
from core.schema import Scenario
from engine.ledger import create_scenarios

from .models import StoredDocument, StoredScenario
from .validators import ValidationResult, sanitize_scenario

logger = get_logger("revenue_simulator.store")


class ScenarioStore:
    """
    Persist a fixed, named set of scenario slots to one JSON file.

    Usage:
        store = ScenarioStore("data/scenarios.json", names=("Scenario A", "Scenario B"))
        scenarios = store.load()
        ...
        store.save(scenarios)
    """

    def __init__(
        self,
        path: Union[str, Path],
        *,
        names: Sequence[str],
        version: int = STORAGE_VERSION,
    ):
        self.path = Path(path)
        self.names = tuple(names)
        self.version = version
        self.last_result = ValidationResult()

    def _empty(self) -> List[Scenario]:
        return create_scenarios(self.names)

    def load(self) -> List[Scenario]:
        """Read the stored scenarios, one per slot name, repairing as needed."""
        self.last_result = ValidationResult()

        if not self.path.exists():
            return self._empty()

        try:
            with self.path.open("r", encoding="utf-8") as f:
                doc = json.load(f)
        except (OSError, ValueError) as e:
            self.last_result.errors.append(f"Unreadable scenario file: {e}")
            logger.warning("unreadable scenario file path=%s error=%s", self.path, e)
            return self._empty()

        if (
            not isinstance(doc, dict)
            or doc.get("version") != self.version
            or not isinstance(doc.get("scenarios"), list)
        ):
            found = doc.get("version") if isinstance(doc, dict) else None
            self.last_result.errors.append(
                f"Schema version mismatch (found {found!r}, expected {self.version}); stored data discarded."
            )
            logger.warning(
                "discarding scenario file path=%s found_version=%r expected_version=%d",
                self.path, found, self.version,
            )
            try:
                self.clear()
            except OSError as e:
                self.last_result.errors.append(f"Could not delete discarded scenario file: {e}")
                logger.error("could not delete scenario file path=%s error=%s", self.path, e)
            return self._empty()

        stored = doc["scenarios"]
        scenarios = []
        for i, name in enumerate(self.names):
            raw = stored[i] if i < len(stored) else None
            scenario, result = sanitize_scenario(raw, name)
            self.last_result.warnings.extend(result.warnings)
            scenarios.append(scenario)

        for w in self.last_result.warnings:
            logger.warning("sanitized scenario data: %s", w)
        logger.info("loaded %d scenarios path=%s", len(scenarios), self.path)
        return scenarios

    def save(self, scenarios: Sequence[Scenario]) -> None:
        """Write all scenarios; the file is replaced atomically."""
        doc = StoredDocument(
            version=self.version,
            scenarios=[StoredScenario.from_scenario(s) for s in scenarios],
        )
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=".scenarios-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(doc.model_dump_json(indent=2))
            os.replace(tmp, self.path)
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise
        logger.debug("saved %d scenarios path=%s", len(scenarios), self.path)

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()
