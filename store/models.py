"""Serialized shapes of the scenario document."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, StrictStr

from core.schema import DealRecord, Scenario


class StoredDeal(BaseModel):
    month: int = Field(..., ge=0, le=11)
    value: float = Field(..., allow_inf_nan=False)
    id: StrictStr

    @classmethod
    def from_record(cls, d: DealRecord) -> "StoredDeal":
        return cls(month=d.month, value=d.value, id=d.id)

    def to_record(self) -> DealRecord:
        return DealRecord(month=self.month, value=self.value, id=self.id)


class StoredScenario(BaseModel):
    name: str
    baseline: List[float] = Field(default_factory=lambda: [0.0] * 12)
    starting_recurring: float = 0.0
    recurring: List[StoredDeal] = Field(default_factory=list)
    one_offs: List[StoredDeal] = Field(default_factory=list)
    goal: Optional[float] = None

    @classmethod
    def from_scenario(cls, s: Scenario) -> "StoredScenario":
        return cls(
            name=s.name,
            baseline=list(s.baseline),
            starting_recurring=s.starting_recurring,
            recurring=[StoredDeal.from_record(d) for d in s.recurring],
            one_offs=[StoredDeal.from_record(d) for d in s.one_offs],
            goal=s.goal,
        )


class StoredDocument(BaseModel):
    version: int
    scenarios: List[StoredScenario]
