"""Training consistency schemas."""

from __future__ import annotations

import datetime
from enum import Enum

from pydantic import BaseModel, Field


class ConsistencyState(str, Enum):
    OK = "ok"
    NO_DATA = "no_data"


class WeekConsistency(BaseModel):
    """Workout frequency for one ISO week of the history window."""

    week_start: datetime.date = Field(..., description="Monday of the ISO week")
    days_in_window: int = Field(..., ge=1, le=7)
    workout_count: int = Field(..., ge=0)
    threshold: int = Field(..., ge=1)
    consistent: bool


class ConsistencyReport(BaseModel):
    """Consistency score plus the per-week breakdown behind it."""

    score: int = Field(..., ge=0, le=100)
    state: ConsistencyState
    weeks: list[WeekConsistency] = Field(default_factory=list)

    @property
    def consistent_weeks(self) -> int:
        return sum(1 for w in self.weeks if w.consistent)
