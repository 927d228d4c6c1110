"""Combined recovery report handed to the presentation layer."""

from __future__ import annotations

import datetime

from pydantic import BaseModel, Field

from fitrecovery.schemas.consistency import ConsistencyReport
from fitrecovery.schemas.imbalance import ImbalanceReport, MuscleImbalance
from fitrecovery.schemas.muscle import MuscleStatus
from fitrecovery.schemas.readiness import ReadinessResponse, RecoveryInsight, TrendPoint


class RecoveryReport(BaseModel):
    """Everything the dashboard needs, computed in one pass."""

    generated_at: datetime.datetime
    muscle_statuses: list[MuscleStatus] = Field(default_factory=list)
    readiness: ReadinessResponse
    consistency: ConsistencyReport
    imbalance: ImbalanceReport
    insights: list[RecoveryInsight] = Field(default_factory=list)
    trend_data: list[TrendPoint] = Field(default_factory=list)

    @property
    def readiness_score(self) -> float:
        return self.readiness.score

    @property
    def consistency_score(self) -> int:
        return self.consistency.score

    @property
    def imbalances(self) -> list[MuscleImbalance]:
        return self.imbalance.imbalances
