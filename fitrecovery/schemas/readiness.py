"""
Readiness schemas.

The readiness score is the rounded mean recovery percentage across all
tracked muscles.  Status thresholds:

    ready       >= 75
    recovering  50-74
    needs_rest  < 50
"""

from __future__ import annotations

import datetime
from enum import Enum

from pydantic import BaseModel, Field

from fitrecovery.schemas.muscle import MuscleGroup


class ReadinessStatus(str, Enum):
    READY = "ready"
    RECOVERING = "recovering"
    NEEDS_REST = "needs_rest"


class RecoveryTrend(BaseModel):
    """Current readiness compared with readiness seven days earlier."""

    current: float = Field(..., ge=0.0, le=100.0)
    previous: float = Field(..., ge=0.0, le=100.0)
    change: float
    change_percentage: float


class ReadinessResponse(BaseModel):
    """Aggregate readiness consumed by the dashboard."""

    score: float = Field(..., ge=0.0, le=100.0)
    status: ReadinessStatus
    trend: RecoveryTrend


class TrendPoint(BaseModel):
    """A single day on the 7-day recovery chart."""

    date: datetime.date
    day: str = Field(..., description="Short weekday label, e.g. 'Mon'")
    recovery: float = Field(..., ge=0.0, le=100.0)


class InsightType(str, Enum):
    WARNING = "warning"
    RECOMMENDATION = "recommendation"
    INFO = "info"


class RecoveryInsight(BaseModel):
    """Contextual recovery message for the presentation layer."""

    type: InsightType
    message: str
    muscles: list[MuscleGroup] = Field(default_factory=list)
