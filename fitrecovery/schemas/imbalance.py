"""Left/right imbalance schemas."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from fitrecovery.schemas.muscle import MuscleGroup


class ImbalanceStatus(str, Enum):
    BALANCED = "balanced"
    IMBALANCED = "imbalanced"


class ImbalanceState(str, Enum):
    OK = "ok"
    INSUFFICIENT_DATA = "insufficient_data"


class MuscleImbalance(BaseModel):
    """Asymmetric training volume on one bilateral muscle."""

    muscle: MuscleGroup
    left_volume: float = Field(..., ge=0.0)
    right_volume: float = Field(..., ge=0.0)
    imbalance_percent: float = Field(..., ge=0.0, le=100.0)
    status: ImbalanceStatus


class ImbalanceReport(BaseModel):
    """Result of imbalance detection.

    ``state`` is ``insufficient_data`` when fewer workouts than required
    were supplied; ``imbalances`` is then always empty.
    """

    state: ImbalanceState
    imbalances: list[MuscleImbalance] = Field(default_factory=list)
    workouts_considered: int = Field(0, ge=0)
    symmetry_score: int = Field(..., ge=0, le=100)
