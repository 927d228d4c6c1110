"""
Muscle group and muscle recovery status schemas.

A :class:`MuscleStatus` is a *derived* value: it is recomputed on demand
from workout history plus recovery settings and is never the source of
truth.  Recovery percentages are 0-100 where:

    0   = just trained, no recovery yet
    100 = fully recovered, ready to be trained again
"""

from __future__ import annotations

import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class MuscleGroup(str, Enum):
    """Tracked muscle groups."""

    # Upper body - chest
    CHEST = "chest"
    UPPER_CHEST = "upper_chest"
    LOWER_CHEST = "lower_chest"

    # Upper body - back
    BACK = "back"
    LATS = "lats"
    TRAPS = "traps"
    RHOMBOIDS = "rhomboids"
    LOWER_BACK = "lower_back"

    # Upper body - shoulders
    SHOULDERS = "shoulders"
    FRONT_DELTS = "front_delts"
    SIDE_DELTS = "side_delts"
    REAR_DELTS = "rear_delts"

    # Upper body - arms
    BICEPS = "biceps"
    TRICEPS = "triceps"
    FOREARMS = "forearms"

    # Core
    ABS = "abs"
    OBLIQUES = "obliques"

    # Lower body
    QUADS = "quads"
    HAMSTRINGS = "hamstrings"
    GLUTES = "glutes"
    CALVES = "calves"
    HIP_FLEXORS = "hip_flexors"

    @property
    def label(self) -> str:
        """Human-readable name, e.g. ``'Front Delts'``."""
        return " ".join(part.capitalize() for part in self.value.split("_"))


# Midline groups cannot be trained asymmetrically in a meaningful way.
BILATERAL_MUSCLES: frozenset[MuscleGroup] = frozenset(
    m for m in MuscleGroup if m not in (MuscleGroup.ABS, MuscleGroup.LOWER_BACK)
)


class RecoveryStatus(str, Enum):
    """Recovery label derived from the recovery percentage."""

    RECOVERED = "recovered"
    RECOVERING = "recovering"
    SORE = "sore"
    OVERWORKED = "overworked"


class MuscleStatus(BaseModel):
    """Recovery state of a single muscle group."""

    model_config = ConfigDict(frozen=True)

    muscle: MuscleGroup
    recovery_percentage: float = Field(
        ..., ge=0.0, le=100.0,
        description="Modelled readiness of the muscle to be trained again (0-100)",
    )
    recovery_status: RecoveryStatus
    workload_score: float = Field(
        0.0, ge=0.0,
        description="Workload of the most recent session that hit this muscle",
    )
    last_worked: datetime.datetime | None = Field(
        None,
        description="When the muscle was last trained (None if never)",
    )
    recommended_rest_days: int = Field(0, ge=0)
    total_volume_last_7_days: float = Field(0.0, ge=0.0)
    training_frequency: float = Field(
        0.0, ge=0.0,
        description="Sessions per week hitting this muscle, averaged over 30 days",
    )
