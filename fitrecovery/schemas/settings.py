"""
User profile and recovery settings schemas.

Default rest-day tables are expressed in **days per muscle group** for each
experience level.  Muscles missing from a table fall back to
``fallback_rest_days`` for that level.

    Level         chest back shoulders biceps triceps quads hams glutes abs
    beginner        3    3      2        2       2      4     4     3    1
    intermediate    2    2      2        1       1      3     3     2    1
    advanced        1    1      1        1       1      2     2     1    1
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from fitrecovery.core.config import settings
from fitrecovery.schemas.muscle import MuscleGroup
from fitrecovery.schemas.workout import WeightUnit


class ExperienceLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


# Base interval the rest-day tables are calibrated against (hours).
REFERENCE_REST_INTERVAL_HOURS = 48.0

MIN_BASE_REST_INTERVAL_HOURS = 12.0
MAX_BASE_REST_INTERVAL_HOURS = 72.0

_BEGINNER_REST_DAYS: dict[MuscleGroup, float] = {
    MuscleGroup.CHEST: 3,
    MuscleGroup.BACK: 3,
    MuscleGroup.SHOULDERS: 2,
    MuscleGroup.BICEPS: 2,
    MuscleGroup.TRICEPS: 2,
    MuscleGroup.QUADS: 4,
    MuscleGroup.HAMSTRINGS: 4,
    MuscleGroup.GLUTES: 3,
    MuscleGroup.ABS: 1,
}

_INTERMEDIATE_REST_DAYS: dict[MuscleGroup, float] = {
    MuscleGroup.CHEST: 2,
    MuscleGroup.BACK: 2,
    MuscleGroup.SHOULDERS: 2,
    MuscleGroup.BICEPS: 1,
    MuscleGroup.TRICEPS: 1,
    MuscleGroup.QUADS: 3,
    MuscleGroup.HAMSTRINGS: 3,
    MuscleGroup.GLUTES: 2,
    MuscleGroup.ABS: 1,
}

_ADVANCED_REST_DAYS: dict[MuscleGroup, float] = {
    MuscleGroup.CHEST: 1,
    MuscleGroup.BACK: 1,
    MuscleGroup.SHOULDERS: 1,
    MuscleGroup.BICEPS: 1,
    MuscleGroup.TRICEPS: 1,
    MuscleGroup.QUADS: 2,
    MuscleGroup.HAMSTRINGS: 2,
    MuscleGroup.GLUTES: 1,
    MuscleGroup.ABS: 1,
}

_FALLBACK_REST_DAYS: dict[ExperienceLevel, float] = {
    ExperienceLevel.BEGINNER: 2,
    ExperienceLevel.INTERMEDIATE: 2,
    ExperienceLevel.ADVANCED: 1,
}


class RecoverySettings(BaseModel):
    """User-editable recovery settings.  Affects every recalculation."""

    base_rest_interval: float = Field(
        default_factory=lambda: settings.DEFAULT_BASE_REST_INTERVAL_HOURS,
        ge=MIN_BASE_REST_INTERVAL_HOURS, le=MAX_BASE_REST_INTERVAL_HOURS,
        description="Baseline rest interval in hours; rest-day tables are "
                    "scaled by base_rest_interval / 48",
    )
    beginner_rest_days: dict[MuscleGroup, float] = Field(
        default_factory=lambda: dict(_BEGINNER_REST_DAYS),
    )
    intermediate_rest_days: dict[MuscleGroup, float] = Field(
        default_factory=lambda: dict(_INTERMEDIATE_REST_DAYS),
    )
    advanced_rest_days: dict[MuscleGroup, float] = Field(
        default_factory=lambda: dict(_ADVANCED_REST_DAYS),
    )
    fallback_rest_days: dict[ExperienceLevel, float] = Field(
        default_factory=lambda: dict(_FALLBACK_REST_DAYS),
    )
    overtraining_threshold: float = Field(
        80.0, ge=0.0,
        description="7-day volume (in thousands of volume units) above which "
                    "a muscle is flagged overworked",
    )

    # Accepted for parity with the settings store; not used by the engine.
    muscle_recovery_alerts_enabled: bool = False

    def rest_days_for(self, muscle: MuscleGroup, level: ExperienceLevel) -> float:
        """Default rest days for *muscle* at *level*."""
        table = {
            ExperienceLevel.BEGINNER: self.beginner_rest_days,
            ExperienceLevel.INTERMEDIATE: self.intermediate_rest_days,
            ExperienceLevel.ADVANCED: self.advanced_rest_days,
        }[level]
        days = table.get(muscle)
        if not days:
            return self.fallback_rest_days.get(level, 2)
        return days


DEFAULT_RECOVERY_SETTINGS = RecoverySettings()


class UserProfile(BaseModel):
    """The slice of the user profile the engine cares about."""

    experience_level: ExperienceLevel = Field(
        default_factory=lambda: ExperienceLevel(settings.DEFAULT_EXPERIENCE_LEVEL),
    )
    preferred_unit: WeightUnit = WeightUnit.KG
