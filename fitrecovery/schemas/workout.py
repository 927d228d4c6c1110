"""
Workout history schemas.

These mirror the records handed over by the persistence collaborator.
They are frozen snapshots: the engine never mutates its inputs.

``WorkoutRecord.date`` is deliberately loose (``Any``): records coming
from storage may carry ISO strings, datetimes, or garbage.  The engine
parses it leniently (see :func:`fitrecovery.engine.workload.parse_workout_date`)
and treats unparseable dates as "no information" rather than failing.
"""

from __future__ import annotations

import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from fitrecovery.schemas.muscle import MuscleGroup

MILES_TO_KM = 1.60934


class WeightUnit(str, Enum):
    KG = "kg"
    LBS = "lbs"


class DistanceUnit(str, Enum):
    KM = "km"
    MILES = "miles"


class TrackingType(str, Enum):
    """How an exercise's sets are measured."""

    WEIGHT_REPS = "weight_reps"
    REPS_ONLY = "reps_only"
    CARDIO = "cardio"
    DURATION = "duration"


class SetSide(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    BOTH = "both"


class WorkoutSet(BaseModel):
    """A single logged set, with optional per-side breakdown."""

    model_config = ConfigDict(frozen=True)

    set_number: int = Field(1, ge=1)

    reps: Optional[int] = Field(None, ge=0)
    weight: Optional[float] = Field(None, ge=0.0)
    unit: WeightUnit = WeightUnit.KG
    distance: Optional[float] = Field(None, ge=0.0)
    distance_unit: DistanceUnit = DistanceUnit.KM
    duration: Optional[float] = Field(None, ge=0.0, description="Seconds")

    rpe: Optional[float] = Field(None, ge=1.0, le=10.0)
    completed: bool = True

    # Side tracking
    left_reps: Optional[int] = Field(None, ge=0)
    right_reps: Optional[int] = Field(None, ge=0)
    left_weight: Optional[float] = Field(None, ge=0.0)
    right_weight: Optional[float] = Field(None, ge=0.0)
    left_distance: Optional[float] = Field(None, ge=0.0)
    right_distance: Optional[float] = Field(None, ge=0.0)
    left_duration: Optional[float] = Field(None, ge=0.0)
    right_duration: Optional[float] = Field(None, ge=0.0)
    sides: Optional[SetSide] = None

    @property
    def has_side_data(self) -> bool:
        """True when the set records anything beyond a plain bilateral set."""
        if self.sides in (SetSide.LEFT, SetSide.RIGHT):
            return True
        return any(
            v is not None for v in (
                self.left_reps, self.right_reps,
                self.left_weight, self.right_weight,
                self.left_distance, self.right_distance,
                self.left_duration, self.right_duration,
            )
        )

    def infer_tracking_type(self) -> TrackingType:
        """Guess the tracking type from which fields are filled in.

        Per-side values count the same as the shared field.
        """
        def filled(*values) -> bool:
            return any(v is not None for v in values)

        if (filled(self.weight, self.left_weight, self.right_weight)
                and filled(self.reps, self.left_reps, self.right_reps)):
            return TrackingType.WEIGHT_REPS
        if filled(self.distance, self.left_distance, self.right_distance):
            return TrackingType.CARDIO
        if filled(self.duration, self.left_duration, self.right_duration):
            return TrackingType.DURATION
        return TrackingType.REPS_ONLY


class WorkoutExercise(BaseModel):
    """An exercise performed within a workout."""

    model_config = ConfigDict(frozen=True)

    exercise_id: str = ""
    exercise_name: str = ""
    sets: list[WorkoutSet] = Field(default_factory=list)
    tracking_type: Optional[TrackingType] = None
    muscles_worked: list[MuscleGroup] = Field(
        default_factory=list,
        description="Muscles stored with the exercise; used when the "
                    "exercise is not in the built-in catalog",
    )
    total_volume: Optional[float] = Field(
        None, ge=0.0,
        description="Precomputed volume, informational only",
    )


class WorkoutRecord(BaseModel):
    """A logged workout as supplied by the persistence layer."""

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    date: Any = Field(
        ...,
        description="When the workout happened; parsed leniently by the engine",
    )
    exercises: list[WorkoutExercise] = Field(default_factory=list)
    deleted_at: Optional[datetime.datetime] = Field(
        None,
        description="Soft-delete timestamp; deleted workouts are ignored",
    )

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


def active_workouts(workouts: list[WorkoutRecord]) -> list[WorkoutRecord]:
    """Drop soft-deleted records."""
    return [w for w in workouts if not w.is_deleted]
