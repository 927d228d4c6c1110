"""
Workload aggregation: from logged sets to per-muscle training volume.

Model
-----
Set volume depends on how the exercise is tracked:

    weight_reps   reps × weight
    reps_only     reps
    cardio        distance in km (miles × 1.60934)
    duration      seconds

Uncompleted sets contribute nothing.

Each exercise's volume is attributed to the muscles resolved by
:func:`~fitrecovery.exercises.catalog.resolve_exercise_muscles` and
**split evenly** across them.  Within a set, volume is split left/right
according to the recorded side values when the set carries any; otherwise
an even 50/50 split is assumed.  Exercises with no resolvable muscles
contribute zero volume.

Workload score
--------------
The workload score is a per-muscle fatigue measure for the most recent
session that hit the muscle::

    share     = exercise_volume / n_muscles × weight   (primary 1.0, secondary 0.5)
    workload  = share / volume_scale × intensity_mult × rpe_mult

with intensity multipliers high 1.5 / medium 1.0 / low 0.5 and
``rpe_mult = 1 + (rpe - 5) / 10`` (first completed set's RPE, 1.0 when
absent).  ``volume_scale`` (100 volume units per point by default) keeps
scores in the 0-100+ range the recovery model expects.
"""

from __future__ import annotations

import datetime
import logging
from typing import Any, Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from fitrecovery.core.config import settings
from fitrecovery.engine.common import ensure_utc
from fitrecovery.exercises.catalog import resolve_exercise_muscles
from fitrecovery.exercises.mapping import IntensityLevel, MuscleResolution
from fitrecovery.schemas.muscle import MuscleGroup
from fitrecovery.schemas.workout import (
    MILES_TO_KM,
    DistanceUnit,
    SetSide,
    TrackingType,
    WorkoutExercise,
    WorkoutRecord,
    WorkoutSet,
    active_workouts,
)

logger = logging.getLogger(__name__)

_DATETIME_ADAPTER = TypeAdapter(datetime.datetime)

_INTENSITY_MULTIPLIER: dict[IntensityLevel, float] = {
    IntensityLevel.HIGH: 1.5,
    IntensityLevel.MEDIUM: 1.0,
    IntensityLevel.LOW: 0.5,
}

VOLUME_WINDOW_DAYS = 7
FREQUENCY_WINDOW_DAYS = 30


# ======================================================================
# Value objects
# ======================================================================


class SideVolume(BaseModel):
    """Left/right training volume."""

    model_config = ConfigDict(frozen=True)

    left: float = Field(0.0, ge=0.0)
    right: float = Field(0.0, ge=0.0)

    @property
    def total(self) -> float:
        return self.left + self.right

    def add(self, other: SideVolume) -> SideVolume:
        return SideVolume(left=self.left + other.left, right=self.right + other.right)

    def scaled(self, factor: float) -> SideVolume:
        return SideVolume(left=self.left * factor, right=self.right * factor)

    @classmethod
    def zero(cls) -> SideVolume:
        return cls()

    @classmethod
    def even(cls, total: float) -> SideVolume:
        return cls(left=total / 2.0, right=total / 2.0)


class MuscleWorkload(BaseModel):
    """Time-based workload summary for one muscle, relative to "now"."""

    muscle: MuscleGroup
    last_worked: Optional[datetime.datetime] = None
    workload_score: float = Field(0.0, ge=0.0)
    total_volume_last_7_days: float = Field(0.0, ge=0.0)
    training_frequency: float = Field(0.0, ge=0.0)


# ======================================================================
# Dates
# ======================================================================


def parse_workout_date(value: Any) -> datetime.datetime | None:
    """Parse a workout date leniently into an aware UTC datetime.

    Returns ``None`` (and logs a warning) for values that cannot be
    interpreted as a point in time, including offsets that push the
    value outside the representable UTC range.
    """
    if isinstance(value, datetime.date) and not isinstance(value, datetime.datetime):
        return datetime.datetime.combine(value, datetime.time(), tzinfo=datetime.timezone.utc)
    try:
        if isinstance(value, datetime.datetime):
            return ensure_utc(value)
        return ensure_utc(_DATETIME_ADAPTER.validate_python(value))
    except (ValidationError, OverflowError):
        logger.warning("Ignoring workout with unparseable date %r", value)
        return None


def dated_workouts(
    workouts: Iterable[WorkoutRecord],
) -> list[tuple[datetime.datetime, WorkoutRecord]]:
    """Active workouts with a valid date, oldest first."""
    result = []
    for workout in active_workouts(list(workouts)):
        when = parse_workout_date(workout.date)
        if when is not None:
            result.append((when, workout))
    result.sort(key=lambda pair: pair[0])
    return result


# ======================================================================
# Set / exercise volume
# ======================================================================


def _km(distance: float, unit: DistanceUnit) -> float:
    return distance * MILES_TO_KM if unit is DistanceUnit.MILES else distance


def _volume_from(
    kind: TrackingType,
    workout_set: WorkoutSet,
    reps: Optional[int],
    weight: Optional[float],
    distance: Optional[float],
    duration: Optional[float],
) -> float:
    if kind is TrackingType.WEIGHT_REPS:
        if reps is None or weight is None:
            return 0.0
        return reps * weight
    if kind is TrackingType.REPS_ONLY:
        return float(reps) if reps is not None else 0.0
    if kind is TrackingType.CARDIO:
        return _km(distance, workout_set.distance_unit) if distance is not None else 0.0
    if kind is TrackingType.DURATION:
        return duration if duration is not None else 0.0
    return 0.0


def compute_set_volume(
    workout_set: WorkoutSet,
    tracking_type: Optional[TrackingType] = None,
) -> float:
    """Volume of a single set (0 for uncompleted sets)."""
    if not workout_set.completed:
        return 0.0
    kind = tracking_type or workout_set.infer_tracking_type()
    return _volume_from(
        kind, workout_set,
        workout_set.reps, workout_set.weight,
        workout_set.distance, workout_set.duration,
    )


def split_set_volume(
    workout_set: WorkoutSet,
    tracking_type: Optional[TrackingType] = None,
) -> SideVolume:
    """Split a set's volume into left and right.

    * ``sides == "left"`` / ``"right"`` puts the whole set on that side.
    * Explicit ``left_*`` / ``right_*`` values are used per side, falling
      back to the shared field for whatever a side does not record.
    * Otherwise the set is split 50/50.
    """
    if not workout_set.completed:
        return SideVolume.zero()

    kind = tracking_type or workout_set.infer_tracking_type()

    if workout_set.sides is SetSide.LEFT:
        return SideVolume(left=compute_set_volume(workout_set, kind))
    if workout_set.sides is SetSide.RIGHT:
        return SideVolume(right=compute_set_volume(workout_set, kind))

    if not workout_set.has_side_data:
        return SideVolume.even(compute_set_volume(workout_set, kind))

    s = workout_set
    left = _volume_from(
        kind, s,
        s.left_reps if s.left_reps is not None else s.reps,
        s.left_weight if s.left_weight is not None else s.weight,
        s.left_distance if s.left_distance is not None else s.distance,
        s.left_duration if s.left_duration is not None else s.duration,
    )
    right = _volume_from(
        kind, s,
        s.right_reps if s.right_reps is not None else s.reps,
        s.right_weight if s.right_weight is not None else s.weight,
        s.right_distance if s.right_distance is not None else s.distance,
        s.right_duration if s.right_duration is not None else s.duration,
    )
    return SideVolume(left=left, right=right)


def exercise_side_volume(exercise: WorkoutExercise) -> SideVolume:
    """Left/right volume of a whole exercise."""
    total = SideVolume.zero()
    for workout_set in exercise.sets:
        total = total.add(split_set_volume(workout_set, exercise.tracking_type))
    return total


def exercise_volume(exercise: WorkoutExercise) -> float:
    return exercise_side_volume(exercise).total


# ======================================================================
# Aggregation
# ======================================================================


def _mapped_exercises(
    workout: WorkoutRecord,
) -> list[tuple[WorkoutExercise, MuscleResolution]]:
    result = []
    for exercise in workout.exercises:
        resolution = resolve_exercise_muscles(exercise)
        if not resolution.is_mapped:
            logger.debug(
                "No muscle mapping for exercise %r; it contributes no volume",
                exercise.exercise_name or exercise.exercise_id,
            )
            continue
        result.append((exercise, resolution))
    return result


def aggregate_muscle_volume(
    workouts: Iterable[WorkoutRecord],
    since: Optional[datetime.datetime] = None,
    until: Optional[datetime.datetime] = None,
) -> dict[MuscleGroup, SideVolume]:
    """Accumulate left/right volume per muscle.

    Args:
        workouts: Workout history.  Soft-deleted records are skipped.
        since: Optional inclusive lower bound of the history window.
        until: Optional inclusive upper bound of the history window.

    When a window bound is given, workouts with unparseable dates are
    skipped (they cannot be placed in the window).

    Returns:
        ``{muscle: SideVolume}`` for every muscle that received volume.
    """
    since_utc = ensure_utc(since) if since is not None else None
    until_utc = ensure_utc(until) if until is not None else None
    windowed = since_utc is not None or until_utc is not None

    totals: dict[MuscleGroup, SideVolume] = {}

    for workout in active_workouts(list(workouts)):
        if windowed:
            when = parse_workout_date(workout.date)
            if when is None:
                continue
            if since_utc is not None and when < since_utc:
                continue
            if until_utc is not None and when > until_utc:
                continue

        for exercise, resolution in _mapped_exercises(workout):
            volume = exercise_side_volume(exercise)
            if volume.total <= 0:
                continue
            muscles = resolution.muscles
            share = volume.scaled(1.0 / len(muscles))
            for muscle in muscles:
                totals[muscle] = totals.get(muscle, SideVolume.zero()).add(share)

    return totals


def calculate_workload_score(
    volume: float,
    intensity: IntensityLevel,
    rpe: Optional[float] = None,
    volume_scale: Optional[float] = None,
) -> float:
    """Convert a muscle's share of exercise volume into workload points."""
    scale = volume_scale or settings.WORKLOAD_VOLUME_SCALE
    base = (volume / scale) * _INTENSITY_MULTIPLIER[intensity]
    rpe_multiplier = 1.0 + (rpe - 5.0) / 10.0 if rpe else 1.0
    return round(max(0.0, base * rpe_multiplier), 1)


def _first_completed_rpe(exercise: WorkoutExercise) -> Optional[float]:
    for workout_set in exercise.sets:
        if workout_set.completed and workout_set.rpe is not None:
            return workout_set.rpe
    return None


def _workout_muscle_shares(
    workout: WorkoutRecord,
    volume_scale: Optional[float],
) -> dict[MuscleGroup, tuple[float, float]]:
    """``{muscle: (weighted_volume, workload_score)}`` for one workout."""
    shares: dict[MuscleGroup, tuple[float, float]] = {}
    for exercise, resolution in _mapped_exercises(workout):
        muscles = resolution.muscles
        per_muscle = exercise_volume(exercise) / len(muscles)
        rpe = _first_completed_rpe(exercise)
        for muscle in muscles:
            weighted = per_muscle * resolution.weight_for(muscle)
            workload = calculate_workload_score(
                weighted, resolution.intensity, rpe, volume_scale,
            )
            volume, score = shares.get(muscle, (0.0, 0.0))
            shares[muscle] = (volume + weighted, score + workload)
    return shares


def compute_muscle_workloads(
    workouts: Iterable[WorkoutRecord],
    now: datetime.datetime,
    volume_scale: Optional[float] = None,
) -> dict[MuscleGroup, MuscleWorkload]:
    """Per-muscle workload summary as of *now*.

    Only workouts dated at or before *now* are considered.  A muscle's
    workload score comes from the most recent workout that trained it
    (workouts sharing that exact timestamp are summed).

    Workouts with unparseable dates are logged and carry no timing
    information: muscles trained only in such workouts get a summary
    without ``last_worked``, which reads as fully recovered.
    """
    now = ensure_utc(now)
    volume_since = now - datetime.timedelta(days=VOLUME_WINDOW_DAYS)
    frequency_since = now - datetime.timedelta(days=FREQUENCY_WINDOW_DAYS)

    last_worked: dict[MuscleGroup, datetime.datetime] = {}
    workload: dict[MuscleGroup, float] = {}
    volume_7d: dict[MuscleGroup, float] = {}
    training_days: dict[MuscleGroup, set[datetime.date]] = {}
    undated: set[MuscleGroup] = set()

    for workout in active_workouts(list(workouts)):
        when = parse_workout_date(workout.date)
        if when is None:
            undated.update(_workout_muscle_shares(workout, volume_scale))
            continue
        if when > now:
            continue
        for muscle, (volume, score) in _workout_muscle_shares(workout, volume_scale).items():
            previous = last_worked.get(muscle)
            if previous is None or when > previous:
                last_worked[muscle] = when
                workload[muscle] = score
            elif when == previous:
                workload[muscle] += score

            if when >= volume_since:
                volume_7d[muscle] = volume_7d.get(muscle, 0.0) + volume
            if when >= frequency_since:
                training_days.setdefault(muscle, set()).add(when.date())

    summaries = {
        muscle: MuscleWorkload(
            muscle=muscle,
            last_worked=worked,
            workload_score=round(workload.get(muscle, 0.0), 1),
            total_volume_last_7_days=round(volume_7d.get(muscle, 0.0), 1),
            training_frequency=round(
                len(training_days.get(muscle, ())) / FREQUENCY_WINDOW_DAYS * 7, 2,
            ),
        )
        for muscle, worked in last_worked.items()
    }
    for muscle in undated - summaries.keys():
        summaries[muscle] = MuscleWorkload(muscle=muscle)
    return summaries
