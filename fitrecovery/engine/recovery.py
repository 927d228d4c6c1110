"""
Muscle recovery: from last-worked time and workload to a recovery percentage.

Model
-----
Recovery is modelled as a linear climb from 0 % (just trained) to 100 %
(fully recovered) over an *adjusted* recovery window:

    base_hours      = rest_days[level][muscle] × 24
    base_hours     *= base_rest_interval / 48          (user baseline)
    adjusted_hours  = base_hours × (1 + workload / 100) × sleep_multiplier
    recovery_pct    = clamp(0, 100, hours_since_worked / adjusted_hours × 100)

Heavier recent workload stretches the window; good sleep shortens it and
poor sleep stretches it (multiplier clamped to [0.7, 1.3]).

Safe defaults
-------------
* A muscle that was never worked is 100 % recovered.
* An adjusted window that is NaN, zero or negative yields 100 % rather
  than propagating an invalid value.

Status thresholds
-----------------
    recovered    >= 90
    recovering   50-89
    sore         25-49
    overworked   < 25 with workload > 50   (otherwise sore)

A muscle whose 7-day volume exceeds the overtraining threshold is
overworked regardless of its percentage.
"""

from __future__ import annotations

import datetime
import math
from typing import Iterable, Optional

from fitrecovery.engine.common import hours_between, resolve_now
from fitrecovery.engine.workload import compute_muscle_workloads
from fitrecovery.schemas.muscle import MuscleGroup, MuscleStatus, RecoveryStatus
from fitrecovery.schemas.settings import (
    DEFAULT_RECOVERY_SETTINGS,
    REFERENCE_REST_INTERVAL_HOURS,
    ExperienceLevel,
    RecoverySettings,
    UserProfile,
)
from fitrecovery.schemas.sleep import SleepLog
from fitrecovery.schemas.workout import WorkoutRecord

FULLY_RECOVERED = 100.0

# Status thresholds (percent).
_RECOVERED_MIN = 90.0
_RECOVERING_MIN = 50.0
_SORE_MIN = 25.0
_OVERWORKED_WORKLOAD = 50.0

# Sleep multiplier bounds.
_SLEEP_MULTIPLIER_MIN = 0.7
_SLEEP_MULTIPLIER_MAX = 1.3


# ======================================================================
# Recovery window
# ======================================================================


def base_recovery_hours(
    muscle: MuscleGroup,
    level: ExperienceLevel,
    recovery_settings: Optional[RecoverySettings] = None,
) -> float:
    """Experience-tiered default recovery hours for *muscle*."""
    cfg = recovery_settings or DEFAULT_RECOVERY_SETTINGS
    return cfg.rest_days_for(muscle, level) * 24.0


def calculate_sleep_multiplier(sleep: SleepLog) -> float:
    """Recovery-window multiplier for one night of sleep.

    Quality <= 4 stretches the window, quality >= 8 shrinks it; short
    nights stretch it further and long nights shrink it slightly.
    """
    multiplier = 1.0

    if sleep.quality <= 4:
        multiplier += 0.1 + (5 - sleep.quality) * 0.05
    elif sleep.quality >= 8:
        multiplier -= 0.1 + (sleep.quality - 7) * 0.05

    if sleep.duration is not None:
        hours = sleep.duration / 60.0
        if hours < 6:
            multiplier += 0.15
        elif hours < 7:
            multiplier += 0.05
        elif hours > 9:
            multiplier -= 0.05

    return max(_SLEEP_MULTIPLIER_MIN, min(_SLEEP_MULTIPLIER_MAX, multiplier))


def calculate_adjusted_recovery_hours(
    muscle: MuscleGroup,
    workload_score: float,
    level: ExperienceLevel,
    base_rest_interval: Optional[float] = None,
    sleep: Optional[SleepLog] = None,
    recovery_settings: Optional[RecoverySettings] = None,
) -> float:
    """Hours *muscle* needs to go from 0 % to 100 % recovered."""
    hours = base_recovery_hours(muscle, level, recovery_settings)

    if base_rest_interval is not None:
        hours *= base_rest_interval / REFERENCE_REST_INTERVAL_HOURS

    hours *= 1.0 + workload_score / 100.0

    if sleep is not None:
        hours *= calculate_sleep_multiplier(sleep)

    return hours


def calculate_recovery_percentage(hours_since: float, adjusted_hours: float) -> float:
    """Clamp ``hours_since / adjusted_hours`` to a 0-100 percentage.

    Invalid windows (NaN, zero, negative, infinite) and NaN elapsed times
    fall back to fully recovered.
    """
    if not math.isfinite(adjusted_hours) or adjusted_hours <= 0:
        return FULLY_RECOVERED
    if math.isnan(hours_since):
        return FULLY_RECOVERED
    percentage = hours_since / adjusted_hours * 100.0
    return min(100.0, max(0.0, percentage))


def label_recovery_status(recovery_percentage: float, workload_score: float) -> RecoveryStatus:
    """Map a recovery percentage to its status label."""
    if recovery_percentage >= _RECOVERED_MIN:
        return RecoveryStatus.RECOVERED
    if recovery_percentage >= _RECOVERING_MIN:
        return RecoveryStatus.RECOVERING
    if recovery_percentage >= _SORE_MIN:
        return RecoveryStatus.SORE
    if workload_score > _OVERWORKED_WORKLOAD:
        return RecoveryStatus.OVERWORKED
    return RecoveryStatus.SORE


def select_recent_sleep(
    sleep_logs: Optional[Iterable[SleepLog]],
    now: datetime.datetime,
) -> Optional[SleepLog]:
    """Most recent sleep log dated on or before *now*."""
    if not sleep_logs:
        return None
    candidates = [log for log in sleep_logs if log.date <= now.date()]
    if not candidates:
        return None
    return max(candidates, key=lambda log: log.date)


# ======================================================================
# Per-muscle status
# ======================================================================


def calculate_muscle_status(
    muscle: MuscleGroup,
    last_worked: Optional[datetime.datetime],
    workload_score: float,
    level: ExperienceLevel,
    now: datetime.datetime,
    recovery_settings: Optional[RecoverySettings] = None,
    sleep: Optional[SleepLog] = None,
    total_volume_last_7_days: float = 0.0,
    training_frequency: float = 0.0,
) -> MuscleStatus:
    """Compute the :class:`MuscleStatus` of a single muscle at *now*."""
    cfg = recovery_settings or DEFAULT_RECOVERY_SETTINGS

    if last_worked is None:
        return MuscleStatus(
            muscle=muscle,
            recovery_percentage=FULLY_RECOVERED,
            recovery_status=RecoveryStatus.RECOVERED,
            workload_score=0.0,
            last_worked=None,
            recommended_rest_days=0,
            total_volume_last_7_days=total_volume_last_7_days,
            training_frequency=training_frequency,
        )

    hours_since = hours_between(now, last_worked)
    adjusted_hours = calculate_adjusted_recovery_hours(
        muscle, workload_score, level,
        base_rest_interval=cfg.base_rest_interval,
        sleep=sleep,
        recovery_settings=cfg,
    )
    percentage = calculate_recovery_percentage(hours_since, adjusted_hours)

    status = label_recovery_status(percentage, workload_score)
    if total_volume_last_7_days > cfg.overtraining_threshold * 1000:
        status = RecoveryStatus.OVERWORKED

    if math.isfinite(adjusted_hours) and adjusted_hours > 0:
        remaining = max(0.0, adjusted_hours - max(hours_since, 0.0))
        rest_days = math.ceil(remaining / 24.0)
    else:
        rest_days = 0

    return MuscleStatus(
        muscle=muscle,
        recovery_percentage=round(percentage, 1),
        recovery_status=status,
        workload_score=workload_score,
        last_worked=last_worked,
        recommended_rest_days=rest_days,
        total_volume_last_7_days=total_volume_last_7_days,
        training_frequency=training_frequency,
    )


def compute_muscle_statuses(
    workouts: Iterable[WorkoutRecord],
    profile: Optional[UserProfile] = None,
    recovery_settings: Optional[RecoverySettings] = None,
    sleep_logs: Optional[Iterable[SleepLog]] = None,
    now: Optional[datetime.datetime] = None,
    include_untrained: bool = False,
) -> list[MuscleStatus]:
    """Compute recovery status for every tracked muscle.

    Args:
        workouts: Workout history (any order).  Soft-deleted records are
            ignored; muscles seen only in records with unparseable dates
            are reported fully recovered.
        profile: User profile (experience level).  Defaults apply when
            omitted.
        recovery_settings: User recovery settings.
        sleep_logs: Optional sleep history; the latest night on or before
            *now* adjusts every muscle's recovery window.
        now: Reference time.  Defaults to the current UTC time.
        include_untrained: Also return 100 % entries for muscle groups
            that never appear in the history.

    Returns:
        One :class:`MuscleStatus` per muscle, in :class:`MuscleGroup` order.
    """
    reference = resolve_now(now)
    level = (profile or UserProfile()).experience_level
    cfg = recovery_settings or DEFAULT_RECOVERY_SETTINGS
    sleep = select_recent_sleep(list(sleep_logs) if sleep_logs else None, reference)

    workloads = compute_muscle_workloads(workouts, reference)

    statuses: list[MuscleStatus] = []
    for muscle in MuscleGroup:
        summary = workloads.get(muscle)
        if summary is None:
            if include_untrained:
                statuses.append(calculate_muscle_status(
                    muscle, None, 0.0, level, reference, cfg,
                ))
            continue
        statuses.append(calculate_muscle_status(
            muscle,
            summary.last_worked,
            summary.workload_score,
            level,
            reference,
            recovery_settings=cfg,
            sleep=sleep,
            total_volume_last_7_days=summary.total_volume_last_7_days,
            training_frequency=summary.training_frequency,
        ))
    return statuses
