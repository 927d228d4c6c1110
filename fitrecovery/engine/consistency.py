"""
Training consistency: how many calendar weeks met a workout target.

The history window is partitioned into ISO weeks (Monday start).  A week
is consistent when::

    workout_count >= ceil(target_per_week × days_in_window / 7)

where ``days_in_window`` is the number of that week's days that fall
inside the window.  Partial leading and trailing weeks are therefore
prorated.  The score is ``round(consistent_weeks / total_weeks × 100)``,
capped at 100, and 0 when there are no workouts at all.
"""

from __future__ import annotations

import datetime
import math
from collections import Counter
from typing import Iterable, Optional

from pydantic import BaseModel, Field

from fitrecovery.engine.common import ensure_utc, round_half_up
from fitrecovery.engine.workload import dated_workouts
from fitrecovery.schemas.consistency import (
    ConsistencyReport,
    ConsistencyState,
    WeekConsistency,
)
from fitrecovery.schemas.workout import WorkoutRecord


class ConsistencyConfig(BaseModel):
    """Configuration for the consistency score."""

    target_workouts_per_week: int = Field(3, ge=1, le=14)


DEFAULT_CONSISTENCY_CONFIG = ConsistencyConfig()


def week_start(day: datetime.date) -> datetime.date:
    """Monday of *day*'s ISO week."""
    return day - datetime.timedelta(days=day.weekday())


def weekly_threshold(days_in_window: int, target_per_week: int = 3) -> int:
    """Workouts needed for a week with *days_in_window* days to count."""
    return math.ceil(target_per_week * days_in_window / 7)


def _window_day(value: Optional[datetime.date]) -> Optional[datetime.date]:
    # datetime is a date subclass but does not compare with plain dates
    if isinstance(value, datetime.datetime):
        return ensure_utc(value).date()
    return value


def calculate_consistency(
    workouts: Iterable[WorkoutRecord],
    start: Optional[datetime.date] = None,
    end: Optional[datetime.date] = None,
    config: Optional[ConsistencyConfig] = None,
) -> ConsistencyReport:
    """Score training consistency over a history window.

    Args:
        workouts: Workout history.  Soft-deleted records and records with
            unparseable dates are ignored.
        start: First day of the window.  Defaults to the earliest workout.
            Datetimes are reduced to their UTC calendar day.
        end: Last day of the window.  Defaults to the latest workout.
        config: Optional :class:`ConsistencyConfig` override.

    Returns:
        :class:`ConsistencyReport`; ``no_data`` with score 0 when there
        are no workouts (or the window is empty).
    """
    cfg = config or DEFAULT_CONSISTENCY_CONFIG
    days = [when.date() for when, _ in dated_workouts(workouts)]
    if not days:
        return ConsistencyReport(score=0, state=ConsistencyState.NO_DATA)

    window_start = _window_day(start) or min(days)
    window_end = _window_day(end) or max(days)
    if window_start > window_end:
        return ConsistencyReport(score=0, state=ConsistencyState.NO_DATA)

    counts = Counter(
        week_start(d) for d in days if window_start <= d <= window_end
    )

    weeks: list[WeekConsistency] = []
    monday = week_start(window_start)
    while monday <= window_end:
        first = max(monday, window_start)
        last = min(monday + datetime.timedelta(days=6), window_end)
        days_in_window = (last - first).days + 1
        threshold = weekly_threshold(days_in_window, cfg.target_workouts_per_week)
        count = counts.get(monday, 0)
        weeks.append(WeekConsistency(
            week_start=monday,
            days_in_window=days_in_window,
            workout_count=count,
            threshold=threshold,
            consistent=count >= threshold,
        ))
        monday += datetime.timedelta(days=7)

    consistent = sum(1 for w in weeks if w.consistent)
    score = min(100, round_half_up(consistent / len(weeks) * 100))
    return ConsistencyReport(score=score, state=ConsistencyState.OK, weeks=weeks)


def calculate_consistency_score(
    workouts: Iterable[WorkoutRecord],
    start: Optional[datetime.date] = None,
    end: Optional[datetime.date] = None,
    config: Optional[ConsistencyConfig] = None,
) -> int:
    """Shortcut returning only the 0-100 score."""
    return calculate_consistency(workouts, start, end, config).score
