"""
Readiness: aggregate recovery across all tracked muscles.

Model
-----
The overall score is the rounded mean of every tracked muscle's recovery
percentage (100 when no muscle data exists).

The trend compares today's score with the score the same muscles would
have had ``trend_days`` earlier: the recovery formula is re-run with the
same workload and last-worked time but an earlier reference time::

    previous          = round(mean(recovery_pct(reference - 7d)))
    change            = current - previous
    change_percentage = round(change / previous × 100)
                        (previous == 0 → 100 if current > 0 else 0)

A muscle last worked *after* the earlier reference keeps its current
percentage in the previous average.

Status thresholds
-----------------
    ready        >= 75
    recovering   50-74
    needs_rest   < 50
"""

from __future__ import annotations

import datetime
from typing import Iterable, Optional, Sequence

from pydantic import BaseModel, Field

from fitrecovery.engine.common import hours_between, resolve_now, round_half_up
from fitrecovery.engine.recovery import (
    FULLY_RECOVERED,
    calculate_adjusted_recovery_hours,
    calculate_recovery_percentage,
)
from fitrecovery.schemas.muscle import MuscleStatus, RecoveryStatus
from fitrecovery.schemas.readiness import (
    InsightType,
    ReadinessResponse,
    ReadinessStatus,
    RecoveryInsight,
    RecoveryTrend,
    TrendPoint,
)
from fitrecovery.schemas.settings import (
    DEFAULT_RECOVERY_SETTINGS,
    ExperienceLevel,
    RecoverySettings,
    UserProfile,
)
from fitrecovery.schemas.sleep import SleepLog

# ======================================================================
# Configuration
# ======================================================================

_WEEKDAY_LABELS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


class ReadinessConfig(BaseModel):
    """Configuration for the readiness aggregation."""

    ready_threshold: float = Field(75.0, ge=0.0, le=100.0)
    recovering_threshold: float = Field(50.0, ge=0.0, le=100.0)
    trend_days: int = Field(7, ge=1)
    chart_days: int = Field(7, ge=1)


DEFAULT_READINESS_CONFIG = ReadinessConfig()


# ======================================================================
# Status labelling
# ======================================================================


def label_readiness(score: float, config: Optional[ReadinessConfig] = None) -> ReadinessStatus:
    """Map an overall score to its readiness status."""
    cfg = config or DEFAULT_READINESS_CONFIG
    if score >= cfg.ready_threshold:
        return ReadinessStatus.READY
    if score >= cfg.recovering_threshold:
        return ReadinessStatus.RECOVERING
    return ReadinessStatus.NEEDS_REST


# ======================================================================
# Core computation
# ======================================================================


def calculate_overall_recovery_score(statuses: Sequence[MuscleStatus]) -> int:
    """Rounded mean recovery percentage; 100 when there is no muscle data."""
    if not statuses:
        return int(FULLY_RECOVERED)
    total = sum(s.recovery_percentage for s in statuses)
    return round_half_up(total / len(statuses))


def _recovery_at(
    status: MuscleStatus,
    reference: datetime.datetime,
    level: ExperienceLevel,
    recovery_settings: RecoverySettings,
    sleep: Optional[SleepLog] = None,
) -> float:
    """Recovery percentage *status*'s muscle had (or will have) at *reference*."""
    if status.last_worked is None:
        return FULLY_RECOVERED

    hours_since = hours_between(reference, status.last_worked)
    if hours_since < 0:
        return status.recovery_percentage

    adjusted_hours = calculate_adjusted_recovery_hours(
        status.muscle,
        status.workload_score,
        level,
        base_rest_interval=recovery_settings.base_rest_interval,
        sleep=sleep,
        recovery_settings=recovery_settings,
    )
    return calculate_recovery_percentage(hours_since, adjusted_hours)


def calculate_recovery_trend(
    statuses: Sequence[MuscleStatus],
    level: ExperienceLevel,
    recovery_settings: Optional[RecoverySettings] = None,
    now: Optional[datetime.datetime] = None,
    config: Optional[ReadinessConfig] = None,
) -> RecoveryTrend:
    """Compare current readiness with readiness ``trend_days`` ago."""
    if not statuses:
        return RecoveryTrend(
            current=FULLY_RECOVERED,
            previous=FULLY_RECOVERED,
            change=0.0,
            change_percentage=0.0,
        )

    cfg = config or DEFAULT_READINESS_CONFIG
    settings_ = recovery_settings or DEFAULT_RECOVERY_SETTINGS
    reference = resolve_now(now) - datetime.timedelta(days=cfg.trend_days)

    current = calculate_overall_recovery_score(statuses)
    earlier = [_recovery_at(s, reference, level, settings_) for s in statuses]
    previous = round_half_up(sum(earlier) / len(earlier))

    change = current - previous
    if previous > 0:
        change_percentage = round_half_up(change / previous * 100)
    else:
        change_percentage = 100 if current > 0 else 0

    return RecoveryTrend(
        current=current,
        previous=previous,
        change=change,
        change_percentage=change_percentage,
    )


def compute_readiness(
    statuses: Sequence[MuscleStatus],
    profile: Optional[UserProfile] = None,
    recovery_settings: Optional[RecoverySettings] = None,
    now: Optional[datetime.datetime] = None,
    config: Optional[ReadinessConfig] = None,
) -> ReadinessResponse:
    """Aggregate muscle statuses into the readiness object.

    Args:
        statuses: Muscle statuses, typically from
            :func:`~fitrecovery.engine.recovery.compute_muscle_statuses`.
        profile: User profile (experience level drives the trend).
        recovery_settings: Recovery settings used for the trend.
        now: Reference time the statuses were computed for.
        config: Optional :class:`ReadinessConfig` override.

    Returns:
        :class:`ReadinessResponse` with score, status and 7-day trend.
    """
    level = (profile or UserProfile()).experience_level
    score = calculate_overall_recovery_score(statuses)
    return ReadinessResponse(
        score=score,
        status=label_readiness(score, config),
        trend=calculate_recovery_trend(
            statuses, level, recovery_settings, now, config,
        ),
    )


# ======================================================================
# Chart data
# ======================================================================


def calculate_recovery_trend_data(
    statuses: Sequence[MuscleStatus],
    level: ExperienceLevel,
    recovery_settings: Optional[RecoverySettings] = None,
    sleep_logs: Optional[Iterable[SleepLog]] = None,
    now: Optional[datetime.datetime] = None,
    config: Optional[ReadinessConfig] = None,
) -> list[TrendPoint]:
    """Average recovery for each of the last ``chart_days`` days, oldest first.

    The sleep log of each charted day, when present, adjusts that day's
    recovery windows.
    """
    cfg = config or DEFAULT_READINESS_CONFIG
    settings_ = recovery_settings or DEFAULT_RECOVERY_SETTINGS
    reference = resolve_now(now)
    sleep_by_date = {log.date: log for log in (sleep_logs or [])}

    points: list[TrendPoint] = []
    for days_back in range(cfg.chart_days - 1, -1, -1):
        target = reference - datetime.timedelta(days=days_back)
        sleep = sleep_by_date.get(target.date())
        if statuses:
            values = [_recovery_at(s, target, level, settings_, sleep) for s in statuses]
            recovery = round_half_up(sum(values) / len(values))
        else:
            recovery = int(FULLY_RECOVERED)
        points.append(TrendPoint(
            date=target.date(),
            day=_WEEKDAY_LABELS[target.weekday()],
            recovery=recovery,
        ))
    return points


# ======================================================================
# Muscle ranking and insights
# ======================================================================


def top_muscles_by_status(
    statuses: Sequence[MuscleStatus],
    count: int = 6,
    filter_by: str = "all",
    config: Optional[ReadinessConfig] = None,
) -> list[MuscleStatus]:
    """Pick muscles to highlight on the dashboard.

    * ``"ready"``: muscles at or above the ready threshold, most recovered first.
    * ``"needs_rest"``: muscles below the recovering threshold, least recovered first.
    * ``"all"``: ready muscles first, then everything else, each by
      recovery descending.
    """
    cfg = config or DEFAULT_READINESS_CONFIG
    if filter_by == "ready":
        selected = [s for s in statuses if s.recovery_percentage >= cfg.ready_threshold]
        selected.sort(key=lambda s: -s.recovery_percentage)
    elif filter_by == "needs_rest":
        selected = [s for s in statuses if s.recovery_percentage < cfg.recovering_threshold]
        selected.sort(key=lambda s: s.recovery_percentage)
    else:
        selected = sorted(
            statuses,
            key=lambda s: (s.recovery_percentage < cfg.ready_threshold, -s.recovery_percentage),
        )
    return selected[:count]


def _join_labels(statuses: Sequence[MuscleStatus]) -> str:
    return ", ".join(s.muscle.label for s in statuses[:3])


def generate_recovery_insights(
    statuses: Sequence[MuscleStatus],
    config: Optional[ReadinessConfig] = None,
) -> list[RecoveryInsight]:
    """Generate contextual recovery messages."""
    if not statuses:
        return []

    cfg = config or DEFAULT_READINESS_CONFIG
    insights: list[RecoveryInsight] = []
    overall = calculate_overall_recovery_score(statuses)

    fatigued = [
        s for s in statuses
        if s.recovery_status in (RecoveryStatus.OVERWORKED, RecoveryStatus.SORE)
    ]
    ready = [s for s in statuses if s.recovery_percentage >= cfg.ready_threshold]
    recovering = [
        s for s in statuses
        if cfg.recovering_threshold <= s.recovery_percentage < cfg.ready_threshold
    ]

    if fatigued:
        verb = "is" if len(fatigued) == 1 else "are"
        insights.append(RecoveryInsight(
            type=InsightType.WARNING,
            message=f"{_join_labels(fatigued)} {verb} under high fatigue. "
                    "Consider additional rest.",
            muscles=[s.muscle for s in fatigued],
        ))

    if overall >= cfg.ready_threshold and len(ready) >= 3:
        insights.append(RecoveryInsight(
            type=InsightType.RECOMMENDATION,
            message=f"Great recovery! {_join_labels(ready)} are ready for intense training.",
            muscles=[s.muscle for s in ready],
        ))

    if recovering and overall < cfg.ready_threshold:
        plural = "" if len(recovering) == 1 else "s"
        insights.append(RecoveryInsight(
            type=InsightType.INFO,
            message=f"{len(recovering)} muscle group{plural} still recovering. "
                    "Light activity recommended.",
        ))

    if overall >= 85 and len(ready) == len(statuses):
        insights.append(RecoveryInsight(
            type=InsightType.RECOMMENDATION,
            message="Optimal recovery achieved! All muscle groups are ready "
                    "for high-intensity training.",
        ))

    return insights
