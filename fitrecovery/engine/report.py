"""
Recovery report: runs every engine component over one input snapshot.

Architecture (leaf-first):
    1. **Workload**: sets → per-muscle volume and workload
    2. **Recovery**: workload + elapsed time → per-muscle status
    3. **Readiness / consistency / imbalance**: consume the above

The report is a pure function of its arguments.  Callers recompute it
whenever workouts or settings change; nothing is cached here.
"""

from __future__ import annotations

import datetime
import logging
from typing import Iterable, Optional

from fitrecovery.engine.common import resolve_now
from fitrecovery.engine.consistency import ConsistencyConfig, calculate_consistency
from fitrecovery.engine.imbalance import ImbalanceConfig, detect_imbalances
from fitrecovery.engine.readiness import (
    ReadinessConfig,
    calculate_recovery_trend_data,
    compute_readiness,
    generate_recovery_insights,
)
from fitrecovery.engine.recovery import compute_muscle_statuses
from fitrecovery.schemas.report import RecoveryReport
from fitrecovery.schemas.settings import (
    DEFAULT_RECOVERY_SETTINGS,
    RecoverySettings,
    UserProfile,
)
from fitrecovery.schemas.sleep import SleepLog
from fitrecovery.schemas.workout import WorkoutRecord

logger = logging.getLogger(__name__)


def compute_recovery_report(
    workouts: Iterable[WorkoutRecord],
    profile: Optional[UserProfile] = None,
    recovery_settings: Optional[RecoverySettings] = None,
    sleep_logs: Optional[Iterable[SleepLog]] = None,
    now: Optional[datetime.datetime] = None,
    consistency_start: Optional[datetime.date] = None,
    consistency_end: Optional[datetime.date] = None,
    readiness_config: Optional[ReadinessConfig] = None,
    consistency_config: Optional[ConsistencyConfig] = None,
    imbalance_config: Optional[ImbalanceConfig] = None,
) -> RecoveryReport:
    """Compute the full recovery report.

    Args:
        workouts: Workout history snapshot.
        profile: User profile (experience level).
        recovery_settings: User recovery settings.
        sleep_logs: Optional sleep history.
        now: Reference time.  Defaults to the current UTC time.
        consistency_start: First day of the consistency window
            (defaults to the earliest workout).
        consistency_end: Last day of the consistency window
            (defaults to the latest workout).
        readiness_config: Optional readiness config override.
        consistency_config: Optional consistency config override.
        imbalance_config: Optional imbalance config override.

    Returns:
        :class:`RecoveryReport`.  With no workouts: readiness 100,
        consistency 0 and no imbalances.
    """
    reference = resolve_now(now)
    user = profile or UserProfile()
    cfg = recovery_settings or DEFAULT_RECOVERY_SETTINGS
    history = list(workouts)
    sleep = list(sleep_logs) if sleep_logs else []

    statuses = compute_muscle_statuses(
        history, user, cfg, sleep, reference,
    )
    readiness = compute_readiness(
        statuses, user, cfg, reference, readiness_config,
    )
    consistency = calculate_consistency(
        history, consistency_start, consistency_end, consistency_config,
    )
    imbalance = detect_imbalances(history, imbalance_config)

    logger.debug(
        "Recovery report: %d muscles, readiness %s, consistency %d, %d imbalances",
        len(statuses), readiness.score, consistency.score,
        len(imbalance.imbalances),
    )

    return RecoveryReport(
        generated_at=reference,
        muscle_statuses=statuses,
        readiness=readiness,
        consistency=consistency,
        imbalance=imbalance,
        insights=generate_recovery_insights(statuses, readiness_config),
        trend_data=calculate_recovery_trend_data(
            statuses, user.experience_level, cfg, sleep, reference,
            readiness_config,
        ),
    )
