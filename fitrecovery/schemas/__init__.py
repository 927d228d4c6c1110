"""Pydantic schemas for engine inputs and results."""

from fitrecovery.schemas.muscle import (
    BILATERAL_MUSCLES,
    MuscleGroup,
    MuscleStatus,
    RecoveryStatus,
)
from fitrecovery.schemas.workout import (
    DistanceUnit,
    SetSide,
    TrackingType,
    WeightUnit,
    WorkoutExercise,
    WorkoutRecord,
    WorkoutSet,
)
from fitrecovery.schemas.settings import ExperienceLevel, RecoverySettings, UserProfile
from fitrecovery.schemas.sleep import SleepLog
from fitrecovery.schemas.readiness import (
    ReadinessResponse,
    ReadinessStatus,
    RecoveryInsight,
    RecoveryTrend,
    TrendPoint,
)
from fitrecovery.schemas.consistency import ConsistencyReport, ConsistencyState
from fitrecovery.schemas.imbalance import (
    ImbalanceReport,
    ImbalanceState,
    ImbalanceStatus,
    MuscleImbalance,
)
from fitrecovery.schemas.report import RecoveryReport

__all__ = [
    "BILATERAL_MUSCLES",
    "MuscleGroup",
    "MuscleStatus",
    "RecoveryStatus",
    "DistanceUnit",
    "SetSide",
    "TrackingType",
    "WeightUnit",
    "WorkoutExercise",
    "WorkoutRecord",
    "WorkoutSet",
    "ExperienceLevel",
    "RecoverySettings",
    "UserProfile",
    "SleepLog",
    "ReadinessResponse",
    "ReadinessStatus",
    "RecoveryInsight",
    "RecoveryTrend",
    "TrendPoint",
    "ConsistencyReport",
    "ConsistencyState",
    "ImbalanceReport",
    "ImbalanceState",
    "ImbalanceStatus",
    "MuscleImbalance",
    "RecoveryReport",
]
