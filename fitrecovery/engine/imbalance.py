"""
Left/right imbalance detection for bilateral muscles.

Left and right volume per muscle come from the workload aggregator, which
uses per-set side data when present and an even split otherwise.  A muscle
trained only with bilateral sets therefore never shows an imbalance.

    imbalance_percent = |left - right| / max(left, right) × 100

A muscle is reported when ``imbalance_percent`` exceeds the threshold
(10 %) **and** its combined volume exceeds a noise floor (100 volume
units), so small samples are not flagged.

Fewer than ``min_workouts`` (7) workouts is an insufficient-data
condition: the report is tagged ``insufficient_data`` with an empty list.
"""

from __future__ import annotations

from typing import Iterable, Mapping, Optional

from pydantic import BaseModel, Field

from fitrecovery.engine.common import round_half_up
from fitrecovery.engine.workload import SideVolume, aggregate_muscle_volume
from fitrecovery.schemas.imbalance import (
    ImbalanceReport,
    ImbalanceState,
    ImbalanceStatus,
    MuscleImbalance,
)
from fitrecovery.schemas.muscle import BILATERAL_MUSCLES, MuscleGroup
from fitrecovery.schemas.workout import WorkoutRecord, active_workouts


class ImbalanceConfig(BaseModel):
    """Configuration for imbalance detection."""

    min_workouts: int = Field(7, ge=1)
    imbalance_threshold_percent: float = Field(10.0, ge=0.0, le=100.0)
    noise_floor_volume: float = Field(100.0, ge=0.0)
    default_symmetry_score: int = Field(
        85, ge=0, le=100,
        description="Symmetry score reported while data is insufficient",
    )


DEFAULT_IMBALANCE_CONFIG = ImbalanceConfig()


def calculate_imbalance_percent(left: float, right: float) -> float:
    """Relative left/right difference, 0 when neither side has volume."""
    larger = max(left, right)
    if larger <= 0:
        return 0.0
    return abs(left - right) / larger * 100.0


def calculate_symmetry_score(volumes: Mapping[MuscleGroup, SideVolume]) -> Optional[int]:
    """Mean ``min/max`` side ratio (as %) over bilateral muscles with volume.

    Returns ``None`` when no bilateral muscle has any volume.
    """
    ratios = []
    for muscle, volume in volumes.items():
        if muscle not in BILATERAL_MUSCLES or volume.total <= 0:
            continue
        larger = max(volume.left, volume.right)
        ratios.append(min(volume.left, volume.right) / larger * 100.0)
    if not ratios:
        return None
    return round_half_up(sum(ratios) / len(ratios))


def detect_imbalances(
    workouts: Iterable[WorkoutRecord],
    config: Optional[ImbalanceConfig] = None,
) -> ImbalanceReport:
    """Flag bilateral muscles trained asymmetrically.

    Args:
        workouts: Workout history.  Soft-deleted records are ignored.
        config: Optional :class:`ImbalanceConfig` override.

    Returns:
        :class:`ImbalanceReport` with imbalances sorted by severity.
    """
    cfg = config or DEFAULT_IMBALANCE_CONFIG
    active = active_workouts(list(workouts))

    if len(active) < cfg.min_workouts:
        return ImbalanceReport(
            state=ImbalanceState.INSUFFICIENT_DATA,
            imbalances=[],
            workouts_considered=len(active),
            symmetry_score=cfg.default_symmetry_score,
        )

    volumes = aggregate_muscle_volume(active)

    imbalances: list[MuscleImbalance] = []
    for muscle in MuscleGroup:
        volume = volumes.get(muscle)
        if muscle not in BILATERAL_MUSCLES or volume is None:
            continue
        percent = calculate_imbalance_percent(volume.left, volume.right)
        if percent <= cfg.imbalance_threshold_percent:
            continue
        if volume.total <= cfg.noise_floor_volume:
            continue
        imbalances.append(MuscleImbalance(
            muscle=muscle,
            left_volume=round(volume.left, 1),
            right_volume=round(volume.right, 1),
            imbalance_percent=round(percent, 1),
            status=ImbalanceStatus.IMBALANCED,
        ))

    imbalances.sort(key=lambda i: -i.imbalance_percent)

    symmetry = calculate_symmetry_score(volumes)
    return ImbalanceReport(
        state=ImbalanceState.OK,
        imbalances=imbalances,
        workouts_considered=len(active),
        symmetry_score=symmetry if symmetry is not None else cfg.default_symmetry_score,
    )
