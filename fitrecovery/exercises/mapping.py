"""
Exercise → muscle mapping models.

:class:`ExerciseMuscleMapping` describes a catalog entry;
:class:`MuscleResolution` is the outcome of attributing one logged
exercise to muscle groups, tagged with the :class:`MuscleSource` path that
produced it.  The resolver itself lives next to the table it reads, in
:func:`fitrecovery.exercises.catalog.resolve_exercise_muscles`.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from fitrecovery.schemas.muscle import MuscleGroup


class IntensityLevel(str, Enum):
    """Typical systemic intensity of an exercise."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class MuscleSource(str, Enum):
    """Which resolution path produced the muscle list."""
    CATALOG = "catalog"
    STORED = "stored"
    UNMAPPED = "unmapped"


class ExerciseMuscleMapping(BaseModel):
    """Catalog entry describing which muscles an exercise trains."""

    model_config = ConfigDict(frozen=True)

    exercise_id: str = Field(..., description="Unique slug, e.g. 'barbell_squat'")
    display_name: str = Field(..., description="Human-readable name")
    primary: tuple[MuscleGroup, ...] = Field(..., min_length=1)
    secondary: tuple[MuscleGroup, ...] = ()
    intensity: IntensityLevel = IntensityLevel.MEDIUM

    @property
    def all_muscles(self) -> tuple[MuscleGroup, ...]:
        return self.primary + self.secondary


class MuscleResolution(BaseModel):
    """Muscles attributed to one logged exercise."""

    model_config = ConfigDict(frozen=True)

    source: MuscleSource
    primary: tuple[MuscleGroup, ...] = ()
    secondary: tuple[MuscleGroup, ...] = ()
    intensity: IntensityLevel = IntensityLevel.MEDIUM

    @property
    def muscles(self) -> tuple[MuscleGroup, ...]:
        """Primary then secondary muscles, without duplicates."""
        seen: dict[MuscleGroup, None] = {}
        for m in self.primary + self.secondary:
            seen.setdefault(m, None)
        return tuple(seen)

    @property
    def is_mapped(self) -> bool:
        return self.source is not MuscleSource.UNMAPPED

    def weight_for(self, muscle: MuscleGroup) -> float:
        """Workload weighting: primary 1.0, secondary 0.5, otherwise 0."""
        if muscle in self.primary:
            return 1.0
        if muscle in self.secondary:
            return 0.5
        return 0.0


UNMAPPED = MuscleResolution(source=MuscleSource.UNMAPPED)
