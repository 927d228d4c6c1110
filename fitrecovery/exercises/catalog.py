"""
Built-in exercise → muscle catalog.

Each entry is an :class:`~fitrecovery.exercises.mapping.ExerciseMuscleMapping`
listing primary and secondary muscle groups.  The catalog is exposed as a
read-only mapping.

Lookups accept either the slug (``"barbell_squat"``) or the display name
(``"Barbell Squat"``); both are normalised the same way.

Resolution
----------
:func:`resolve_exercise_muscles` attributes a logged exercise to muscles
along an explicit, ordered path:

1. **catalog**: this table, looked up by exercise id and then by display
   name.
2. **stored**: the ``muscles_worked`` list stored with the exercise
   (custom exercises).  Stored muscles carry no primary/secondary split,
   so all of them are treated as primary at medium intensity.
3. **unmapped**: neither exists.  The exercise contributes zero volume.
   This is a known gap for custom exercises saved without muscles, not
   an error.
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Mapping

from fitrecovery.exercises.mapping import (
    UNMAPPED,
    ExerciseMuscleMapping,
    IntensityLevel,
    MuscleResolution,
    MuscleSource,
)
from fitrecovery.schemas.muscle import MuscleGroup
from fitrecovery.schemas.workout import WorkoutExercise

# ======================================================================
# Helpers
# ======================================================================

# Aliases for brevity in the table below
CH = MuscleGroup.CHEST
UC = MuscleGroup.UPPER_CHEST
BK = MuscleGroup.BACK
LT = MuscleGroup.LATS
TR = MuscleGroup.TRAPS
RH = MuscleGroup.RHOMBOIDS
LB = MuscleGroup.LOWER_BACK
SH = MuscleGroup.SHOULDERS
FD = MuscleGroup.FRONT_DELTS
SD = MuscleGroup.SIDE_DELTS
RD = MuscleGroup.REAR_DELTS
BI = MuscleGroup.BICEPS
TC = MuscleGroup.TRICEPS
FA = MuscleGroup.FOREARMS
AB = MuscleGroup.ABS
OB = MuscleGroup.OBLIQUES
QU = MuscleGroup.QUADS
HA = MuscleGroup.HAMSTRINGS
GL = MuscleGroup.GLUTES
CA = MuscleGroup.CALVES
HF = MuscleGroup.HIP_FLEXORS

HI = IntensityLevel.HIGH
MD = IntensityLevel.MEDIUM
LO = IntensityLevel.LOW


def _key(name: str) -> str:
    """Normalise an exercise id or display name into a lookup key."""
    return re.sub(r"[^a-z0-9]+", "_", name.strip().lower()).strip("_")


def _entry(
    display_name: str,
    primary: tuple[MuscleGroup, ...],
    secondary: tuple[MuscleGroup, ...],
    intensity: IntensityLevel,
) -> ExerciseMuscleMapping:
    return ExerciseMuscleMapping(
        exercise_id=_key(display_name),
        display_name=display_name,
        primary=primary,
        secondary=secondary,
        intensity=intensity,
    )


# ======================================================================
# Built-in exercises
# ======================================================================

_EXERCISES: list[ExerciseMuscleMapping] = [
    # ── Chest ─────────────────────────────────────────────────────
    _entry("Barbell Bench Press", (CH, FD), (TC,), HI),
    _entry("Dumbbell Bench Press", (CH, FD), (TC,), HI),
    _entry("Incline Dumbbell Press", (UC, FD), (TC, CH), HI),
    _entry("Cable Fly", (CH,), (FD,), MD),
    _entry("Push-ups", (CH, FD), (TC, AB), MD),

    # ── Back ──────────────────────────────────────────────────────
    _entry("Barbell Deadlift", (BK, GL, HA), (LB, TR, FA), HI),
    _entry("Barbell Row", (BK, LT, RH), (BI, TR), HI),
    _entry("Single-Arm Dumbbell Row", (LT, RH), (BI, RD), MD),
    _entry("Pull-ups", (LT, BK), (BI, TR), HI),
    _entry("Lat Pulldown", (LT,), (BI, RH), MD),
    _entry("Barbell Shrug", (TR,), (FA,), MD),
    _entry("Rowing Machine", (BK, LT), (QU, HA, BI), MD),

    # ── Shoulders ─────────────────────────────────────────────────
    _entry("Overhead Press", (SH, FD), (TC, AB), HI),
    _entry("Lateral Raises", (SD,), (FD,), MD),
    _entry("Face Pull", (RD,), (RH, TR), LO),

    # ── Arms ──────────────────────────────────────────────────────
    _entry("Barbell Bicep Curl", (BI,), (FA,), MD),
    _entry("Dumbbell Hammer Curl", (BI, FA), (), MD),
    _entry("Tricep Dips", (TC,), (FD,), HI),
    _entry("Tricep Pushdown", (TC,), (), MD),
    _entry("Close-Grip Bench Press", (TC,), (CH, FD), HI),

    # ── Core ──────────────────────────────────────────────────────
    _entry("Plank", (AB, OB), (LB,), LO),
    _entry("Russian Twists", (AB, OB), (), LO),
    _entry("Hanging Leg Raise", (AB, HF), (OB,), MD),

    # ── Legs ──────────────────────────────────────────────────────
    _entry("Barbell Squat", (QU, GL), (HA, LB, AB), HI),
    _entry("Romanian Deadlift", (HA, GL), (LB,), HI),
    _entry("Leg Press", (QU, GL), (HA,), MD),
    _entry("Walking Lunges", (QU, GL), (HA, CA), MD),
    _entry("Bulgarian Split Squat", (QU, GL), (HA, HF), HI),
    _entry("Leg Extension", (QU,), (), MD),
    _entry("Leg Curl", (HA,), (CA,), MD),
    _entry("Hip Thrust", (GL,), (HA,), MD),
    _entry("Standing Calf Raise", (CA,), (), LO),

    # ── Cardio ────────────────────────────────────────────────────
    _entry("Running", (QU, CA), (HA, GL), MD),
]

# Indexed by both slug and normalised display name.
EXERCISE_MUSCLE_MAP: Mapping[str, ExerciseMuscleMapping] = MappingProxyType(
    {
        key: ex
        for ex in _EXERCISES
        for key in (ex.exercise_id, _key(ex.display_name))
    }
)


def get_muscle_mapping(name: str | None) -> ExerciseMuscleMapping | None:
    """Look up an exercise by slug or display name.  ``None`` if unknown."""
    if not name:
        return None
    return EXERCISE_MUSCLE_MAP.get(_key(name))


def all_exercises() -> list[ExerciseMuscleMapping]:
    """Every built-in exercise, once each, in catalog order."""
    return list(_EXERCISES)


# ======================================================================
# Resolution
# ======================================================================


def resolve_exercise_muscles(exercise: WorkoutExercise) -> MuscleResolution:
    """Resolve the muscles trained by a logged exercise.

    See the module docstring for the resolution order.
    """
    mapping = get_muscle_mapping(exercise.exercise_id) or get_muscle_mapping(
        exercise.exercise_name,
    )
    if mapping is not None:
        return MuscleResolution(
            source=MuscleSource.CATALOG,
            primary=mapping.primary,
            secondary=mapping.secondary,
            intensity=mapping.intensity,
        )

    if exercise.muscles_worked:
        return MuscleResolution(
            source=MuscleSource.STORED,
            primary=tuple(dict.fromkeys(exercise.muscles_worked)),
        )

    return UNMAPPED
