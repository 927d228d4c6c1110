"""Exercise catalog and exercise → muscle resolution."""

from fitrecovery.exercises.catalog import (
    EXERCISE_MUSCLE_MAP,
    all_exercises,
    get_muscle_mapping,
    resolve_exercise_muscles,
)
from fitrecovery.exercises.mapping import (
    ExerciseMuscleMapping,
    IntensityLevel,
    MuscleResolution,
    MuscleSource,
)

__all__ = [
    "EXERCISE_MUSCLE_MAP",
    "all_exercises",
    "get_muscle_mapping",
    "resolve_exercise_muscles",
    "ExerciseMuscleMapping",
    "IntensityLevel",
    "MuscleResolution",
    "MuscleSource",
]
