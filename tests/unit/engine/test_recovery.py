"""
Unit tests for the muscle recovery model.

Tests the linear recovery window, sleep and workload adjustments,
status labelling and the per-muscle status computation.
"""

import datetime
import math

import pytest

from fitrecovery.engine.recovery import (
    base_recovery_hours,
    calculate_adjusted_recovery_hours,
    calculate_muscle_status,
    calculate_recovery_percentage,
    calculate_sleep_multiplier,
    compute_muscle_statuses,
    label_recovery_status,
    select_recent_sleep,
)
from fitrecovery.schemas.muscle import MuscleGroup, RecoveryStatus
from fitrecovery.schemas.settings import ExperienceLevel, RecoverySettings, UserProfile
from fitrecovery.schemas.sleep import SleepLog
from fitrecovery.schemas.workout import WorkoutExercise, WorkoutRecord, WorkoutSet

UTC = datetime.timezone.utc
NOW = datetime.datetime(2026, 3, 10, 12, 0, tzinfo=UTC)

BEGINNER = ExperienceLevel.BEGINNER
INTERMEDIATE = ExperienceLevel.INTERMEDIATE
ADVANCED = ExperienceLevel.ADVANCED


def _hours_ago(hours: float) -> datetime.datetime:
    return NOW - datetime.timedelta(hours=hours)


def _leg_extension(when, weight: float = 100.0, **kwargs) -> WorkoutRecord:
    return WorkoutRecord(
        date=when,
        exercises=[WorkoutExercise(
            exercise_name="Leg Extension",
            sets=[WorkoutSet(reps=10, weight=weight)],
        )],
        **kwargs,
    )


# ======================================================================
# Recovery window
# ======================================================================


class TestBaseRecoveryHours:

    @pytest.mark.parametrize("muscle,level,expected", [
        (MuscleGroup.SHOULDERS, BEGINNER, 48),
        (MuscleGroup.QUADS, BEGINNER, 96),
        (MuscleGroup.CHEST, INTERMEDIATE, 48),
        (MuscleGroup.BICEPS, INTERMEDIATE, 24),
        (MuscleGroup.HAMSTRINGS, ADVANCED, 48),
        # Not in the tables → per-level fallback
        (MuscleGroup.FOREARMS, BEGINNER, 48),
        (MuscleGroup.FOREARMS, ADVANCED, 24),
    ])
    def test_tables(self, muscle, level, expected):
        assert base_recovery_hours(muscle, level) == expected

    def test_custom_table(self):
        cfg = RecoverySettings(beginner_rest_days={MuscleGroup.SHOULDERS: 4})
        assert base_recovery_hours(MuscleGroup.SHOULDERS, BEGINNER, cfg) == 96
        # Missing from the custom table → fallback
        assert base_recovery_hours(MuscleGroup.CHEST, BEGINNER, cfg) == 48


class TestSleepMultiplier:

    @pytest.mark.parametrize("quality,duration,expected", [
        (6, None, 1.0),
        (5, None, 1.0),
        (7, None, 1.0),
        (4, None, 1.15),
        (1, None, 1.3),
        (8, None, 0.85),
        (10, None, 0.75),
        (6, 390, 1.05),      # 6.5 h
        (6, 300, 1.15),      # 5 h
        (6, 480, 1.0),       # 8 h
        (6, 600, 0.95),      # 10 h
        (10, 600, 0.7),
        (1, 300, 1.3),       # clamped
    ])
    def test_multiplier(self, quality, duration, expected):
        sleep = SleepLog(date=NOW.date(), quality=quality, duration=duration)
        assert calculate_sleep_multiplier(sleep) == pytest.approx(expected)


class TestAdjustedRecoveryHours:

    def test_no_adjustments(self):
        assert calculate_adjusted_recovery_hours(
            MuscleGroup.SHOULDERS, 0.0, BEGINNER, base_rest_interval=48,
        ) == pytest.approx(48)

    def test_base_rest_interval_scales_window(self):
        assert calculate_adjusted_recovery_hours(
            MuscleGroup.SHOULDERS, 0.0, BEGINNER, base_rest_interval=24,
        ) == pytest.approx(24)
        assert calculate_adjusted_recovery_hours(
            MuscleGroup.SHOULDERS, 0.0, BEGINNER, base_rest_interval=72,
        ) == pytest.approx(72)

    def test_workload_stretches_window(self):
        assert calculate_adjusted_recovery_hours(
            MuscleGroup.SHOULDERS, 50.0, BEGINNER, base_rest_interval=48,
        ) == pytest.approx(72)

    def test_good_sleep_shrinks_window(self):
        sleep = SleepLog(date=NOW.date(), quality=9)
        assert calculate_adjusted_recovery_hours(
            MuscleGroup.SHOULDERS, 0.0, BEGINNER, base_rest_interval=48, sleep=sleep,
        ) == pytest.approx(38.4)


# ======================================================================
# calculate_recovery_percentage
# ======================================================================


class TestRecoveryPercentage:

    @pytest.mark.parametrize("hours,window,expected", [
        (0, 48, 0.0),
        (12, 48, 25.0),
        (24, 48, 50.0),
        (48, 48, 100.0),
        (100, 48, 100.0),
        (-5, 48, 0.0),
    ])
    def test_linear_and_clamped(self, hours, window, expected):
        assert calculate_recovery_percentage(hours, window) == pytest.approx(expected)

    @pytest.mark.parametrize("window", [0.0, -10.0, math.nan, math.inf])
    def test_invalid_window_is_fully_recovered(self, window):
        assert calculate_recovery_percentage(10, window) == 100.0

    def test_nan_elapsed_is_fully_recovered(self):
        assert calculate_recovery_percentage(math.nan, 48) == 100.0

    def test_monotonic_in_elapsed_time(self):
        values = [calculate_recovery_percentage(h, 60) for h in range(0, 100, 3)]
        assert values == sorted(values)
        assert all(0.0 <= v <= 100.0 for v in values)


# ======================================================================
# label_recovery_status
# ======================================================================


class TestLabelRecoveryStatus:

    @pytest.mark.parametrize("pct,workload,expected", [
        (100.0, 0, RecoveryStatus.RECOVERED),
        (90.0, 0, RecoveryStatus.RECOVERED),
        (89.9, 0, RecoveryStatus.RECOVERING),
        (50.0, 0, RecoveryStatus.RECOVERING),
        (49.9, 0, RecoveryStatus.SORE),
        (25.0, 80, RecoveryStatus.SORE),
        (24.9, 80, RecoveryStatus.OVERWORKED),
        (0.0, 51, RecoveryStatus.OVERWORKED),
        (0.0, 50, RecoveryStatus.SORE),
        (10.0, 0, RecoveryStatus.SORE),
    ])
    def test_thresholds(self, pct, workload, expected):
        assert label_recovery_status(pct, workload) is expected


# ======================================================================
# calculate_muscle_status
# ======================================================================


class TestCalculateMuscleStatus:

    def test_never_worked_is_fully_recovered(self):
        status = calculate_muscle_status(MuscleGroup.CHEST, None, 0.0, BEGINNER, NOW)
        assert status.recovery_percentage == 100.0
        assert status.recovery_status is RecoveryStatus.RECOVERED
        assert status.recommended_rest_days == 0
        assert status.last_worked is None

    def test_two_day_muscle_recovered_after_48_hours(self):
        cfg = RecoverySettings(base_rest_interval=48)
        for muscle in (MuscleGroup.SHOULDERS, MuscleGroup.BICEPS):
            status = calculate_muscle_status(
                muscle, _hours_ago(48), 0.0, BEGINNER, NOW, recovery_settings=cfg,
            )
            assert status.recovery_percentage == 100.0
            assert status.recovery_status is RecoveryStatus.RECOVERED

    def test_halfway(self):
        status = calculate_muscle_status(
            MuscleGroup.SHOULDERS, _hours_ago(24), 0.0, BEGINNER, NOW,
        )
        assert status.recovery_percentage == 50.0
        assert status.recovery_status is RecoveryStatus.RECOVERING
        assert status.recommended_rest_days == 1

    def test_heavy_recent_session_is_overworked(self):
        status = calculate_muscle_status(
            MuscleGroup.SHOULDERS, _hours_ago(6), 60.0, BEGINNER, NOW,
        )
        # window 48 × 1.6 = 76.8 h
        assert status.recovery_percentage == pytest.approx(7.8)
        assert status.recovery_status is RecoveryStatus.OVERWORKED
        assert status.recommended_rest_days == 3

    def test_overtraining_volume_overrides_status(self):
        status = calculate_muscle_status(
            MuscleGroup.SHOULDERS, _hours_ago(100), 0.0, BEGINNER, NOW,
            total_volume_last_7_days=80_001,
        )
        assert status.recovery_percentage == 100.0
        assert status.recovery_status is RecoveryStatus.OVERWORKED

    def test_percentage_monotonic_in_hours(self):
        values = [
            calculate_muscle_status(
                MuscleGroup.QUADS, _hours_ago(h), 20.0, INTERMEDIATE, NOW,
            ).recovery_percentage
            for h in range(0, 120, 6)
        ]
        assert values == sorted(values)

    def test_naive_last_worked_treated_as_utc(self):
        naive = _hours_ago(24).replace(tzinfo=None)
        status = calculate_muscle_status(MuscleGroup.SHOULDERS, naive, 0.0, BEGINNER, NOW)
        assert status.recovery_percentage == 50.0


# ======================================================================
# select_recent_sleep
# ======================================================================


class TestSelectRecentSleep:

    def test_latest_log_on_or_before_now(self):
        logs = [
            SleepLog(date=datetime.date(2026, 3, 8), quality=5),
            SleepLog(date=datetime.date(2026, 3, 10), quality=9),
            SleepLog(date=datetime.date(2026, 3, 11), quality=2),
        ]
        assert select_recent_sleep(logs, NOW).quality == 9

    def test_no_logs(self):
        assert select_recent_sleep([], NOW) is None
        assert select_recent_sleep(None, NOW) is None


# ======================================================================
# compute_muscle_statuses
# ======================================================================


class TestComputeMuscleStatuses:

    def test_empty_history(self):
        assert compute_muscle_statuses([], now=NOW) == []

    def test_only_trained_muscles_returned(self):
        statuses = compute_muscle_statuses([_leg_extension(_hours_ago(24))], now=NOW)
        assert [s.muscle for s in statuses] == [MuscleGroup.QUADS]
        quads = statuses[0]
        # intermediate quads: 72 h × (1 + 10 / 100) = 79.2 h
        assert quads.workload_score == 10.0
        assert quads.recovery_percentage == pytest.approx(30.3)
        assert quads.recovery_status is RecoveryStatus.SORE

    def test_include_untrained(self):
        statuses = compute_muscle_statuses(
            [_leg_extension(_hours_ago(24))], now=NOW, include_untrained=True,
        )
        assert [s.muscle for s in statuses] == list(MuscleGroup)
        untrained = [s for s in statuses if s.muscle is not MuscleGroup.QUADS]
        assert all(s.recovery_percentage == 100.0 for s in untrained)

    def test_experience_level_shortens_window(self):
        workouts = [_leg_extension(_hours_ago(24))]
        beginner = compute_muscle_statuses(
            workouts, UserProfile(experience_level=BEGINNER), now=NOW,
        )[0]
        advanced = compute_muscle_statuses(
            workouts, UserProfile(experience_level=ADVANCED), now=NOW,
        )[0]
        assert advanced.recovery_percentage > beginner.recovery_percentage

    def test_poor_sleep_slows_recovery(self):
        workouts = [_leg_extension(_hours_ago(24))]
        rested = compute_muscle_statuses(workouts, now=NOW)[0]
        tired = compute_muscle_statuses(
            workouts, now=NOW,
            sleep_logs=[SleepLog(date=NOW.date(), quality=2, duration=300)],
        )[0]
        assert tired.recovery_percentage < rested.recovery_percentage

    def test_deleted_workouts_ignored(self):
        workouts = [_leg_extension(_hours_ago(2), deleted_at=NOW)]
        assert compute_muscle_statuses(workouts, now=NOW) == []

    def test_undated_workout_reads_fully_recovered(self):
        statuses = compute_muscle_statuses([_leg_extension("garbage")], now=NOW)
        assert [s.muscle for s in statuses] == [MuscleGroup.QUADS]
        assert statuses[0].recovery_percentage == 100.0
        assert statuses[0].recovery_status is RecoveryStatus.RECOVERED
        assert statuses[0].last_worked is None

    def test_idempotent(self):
        workouts = [_leg_extension(_hours_ago(h)) for h in (5, 30, 80)]
        first = compute_muscle_statuses(workouts, now=NOW)
        second = compute_muscle_statuses(workouts, now=NOW)
        assert first == second
