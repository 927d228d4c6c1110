"""Unit tests for the weekly training consistency score."""

import datetime

import pytest

from fitrecovery.engine.consistency import (
    ConsistencyConfig,
    calculate_consistency,
    calculate_consistency_score,
    week_start,
    weekly_threshold,
)
from fitrecovery.schemas.consistency import ConsistencyState
from fitrecovery.schemas.workout import WorkoutRecord

UTC = datetime.timezone.utc

# 2026-03-09 is a Monday
MON = datetime.date(2026, 3, 9)


def _day(offset: int) -> datetime.date:
    return MON + datetime.timedelta(days=offset)


def _workouts(*offsets: int, **kwargs) -> list[WorkoutRecord]:
    return [
        WorkoutRecord(
            date=datetime.datetime.combine(_day(o), datetime.time(18), tzinfo=UTC),
            **kwargs,
        )
        for o in offsets
    ]


class TestHelpers:

    @pytest.mark.parametrize("offset", range(7))
    def test_week_start_is_monday(self, offset):
        assert week_start(_day(offset)) == MON

    @pytest.mark.parametrize("days,expected", [
        (7, 3),
        (6, 3),
        (5, 3),
        (3, 2),
        (2, 1),
        (1, 1),
    ])
    def test_weekly_threshold(self, days, expected):
        assert weekly_threshold(days) == expected


class TestCalculateConsistency:

    def test_no_workouts(self):
        report = calculate_consistency([])
        assert report.score == 0
        assert report.state is ConsistencyState.NO_DATA
        assert report.weeks == []

    def test_three_workouts_in_one_week(self):
        assert calculate_consistency_score(_workouts(0, 2, 4)) == 100

    def test_three_workouts_full_week_window(self):
        report = calculate_consistency(_workouts(0, 2, 4), start=MON, end=_day(6))
        assert report.score == 100
        assert report.weeks[0].threshold == 3
        assert report.weeks[0].workout_count == 3

    def test_two_workouts_full_week_window(self):
        report = calculate_consistency(_workouts(0, 4), start=MON, end=_day(6))
        assert report.score == 0
        assert report.state is ConsistencyState.OK

    def test_extra_workouts_do_not_carry_over(self):
        # 10 workouts in week one, none in week two
        report = calculate_consistency(
            _workouts(0, 0, 1, 1, 2, 3, 4, 5, 6, 6), start=MON, end=_day(13),
        )
        assert report.score == 50
        assert [w.consistent for w in report.weeks] == [True, False]

    def test_score_capped_at_100(self):
        assert calculate_consistency_score(_workouts(*([0] * 20))) == 100

    def test_partial_weeks_prorated(self):
        # Window Sat..Tue spans two ISO weeks of two days each
        report = calculate_consistency(_workouts(5, 7), start=_day(5), end=_day(8))
        assert [w.days_in_window for w in report.weeks] == [2, 2]
        assert [w.threshold for w in report.weeks] == [1, 1]
        assert report.score == 100

    def test_multi_week_history(self):
        # Weeks 1 and 3 consistent, week 2 only one workout
        report = calculate_consistency(
            _workouts(0, 2, 4, 9, 14, 16, 18), start=MON, end=_day(20),
        )
        assert report.consistent_weeks == 2
        assert report.score == 67

    def test_workouts_outside_window_ignored(self):
        report = calculate_consistency(
            _workouts(0, 1, 2, 14), start=MON, end=_day(6),
        )
        assert len(report.weeks) == 1
        assert report.weeks[0].workout_count == 3

    def test_deleted_and_undated_workouts_ignored(self):
        workouts = _workouts(0, 2) + _workouts(4, deleted_at=datetime.datetime.now(UTC))
        workouts.append(WorkoutRecord(date="not a date"))
        report = calculate_consistency(workouts, start=MON, end=_day(6))
        assert report.weeks[0].workout_count == 2
        assert report.score == 0

    def test_datetime_bounds_match_date_bounds(self):
        workouts = _workouts(0, 2, 4, 9, 14, 16, 18)
        start = datetime.datetime.combine(MON, datetime.time(0), tzinfo=UTC)
        end = datetime.datetime.combine(_day(20), datetime.time(23, 59), tzinfo=UTC)
        expected = calculate_consistency(workouts, start=MON, end=_day(20))
        assert calculate_consistency(workouts, start=start, end=end) == expected
        assert calculate_consistency(workouts, start=start, end=_day(20)) == expected

    def test_datetime_bounds_use_utc_day(self):
        # 01:00 on Tuesday at +02:00 is still Monday in UTC
        tz = datetime.timezone(datetime.timedelta(hours=2))
        start = datetime.datetime.combine(_day(1), datetime.time(1), tzinfo=tz)
        report = calculate_consistency(_workouts(0, 2, 4), start=start, end=_day(6))
        assert report.weeks[0].days_in_window == 7
        assert report.score == 100

    def test_naive_datetime_bounds(self):
        start = datetime.datetime.combine(MON, datetime.time(0))
        report = calculate_consistency(_workouts(0, 2, 4), start=start, end=_day(6))
        assert report.score == 100

    def test_inverted_window(self):
        report = calculate_consistency(_workouts(0), start=_day(6), end=MON)
        assert report.state is ConsistencyState.NO_DATA
        assert report.score == 0

    def test_custom_target(self):
        cfg = ConsistencyConfig(target_workouts_per_week=2)
        report = calculate_consistency(_workouts(0, 4), start=MON, end=_day(6), config=cfg)
        assert report.score == 100

    def test_idempotent(self):
        workouts = _workouts(0, 2, 4, 9, 14)
        assert calculate_consistency(workouts) == calculate_consistency(workouts)
