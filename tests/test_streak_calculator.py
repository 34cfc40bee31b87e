"""
Streak calculator tests.

Covers the calendar-day gap rules, day boundaries in a non-UTC zone,
clock-skew clamping and the trailing-run property over entry sequences.
"""

import random
from datetime import datetime, timedelta, timezone

import pytest

from app.modules.plant_growth.domain.services.streak_calculator import (
    compute_streak,
    streak_from_dates,
    update_longest_streak,
)
from app.shared.core.clock import calendar_days_between

UTC = timezone.utc
DAY_ONE = datetime(2024, 3, 1, 20, 0, tzinfo=UTC)


class TestComputeStreak:
    """Gap rules for a single entry."""

    def test_first_entry_starts_at_one(self):
        assert compute_streak(0, None, DAY_ONE) == 1

    def test_next_calendar_day_extends(self):
        assert compute_streak(4, DAY_ONE, DAY_ONE + timedelta(days=1)) == 5

    def test_same_day_entry_keeps_streak(self):
        assert compute_streak(4, DAY_ONE, DAY_ONE + timedelta(hours=3)) == 4

    def test_gap_of_two_days_restarts(self):
        assert compute_streak(9, DAY_ONE, DAY_ONE + timedelta(days=2)) == 1

    def test_midnight_crossing_counts_as_next_day(self):
        late = datetime(2024, 3, 1, 23, 59, tzinfo=UTC)
        early = datetime(2024, 3, 2, 0, 1, tzinfo=UTC)
        assert compute_streak(2, late, early) == 3

    def test_nearly_two_full_days_is_still_consecutive(self):
        early = datetime(2024, 3, 1, 0, 5, tzinfo=UTC)
        late = datetime(2024, 3, 2, 23, 55, tzinfo=UTC)
        assert compute_streak(1, early, late) == 2

    def test_clock_skew_is_clamped_to_same_day(self):
        # Entry stamped before the previous one; treated as gap 0
        assert compute_streak(3, DAY_ONE, DAY_ONE - timedelta(days=2)) == 3

    def test_naive_timestamps_are_read_as_utc(self):
        naive_prev = datetime(2024, 3, 1, 12, 0)
        assert compute_streak(1, naive_prev, datetime(2024, 3, 2, 8, 0, tzinfo=UTC)) == 2


class TestDayBoundaryTimezone:
    """Day boundaries follow the plant's timezone."""

    def test_local_midnight_decides_the_day(self):
        # 23:30 and 08:00 next morning in New York are the same UTC day
        first = datetime(2024, 3, 2, 4, 30, tzinfo=UTC)
        second = datetime(2024, 3, 2, 13, 0, tzinfo=UTC)

        assert compute_streak(1, first, second, "UTC") == 1
        assert compute_streak(1, first, second, "America/New_York") == 2

    def test_calendar_days_between_uses_zone(self):
        first = datetime(2024, 3, 1, 22, 0, tzinfo=UTC)
        second = datetime(2024, 3, 2, 1, 0, tzinfo=UTC)

        assert calendar_days_between(first, second, "UTC") == 1
        assert calendar_days_between(first, second, "Asia/Tokyo") == 0


def test_update_longest_streak_never_decreases():
    assert update_longest_streak(7, 3) == 7
    assert update_longest_streak(7, 8) == 8


def _trailing_run(day_offsets):
    """Length of the trailing run whose day gaps are exactly 1 (gap 0 ignored)."""
    run = 1
    for previous, current in zip(day_offsets, day_offsets[1:]):
        gap = current - previous
        if gap == 0:
            continue
        run = run + 1 if gap == 1 else 1
    return run


@pytest.mark.parametrize("seed", range(25))
def test_streak_matches_trailing_run_of_consecutive_days(seed):
    rng = random.Random(seed)
    noon = DAY_ONE.replace(hour=12)

    day_offsets = [0]
    for _ in range(rng.randint(1, 30)):
        day_offsets.append(day_offsets[-1] + rng.choice([0, 1, 1, 1, 2, 4]))

    streak = 0
    last_entry_at = None
    for offset in day_offsets:
        # Jitter stays inside the same UTC calendar day
        occurred_at = noon + timedelta(days=offset, minutes=rng.randint(-700, 700))
        streak = compute_streak(streak, last_entry_at, occurred_at)
        last_entry_at = occurred_at

    assert streak == _trailing_run(day_offsets)


class TestStreakFromDates:
    """Streak rebuilt from a history of entry dates."""

    def test_run_ending_today(self):
        now = datetime(2024, 3, 5, 18, 0, tzinfo=UTC)
        dates = [now - timedelta(days=d) for d in (0, 1, 2, 4)]
        assert streak_from_dates(dates, now) == 3

    def test_no_entry_today_is_zero(self):
        now = datetime(2024, 3, 5, 18, 0, tzinfo=UTC)
        dates = [now - timedelta(days=d) for d in (1, 2)]
        assert streak_from_dates(dates, now) == 0

    def test_multiple_entries_per_day_count_once(self):
        now = datetime(2024, 3, 5, 18, 0, tzinfo=UTC)
        dates = [now, now - timedelta(hours=2), now - timedelta(days=1)]
        assert streak_from_dates(dates, now) == 2

    def test_future_entries_are_ignored(self):
        now = datetime(2024, 3, 5, 18, 0, tzinfo=UTC)
        dates = [now + timedelta(days=1), now]
        assert streak_from_dates(dates, now) == 1
