# 📄 File: app/modules/plant_growth/domain/services/streak_calculator.py
# 🧭 Purpose (Layman Explanation):
# Counts how many days in a row someone has journaled - writing twice on the same day
# doesn't count double, and skipping a day starts the count over.
# 🧪 Purpose (Technical Summary):
# Pure calendar-day streak arithmetic in the plant's timezone: the incremental update used
# on every entry and a from-history recomputation of the streak ending today.
# 🔗 Dependencies:
# app.shared.core.clock
# 🔄 Connected Modules / Calls From:
# plant_state_machine.py, encouragement projections, tests

from datetime import datetime
from typing import Iterable, Optional

from app.shared.core.clock import TimezoneLike, calendar_days_between, local_date


def compute_streak(
    previous_streak: int,
    last_entry_at: Optional[datetime],
    now: datetime,
    tz: TimezoneLike = "UTC"
) -> int:
    """
    Streak after an entry made at ``now``.

    - first ever entry starts at 1
    - next calendar day extends the streak by 1
    - same calendar day leaves it unchanged
    - any longer gap restarts at 1
    """
    if last_entry_at is None:
        return 1

    gap_days = calendar_days_between(last_entry_at, now, tz)

    if gap_days == 0:
        return previous_streak
    if gap_days == 1:
        return previous_streak + 1
    return 1


def update_longest_streak(longest_streak: int, current_streak: int) -> int:
    return max(longest_streak, current_streak)


def streak_from_dates(
    entry_dates: Iterable[datetime],
    now: datetime,
    tz: TimezoneLike = "UTC"
) -> int:
    """
    Length of the run of consecutive journaling days ending today.

    Several entries on one day count once. If there is no entry today
    the run is 0. Entries dated after ``now`` are ignored.
    """
    today = local_date(now, tz)
    days = sorted({local_date(d, tz) for d in entry_dates}, reverse=True)

    streak = 0
    for day in days:
        offset = (today - day).days
        if offset < streak:
            continue
        if offset > streak:
            break
        streak += 1

    return streak
