# 📄 File: app/shared/core/clock.py
# 🧭 Purpose (Layman Explanation):
# Tells the garden what time it is and works out how many calendar days passed between
# two journal entries, so a late-night entry and an early-morning one count as different days.
# 🧪 Purpose (Technical Summary):
# Injectable time provider (SystemClock / FixedClock) plus calendar-day helpers that
# compare timestamps by their start-of-day in a configurable IANA timezone.
# 🔗 Dependencies:
# datetime, zoneinfo, typing
# 🔄 Connected Modules / Calls From:
# Streak calculator, health model, plant command handlers, health sweep task, tests

from datetime import datetime, timedelta, timezone
from typing import Protocol, Union
from zoneinfo import ZoneInfo

TimezoneLike = Union[str, ZoneInfo, timezone]


class Clock(Protocol):
    """Anything that can report the current instant."""

    def now(self) -> datetime:
        ...


class SystemClock:
    """Wall clock, always timezone-aware UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """
    Clock frozen at a given instant.

    Used by tests and by replay tooling; ``advance`` moves it forward.
    """

    def __init__(self, current: datetime):
        self._current = ensure_aware(current)

    def now(self) -> datetime:
        return self._current

    def set(self, current: datetime) -> None:
        self._current = ensure_aware(current)

    def advance(self, **delta) -> datetime:
        self._current = self._current + timedelta(**delta)
        return self._current


# =============================================================================
# CALENDAR DAY HELPERS
# =============================================================================

def resolve_timezone(tz: TimezoneLike) -> Union[ZoneInfo, timezone]:
    if isinstance(tz, str):
        return ZoneInfo(tz)
    return tz


def ensure_aware(ts: datetime) -> datetime:
    """Naive timestamps are taken to be UTC."""
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts


def local_date(ts: datetime, tz: TimezoneLike = "UTC"):
    """Calendar date of ``ts`` as seen in ``tz``."""
    return ensure_aware(ts).astimezone(resolve_timezone(tz)).date()


def start_of_day(ts: datetime, tz: TimezoneLike = "UTC") -> datetime:
    """Local midnight of the day containing ``ts``."""
    zone = resolve_timezone(tz)
    local = ensure_aware(ts).astimezone(zone)
    return local.replace(hour=0, minute=0, second=0, microsecond=0)


def calendar_days_between(
    earlier: datetime,
    later: datetime,
    tz: TimezoneLike = "UTC"
) -> int:
    """
    Whole calendar days from ``earlier`` to ``later``.

    Both instants are truncated to their local day before subtracting, so
    23:59 and 00:01 the next morning are one day apart. Out-of-order
    inputs (clock skew) clamp to 0.
    """
    days = (local_date(later, tz) - local_date(earlier, tz)).days
    return max(0, days)
