"""Period Clock — resolves calendar-month accounting windows.

Invariants:
    - PeriodWindow is [start, end): start inclusive, end exclusive
    - Windows are computed in the reference timezone and never cached
    - All returned datetimes are timezone-aware

Design Decisions:
    - Pure functions take an explicit `now`; PeriodClock only binds the timezone
      and the time source so services can be tested with a frozen clock
"""

from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from typing import Callable

from noodles.core.errors import InvalidPeriodError


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class PeriodWindow:
    """Bounds of one accounting period."""
    start: datetime
    end: datetime

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant < self.end


def month_start(now: datetime, tz: tzinfo) -> datetime:
    """First instant of the calendar month containing `now`, in `tz`."""
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    local = now.astimezone(tz)
    return local.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def month_window(year: int, month: int, tz: tzinfo) -> PeriodWindow:
    """[start, end) of the given calendar month in `tz`."""
    if not 1 <= month <= 12 or not 1 <= year <= 9998:
        raise InvalidPeriodError(year, month)
    start = datetime(year, month, 1, tzinfo=tz)
    if month == 12:
        end = datetime(year + 1, 1, 1, tzinfo=tz)
    else:
        end = datetime(year, month + 1, 1, tzinfo=tz)
    return PeriodWindow(start=start, end=end)


class PeriodClock:
    """Binds a reference timezone and a time source."""

    def __init__(
        self, tz: tzinfo = timezone.utc, now: Callable[[], datetime] = utc_now,
    ):
        self.tz = tz
        self._now = now

    def now(self) -> datetime:
        return self._now()

    def current_period_start(self, now: datetime | None = None) -> datetime:
        return month_start(now or self._now(), self.tz)

    def current_period(self, now: datetime | None = None) -> PeriodWindow:
        start = self.current_period_start(now)
        return month_window(start.year, start.month, self.tz)
