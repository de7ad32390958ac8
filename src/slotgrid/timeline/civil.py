"""Fixed-offset civil calendar (wall clock day/hour/minute <-> instants).

The offset is a configuration constant rather than a timezone database lookup:
the target region observes no daylight-saving transitions, so every civil day is
exactly 1440 minutes long and the conversion is plain offset arithmetic.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass

from slotgrid.core.errors import SlotGridValueError
from slotgrid.core.types import Instant, ensure_utc
from slotgrid.timeline.clock import Clock

MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 24 * MINUTES_PER_HOUR
DAYS_PER_WEEK = 7
JST_OFFSET_MINUTES = 9 * MINUTES_PER_HOUR
DEFAULT_DAY_END_MINUTES = 23 * MINUTES_PER_HOUR + 59
LAST_CELL_START_MINUTES = MINUTES_PER_DAY - 30
MAX_OFFSET_MINUTES = 18 * MINUTES_PER_HOUR


@dataclass(frozen=True, slots=True, order=True)
class CivilDate:
    """A calendar date in the fixed-offset zone. Derived, never stored."""

    year: int
    month: int
    day: int

    @classmethod
    def from_date(cls, value: dt.date) -> "CivilDate":
        return cls(value.year, value.month, value.day)

    @classmethod
    def parse(cls, text: str) -> "CivilDate":
        try:
            return cls.from_date(dt.date.fromisoformat(text.strip()))
        except ValueError as exc:
            raise SlotGridValueError(f"Invalid civil date '{text}' (expected YYYY-MM-DD)") from exc

    def to_date(self) -> dt.date:
        return dt.date(self.year, self.month, self.day)

    def plus_days(self, days: int) -> "CivilDate":
        return CivilDate.from_date(self.to_date() + dt.timedelta(days=days))

    def isoformat(self) -> str:
        return self.to_date().isoformat()

    def __str__(self) -> str:
        return self.isoformat()


@dataclass(frozen=True, slots=True, order=True)
class CivilTime:
    """Wall-clock reading (minute precision) in the fixed-offset zone."""

    year: int
    month: int
    day: int
    hour: int
    minute: int

    @property
    def date(self) -> CivilDate:
        return CivilDate(self.year, self.month, self.day)

    @property
    def minutes_of_day(self) -> int:
        return self.hour * MINUTES_PER_HOUR + self.minute

    def __str__(self) -> str:
        return f"{self.date.isoformat()} {self.hour:02d}:{self.minute:02d}"


@dataclass(frozen=True, slots=True)
class CivilCalendar:
    """Converts instants to and from one fixed-offset wall clock.

    Parameters
    ----------
    offset_minutes:
        UTC offset of the civil zone in minutes (``540`` for +09:00).
    day_end_minutes:
        Minutes after midnight used as the last representable point of a civil
        day. Defaults to 23:59, one minute short of the following midnight. It
        must fall inside the 23:30 cell and stay short of midnight, so a split
        window never touches the next day's 00:00.
    """

    offset_minutes: int = JST_OFFSET_MINUTES
    day_end_minutes: int = DEFAULT_DAY_END_MINUTES

    def __post_init__(self) -> None:
        if abs(self.offset_minutes) > MAX_OFFSET_MINUTES:
            raise SlotGridValueError(
                f"UTC offset {self.offset_minutes} min outside +/-{MAX_OFFSET_MINUTES} min"
            )
        if not LAST_CELL_START_MINUTES < self.day_end_minutes < MINUTES_PER_DAY:
            raise SlotGridValueError(
                f"day_end_minutes must be in ({LAST_CELL_START_MINUTES}, {MINUTES_PER_DAY}), "
                f"got {self.day_end_minutes}"
            )

    @property
    def tzinfo(self) -> dt.tzinfo:
        return dt.timezone(dt.timedelta(minutes=self.offset_minutes))

    @property
    def offset_label(self) -> str:
        sign = "+" if self.offset_minutes >= 0 else "-"
        hours, minutes = divmod(abs(self.offset_minutes), MINUTES_PER_HOUR)
        return f"{sign}{hours:02d}:{minutes:02d}"

    def to_civil(self, instant: Instant) -> CivilTime:
        local = ensure_utc(instant) + dt.timedelta(minutes=self.offset_minutes)
        return CivilTime(local.year, local.month, local.day, local.hour, local.minute)

    def to_instant(self, year: int, month: int, day: int, hour: int = 0, minute: int = 0) -> Instant:
        naive = dt.datetime(year, month, day, hour, minute)
        return (naive - dt.timedelta(minutes=self.offset_minutes)).replace(tzinfo=dt.timezone.utc)

    def at(self, date: CivilDate, minutes: int) -> Instant:
        """Instant ``minutes`` after civil midnight of ``date`` (``0 <= minutes <= 1440``)."""
        if not 0 <= minutes <= MINUTES_PER_DAY:
            raise SlotGridValueError(f"minutes {minutes} outside [0, {MINUTES_PER_DAY}]")
        return self.day_start(date) + dt.timedelta(minutes=minutes)

    def civil_date(self, instant: Instant) -> CivilDate:
        return self.to_civil(instant).date

    def same_civil_day(self, a: Instant, b: Instant) -> bool:
        return self.civil_date(a) == self.civil_date(b)

    def minutes_since_midnight(self, instant: Instant) -> int:
        return self.to_civil(instant).minutes_of_day

    def day_start(self, date: CivilDate) -> Instant:
        return self.to_instant(date.year, date.month, date.day)

    def day_end(self, date: CivilDate) -> Instant:
        return self.day_start(date) + dt.timedelta(minutes=self.day_end_minutes)

    def today(self, clock: Clock) -> CivilDate:
        return self.civil_date(clock.now())

    def week_dates(self, anchor: CivilDate) -> tuple[CivilDate, ...]:
        """The Sunday-first week containing ``anchor``."""
        back = (anchor.to_date().weekday() + 1) % DAYS_PER_WEEK
        sunday = anchor.plus_days(-back)
        return tuple(sunday.plus_days(offset) for offset in range(DAYS_PER_WEEK))

    def format_instant(self, instant: Instant) -> str:
        local = ensure_utc(instant).astimezone(self.tzinfo)
        return local.isoformat(timespec="minutes")


__all__ = [
    "MINUTES_PER_HOUR",
    "MINUTES_PER_DAY",
    "DAYS_PER_WEEK",
    "JST_OFFSET_MINUTES",
    "DEFAULT_DAY_END_MINUTES",
    "LAST_CELL_START_MINUTES",
    "CivilDate",
    "CivilTime",
    "CivilCalendar",
]
