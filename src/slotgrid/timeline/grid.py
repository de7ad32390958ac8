"""The 30-minute civil day grid and duration modes."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from slotgrid.core.errors import SlotGridValueError
from slotgrid.core.types import Instant, Window
from slotgrid.timeline.civil import MINUTES_PER_DAY, MINUTES_PER_HOUR, CivilCalendar, CivilDate

CELL_MINUTES = 30
CELLS_PER_DAY = MINUTES_PER_DAY // CELL_MINUTES


class DurationMode(str, Enum):
    """Selection granularity for one user action on the grid."""

    THIRTY_MINUTES = "30min"
    ONE_HOUR = "1h"
    THREE_HOURS = "3h"
    ONE_DAY = "1day"

    @property
    def cells(self) -> int:
        return DURATION_CELLS[self]

    @property
    def minutes(self) -> int:
        return self.cells * CELL_MINUTES

    @classmethod
    def parse(cls, value: "str | DurationMode") -> "DurationMode":
        if isinstance(value, DurationMode):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            available = ", ".join(mode.value for mode in cls)
            raise SlotGridValueError(
                f"Unknown duration mode '{value}'. Available: {available}"
            ) from exc


DURATION_CELLS: dict[DurationMode, int] = {
    DurationMode.THIRTY_MINUTES: 1,
    DurationMode.ONE_HOUR: 2,
    DurationMode.THREE_HOURS: 6,
    DurationMode.ONE_DAY: CELLS_PER_DAY,
}


def validate_cell_index(cell: int) -> int:
    if isinstance(cell, bool) or not isinstance(cell, int) or not 0 <= cell < CELLS_PER_DAY:
        raise SlotGridValueError(f"grid cell index {cell!r} outside [0, {CELLS_PER_DAY})")
    return cell


def _hhmm(minutes: int) -> str:
    hours, mins = divmod(minutes, MINUTES_PER_HOUR)
    return f"{hours:02d}:{mins:02d}"


def cell_bounds(cell: int) -> tuple[int, int]:
    """Return ``(start, end)`` minutes after midnight for a grid cell."""
    validate_cell_index(cell)
    start = cell * CELL_MINUTES
    return start, start + CELL_MINUTES


def cell_label(cell: int) -> str:
    start, end = cell_bounds(cell)
    return f"{_hhmm(start)} - {_hhmm(end)}"


def cell_of(instant: Instant, calendar: CivilCalendar) -> int:
    """Grid cell containing ``instant`` on its own civil day."""
    return calendar.minutes_since_midnight(instant) // CELL_MINUTES


def cell_window(day: CivilDate, cell: int, calendar: CivilCalendar) -> Window:
    start, end = cell_bounds(cell)
    return Window(start=calendar.at(day, start), end=calendar.at(day, end))


def grid_windows(day: CivilDate, calendar: CivilCalendar) -> tuple[Window, ...]:
    """All 48 contiguous cells of a civil day."""
    return tuple(cell_window(day, cell, calendar) for cell in range(CELLS_PER_DAY))


def format_window(window: Window, calendar: CivilCalendar) -> str:
    start = calendar.to_civil(window.start)
    end = calendar.to_civil(window.end)
    return f"{start.hour:02d}:{start.minute:02d}-{end.hour:02d}:{end.minute:02d}"


def is_cell_covered(window: Window, day: CivilDate, cell: int, calendar: CivilCalendar) -> bool:
    """True when ``window`` starts on ``day`` and its span contains the cell's start."""
    if calendar.civil_date(window.start) != day:
        return False
    cell_start = calendar.at(day, cell_bounds(cell)[0])
    return window.start <= cell_start < window.end


def windows_on_day(
    windows: Iterable[Window], day: CivilDate, calendar: CivilCalendar
) -> tuple[Window, ...]:
    """Windows whose start falls on ``day``, sorted by start."""
    selected = [w for w in windows if calendar.civil_date(w.start) == day]
    return tuple(sorted(selected, key=lambda w: w.start))


__all__ = [
    "CELL_MINUTES",
    "CELLS_PER_DAY",
    "DURATION_CELLS",
    "DurationMode",
    "validate_cell_index",
    "cell_bounds",
    "cell_label",
    "cell_of",
    "cell_window",
    "grid_windows",
    "format_window",
    "is_cell_covered",
    "windows_on_day",
]
