"""Civil-time conversion, clocks, and the 30-minute day grid."""

from .civil import CivilCalendar, CivilDate, CivilTime
from .clock import Clock, FixedClock, SystemClock
from .grid import (
    CELL_MINUTES,
    CELLS_PER_DAY,
    DurationMode,
    cell_bounds,
    cell_label,
    cell_of,
    cell_window,
    format_window,
    grid_windows,
    is_cell_covered,
    validate_cell_index,
    windows_on_day,
)

__all__ = [
    "CivilCalendar",
    "CivilDate",
    "CivilTime",
    "Clock",
    "FixedClock",
    "SystemClock",
    "CELL_MINUTES",
    "CELLS_PER_DAY",
    "DurationMode",
    "cell_bounds",
    "cell_label",
    "cell_of",
    "cell_window",
    "format_window",
    "grid_windows",
    "is_cell_covered",
    "validate_cell_index",
    "windows_on_day",
]
