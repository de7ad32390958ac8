"""Click-level overlap guard.

Single-cell selections are rejected when they land on an existing window.
Whole-day and day-crossing selections skip the guard and are absorbed by the
full-overlap merge instead.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from slotgrid.config import DEFAULT_CONFLICT_MESSAGE, DEFAULT_NOTICE_SECONDS
from slotgrid.core.types import Window
from slotgrid.intervals.generator import is_day_crossing
from slotgrid.intervals.overlap import find_overlapping
from slotgrid.timeline.civil import CivilCalendar, CivilDate
from slotgrid.timeline.grid import DurationMode, cell_window


@dataclass(frozen=True, slots=True)
class GuardResult:
    """Outcome of the overlap guard; rejections carry a user-facing notice."""

    accepted: bool
    reason: str | None = None
    expires_after: float | None = None
    conflicts: tuple[Window, ...] = ()

    @classmethod
    def accept(cls) -> "GuardResult":
        return cls(accepted=True)


def guard_applies(start_cell: int, mode: DurationMode | str) -> bool:
    mode = DurationMode.parse(mode)
    return mode is not DurationMode.ONE_DAY and not is_day_crossing(start_cell, mode)


def check_cell(
    existing: Iterable[Window],
    day: CivilDate,
    cell: int,
    calendar: CivilCalendar,
    *,
    message: str = DEFAULT_CONFLICT_MESSAGE,
    expires_after: float = DEFAULT_NOTICE_SECONDS,
) -> GuardResult:
    conflicts = find_overlapping(cell_window(day, cell, calendar), existing)
    if not conflicts:
        return GuardResult.accept()
    return GuardResult(
        accepted=False,
        reason=message,
        expires_after=expires_after,
        conflicts=conflicts,
    )


__all__ = ["GuardResult", "guard_applies", "check_cell"]
