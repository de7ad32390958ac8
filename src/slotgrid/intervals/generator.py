"""Duration-mode window generation on the civil day grid."""

from __future__ import annotations

import logging
from collections.abc import Collection, Iterable
from dataclasses import dataclass

from slotgrid.core.types import Window
from slotgrid.intervals.merge import merge_overlapping
from slotgrid.timeline.civil import CivilCalendar, CivilDate
from slotgrid.timeline.grid import CELL_MINUTES, CELLS_PER_DAY, DurationMode, validate_cell_index

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GenerationResult:
    """Windows produced for one grid selection.

    Attributes
    ----------
    windows:
        One window, or two when the selection crosses midnight (today first).
    dropped:
        Next-day dates whose window was omitted because they fall outside the
        visible range.
    """

    windows: tuple[Window, ...]
    dropped: tuple[CivilDate, ...] = ()

    @property
    def partial(self) -> bool:
        return bool(self.dropped)


def is_day_crossing(start_cell: int, mode: DurationMode | str) -> bool:
    mode = DurationMode.parse(mode)
    if mode is DurationMode.ONE_DAY:
        return False
    return validate_cell_index(start_cell) + mode.cells >= CELLS_PER_DAY


def generate_windows(
    day: CivilDate,
    start_cell: int,
    mode: DurationMode | str,
    calendar: CivilCalendar,
    *,
    visible_days: Collection[CivilDate] | None = None,
    available: bool = True,
) -> GenerationResult:
    """Compute the window(s) requested by a click on ``(day, start_cell)``.

    Selections that run past midnight are split into a today-window ending at
    the calendar's day end (23:59 by default) and a tomorrow-window starting at
    00:00. The tomorrow-window is omitted when it would be empty or when the
    next day is not in ``visible_days``.
    """

    mode = DurationMode.parse(mode)
    validate_cell_index(start_cell)

    if mode is DurationMode.ONE_DAY:
        whole_day = Window(start=calendar.day_start(day), end=calendar.day_end(day), available=available)
        return GenerationResult(windows=(whole_day,))

    end_cell = start_cell + mode.cells
    start = calendar.at(day, start_cell * CELL_MINUTES)
    if end_cell < CELLS_PER_DAY:
        window = Window(start=start, end=calendar.at(day, end_cell * CELL_MINUTES), available=available)
        return GenerationResult(windows=(window,))

    windows = [Window(start=start, end=calendar.day_end(day), available=available)]
    tomorrow = day.plus_days(1)
    spill_cells = end_cell - CELLS_PER_DAY
    if spill_cells == 0:
        return GenerationResult(windows=tuple(windows))
    if visible_days is not None and tomorrow not in visible_days:
        logger.info(
            "Dropping %s spill-over of %s selection at %s cell %d: day outside visible range",
            tomorrow,
            mode.value,
            day,
            start_cell,
        )
        return GenerationResult(windows=tuple(windows), dropped=(tomorrow,))
    windows.append(
        Window(
            start=calendar.day_start(tomorrow),
            end=calendar.at(tomorrow, spill_cells * CELL_MINUTES),
            available=available,
        )
    )
    return GenerationResult(windows=tuple(windows))


def apply_generation(
    existing: Iterable[Window],
    day: CivilDate,
    start_cell: int,
    mode: DurationMode | str,
    calendar: CivilCalendar,
    *,
    visible_days: Collection[CivilDate] | None = None,
) -> tuple[tuple[Window, ...], GenerationResult]:
    """Generate a selection and absorb it into ``existing`` with the full-overlap merge."""
    result = generate_windows(day, start_cell, mode, calendar, visible_days=visible_days)
    merged = merge_overlapping([*existing, *result.windows])
    logger.debug(
        "Applied %s selection at %s cell %d: %d generated, %d windows after merge",
        DurationMode.parse(mode).value,
        day,
        start_cell,
        len(result.windows),
        len(merged),
    )
    return merged, result


__all__ = ["GenerationResult", "is_day_crossing", "generate_windows", "apply_generation"]
