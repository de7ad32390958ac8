"""Window fusion policies.

``merge_touching`` continues a gesture: a window fuses with the next one only
when its end equals the next start and both readings fall on one civil day.
The 23:59 day end keeps per-day blocks from touching across midnight.
``merge_overlapping`` reconciles a new selection against the whole calendar and
absorbs any overlap, containment, or adjacency. Callers split day-crossing
selections before using it.
"""

from __future__ import annotations

from collections.abc import Iterable

from slotgrid.core.types import Window
from slotgrid.timeline.civil import CivilCalendar


def _by_start(windows: Iterable[Window]) -> list[Window]:
    return sorted(windows, key=lambda w: w.start)


def merge_touching(windows: Iterable[Window], calendar: CivilCalendar) -> tuple[Window, ...]:
    ordered = _by_start(windows)
    if not ordered:
        return ()

    merged: list[Window] = []
    current = ordered[0]
    for nxt in ordered[1:]:
        if current.end == nxt.start and calendar.same_civil_day(current.end, nxt.start):
            current = current.widened(nxt.end)
        else:
            merged.append(current)
            current = nxt
    merged.append(current)
    return tuple(merged)


def merge_overlapping(windows: Iterable[Window]) -> tuple[Window, ...]:
    ordered = _by_start(windows)
    if not ordered:
        return ()

    merged: list[Window] = []
    current = ordered[0]
    for nxt in ordered[1:]:
        if current.end >= nxt.start:
            current = current.widened(nxt.end)
        else:
            merged.append(current)
            current = nxt
    merged.append(current)
    return tuple(merged)


__all__ = ["merge_touching", "merge_overlapping"]
