"""Half-open interval predicates and window-set validation."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from slotgrid.core.types import Window


def overlaps(a: Window, b: Window) -> bool:
    """Half-open overlap test; windows that merely touch do not overlap."""
    return a.start < b.end and b.start < a.end


def touches(a: Window, b: Window) -> bool:
    return a.end == b.start or b.end == a.start


def find_overlapping(candidate: Window, windows: Iterable[Window]) -> tuple[Window, ...]:
    return tuple(w for w in windows if overlaps(candidate, w))


def has_overlap(candidate: Window, windows: Iterable[Window]) -> bool:
    return any(overlaps(candidate, w) for w in windows)


def validate_window_set(windows: Sequence[Window]) -> list[str]:
    """Return problems that break the sorted, non-overlapping window-set invariant."""

    problems: list[str] = []
    for idx in range(1, len(windows)):
        if windows[idx].start < windows[idx - 1].start:
            problems.append(f"Window {idx} starts before window {idx - 1}; set is not sorted")
    for i in range(len(windows)):
        for j in range(i + 1, len(windows)):
            if overlaps(windows[i], windows[j]):
                problems.append(
                    f"Windows {i} [{windows[i].start.isoformat()}, {windows[i].end.isoformat()}) "
                    f"and {j} [{windows[j].start.isoformat()}, {windows[j].end.isoformat()}) overlap"
                )
    return problems


__all__ = ["overlaps", "touches", "find_overlapping", "has_overlap", "validate_window_set"]
