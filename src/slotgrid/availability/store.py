"""Reference availability store owning one schedule's window set."""

from __future__ import annotations

import datetime as dt
import logging
import threading
from collections.abc import Collection, Iterable
from dataclasses import dataclass, field

from slotgrid.availability.guard import GuardResult, check_cell, guard_applies
from slotgrid.config import EngineConfig
from slotgrid.core.types import Window
from slotgrid.intervals.generator import apply_generation
from slotgrid.intervals.merge import merge_overlapping, merge_touching
from slotgrid.intervals.overlap import validate_window_set
from slotgrid.timeline.civil import CivilDate
from slotgrid.timeline.clock import Clock, SystemClock
from slotgrid.timeline.grid import DurationMode

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SelectionOutcome:
    """Result of one grid selection against the store."""

    accepted: bool
    windows: tuple[Window, ...]
    generated: tuple[Window, ...] = ()
    dropped: tuple[CivilDate, ...] = ()
    notice: GuardResult | None = None


@dataclass(frozen=True, slots=True)
class Notice:
    message: str
    expires_at: dt.datetime


class AvailabilityStore:
    """Holds the window set of one schedule and serialises engine calls.

    Every mutation runs under a per-store lock, so one selection (including its
    merge) completes before the next is applied. Stores for different schedules
    share nothing.
    """

    def __init__(
        self,
        schedule_id: str,
        windows: Iterable[Window] = (),
        *,
        config: EngineConfig | None = None,
        clock: Clock | None = None,
        visible_days: Collection[CivilDate] | None = None,
    ) -> None:
        self.schedule_id = schedule_id
        self.config = config or EngineConfig()
        self.calendar = self.config.calendar()
        self.clock = clock or SystemClock()
        self.visible_days: tuple[CivilDate, ...] | None = (
            tuple(visible_days) if visible_days is not None else None
        )
        self._windows: tuple[Window, ...] = merge_overlapping(windows)
        self._notice: Notice | None = None
        self._lock = threading.Lock()

    @property
    def windows(self) -> tuple[Window, ...]:
        return self._windows

    def show_week(self, anchor: CivilDate | None = None) -> tuple[CivilDate, ...]:
        """Restrict the visible range to the week containing ``anchor`` (default: today)."""
        anchor = anchor or self.calendar.today(self.clock)
        with self._lock:
            self.visible_days = self.calendar.week_dates(anchor)
        return self.visible_days

    def select(self, day: CivilDate, cell: int, mode: DurationMode | str) -> SelectionOutcome:
        mode = DurationMode.parse(mode)
        with self._lock:
            if guard_applies(cell, mode):
                verdict = check_cell(
                    self._windows,
                    day,
                    cell,
                    self.calendar,
                    message=self.config.conflict_message,
                    expires_after=self.config.notice_seconds,
                )
                if not verdict.accepted:
                    self._post_notice(verdict)
                    logger.debug(
                        "Schedule %s: rejected %s at %s cell %d (%d conflicts)",
                        self.schedule_id,
                        mode.value,
                        day,
                        cell,
                        len(verdict.conflicts),
                    )
                    return SelectionOutcome(accepted=False, windows=self._windows, notice=verdict)
            merged, result = apply_generation(
                self._windows,
                day,
                cell,
                mode,
                self.calendar,
                visible_days=self.visible_days,
            )
            self._windows = merged
            return SelectionOutcome(
                accepted=True,
                windows=merged,
                generated=result.windows,
                dropped=result.dropped,
            )

    def add_windows(self, windows: Iterable[Window]) -> tuple[Window, ...]:
        """Fold gesture-drawn windows in with the same-day touching merge.

        The touching merge does not absorb overlaps: callers pass cells that are
        free in the current set. A set left overlapping is logged as a warning.
        """
        with self._lock:
            self._windows = merge_touching([*self._windows, *windows], self.calendar)
            problems = validate_window_set(self._windows)
            if problems:
                logger.warning("Schedule %s: %s", self.schedule_id, "; ".join(problems))
            return self._windows

    def remove(self, window_id: str) -> bool:
        with self._lock:
            kept = tuple(w for w in self._windows if w.id != window_id)
            removed = len(kept) != len(self._windows)
            self._windows = kept
        return removed

    def clear(self) -> None:
        with self._lock:
            self._windows = ()
            self._notice = None

    def _post_notice(self, verdict: GuardResult) -> None:
        expires_at = self.clock.now() + dt.timedelta(seconds=verdict.expires_after or 0.0)
        self._notice = Notice(message=verdict.reason or "", expires_at=expires_at)

    def active_notice(self) -> str | None:
        """The pending rejection message, or ``None`` once it has expired."""
        with self._lock:
            notice = self._notice
            if notice is None:
                return None
            if self.clock.now() >= notice.expires_at:
                self._notice = None
                return None
            return notice.message


@dataclass
class StoreRegistry:
    """Hands out one ``AvailabilityStore`` per schedule id."""

    config: EngineConfig = field(default_factory=EngineConfig)
    clock: Clock = field(default_factory=SystemClock)
    _stores: dict[str, AvailabilityStore] = field(default_factory=dict, init=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False)

    def get(self, schedule_id: str, windows: Iterable[Window] = ()) -> AvailabilityStore:
        with self._lock:
            store = self._stores.get(schedule_id)
            if store is None:
                store = AvailabilityStore(schedule_id, windows, config=self.config, clock=self.clock)
                self._stores[schedule_id] = store
            return store

    def drop(self, schedule_id: str) -> bool:
        with self._lock:
            return self._stores.pop(schedule_id, None) is not None

    def __len__(self) -> int:
        return len(self._stores)


__all__ = ["AvailabilityStore", "SelectionOutcome", "Notice", "StoreRegistry"]
