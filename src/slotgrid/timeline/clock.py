"""Injectable instant sources."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Protocol


class Clock(Protocol):
    def now(self) -> dt.datetime: ...


class SystemClock:
    """Reads the host clock (UTC)."""

    def now(self) -> dt.datetime:
        return dt.datetime.now(dt.timezone.utc)


@dataclass(slots=True)
class FixedClock:
    """Clock pinned to one instant; ``advance`` moves it forward."""

    instant: dt.datetime

    def now(self) -> dt.datetime:
        return self.instant

    def advance(self, **delta: float) -> dt.datetime:
        self.instant = self.instant + dt.timedelta(**delta)
        return self.instant


__all__ = ["Clock", "SystemClock", "FixedClock"]
