import datetime as dt

import pytest

from slotgrid.config import OFFSET_ENV_VAR
from slotgrid.timeline import CivilCalendar, FixedClock


@pytest.fixture(autouse=True)
def _isolate_offset_env(monkeypatch):
    """Keep a developer's offset override out of the suite."""

    monkeypatch.delenv(OFFSET_ENV_VAR, raising=False)


@pytest.fixture
def calendar() -> CivilCalendar:
    return CivilCalendar()


@pytest.fixture
def clock() -> FixedClock:
    # 2025-07-04 10:00 JST
    return FixedClock(dt.datetime(2025, 7, 4, 1, 0, tzinfo=dt.timezone.utc))
