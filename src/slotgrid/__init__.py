"""slotgrid: fixed-offset availability time-slot engine."""

from slotgrid.availability import AvailabilityStore, GuardResult, SelectionOutcome, check_cell
from slotgrid.config import EngineConfig, load_config
from slotgrid.core import SlotGridError, SlotGridValueError, Window
from slotgrid.intervals import (
    GenerationResult,
    apply_generation,
    generate_windows,
    merge_overlapping,
    merge_touching,
    overlaps,
)
from slotgrid.timeline import CivilCalendar, CivilDate, CivilTime, DurationMode, FixedClock, SystemClock

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "AvailabilityStore",
    "GuardResult",
    "SelectionOutcome",
    "check_cell",
    "EngineConfig",
    "load_config",
    "SlotGridError",
    "SlotGridValueError",
    "Window",
    "GenerationResult",
    "apply_generation",
    "generate_windows",
    "merge_overlapping",
    "merge_touching",
    "overlaps",
    "CivilCalendar",
    "CivilDate",
    "CivilTime",
    "DurationMode",
    "FixedClock",
    "SystemClock",
]
