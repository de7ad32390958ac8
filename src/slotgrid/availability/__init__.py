"""Availability store and click-level overlap guard."""

from .guard import GuardResult, check_cell, guard_applies
from .store import AvailabilityStore, Notice, SelectionOutcome, StoreRegistry

__all__ = [
    "GuardResult",
    "check_cell",
    "guard_applies",
    "AvailabilityStore",
    "Notice",
    "SelectionOutcome",
    "StoreRegistry",
]
