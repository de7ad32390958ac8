"""Core utilities shared across slotgrid modules."""

from .errors import SlotGridError, SlotGridValueError
from .types import Window, ensure_utc

__all__ = ["SlotGridError", "SlotGridValueError", "Window", "ensure_utc"]
