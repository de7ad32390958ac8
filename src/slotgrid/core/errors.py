"""Common slotgrid-specific exceptions."""


class SlotGridError(Exception):
    """Base class for errors raised by the slot engine."""


class SlotGridValueError(SlotGridError, ValueError):
    """Raised when slotgrid detects invalid caller-provided data."""


__all__ = ["SlotGridError", "SlotGridValueError"]
