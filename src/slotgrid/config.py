"""Engine configuration: civil offset, day-end convention, and notice settings."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from slotgrid.core.errors import SlotGridValueError
from slotgrid.timeline.civil import (
    JST_OFFSET_MINUTES,
    LAST_CELL_START_MINUTES,
    MINUTES_PER_DAY,
    MINUTES_PER_HOUR,
    CivilCalendar,
)

OFFSET_ENV_VAR = "SLOTGRID_UTC_OFFSET"
DEFAULT_CONFLICT_MESSAGE = "This time already overlaps an existing availability window."
DEFAULT_NOTICE_SECONDS = 3.0

_OFFSET_RE = re.compile(r"^([+-])(\d{2}):?(\d{2})$")
_HHMM_RE = re.compile(r"^(\d{2}):(\d{2})$")


def parse_offset(value: str | int) -> int:
    """Parse ``+09:00``/``+0900``/``-05:00`` (or integer minutes) into minutes."""
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if text.upper() in {"Z", "UTC"}:
        return 0
    match = _OFFSET_RE.match(text)
    if match:
        sign_s, hh_s, mm_s = match.groups()
        hours, minutes = int(hh_s), int(mm_s)
        if hours > 18 or minutes > 59:
            raise SlotGridValueError(f"Invalid UTC offset: {text!r}")
        sign = 1 if sign_s == "+" else -1
        return sign * (hours * MINUTES_PER_HOUR + minutes)
    try:
        return int(text)
    except ValueError as exc:
        raise SlotGridValueError(f"Invalid UTC offset: {text!r}") from exc


def parse_hhmm(value: str) -> int:
    """Day-end time as minutes after midnight; must lie after 23:30 and before 24:00."""
    match = _HHMM_RE.match(str(value).strip())
    if not match:
        raise ValueError(f"expected HH:MM, got {value!r}")
    hours, minutes = int(match.group(1)), int(match.group(2))
    total = hours * MINUTES_PER_HOUR + minutes
    if minutes > 59 or not LAST_CELL_START_MINUTES < total < MINUTES_PER_DAY:
        raise ValueError(f"{value!r} is not a valid day-end time")
    return total


class EngineConfig(BaseModel):
    """Validated engine settings (loaded from YAML or a named preset)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    utc_offset_minutes: int = JST_OFFSET_MINUTES
    day_end: str = "23:59"
    notice_seconds: float = DEFAULT_NOTICE_SECONDS
    conflict_message: str = DEFAULT_CONFLICT_MESSAGE

    @field_validator("utc_offset_minutes", mode="before")
    @classmethod
    def _offset(cls, value: Any) -> int:
        return parse_offset(value)

    @field_validator("utc_offset_minutes")
    @classmethod
    def _offset_range(cls, value: int) -> int:
        if abs(value) > 18 * MINUTES_PER_HOUR:
            raise ValueError("utc_offset_minutes must be within +/-18 hours")
        return value

    @field_validator("day_end")
    @classmethod
    def _day_end(cls, value: str) -> str:
        parse_hhmm(value)
        return value

    @field_validator("notice_seconds")
    @classmethod
    def _notice_positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("notice_seconds must be positive")
        return value

    @property
    def day_end_minutes(self) -> int:
        return parse_hhmm(self.day_end)

    def calendar(self) -> CivilCalendar:
        return CivilCalendar(offset_minutes=self.utc_offset_minutes, day_end_minutes=self.day_end_minutes)


PRESETS: dict[str, EngineConfig] = {
    "jst": EngineConfig(),
    "utc": EngineConfig(utc_offset_minutes=0),
}


def get_preset(name: str) -> EngineConfig:
    key = name.lower()
    if key not in PRESETS:
        available = ", ".join(sorted(PRESETS))
        raise KeyError(f"Unknown preset '{name}'. Available: {available}")
    return PRESETS[key]


def _apply_env(data: dict[str, Any], environ: Mapping[str, str]) -> dict[str, Any]:
    override = environ.get(OFFSET_ENV_VAR)
    if override:
        data["utc_offset_minutes"] = parse_offset(override)
    return data


def load_config(
    path: str | Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> EngineConfig:
    """Load configuration from YAML (optional) and apply environment overrides."""

    data: dict[str, Any] = {}
    if path is not None:
        path = Path(path)
        with path.open("r", encoding="utf-8") as handle:
            raw = yaml.safe_load(handle) or {}
        if not isinstance(raw, dict):
            raise SlotGridValueError(f"Config {path} must contain a mapping")
        data.update(raw.get("slotgrid", raw))
    data = _apply_env(data, os.environ if environ is None else environ)
    try:
        return EngineConfig.model_validate(data)
    except ValidationError as exc:
        raise SlotGridValueError(f"Invalid slotgrid configuration: {exc}") from exc


__all__ = [
    "OFFSET_ENV_VAR",
    "DEFAULT_CONFLICT_MESSAGE",
    "DEFAULT_NOTICE_SECONDS",
    "EngineConfig",
    "PRESETS",
    "get_preset",
    "load_config",
    "parse_offset",
    "parse_hhmm",
]
