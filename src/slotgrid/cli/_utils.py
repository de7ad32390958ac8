"""CLI helper utilities for slotgrid."""

from __future__ import annotations

import datetime as dt
import logging
from pathlib import Path

import typer

from slotgrid.config import EngineConfig, get_preset, load_config
from slotgrid.core.errors import SlotGridValueError
from slotgrid.timeline.civil import CivilCalendar, CivilDate
from slotgrid.timeline.grid import DurationMode


def resolve_config(config_path: Path | None, preset: str | None) -> EngineConfig:
    """Config file wins over a preset; neither means defaults plus env overrides."""
    if config_path is not None:
        try:
            return load_config(config_path)
        except SlotGridValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="--config") from exc
    if preset is not None:
        try:
            return get_preset(preset)
        except KeyError as exc:
            raise typer.BadParameter(str(exc.args[0]), param_hint="--preset") from exc
    return load_config()


def parse_mode(value: str) -> DurationMode:
    try:
        return DurationMode.parse(value)
    except SlotGridValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--mode") from exc


def parse_day(value: str) -> CivilDate:
    try:
        return CivilDate.parse(value)
    except SlotGridValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="DAY") from exc


def parse_instant(value: str, calendar: CivilCalendar) -> dt.datetime:
    """ISO-8601 instant; a value without offset is read as civil wall clock."""
    try:
        parsed = dt.datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError as exc:
        raise typer.BadParameter(f"Invalid ISO-8601 instant: {value!r}", param_hint="INSTANT") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=calendar.tzinfo)
    return parsed.astimezone(dt.timezone.utc)


def configure_logging(verbose: bool) -> None:
    """Route slotgrid log records through rich when ``--verbose`` is given."""
    if not verbose:
        return
    from rich.logging import RichHandler

    logger = logging.getLogger("slotgrid")
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(show_path=False, markup=False))
    logger.setLevel(logging.DEBUG)


__all__ = ["resolve_config", "parse_mode", "parse_day", "parse_instant", "configure_logging"]
