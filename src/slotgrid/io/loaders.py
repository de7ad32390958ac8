"""Window-set loading and export (JSON/YAML/CSV)."""

from __future__ import annotations

import datetime as dt
import json
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any, cast

import pandas as pd
import yaml
from pydantic import TypeAdapter, ValidationError

from slotgrid.core.errors import SlotGridValueError
from slotgrid.core.types import Window
from slotgrid.timeline.civil import CivilCalendar

__all__ = [
    "WINDOW_COLUMNS",
    "read_csv",
    "parse_windows",
    "load_windows",
    "dump_windows",
    "windows_dataframe",
]

WINDOW_COLUMNS = [
    "id",
    "start",
    "end",
    "available",
    "civil_date",
    "civil_start",
    "civil_end",
    "duration_minutes",
]

_TIME_KEYS = ("start", "end", "StartTime", "EndTime", "startTime", "endTime")
_WINDOWS = TypeAdapter(list[Window])


def read_csv(path: Path) -> pd.DataFrame:
    """Load a CSV file using pandas with UTF-8 defaults."""
    return pd.read_csv(path, dtype={"id": "string"}, keep_default_na=True)


def _localise(value: object, calendar: CivilCalendar) -> object:
    """Attach the civil offset to wall-clock timestamps that carry none."""
    if isinstance(value, str):
        try:
            value = dt.datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return value
    if isinstance(value, dt.datetime) and value.tzinfo is None:
        return value.replace(tzinfo=calendar.tzinfo)
    return value


def _clean_row(row: dict[str, Any], calendar: CivilCalendar) -> dict[str, Any]:
    cleaned: dict[str, Any] = {}
    for key, value in row.items():
        if value is None or (not isinstance(value, (str, bool)) and pd.isna(cast("Any", value))):
            continue
        if hasattr(value, "item") and not isinstance(value, str):
            value = value.item()  # numpy scalars from pandas rows
        if key in _TIME_KEYS:
            value = _localise(value, calendar)
        elif isinstance(value, str):
            value = value.strip()
            if not value:
                continue
        cleaned[key] = value
    return cleaned


def parse_windows(rows: Iterable[dict[str, Any]], calendar: CivilCalendar | None = None) -> list[Window]:
    """Validate raw mappings into windows; naive times are read as civil wall clock."""
    calendar = calendar or CivilCalendar()
    try:
        return _WINDOWS.validate_python([_clean_row(dict(row), calendar) for row in rows])
    except ValidationError as exc:
        raise SlotGridValueError(f"Invalid window data: {exc}") from exc


def load_windows(path: str | Path, calendar: CivilCalendar | None = None) -> list[Window]:
    """Load a window list from ``.json``, ``.yaml``/``.yml`` or ``.csv``.

    JSON and YAML files may hold a bare list or a mapping with a ``windows``
    (or ``timeSlots``) key. Both ``start``/``end`` and the ``StartTime``/``EndTime``
    spellings are accepted.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".csv":
        rows = cast(list[dict[str, Any]], read_csv(path).to_dict("records"))
        return parse_windows(rows, calendar)
    with path.open("r", encoding="utf-8") as handle:
        if suffix == ".json":
            data = json.load(handle)
        elif suffix in {".yaml", ".yml"}:
            data = yaml.safe_load(handle)
        else:
            raise SlotGridValueError(f"Unsupported window file type: {path.suffix or path.name}")
    if isinstance(data, dict):
        data = data.get("windows", data.get("timeSlots"))
    if not isinstance(data, list):
        raise SlotGridValueError(f"{path} must contain a list of windows")
    return parse_windows(data, calendar)


def _window_record(window: Window) -> dict[str, Any]:
    return {
        "id": window.id,
        "start": window.start.isoformat(),
        "end": window.end.isoformat(),
        "available": window.available,
    }


def dump_windows(windows: Sequence[Window], path: str | Path) -> Path:
    """Write windows as JSON (default) or CSV depending on the suffix."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    records = [_window_record(w) for w in windows]
    if path.suffix.lower() == ".csv":
        pd.DataFrame(records, columns=["id", "start", "end", "available"]).to_csv(path, index=False)
    else:
        with path.open("w", encoding="utf-8") as handle:
            json.dump({"windows": records}, handle, ensure_ascii=False, indent=2)
            handle.write("\n")
    return path


def windows_dataframe(windows: Sequence[Window], calendar: CivilCalendar) -> pd.DataFrame:
    """Tabulate windows with their civil-day readings for reporting."""
    rows = []
    for window in windows:
        start = calendar.to_civil(window.start)
        end = calendar.to_civil(window.end)
        rows.append(
            {
                "id": window.id,
                "start": window.start,
                "end": window.end,
                "available": window.available,
                "civil_date": start.date.isoformat(),
                "civil_start": f"{start.hour:02d}:{start.minute:02d}",
                "civil_end": f"{end.hour:02d}:{end.minute:02d}",
                "duration_minutes": int(window.duration.total_seconds() // 60),
            }
        )
    return pd.DataFrame(rows, columns=WINDOW_COLUMNS)
