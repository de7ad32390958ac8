import json
from pathlib import Path

import pytest

from slotgrid.core.errors import SlotGridValueError
from slotgrid.io import WINDOW_COLUMNS, dump_windows, load_windows, windows_dataframe
from slotgrid.timeline import CivilCalendar, CivilTime

CAL = CivilCalendar()


def test_load_json_with_wire_keys_reads_naive_times_as_civil(tmp_path: Path):
    path = tmp_path / "slots.json"
    path.write_text(
        json.dumps(
            {
                "timeSlots": [
                    {"ID": "a", "StartTime": "2025-07-04T23:30:00", "EndTime": "2025-07-04T23:59:00", "Available": True},
                    {"start": "2025-07-04T15:00:00Z", "end": "2025-07-04T15:30:00Z"},
                ]
            }
        ),
        encoding="utf-8",
    )
    windows = load_windows(path, CAL)
    assert windows[0].id == "a"
    assert CAL.to_civil(windows[0].start) == CivilTime(2025, 7, 4, 23, 30)
    assert CAL.to_civil(windows[1].start) == CivilTime(2025, 7, 5, 0, 0)


def test_load_yaml_list(tmp_path: Path):
    path = tmp_path / "slots.yaml"
    path.write_text(
        "- start: '2025-07-04T10:00:00+09:00'\n  end: '2025-07-04T11:00:00+09:00'\n  available: false\n",
        encoding="utf-8",
    )
    (window,) = load_windows(path)
    assert window.available is False
    assert CAL.to_civil(window.end) == CivilTime(2025, 7, 4, 11, 0)


def test_csv_dump_and_load(tmp_path: Path):
    source = tmp_path / "in.json"
    source.write_text(
        json.dumps(
            [
                {"id": "x", "start": "2025-07-04T10:00:00+09:00", "end": "2025-07-04T10:30:00+09:00"},
                {"start": "2025-07-04T12:00:00+09:00", "end": "2025-07-04T13:00:00+09:00", "available": False},
            ]
        ),
        encoding="utf-8",
    )
    windows = load_windows(source)
    out = dump_windows(windows, tmp_path / "out" / "slots.csv")
    reloaded = load_windows(out)
    assert [w.span() for w in reloaded] == [w.span() for w in windows]
    assert reloaded[0].id == "x"
    assert reloaded[1].id is None
    assert reloaded[1].available is False


def test_json_dump_wraps_windows(tmp_path: Path):
    source = tmp_path / "in.yaml"
    source.write_text("windows:\n  - start: '2025-07-04T01:00:00Z'\n    end: '2025-07-04T02:00:00Z'\n", encoding="utf-8")
    out = dump_windows(load_windows(source), tmp_path / "out.json")
    payload = json.loads(out.read_text(encoding="utf-8"))
    assert payload["windows"][0]["start"] == "2025-07-04T01:00:00+00:00"


def test_invalid_rows_raise(tmp_path: Path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps([{"start": "2025-07-04T11:00:00Z", "end": "2025-07-04T10:00:00Z"}]), encoding="utf-8")
    with pytest.raises(SlotGridValueError):
        load_windows(path)
    other = tmp_path / "slots.txt"
    other.write_text("", encoding="utf-8")
    with pytest.raises(SlotGridValueError):
        load_windows(other)


def test_windows_dataframe_has_civil_columns(tmp_path: Path):
    path = tmp_path / "slots.json"
    path.write_text(
        json.dumps([{"start": "2025-07-04T14:00:00Z", "end": "2025-07-04T15:00:00Z"}]), encoding="utf-8"
    )
    frame = windows_dataframe(load_windows(path), CAL)
    assert list(frame.columns) == WINDOW_COLUMNS
    row = frame.iloc[0]
    assert row["civil_date"] == "2025-07-04"
    assert row["civil_start"] == "23:00"
    assert row["civil_end"] == "00:00"
    assert row["duration_minutes"] == 60
