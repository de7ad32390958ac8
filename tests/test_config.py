from pathlib import Path

import pytest
from pydantic import ValidationError

from slotgrid.availability import AvailabilityStore
from slotgrid.config import OFFSET_ENV_VAR, EngineConfig, get_preset, load_config, parse_offset
from slotgrid.core.errors import SlotGridValueError
from slotgrid.timeline import CivilDate, CivilTime


def test_defaults_are_jst_with_2359_day_end():
    config = load_config(environ={})
    assert config.utc_offset_minutes == 540
    assert config.day_end_minutes == 23 * 60 + 59
    assert config.notice_seconds == pytest.approx(3.0)
    calendar = config.calendar()
    assert calendar.to_civil(calendar.day_end(CivilDate(2025, 7, 4))) == CivilTime(2025, 7, 4, 23, 59)


def test_yaml_config_with_offset_string(tmp_path: Path):
    path = tmp_path / "slotgrid.yaml"
    path.write_text('slotgrid:\n  utc_offset_minutes: "+05:30"\n  notice_seconds: 5\n', encoding="utf-8")
    config = load_config(path, environ={})
    assert config.utc_offset_minutes == 330
    assert config.notice_seconds == pytest.approx(5.0)


def test_environment_override_wins(tmp_path: Path):
    path = tmp_path / "slotgrid.yaml"
    path.write_text("utc_offset_minutes: 60\n", encoding="utf-8")
    config = load_config(path, environ={OFFSET_ENV_VAR: "-03:00"})
    assert config.utc_offset_minutes == -180


def test_invalid_config_raises_value_error(tmp_path: Path):
    path = tmp_path / "bad.yaml"
    path.write_text("day_end: '25:00'\n", encoding="utf-8")
    with pytest.raises(SlotGridValueError):
        load_config(path, environ={})
    path.write_text("unknown_key: 1\n", encoding="utf-8")
    with pytest.raises(SlotGridValueError):
        load_config(path, environ={})
    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(SlotGridValueError):
        load_config(path, environ={})


def test_parse_offset_forms():
    assert parse_offset("+09:00") == 540
    assert parse_offset("+0930") == 570
    assert parse_offset("Z") == 0
    assert parse_offset(-120) == -120
    with pytest.raises(SlotGridValueError):
        parse_offset("nine")


def test_presets():
    assert get_preset("UTC").utc_offset_minutes == 0
    with pytest.raises(KeyError):
        get_preset("mars")


def test_config_is_frozen():
    config = EngineConfig()
    with pytest.raises(Exception):
        config.utc_offset_minutes = 0


@pytest.mark.parametrize("day_end", ["24:00", "23:30", "00:00", "12:00"])
def test_day_end_must_stay_inside_last_cell(day_end: str):
    with pytest.raises(ValidationError):
        EngineConfig(day_end=day_end)


def test_latest_day_end_keeps_midnight_split_apart():
    store = AvailabilityStore("late", config=EngineConfig(day_end="23:59"))
    outcome = store.select(CivilDate(2025, 7, 4), 46, "3h")
    calendar = store.calendar
    assert [(calendar.to_civil(w.start), calendar.to_civil(w.end)) for w in outcome.windows] == [
        (CivilTime(2025, 7, 4, 23, 0), CivilTime(2025, 7, 4, 23, 59)),
        (CivilTime(2025, 7, 5, 0, 0), CivilTime(2025, 7, 5, 2, 0)),
    ]
