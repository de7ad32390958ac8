from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from slotgrid.cli.main import app
from slotgrid.io import load_windows

runner = CliRunner()


def _write(path: Path, windows: list[dict]) -> Path:
    path.write_text(json.dumps({"windows": windows}), encoding="utf-8")
    return path


def test_civil_command():
    result = runner.invoke(app, ["civil", "2025-07-04T14:30:00Z"])
    assert result.exit_code == 0, result.output
    assert "2025-07-04 23:30" in result.output
    assert "+09:00" in result.output


def test_generate_day_crossing_writes_set(tmp_path: Path):
    out = tmp_path / "set.json"
    telemetry = tmp_path / "telemetry" / "ops.jsonl"
    result = runner.invoke(
        app,
        ["generate", "2025-07-04", "46", "--mode", "3h", "--out", str(out), "--telemetry-log", str(telemetry)],
    )
    assert result.exit_code == 0, result.output
    assert "23:00-23:59" in result.output
    assert "00:00-02:00" in result.output
    assert len(load_windows(out)) == 2
    record = json.loads(telemetry.read_text(encoding="utf-8").splitlines()[0])
    assert record["operation"] == "generate"
    assert record["accepted"] is True


def test_generate_rejects_overlapping_click(tmp_path: Path):
    existing = _write(
        tmp_path / "existing.json",
        [{"start": "2025-07-04T10:00:00+09:00", "end": "2025-07-04T11:00:00+09:00"}],
    )
    result = runner.invoke(app, ["generate", "2025-07-04", "21", "--existing", str(existing)])
    assert result.exit_code == 1
    assert "Selection rejected" in result.output


def test_generate_rejects_unknown_mode():
    result = runner.invoke(app, ["generate", "2025-07-04", "10", "--mode", "2h"])
    assert result.exit_code != 0


def test_merge_touching_policy(tmp_path: Path):
    source = _write(
        tmp_path / "slots.json",
        [
            {"start": "2025-07-04T10:00:00+09:00", "end": "2025-07-04T10:30:00+09:00"},
            {"start": "2025-07-04T10:30:00+09:00", "end": "2025-07-04T11:00:00+09:00"},
            {"start": "2025-07-04T23:30:00+09:00", "end": "2025-07-04T23:59:00+09:00"},
            {"start": "2025-07-05T00:00:00+09:00", "end": "2025-07-05T00:30:00+09:00"},
        ],
    )
    out = tmp_path / "merged.csv"
    result = runner.invoke(app, ["merge", str(source), "--policy", "touching", "--out", str(out)])
    assert result.exit_code == 0, result.output
    assert len(load_windows(out)) == 3


def test_check_reports_overlaps(tmp_path: Path):
    source = _write(
        tmp_path / "slots.json",
        [
            {"start": "2025-07-04T10:00:00+09:00", "end": "2025-07-04T11:00:00+09:00"},
            {"start": "2025-07-04T10:30:00+09:00", "end": "2025-07-04T12:00:00+09:00"},
        ],
    )
    result = runner.invoke(app, ["check", str(source)])
    assert result.exit_code == 1
    assert "overlap" in result.output


def test_grid_command_marks_coverage(tmp_path: Path):
    source = _write(
        tmp_path / "slots.json",
        [{"start": "2025-07-04T10:00:00+09:00", "end": "2025-07-04T11:00:00+09:00"}],
    )
    result = runner.invoke(app, ["grid", "2025-07-04", "--existing", str(source), "--preset", "jst"])
    assert result.exit_code == 0, result.output
    assert "10:00 - 10:30" in result.output
