from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import click
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from slotgrid.availability import AvailabilityStore
from slotgrid.cli._utils import configure_logging, parse_day, parse_instant, parse_mode, resolve_config
from slotgrid.core.errors import SlotGridValueError
from slotgrid.core.types import Window
from slotgrid.intervals import merge_overlapping, merge_touching, validate_window_set
from slotgrid.io import dump_windows, load_windows
from slotgrid.telemetry import append_jsonl, operation_record
from slotgrid.timeline import CELLS_PER_DAY, CivilCalendar, cell_label, cell_of, is_cell_covered
from slotgrid.timeline.grid import format_window

app = typer.Typer(add_completion=False, no_args_is_help=True, help="Availability time-slot engine.")
console = Console()
MERGE_POLICY = click.Choice(["touching", "full"], case_sensitive=False)

_CONFIG_OPT = typer.Option(None, "--config", "-c", exists=True, dir_okay=False, help="YAML engine config.")
_PRESET_OPT = typer.Option(None, "--preset", help="Named config preset (jst, utc).")
_TELEMETRY_OPT = typer.Option(None, "--telemetry-log", dir_okay=False, help="Append a JSONL operation record.")
_VERBOSE_OPT = typer.Option(False, "--verbose", "-v", help="Show engine log records.")


def _enable_rich_tracebacks():
    try:
        import rich.traceback as _rt

        _rt.install(show_locals=False, width=120, extra_lines=2)
    except Exception:
        pass


def _load(path: Path, calendar: CivilCalendar) -> list[Window]:
    try:
        return load_windows(path, calendar)
    except SlotGridValueError as exc:
        console.print(f"[red]Could not load windows:[/red] {escape(str(exc))}")
        raise typer.Exit(1)


def _print_windows(title: str, windows: Sequence[Window], calendar: CivilCalendar) -> None:
    table = Table(title=title)
    table.add_column("#", justify="right")
    table.add_column("Date")
    table.add_column("Time")
    table.add_column("Minutes", justify="right")
    table.add_column("Available")
    table.add_column("ID")
    for idx, window in enumerate(windows):
        table.add_row(
            str(idx),
            calendar.civil_date(window.start).isoformat(),
            format_window(window, calendar),
            str(int(window.duration.total_seconds() // 60)),
            "yes" if window.available else "no",
            window.id or "-",
        )
    console.print(table)


@app.command()
def civil(
    instant: str = typer.Argument(..., help="ISO-8601 instant (no offset = civil wall clock)."),
    config: Path | None = _CONFIG_OPT,
    preset: str | None = _PRESET_OPT,
):
    """Show the civil (wall clock) reading of an instant."""
    calendar = resolve_config(config, preset).calendar()
    value = parse_instant(instant, calendar)
    reading = calendar.to_civil(value)
    console.print(f"UTC:   {value.isoformat()}")
    console.print(f"Civil: {reading} ({calendar.offset_label})")
    console.print(f"Cell:  {cell_of(value, calendar)} ({cell_label(cell_of(value, calendar))})")


@app.command()
def generate(
    day: str = typer.Argument(..., help="Civil date (YYYY-MM-DD)."),
    cell: int = typer.Argument(..., min=0, max=CELLS_PER_DAY - 1, help="Grid cell index 0..47."),
    mode: str = typer.Option("30min", "--mode", "-m", help="Duration mode: 30min, 1h, 3h, 1day."),
    existing: Path | None = typer.Option(
        None, "--existing", "-e", exists=True, dir_okay=False, help="Existing windows file."
    ),
    week: bool = typer.Option(
        False, "--week", help="Limit the visible range to the week containing DAY."
    ),
    out: Path | None = typer.Option(None, "--out", "-o", dir_okay=False, help="Write the resulting set."),
    config: Path | None = _CONFIG_OPT,
    preset: str | None = _PRESET_OPT,
    telemetry_log: Path | None = _TELEMETRY_OPT,
    verbose: bool = _VERBOSE_OPT,
):
    """Apply one grid selection to an existing window set."""
    configure_logging(verbose)
    engine_config = resolve_config(config, preset)
    calendar = engine_config.calendar()
    selected_day = parse_day(day)
    duration = parse_mode(mode)
    windows = _load(existing, calendar) if existing else []

    store = AvailabilityStore("cli", windows, config=engine_config)
    if week:
        store.show_week(selected_day)
    outcome = store.select(selected_day, cell, duration)
    if telemetry_log:
        append_jsonl(
            telemetry_log,
            operation_record(
                "generate",
                inputs=windows,
                outputs=outcome.windows,
                day=selected_day.isoformat(),
                cell=cell,
                mode=duration.value,
                accepted=outcome.accepted,
                dropped=[d.isoformat() for d in outcome.dropped],
            ),
        )
    if not outcome.accepted:
        reason = outcome.notice.reason if outcome.notice else "rejected"
        console.print(f"[yellow]Selection rejected:[/yellow] {escape(reason)}")
        raise typer.Exit(1)

    _print_windows("Generated", outcome.generated, calendar)
    for dropped in outcome.dropped:
        console.print(f"[dim]{dropped} is outside the visible range; its part was skipped.[/dim]")
    _print_windows("Window set", outcome.windows, calendar)
    if out:
        dump_windows(outcome.windows, out)
        console.print(f"Saved {len(outcome.windows)} window(s) to {out}")


@app.command()
def merge(
    source: Path = typer.Argument(..., exists=True, dir_okay=False, help="Windows file to merge."),
    policy: str = typer.Option(
        "full", "--policy", "-p", click_type=MERGE_POLICY, help="touching (same-day) or full."
    ),
    out: Path | None = typer.Option(None, "--out", "-o", dir_okay=False, help="Write the merged set."),
    config: Path | None = _CONFIG_OPT,
    preset: str | None = _PRESET_OPT,
    telemetry_log: Path | None = _TELEMETRY_OPT,
):
    """Fuse a window list with one of the merge policies."""
    calendar = resolve_config(config, preset).calendar()
    windows = _load(source, calendar)
    if policy.lower() == "touching":
        merged = merge_touching(windows, calendar)
    else:
        merged = merge_overlapping(windows)
    if telemetry_log:
        append_jsonl(
            telemetry_log,
            operation_record("merge", inputs=windows, outputs=merged, policy=policy.lower()),
        )
    _print_windows(f"Merged ({policy.lower()})", merged, calendar)
    if out:
        dump_windows(merged, out)
        console.print(f"Saved {len(merged)} window(s) to {out}")


@app.command()
def check(
    source: Path = typer.Argument(..., exists=True, dir_okay=False, help="Windows file to validate."),
    config: Path | None = _CONFIG_OPT,
    preset: str | None = _PRESET_OPT,
):
    """Verify a window set is sorted and free of overlaps."""
    calendar = resolve_config(config, preset).calendar()
    windows = _load(source, calendar)
    problems = validate_window_set(windows)
    if problems:
        for problem in problems:
            console.print(f"[red]{escape(problem)}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]{len(windows)} window(s) OK[/green]")


@app.command()
def grid(
    day: str = typer.Argument(..., help="Civil date (YYYY-MM-DD)."),
    existing: Path | None = typer.Option(
        None, "--existing", "-e", exists=True, dir_okay=False, help="Windows file to overlay."
    ),
    config: Path | None = _CONFIG_OPT,
    preset: str | None = _PRESET_OPT,
):
    """Render the 48 cells of a civil day with window coverage."""
    calendar = resolve_config(config, preset).calendar()
    selected_day = parse_day(day)
    windows = _load(existing, calendar) if existing else []
    table = Table(title=f"{selected_day} ({calendar.offset_label})")
    table.add_column("Cell", justify="right")
    table.add_column("Time")
    table.add_column("Covered")
    for cell in range(CELLS_PER_DAY):
        covered = any(is_cell_covered(w, selected_day, cell, calendar) for w in windows)
        table.add_row(str(cell), cell_label(cell), "[green]#[/green]" if covered else "")
    console.print(table)


def main() -> None:
    _enable_rich_tracebacks()
    app()


if __name__ == "__main__":
    main()
