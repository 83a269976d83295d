from __future__ import annotations

import datetime as dt
from collections.abc import Mapping

from rich.console import Console
from rich.table import Table

from floorrota.calendar.utils import format_date, week_dates
from floorrota.domain.types import WeeklySchedule, WorkerProfile
from floorrota.report.grid import EMPTY_CELL, cell_label


def _styled(label: str, overridden: bool) -> str:
    if label == "OFF":
        return "[dim]OFF[/]"
    if overridden:
        return f"[yellow]{label}[/] *"
    return label


def print_week_rich(
    workers: list[WorkerProfile],
    schedules: Mapping[str, WeeklySchedule],
    week_start: dt.date,
    console: Console | None = None,
) -> None:
    console = console or Console()
    days = week_dates(week_start)

    console.rule(f"[bold]Week of {format_date(week_start)}")
    if not workers:
        console.print("[bold yellow]条件に一致する作業員がいません。[/]")
        return

    t = Table("Worker", "Shift", show_lines=True)
    for d in days:
        t.add_column(f"{d:%a}\n{d:%m-%d}", overflow="fold", style="cyan" if d.weekday() >= 5 else None)

    for w in workers:
        schedule = schedules.get(w.id)
        if schedule is None:
            t.add_row(w.name or w.id, EMPTY_CELL, *[EMPTY_CELL] * len(days))
            continue
        cells = []
        for d in days:
            date_str = format_date(d)
            entry = schedule.days.get(date_str)
            label = cell_label(entry) if entry is not None else EMPTY_CELL
            cells.append(_styled(label, date_str in w.manual_overrides))
        t.add_row(w.name or w.id, schedule.assigned_shift, *cells)

    console.print(t)
    console.print("[dim]* 手動上書きあり[/]")
