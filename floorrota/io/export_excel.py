from __future__ import annotations

import datetime as dt
from typing import Final, cast

from openpyxl import Workbook
from openpyxl.cell.cell import Cell
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from floorrota.calendar.utils import format_date, week_dates
from floorrota.domain.types import WeeklySchedule, WorkerProfile
from floorrota.report.grid import EMPTY_CELL, cell_label

SHEET_TITLE: Final[str] = "Schedule"
FIRST_DAY_COLUMN: Final[int] = 3  # A: 作業員, B: 週のシフト, C〜I: 日〜土


def export_week_to_excel(
    *,
    workers: list[WorkerProfile],
    schedules: dict[str, WeeklySchedule],
    week_start: dt.date,
    out_path: str,
) -> None:
    """workers の並び順で 1 週間分のグリッドを書き出す。schedules は worker_id → 勤務表。"""
    wb = Workbook()

    ws_like = wb.active
    # None/Chartsheet の可能性を潰す
    if not isinstance(ws_like, Worksheet):
        ws_like = wb.create_sheet(title=SHEET_TITLE)
    ws: Worksheet = cast(Worksheet, ws_like)
    ws.title = SHEET_TITLE

    days = week_dates(week_start)
    last_col = FIRST_DAY_COLUMN + len(days) - 1

    ws.column_dimensions["A"].width = 16
    ws.column_dimensions["B"].width = 12
    for idx in range(len(days)):
        ws.column_dimensions[get_column_letter(FIRST_DAY_COLUMN + idx)].width = 24

    bold = Font(bold=True)
    center = Alignment(horizontal="center", vertical="center", wrap_text=True)
    left = Alignment(horizontal="left", vertical="center", wrap_text=True)
    border = Border(
        left=Side(style="thin"),
        right=Side(style="thin"),
        top=Side(style="thin"),
        bottom=Side(style="thin"),
    )
    weekend_fill = PatternFill(fill_type="solid", start_color="EEF2FF", end_color="EEF2FF")
    off_fill = PatternFill(fill_type="solid", start_color="D9D9D9", end_color="D9D9D9")
    override_fill = PatternFill(fill_type="solid", start_color="FFF4CC", end_color="FFF4CC")

    # 見出し
    a1: Cell = ws.cell(row=1, column=1, value="Worker")
    b1: Cell = ws.cell(row=1, column=2, value="Shift")
    for c in (a1, b1):
        c.font = bold
        c.alignment = center
    for j, d in enumerate(days, start=FIRST_DAY_COLUMN):
        cell: Cell = ws.cell(row=1, column=j, value=f"{d:%a} {format_date(d)}")
        cell.font = bold
        cell.alignment = center
        if d.weekday() >= 5:
            cell.fill = weekend_fill

    # 本体行
    for i, worker in enumerate(workers, start=2):
        schedule = schedules.get(worker.id)
        ws.cell(row=i, column=1, value=worker.name or worker.id).alignment = left
        ws.cell(
            row=i, column=2, value=schedule.assigned_shift if schedule else EMPTY_CELL
        ).alignment = center

        for j, d in enumerate(days, start=FIRST_DAY_COLUMN):
            date_str = format_date(d)
            entry = schedule.days.get(date_str) if schedule else None
            cell = ws.cell(row=i, column=j, value=cell_label(entry) if entry else EMPTY_CELL)
            cell.alignment = left
            # 上書きのある日 > 休み > 週末 の優先で色付け
            if date_str in worker.manual_overrides:
                cell.fill = override_fill
            elif entry is not None and entry.is_off:
                cell.fill = off_fill
            elif d.weekday() >= 5:
                cell.fill = weekend_fill

        for col in range(1, last_col + 1):
            ws.cell(row=i, column=col).border = border

    for col in range(1, last_col + 1):
        ws.cell(row=1, column=col).border = border

    ws.freeze_panes = "C2"
    wb.save(out_path)
