from __future__ import annotations

import datetime as dt
import logging

from floorrota.calendar.utils import shift_window, weekday_of
from floorrota.domain.config import DEFAULT_ROTATION_CONFIG
from floorrota.domain.types import (
    DayEntry,
    DayStatus,
    RotationConfig,
    resolve_shift_kind,
)

log = logging.getLogger(__name__)

EMPTY_DAY = DayEntry()
OFF_DAY = DayEntry(status=DayStatus.OFF)


def build_day_entry(
    day: dt.date,
    assigned_shift: str | None,
    config: RotationConfig = DEFAULT_ROTATION_CONFIG,
) -> DayEntry:
    """
    割り当てシフトから day 1日分の基本エントリを作る。
    - 定義のないシフト: 空エントリ(例外は投げない)
    - off_weekdays に該当する曜日: 休み(既定では午後シフトの日・月・土)
    """
    kind = resolve_shift_kind(assigned_shift)
    shift = config.shift_defs.get(kind) if kind is not None else None
    if shift is None:
        log.warning("day_entry: no definition for shift %r on %s", assigned_shift, day)
        return EMPTY_DAY

    if weekday_of(day) in config.off_weekdays.get(kind, frozenset()):
        return OFF_DAY

    return DayEntry(
        status=DayStatus.SCHEDULED,
        shift=kind.value,
        start=shift.start,
        end=shift.end,
        duration=shift.duration,
        overtime=shift.overtime,
    )


def entry_window(day: dt.date, entry: DayEntry) -> tuple[dt.datetime, dt.datetime] | None:
    """勤務のあるエントリの開始・終了日時。夜勤は翌日終了になる。"""
    if entry.is_off or not entry.start or not entry.end:
        return None
    return shift_window(day, entry.start, entry.end)
