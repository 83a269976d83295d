from __future__ import annotations

import datetime as dt
from collections.abc import Iterable
from typing import Final, Literal

from floorrota.domain.config import DEFAULT_ROTATION_CONFIG
from floorrota.domain.types import DayEntry, RotationConfig, ShiftKind, WorkerProfile, resolve_shift_kind
from floorrota.schedule.rotation import week_shift_for

SortKey = Literal["name", "shift"]

_SHIFT_RANK: Final[dict[ShiftKind, int]] = {
    ShiftKind.MORNING: 1,
    ShiftKind.AFTERNOON: 2,
    ShiftKind.NIGHT: 3,
}
_UNRANKED: Final[int] = 9

EMPTY_CELL: Final[str] = "-"


def normalize_shift_label(shift: str | None) -> ShiftKind:
    """表示用のシフト種別。カタログの3種以外はすべて custom 扱い。"""
    kind = resolve_shift_kind(shift)
    return kind if kind in _SHIFT_RANK else ShiftKind.CUSTOM


def shift_sort_rank(shift: str | None) -> int:
    return _SHIFT_RANK.get(resolve_shift_kind(shift), _UNRANKED)


def select_workers(
    workers: Iterable[WorkerProfile],
    week_start: dt.date,
    *,
    sort_by: SortKey = "name",
    shift_filter: str | None = None,
    name_filter: str | None = None,
    config: RotationConfig = DEFAULT_ROTATION_CONFIG,
) -> list[WorkerProfile]:
    """週の割り当てシフト・名前で絞り込み、並べ替える"""
    selected: list[WorkerProfile] = []
    for w in workers:
        label = w.name or w.id
        if name_filter and name_filter.lower() not in label.lower():
            continue
        if shift_filter and week_shift_for(w, week_start, config).lower() != shift_filter.lower():
            continue
        selected.append(w)

    def key(w: WorkerProfile) -> tuple[int, str]:
        rank = shift_sort_rank(week_shift_for(w, week_start, config)) if sort_by == "shift" else 0
        return rank, (w.name or w.id)

    return sorted(selected, key=key)


def _hours(value: float) -> str:
    return f"{value:g}"


def cell_label(entry: DayEntry) -> str:
    """
    グリッド1セル分の表示文字列。
    例: "OFF", "Morning 07:30-19:30 • 12h +4h OT", "Custom Time TBD", "-"
    """
    if entry.is_off:
        return "OFF"
    if not (entry.shift or entry.start or entry.end):
        return EMPTY_CELL

    kind = normalize_shift_label(entry.shift)
    label = kind.value.capitalize()
    time_text = f"{entry.start}-{entry.end}" if entry.start and entry.end else "Time TBD"
    meta = []
    if entry.duration is not None:
        meta.append(f"{_hours(entry.duration)}h")
    if entry.overtime:
        meta.append(f"+{_hours(entry.overtime)}h OT")
    text = f"{label} {time_text}"
    if meta:
        text += " • " + " ".join(meta)
    return text
