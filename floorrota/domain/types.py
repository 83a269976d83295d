from __future__ import annotations

import datetime as dt
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any


class ShiftKind(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    NIGHT = "night"
    OFF = "off"  # シフトなし
    CUSTOM = "custom"  # カタログ外の手動定義シフト


class DayStatus(str, Enum):
    SCHEDULED = "scheduled"
    OFF = "off"


class Weekday(str, Enum):
    MONDAY = "mon"
    TUESDAY = "tue"
    WEDNESDAY = "wed"
    THURSDAY = "thu"
    FRIDAY = "fri"
    SATURDAY = "sat"
    SUNDAY = "sun"


def resolve_shift_kind(value: str | None) -> ShiftKind | None:
    """大文字小文字・前後空白を無視して ShiftKind に解決する。未知の値は None。"""
    if not isinstance(value, str):
        return None
    try:
        return ShiftKind(value.strip().lower())
    except ValueError:
        return None


@dataclass(frozen=True)
class ShiftDefinition:
    start: str  # "HH:MM"
    end: str  # "HH:MM"。start 以下なら日付をまたぐ
    duration: float
    overtime: float

    @property
    def spans_midnight(self) -> bool:
        return self.end <= self.start


def _plain(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


@dataclass(frozen=True)
class DayEntry:
    """
    1作業員・1日分の実効スケジュール。
    全フィールドが None のものは「スケジュールが生成されなかった」空エントリ。
    status が off のとき、shift 以下のフィールドは利用側で無視される。
    """

    status: DayStatus | None = None
    shift: str | None = None
    start: str | None = None
    end: str | None = None
    duration: float | None = None
    overtime: float | None = None
    notes: str | None = None

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))

    @property
    def is_off(self) -> bool:
        return self.status == DayStatus.OFF

    def to_dict(self) -> dict[str, Any]:
        # 値がないフィールドは省略で表す(番兵文字列は使わない)
        return {
            f.name: _plain(getattr(self, f.name))
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


@dataclass(frozen=True)
class DayOverride:
    """DayEntry の各フィールドに対応する任意項目。None は「未設定」。"""

    status: DayStatus | None = None
    shift: str | None = None
    start: str | None = None
    end: str | None = None
    duration: float | None = None
    overtime: float | None = None
    notes: str | None = None

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))

    def to_dict(self) -> dict[str, Any]:
        return {
            f.name: _plain(getattr(self, f.name))
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


@dataclass(frozen=True)
class RotationConfig:
    rotation_order: tuple[ShiftKind, ...]
    anchor_date: dt.date  # この日を含む週がローテーション 0 週目
    shift_defs: Mapping[ShiftKind, ShiftDefinition]
    off_weekdays: Mapping[ShiftKind, frozenset[Weekday]] = field(default_factory=dict)


@dataclass
class WorkerProfile:
    id: str
    name: str
    initial_shift: str = ShiftKind.MORNING.value  # ローテーションの基準シフト
    rotation_enabled: bool = True  # False なら毎週 initial_shift 固定
    manual_overrides: dict[str, DayOverride] = field(default_factory=dict)  # "YYYY-MM-DD" → 上書き


@dataclass(frozen=True)
class WeeklySchedule:
    worker_id: str
    week_start: str  # 週の日曜日 "YYYY-MM-DD"
    assigned_shift: str  # 日別の上書きを含まない、その週のローテーション結果
    days: dict[str, DayEntry]

    @property
    def document_id(self) -> str:
        return f"{self.worker_id}_{self.week_start}"

    def to_document(self) -> dict[str, Any]:
        return {
            "workerId": self.worker_id,
            "weekStart": self.week_start,
            "assignedShift": self.assigned_shift,
            "days": {d: entry.to_dict() for d, entry in self.days.items()},
        }
