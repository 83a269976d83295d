from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import fields, replace
from enum import Enum
from typing import Any

from floorrota.calendar.utils import parse_date, parse_time
from floorrota.domain.types import DayEntry, DayOverride, DayStatus

log = logging.getLogger(__name__)

_FIELDS = tuple(f.name for f in fields(DayOverride))


def _as_status(value: Any) -> DayStatus:
    if isinstance(value, DayStatus):
        return value
    try:
        return DayStatus(str(value).strip().lower())
    except ValueError as e:
        raise ValueError(f"status: 'scheduled' か 'off' を期待しましたが '{value}'") from e


def _as_hours(key: str, value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError(f"{key}: 時間数に真偽値は指定できません")
    if isinstance(value, int | float):
        return value
    try:
        hours = float(str(value).strip())
    except ValueError as e:
        raise ValueError(f"{key}: 数値を期待しましたが '{value}' が見つかりました") from e
    return int(hours) if hours.is_integer() else hours


def clean_override(raw: Mapping[str, Any] | DayOverride | None) -> DayOverride:
    """
    上書きを正規化する。
    None・空文字の項目は「未設定」として捨てるので、基本エントリの値を消すことはない。
    """
    if raw is None:
        return DayOverride()
    if isinstance(raw, DayOverride):
        # 型付きの上書きも同じ規則で掃除する
        raw = raw.to_dict()

    values: dict[str, Any] = {}
    for key, value in raw.items():
        if value is None or value == "":
            continue
        if key not in _FIELDS:
            log.warning("override: dropping unknown field %r", key)
            continue
        match key:
            case "status":
                value = _as_status(value)
            case "shift" if isinstance(value, Enum):
                value = value.value
            case "start" | "end":
                parse_time(value)  # HH:MM 以外は InvalidFormat
            case "duration" | "overtime":
                value = _as_hours(key, value)
        values[key] = value
    return DayOverride(**values)


def merge_override(
    base_day: DayEntry, override: Mapping[str, Any] | DayOverride | None
) -> DayEntry:
    """フィールド単位の上書き。上書き側で設定された項目だけが base_day を置き換える。"""
    cleaned = clean_override(override)
    if cleaned.is_empty:
        return base_day
    changes = {name: getattr(cleaned, name) for name in _FIELDS if getattr(cleaned, name) is not None}
    return replace(base_day, **changes)


def override_from_edit(
    status: DayStatus | str,
    *,
    shift: str | None = None,
    start: str | None = None,
    end: str | None = None,
    duration: float | str | None = None,
    overtime: float | str | None = None,
    notes: str | None = None,
) -> DayOverride:
    """
    編集画面の入力から上書きを作る。
    休みにした場合は status 以外の入力を持ち込まない。
    """
    if _as_status(status) == DayStatus.OFF:
        return DayOverride(status=DayStatus.OFF)
    return clean_override(
        {
            "status": DayStatus.SCHEDULED,
            "shift": shift,
            "start": start,
            "end": end,
            "duration": duration,
            "overtime": overtime,
            "notes": notes,
        }
    )


def with_override(
    overrides: Mapping[str, DayOverride],
    date_str: str,
    override: Mapping[str, Any] | DayOverride | None,
) -> dict[str, DayOverride]:
    """
    date_str の上書きを差し替えた新しい辞書を返す。
    空の上書きは保存せず、リセット(削除)として扱う。
    """
    cleaned = clean_override(override)
    if cleaned.is_empty:
        return remove_override(overrides, date_str)
    parse_date(date_str)
    result = dict(overrides)
    result[date_str] = cleaned
    return result


def remove_override(overrides: Mapping[str, DayOverride], date_str: str) -> dict[str, DayOverride]:
    """date_str の上書きを除いた新しい辞書。存在しなければ何もしない。"""
    return {d: o for d, o in overrides.items() if d != date_str}
