from __future__ import annotations

import datetime as dt

from floorrota.domain.types import Weekday

WEEKDAY_LIST = list(Weekday)


class InvalidFormat(ValueError):
    """日付・時刻文字列が想定の形式に分解できない"""


def parse_date(s: str) -> dt.date:
    """'YYYY-MM-DD' を date に変換する。タイムゾーン変換は行わない。"""
    parts = (s or "").split("-")
    if len(parts) != 3:
        raise InvalidFormat(f"日付は YYYY-MM-DD 形式で指定してください: '{s}'")
    try:
        year, month, day = (int(p) for p in parts)
        return dt.date(year, month, day)
    except ValueError as e:
        raise InvalidFormat(f"日付として解釈できません: '{s}'") from e


def format_date(d: dt.date) -> str:
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def parse_time(s: str) -> dt.time:
    """'HH:MM'(24時間表記)を time に変換する。"""
    parts = (s or "").split(":")
    if len(parts) != 2:
        raise InvalidFormat(f"時刻は HH:MM 形式で指定してください: '{s}'")
    try:
        hour, minute = (int(p) for p in parts)
        return dt.time(hour, minute)
    except ValueError as e:
        raise InvalidFormat(f"時刻として解釈できません: '{s}'") from e


def add_days(d: dt.date, n: int) -> dt.date:
    return d + dt.timedelta(days=n)


# 曜日判定(0=Mon ... 6=Sun)
def weekday_of(d: dt.date) -> Weekday:
    return WEEKDAY_LIST[d.weekday()]


def week_start_sunday(d: dt.date) -> dt.date:
    """d 以前で最も近い日曜日(日曜日はそのまま)。週は常に日曜〜土曜。"""
    return d - dt.timedelta(days=(d.weekday() + 1) % 7)


def week_dates(week_start: dt.date) -> list[dt.date]:
    return [add_days(week_start, i) for i in range(7)]


def week_starts_in_range(start: dt.date, end: dt.date) -> list[dt.date]:
    """start〜end(両端含む)にかかる週の日曜日を昇順で返す"""
    if start > end:
        raise ValueError(f"開始日 {start} が終了日 {end} より後になっています")
    first = week_start_sunday(start)
    return [add_days(first, 7 * i) for i in range((end - first).days // 7 + 1)]


def shift_window(day: dt.date, start: str, end: str) -> tuple[dt.datetime, dt.datetime]:
    """
    day に始まるシフトの開始・終了日時を返す。
    終了時刻が開始時刻以下なら日をまたぐシフト(夜勤)とみなし、終了を翌日にする。
    """
    begin = dt.datetime.combine(day, parse_time(start))
    finish = dt.datetime.combine(day, parse_time(end))
    if finish <= begin:
        finish += dt.timedelta(days=1)
    return begin, finish
