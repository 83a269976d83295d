from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from floorrota.calendar.utils import add_days, format_date, week_dates, week_start_sunday, week_starts_in_range
from floorrota.domain.config import DEFAULT_ROTATION_CONFIG
from floorrota.domain.types import DayEntry, RotationConfig, WeeklySchedule, WorkerProfile
from floorrota.schedule.day_entry import build_day_entry, entry_window
from floorrota.schedule.overrides import merge_override
from floorrota.schedule.rotation import week_shift_for

log = logging.getLogger(__name__)


def schedule_document_id(worker_id: str, week_start: dt.date | str) -> str:
    if isinstance(week_start, dt.date):
        week_start = format_date(week_start)
    return f"{worker_id}_{week_start}"


def build_weekly_schedule(
    worker: WorkerProfile,
    week_start: dt.date,
    config: RotationConfig = DEFAULT_ROTATION_CONFIG,
) -> WeeklySchedule:
    """
    作業員 1 人・1 週間分の勤務表を組み立てる。
    同じ入力からは常に同じ結果になる(永続化側は workerId_weekStart で upsert する)。
    """
    week_start = week_start_sunday(week_start)
    assigned_shift = week_shift_for(worker, week_start, config)

    days: dict[str, DayEntry] = {}
    for d in week_dates(week_start):
        date_str = format_date(d)
        base_day = build_day_entry(d, assigned_shift, config)
        days[date_str] = merge_override(base_day, worker.manual_overrides.get(date_str))

    return WeeklySchedule(
        worker_id=worker.id,
        week_start=format_date(week_start),
        assigned_shift=assigned_shift,
        days=days,
    )


def build_day_for_worker(
    worker: WorkerProfile,
    day: dt.date,
    config: RotationConfig = DEFAULT_ROTATION_CONFIG,
    stored: DayEntry | None = None,
) -> DayEntry:
    """
    1日分の実効エントリ。
    保存済みのエントリ(stored)があれば計算値の代わりにそれを土台にし、上書きを重ねる。
    """
    date_str = format_date(day)
    if stored is None:
        assigned_shift = week_shift_for(worker, week_start_sunday(day), config)
        stored = build_day_entry(day, assigned_shift, config)
    return merge_override(stored, worker.manual_overrides.get(date_str))


def active_shift_at(
    worker: WorkerProfile,
    moment: dt.datetime,
    config: RotationConfig = DEFAULT_ROTATION_CONFIG,
) -> tuple[dt.date, DayEntry] | None:
    """
    moment に勤務中のシフトを (勤務開始日, エントリ) で返す。
    前日開始の夜勤が moment の日にまたがっている場合も対象にする。
    """
    today = moment.date()
    for day in (add_days(today, -1), today):
        entry = build_day_for_worker(worker, day, config)
        window = entry_window(day, entry)
        if window is not None and window[0] <= moment < window[1]:
            return day, entry
    return None


@dataclass
class RegenerationResult:
    start: dt.date
    end: dt.date
    week_starts: list[dt.date]
    schedules: list[WeeklySchedule] = field(default_factory=list)
    failures: dict[str, str] = field(default_factory=dict)  # document_id → エラー内容

    @property
    def documents(self) -> dict[str, dict[str, Any]]:
        return {s.document_id: s.to_document() for s in self.schedules}

    def to_dict(self) -> dict[str, Any]:
        return {
            "range": {"startDate": format_date(self.start), "endDate": format_date(self.end)},
            "weekStarts": [format_date(w) for w in self.week_starts],
            "count": len(self.schedules),
            "documents": self.documents,
            "failures": dict(self.failures),
        }


def regenerate_schedules(
    workers: Iterable[WorkerProfile],
    start: dt.date,
    end: dt.date,
    config: RotationConfig = DEFAULT_ROTATION_CONFIG,
) -> RegenerationResult:
    """
    start〜end にかかる全週 x 全作業員の勤務表を作り直す。
    1 人の失敗で他の作業員の処理は止めない。
    """
    worker_list = list(workers)
    result = RegenerationResult(start=start, end=end, week_starts=week_starts_in_range(start, end))
    for week_start in result.week_starts:
        for worker in worker_list:
            doc_id = schedule_document_id(worker.id, week_start)
            try:
                result.schedules.append(build_weekly_schedule(worker, week_start, config))
            except Exception as e:
                # 壊れたレコードが 1 件あってもバッチ全体は止めない
                log.exception("regenerate: failed to build %s", doc_id)
                result.failures[doc_id] = str(e)
    log.info(
        "regenerate: %d schedules for %d workers, %d failures",
        len(result.schedules),
        len(worker_list),
        len(result.failures),
    )
    return result


def schedules_by_worker(schedules: Iterable[WeeklySchedule]) -> Mapping[str, WeeklySchedule]:
    return {s.worker_id: s for s in schedules}
