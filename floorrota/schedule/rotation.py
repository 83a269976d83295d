from __future__ import annotations

import datetime as dt
import logging

from floorrota.calendar.utils import week_start_sunday
from floorrota.domain.config import DEFAULT_ROTATION_CONFIG
from floorrota.domain.types import RotationConfig, ShiftKind, WorkerProfile, resolve_shift_kind

log = logging.getLogger(__name__)


def rotation_index_of(shift: str | None, config: RotationConfig = DEFAULT_ROTATION_CONFIG) -> int:
    """ローテーション順での位置。未知のシフトはエラーにせず 0 を返す。"""
    kind = resolve_shift_kind(shift)
    if kind in config.rotation_order:
        return config.rotation_order.index(kind)
    log.warning("rotation: unknown shift %r, falling back to index 0", shift)
    return 0


def weeks_since_anchor(week_start: dt.date, config: RotationConfig = DEFAULT_ROTATION_CONFIG) -> int:
    """基準週からの経過週数(基準週より前なら負)"""
    anchor_week = week_start_sunday(config.anchor_date)
    return (week_start - anchor_week).days // 7


def assigned_shift_for_week(
    initial_shift: str | None,
    week_start: dt.date,
    config: RotationConfig = DEFAULT_ROTATION_CONFIG,
) -> ShiftKind:
    """
    基準シフトと対象週から、その週に割り当てられるシフトを求める。
    基準週では initial_shift がそのまま返り、以降 1 週ごとに rotation_order を 1 つ進む。
    """
    n = len(config.rotation_order)
    # Python の % は除数が正なら常に 0 以上
    idx = (rotation_index_of(initial_shift, config) + weeks_since_anchor(week_start, config)) % n
    return config.rotation_order[idx]


def week_shift_for(
    worker: WorkerProfile,
    week_start: dt.date,
    config: RotationConfig = DEFAULT_ROTATION_CONFIG,
) -> str:
    """ローテーション無効の作業員は initial_shift 固定(ローテーション計算は行わない)"""
    if not worker.rotation_enabled:
        return worker.initial_shift
    return assigned_shift_for_week(worker.initial_shift, week_start, config).value
