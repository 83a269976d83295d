# tests/test_rotation.py
import datetime as dt
import logging

import pytest

from floorrota.calendar.utils import add_days, week_start_sunday
from floorrota.domain.config import ANCHOR_DATE, DEFAULT_ROTATION_CONFIG, ROTATION_ORDER
from floorrota.domain.types import RotationConfig, ShiftKind
from floorrota.schedule import rotation
from floorrota.schedule.rotation import (
    assigned_shift_for_week,
    rotation_index_of,
    week_shift_for,
    weeks_since_anchor,
)

ANCHOR_WEEK = dt.date(2026, 1, 18)


def test_rotation_order_is_morning_night_afternoon():
    assert ROTATION_ORDER == (ShiftKind.MORNING, ShiftKind.NIGHT, ShiftKind.AFTERNOON)
    assert week_start_sunday(ANCHOR_DATE) == ANCHOR_WEEK


def test_rotation_index_of_known_shifts():
    assert rotation_index_of("morning") == 0
    assert rotation_index_of("night") == 1
    assert rotation_index_of("afternoon") == 2
    assert rotation_index_of(ShiftKind.NIGHT) == 1


def test_rotation_index_of_is_case_insensitive():
    assert rotation_index_of(" Night ") == 1


@pytest.mark.parametrize("shift", ["", None, "evening", "off", "custom", 5])
def test_rotation_index_of_unknown_falls_back_to_zero(shift, caplog):
    with caplog.at_level(logging.WARNING, logger=rotation.__name__):
        assert rotation_index_of(shift) == 0
    assert "unknown shift" in caplog.text


@pytest.mark.parametrize(
    "week_start, expected",
    [
        (dt.date(2026, 1, 18), ShiftKind.MORNING),  # 0週目
        (dt.date(2026, 1, 25), ShiftKind.NIGHT),  # 1週目
        (dt.date(2026, 2, 1), ShiftKind.AFTERNOON),  # 2週目
        (dt.date(2026, 2, 8), ShiftKind.MORNING),  # 3週目で一巡
    ],
)
def test_rotation_scenario_morning_baseline(week_start, expected):
    assert assigned_shift_for_week("morning", week_start) == expected


@pytest.mark.parametrize(
    "week_start, expected",
    [
        (dt.date(2026, 1, 11), ShiftKind.AFTERNOON),  # -1週
        (dt.date(2026, 1, 4), ShiftKind.NIGHT),  # -2週
        (dt.date(2025, 12, 28), ShiftKind.MORNING),  # -3週
        (dt.date(2025, 12, 21), ShiftKind.AFTERNOON),  # -4週
    ],
)
def test_weeks_before_anchor_use_non_negative_modulo(week_start, expected):
    assert weeks_since_anchor(week_start) < 0
    assert assigned_shift_for_week("morning", week_start) == expected


@pytest.mark.parametrize("shift", list(ROTATION_ORDER))
def test_anchor_week_returns_initial_shift(shift):
    assert assigned_shift_for_week(shift, week_start_sunday(ANCHOR_DATE)) == shift


@pytest.mark.parametrize("shift", list(ROTATION_ORDER))
def test_rotation_repeats_every_three_weeks(shift):
    week = dt.date(2025, 6, 1)
    for _ in range(60):
        assert assigned_shift_for_week(shift, week) == assigned_shift_for_week(
            shift, add_days(week, 21)
        )
        week = add_days(week, 7)


def test_each_week_advances_one_step():
    week = dt.date(2026, 1, 18)
    seen = []
    for i in range(6):
        seen.append(assigned_shift_for_week("night", add_days(week, 7 * i)))
    assert seen == [
        ShiftKind.NIGHT,
        ShiftKind.AFTERNOON,
        ShiftKind.MORNING,
        ShiftKind.NIGHT,
        ShiftKind.AFTERNOON,
        ShiftKind.MORNING,
    ]


def test_mid_week_date_resolves_like_its_sunday():
    assert assigned_shift_for_week("morning", dt.date(2026, 1, 28)) == ShiftKind.NIGHT


def test_unknown_initial_shift_rotates_from_index_zero():
    assert assigned_shift_for_week("evening", dt.date(2026, 1, 25)) == ShiftKind.NIGHT


def test_alternate_rotation_table_can_be_injected():
    config = RotationConfig(
        rotation_order=(ShiftKind.NIGHT, ShiftKind.MORNING),
        anchor_date=dt.date(2026, 1, 4),
        shift_defs=DEFAULT_ROTATION_CONFIG.shift_defs,
    )
    assert assigned_shift_for_week("night", dt.date(2026, 1, 4), config) == ShiftKind.NIGHT
    assert assigned_shift_for_week("night", dt.date(2026, 1, 11), config) == ShiftKind.MORNING
    assert assigned_shift_for_week("night", dt.date(2026, 1, 18), config) == ShiftKind.NIGHT
    # 既定の設定は変わらない
    assert assigned_shift_for_week("night", dt.date(2026, 1, 18)) == ShiftKind.NIGHT
    assert DEFAULT_ROTATION_CONFIG.rotation_order == ROTATION_ORDER


def test_week_shift_for_rotating_worker(make_worker):
    w = make_worker(initial_shift="morning", rotation_enabled=True)
    assert week_shift_for(w, dt.date(2026, 2, 1)) == "afternoon"


def test_non_rotating_worker_never_calls_resolver(make_worker, monkeypatch):
    def _fail(*args, **kwargs):
        raise AssertionError("assigned_shift_for_week must not be called")

    monkeypatch.setattr(rotation, "assigned_shift_for_week", _fail)
    w = make_worker(initial_shift="night", rotation_enabled=False)
    for i in range(10):
        assert week_shift_for(w, add_days(dt.date(2026, 1, 18), 7 * i)) == "night"
