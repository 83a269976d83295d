# tests/test_rotation_loader.py
import datetime as dt
from pathlib import Path

import pytest

from floorrota.domain.config import DEFAULT_ROTATION_CONFIG
from floorrota.domain.types import ShiftDefinition, ShiftKind, Weekday
from floorrota.io.rotation_loader import load_rotation_config

BUNDLED = Path(__file__).resolve().parent.parent / "config" / "rotation.toml"


def test_bundled_config_matches_defaults():
    config = load_rotation_config(str(BUNDLED))
    assert config.rotation_order == DEFAULT_ROTATION_CONFIG.rotation_order
    assert config.anchor_date == DEFAULT_ROTATION_CONFIG.anchor_date
    assert dict(config.shift_defs) == dict(DEFAULT_ROTATION_CONFIG.shift_defs)
    assert dict(config.off_weekdays) == dict(DEFAULT_ROTATION_CONFIG.off_weekdays)


def test_partial_file_falls_back_to_defaults(write_toml):
    path = write_toml(
        """
        anchor_date = 2026-03-01

        [shifts.afternoon]
        start = "14:00"
        end = "22:00"
        duration = 8
        """,
        name="rotation.toml",
    )
    config = load_rotation_config(str(path))
    assert config.anchor_date == dt.date(2026, 3, 1)
    assert config.rotation_order == DEFAULT_ROTATION_CONFIG.rotation_order
    assert config.shift_defs[ShiftKind.AFTERNOON] == ShiftDefinition("14:00", "22:00", 8, 0)
    assert config.shift_defs[ShiftKind.NIGHT] == DEFAULT_ROTATION_CONFIG.shift_defs[ShiftKind.NIGHT]


def test_custom_order_and_weekday_exceptions(write_toml):
    path = write_toml(
        """
        rotation_order = ["night", "morning"]

        [off_weekdays]
        morning = ["sat", "sun"]
        """,
        name="rotation.toml",
    )
    config = load_rotation_config(str(path))
    assert config.rotation_order == (ShiftKind.NIGHT, ShiftKind.MORNING)
    assert config.off_weekdays == {ShiftKind.MORNING: frozenset({Weekday.SATURDAY, Weekday.SUNDAY})}


@pytest.mark.parametrize(
    "content",
    [
        'rotation_order = []',
        'rotation_order = ["morning", "morning"]',
        'rotation_order = ["morning", "evening"]',
        'rotation_order = ["morning", "off"]',
        'anchor_date = "18/01/2026"',
        'anchor_date = 5',
        '[shifts.night]\nstart = "7pm"\nend = "07:30"\nduration = 12',
        '[off_weekdays]\nafternoon = ["someday"]',
    ],
)
def test_invalid_config_is_rejected(write_toml, content):
    path = write_toml(content, name="rotation.toml")
    with pytest.raises(ValueError):
        load_rotation_config(str(path))


def test_unknown_weekday_error_names_file_and_shift(write_toml):
    path = write_toml('[off_weekdays]\nafternoon = ["sun", "funday"]', name="rotation.toml")
    with pytest.raises(ValueError, match=r"\[off_weekdays\] afternoon.*funday"):
        load_rotation_config(str(path))
