import datetime as dt
import tomllib
from types import MappingProxyType

from floorrota.calendar.utils import parse_date, parse_time
from floorrota.domain.config import DEFAULT_ROTATION_CONFIG
from floorrota.domain.types import RotationConfig, ShiftDefinition, ShiftKind, Weekday

_ASSIGNABLE = {ShiftKind.MORNING, ShiftKind.AFTERNOON, ShiftKind.NIGHT}


def _shift_kind(value: str, where: str) -> ShiftKind:
    try:
        kind = ShiftKind(value)
    except ValueError as e:
        raise ValueError(f"{where}: 未知のシフト '{value}'") from e
    if kind not in _ASSIGNABLE:
        raise ValueError(f"{where}: '{value}' はローテーションに使えません")
    return kind


def _weekday(value: str, where: str) -> Weekday:
    try:
        return Weekday(value)
    except ValueError as e:
        raise ValueError(f"{where}: 未知の曜日 '{value}' (mon〜sun で指定)") from e


def load_rotation_config(config_path: str) -> RotationConfig:
    """Load the rotation table from a TOML file.

    Keys missing from the file fall back to the built-in defaults.

    Args:
        config_path (str): Path to the TOML configuration file.

    Returns:
        RotationConfig: Immutable rotation configuration.
    """
    with open(config_path, "rb") as f:
        config = tomllib.loads(f.read().decode("utf-8-sig"))

    default = DEFAULT_ROTATION_CONFIG

    anchor = config.get("anchor_date", default.anchor_date)
    if isinstance(anchor, str):
        anchor = parse_date(anchor)
    elif not isinstance(anchor, dt.date) or isinstance(anchor, dt.datetime):
        raise ValueError(f"{config_path}: anchor_date は日付で指定してください")

    shift_defs = dict(default.shift_defs)
    for name, shift in config.get("shifts", {}).items():
        kind = _shift_kind(name, f"{config_path} [shifts.{name}]")
        for key in ("start", "end"):
            parse_time(shift[key])
        shift_defs[kind] = ShiftDefinition(
            start=shift["start"],
            end=shift["end"],
            duration=shift["duration"],
            overtime=shift.get("overtime", 0),
        )

    order_raw = config.get("rotation_order")
    if order_raw is None:
        order = default.rotation_order
    else:
        order = tuple(_shift_kind(s, f"{config_path} rotation_order") for s in order_raw)
    if not order:
        raise ValueError(f"{config_path}: rotation_order が空です")
    if len(set(order)) != len(order):
        raise ValueError(f"{config_path}: rotation_order に重複があります")
    missing = [k.value for k in order if k not in shift_defs]
    if missing:
        raise ValueError(f"{config_path}: シフト定義がありません: {missing}")

    off_raw = config.get("off_weekdays")
    if off_raw is None:
        off_weekdays = dict(default.off_weekdays)
    else:
        off_weekdays = {
            _shift_kind(name, f"{config_path} [off_weekdays]"): frozenset(
                _weekday(d, f"{config_path} [off_weekdays] {name}") for d in days
            )
            for name, days in off_raw.items()
        }

    return RotationConfig(
        rotation_order=order,
        anchor_date=anchor,
        shift_defs=MappingProxyType(shift_defs),
        off_weekdays=MappingProxyType(off_weekdays),
    )
