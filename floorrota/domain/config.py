from __future__ import annotations

import datetime as dt
from types import MappingProxyType
from typing import Final

from floorrota.domain.types import RotationConfig, ShiftDefinition, ShiftKind, Weekday

# 順序に意味がある(アルファベット順ではない)
ROTATION_ORDER: Final[tuple[ShiftKind, ...]] = (
    ShiftKind.MORNING,
    ShiftKind.NIGHT,
    ShiftKind.AFTERNOON,
)
ANCHOR_DATE: Final[dt.date] = dt.date(2026, 1, 18)  # 日曜日

SHIFT_DEFS: Final = MappingProxyType(
    {
        ShiftKind.MORNING: ShiftDefinition(start="07:30", end="19:30", duration=12, overtime=4),
        ShiftKind.NIGHT: ShiftDefinition(start="19:30", end="07:30", duration=12, overtime=4),
        ShiftKind.AFTERNOON: ShiftDefinition(start="15:30", end="23:30", duration=8, overtime=0),
    }
)

# 午後シフトは火〜金のみ
OFF_WEEKDAYS: Final = MappingProxyType(
    {ShiftKind.AFTERNOON: frozenset({Weekday.SUNDAY, Weekday.MONDAY, Weekday.SATURDAY})}
)

DEFAULT_ROTATION_CONFIG: Final[RotationConfig] = RotationConfig(
    rotation_order=ROTATION_ORDER,
    anchor_date=ANCHOR_DATE,
    shift_defs=SHIFT_DEFS,
    off_weekdays=OFF_WEEKDAYS,
)
