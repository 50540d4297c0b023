"""Temperature feature renderer.

A temperature feature can expose any combination of low, high, high
hysteresis, critical and critical hysteresis limits. Which of them make it
onto the line is decided by ``LIMIT_LAYOUTS``; a critical limit that the
chosen layout does not show gets a second, indented line of its own.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from ..config import ReportConfig
from ..logger import get_logger
from ..sensors.base import Feature, SensorsError, TempRole
from .collector import RoleTable, collect_roles
from .context import NOT_AVAILABLE, ChipContext
from .layout import print_label

logger = get_logger(__name__)

FAULT_TEXT = "   FAULT  "
ALARM_TEXT = "ALARM  "
SINGLE_LIMIT_PADDING = 18
EMPTY_LIMITS_WIDTH = 34
THERMISTOR = 4
BETA_VALUE_THRESHOLD = 1000
SENSOR_TYPES = {
    0: "disabled",
    1: "diode",
    2: "transistor",
    3: "thermal diode",
    THERMISTOR: "thermistor",
    5: "AMD AMDSI",
    6: "Intel PECI",
}


class LimitLayout(Enum):
    """Which limits the first line of a temperature feature shows."""

    LOW_HIGH = "low-high"
    HIGH_HYST = "high-hyst"
    HIGH_CRIT = "high-crit"
    HIGH = "high"
    CRIT = "crit"
    NONE = "none"

    @property
    def shows_crit(self) -> bool:
        return self in (LimitLayout.HIGH_CRIT, LimitLayout.CRIT)

    @property
    def uses_high(self) -> bool:
        return self in (LimitLayout.LOW_HIGH, LimitLayout.HIGH_HYST, LimitLayout.HIGH_CRIT, LimitLayout.HIGH)


# (has_high, has_low, has_high_hyst, has_crit) -> layout
LIMIT_LAYOUTS: Dict[Tuple[bool, bool, bool, bool], LimitLayout] = {
    (True, True, True, True): LimitLayout.LOW_HIGH,
    (True, True, True, False): LimitLayout.LOW_HIGH,
    (True, True, False, True): LimitLayout.LOW_HIGH,
    (True, True, False, False): LimitLayout.LOW_HIGH,
    (True, False, True, True): LimitLayout.HIGH_HYST,
    (True, False, True, False): LimitLayout.HIGH_HYST,
    (True, False, False, True): LimitLayout.HIGH_CRIT,
    (True, False, False, False): LimitLayout.HIGH,
    (False, True, True, True): LimitLayout.CRIT,
    (False, True, False, True): LimitLayout.CRIT,
    (False, False, True, True): LimitLayout.CRIT,
    (False, False, False, True): LimitLayout.CRIT,
    (False, True, True, False): LimitLayout.NONE,
    (False, True, False, False): LimitLayout.NONE,
    (False, False, True, False): LimitLayout.NONE,
    (False, False, False, False): LimitLayout.NONE,
}


@dataclass(frozen=True)
class LimitBlock:
    """Up to two named limits and the alarm state printed after them."""

    first: Optional[Tuple[str, float]] = None
    second: Optional[Tuple[str, float]] = None
    alarm: bool = False


def select_layout(table: RoleTable[TempRole]) -> LimitLayout:
    key = (
        TempRole.MAX in table,
        TempRole.MIN in table,
        TempRole.MAX_HYST in table,
        TempRole.CRIT in table,
    )
    return LIMIT_LAYOUTS[key]


def _crit_block(table: RoleTable[TempRole], alarm: bool = False) -> LimitBlock:
    second = ("hyst", table.get(TempRole.CRIT_HYST)) if TempRole.CRIT_HYST in table else None
    return LimitBlock(
        first=("crit", table.get(TempRole.CRIT)),
        second=second,
        alarm=alarm or table.flag(TempRole.CRIT_ALARM),
    )


def limit_blocks(table: RoleTable[TempRole]) -> Tuple[LimitBlock, Optional[LimitBlock]]:
    """Return the limit block of the first line and the optional crit line."""

    layout = select_layout(table)
    alarm = table.flag(TempRole.ALARM)
    if layout.uses_high:
        alarm = alarm or table.flag(TempRole.MAX_ALARM)
    high = ("high", table.get(TempRole.MAX))

    if layout is LimitLayout.LOW_HIGH:
        alarm = alarm or table.flag(TempRole.MIN_ALARM)
        primary = LimitBlock(("low", table.get(TempRole.MIN)), high, alarm)
    elif layout is LimitLayout.HIGH_HYST:
        primary = LimitBlock(high, ("hyst", table.get(TempRole.MAX_HYST)), alarm)
    elif layout is LimitLayout.HIGH_CRIT:
        alarm = alarm or table.flag(TempRole.CRIT_ALARM)
        primary = LimitBlock(high, ("crit", table.get(TempRole.CRIT)), alarm)
    elif layout is LimitLayout.HIGH:
        primary = LimitBlock(high, None, alarm)
    elif layout is LimitLayout.CRIT:
        primary = _crit_block(table, alarm)
    else:
        primary = LimitBlock(alarm=alarm)

    secondary = None
    if TempRole.CRIT in table and not layout.shows_crit:
        secondary = _crit_block(table)
    return primary, secondary


def format_limits(block: LimitBlock, config: ReportConfig) -> str:
    deg = config.degree_suffix
    if block.first is None:
        text = " " * EMPTY_LIMITS_WIDTH
    else:
        name1, value1 = block.first
        first = f"{name1:<4} = {config.temperature(value1):+5.1f}{deg}"
        if block.second is None:
            text = f"({first})" + " " * SINGLE_LIMIT_PADDING
        else:
            name2, value2 = block.second
            text = f"({first}, {name2:<4} = {config.temperature(value2):+5.1f}{deg})  "
    if block.alarm:
        text += ALARM_TEXT
    return text


def sensor_type_name(code: float) -> str:
    sensor = int(code)
    # Older drivers report a thermistor's beta value instead of its type.
    if sensor > BETA_VALUE_THRESHOLD:
        sensor = THERMISTOR
    return SENSOR_TYPES.get(sensor, "unknown")


def format_reading(table: RoleTable[TempRole], config: ReportConfig) -> str:
    deg = config.degree_suffix
    if table.flag(TempRole.FAULT):
        return FAULT_TEXT
    if TempRole.INPUT not in table:
        return f"{NOT_AVAILABLE:>{6 + len(deg)}}  "
    return f"{config.temperature(table.get(TempRole.INPUT)):+6.1f}{deg}  "


def print_temperature(ctx: ChipContext, feature: Feature) -> None:
    """Render one temperature feature, on one or two lines."""

    try:
        label = ctx.backend.label(ctx.chip, feature)
    except SensorsError as exc:
        logger.error("Can't get temperature label for %s: %s", feature.name, exc)
        return

    table = collect_roles(ctx.backend, ctx.chip, feature, TempRole)
    primary, secondary = limit_blocks(table)

    out = ctx.out
    print_label(out, label, ctx.label_width)
    reading = format_reading(table, ctx.config)
    out.write(reading)
    out.write(format_limits(primary, ctx.config))
    if secondary is not None:
        out.write("\n" + " " * (ctx.label_width + len(reading)))
        out.write(format_limits(secondary, ctx.config))
    if TempRole.TYPE in table:
        out.write(f"sensor = {sensor_type_name(table.get(TempRole.TYPE))}")
    out.write("\n")
