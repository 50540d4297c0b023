"""Fan feature renderer."""

from __future__ import annotations

from ..logger import get_logger
from ..sensors.base import FanRole, Feature, SensorsError
from .collector import RoleTable, collect_roles
from .context import NOT_AVAILABLE, ChipContext
from .layout import print_label

logger = get_logger(__name__)


def format_speed(table: RoleTable[FanRole]) -> str:
    if table.flag(FanRole.FAULT):
        return "   FAULT"
    if FanRole.INPUT not in table:
        return f"{NOT_AVAILABLE:>8}"
    return f"{table.get(FanRole.INPUT):4.0f} RPM"


def format_limits(table: RoleTable[FanRole]) -> str:
    if FanRole.MIN in table and FanRole.DIV in table:
        return f"  (min = {table.get(FanRole.MIN):4.0f} RPM, div = {table.get(FanRole.DIV):1.0f})"
    if FanRole.MIN in table:
        return f"  (min = {table.get(FanRole.MIN):4.0f} RPM)"
    if FanRole.DIV in table:
        return f"  (div = {table.get(FanRole.DIV):1.0f})"
    return ""


def print_fan(ctx: ChipContext, feature: Feature) -> None:
    try:
        label = ctx.backend.label(ctx.chip, feature)
    except SensorsError as exc:
        logger.error("Can't get fan label for %s: %s", feature.name, exc)
        return

    table = collect_roles(ctx.backend, ctx.chip, feature, FanRole)

    out = ctx.out
    print_label(out, label, ctx.label_width)
    out.write(format_speed(table))
    out.write(format_limits(table))
    if table.flag(FanRole.ALARM):
        out.write("  ALARM")
    out.write("\n")
