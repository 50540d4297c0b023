"""Voltage feature renderer."""

from __future__ import annotations

from ..logger import get_logger
from ..sensors.base import Feature, InRole, SensorsError
from .collector import RoleTable, collect_roles
from .context import NOT_AVAILABLE, ChipContext
from .layout import print_label

logger = get_logger(__name__)


def format_limits(table: RoleTable[InRole]) -> str:
    if InRole.MIN in table and InRole.MAX in table:
        return f"  (min = {table.get(InRole.MIN):+6.2f} V, max = {table.get(InRole.MAX):+6.2f} V)"
    if InRole.MIN in table:
        return f"  (min = {table.get(InRole.MIN):+6.2f} V)"
    if InRole.MAX in table:
        return f"  (max = {table.get(InRole.MAX):+6.2f} V)"
    return ""


def format_alarms(table: RoleTable[InRole]) -> str:
    """Dedicated min/max alarm flags take precedence over the combined one."""

    if table.any_present(InRole.MIN_ALARM, InRole.MAX_ALARM):
        tripped = [name for name, role in (("MIN", InRole.MIN_ALARM), ("MAX", InRole.MAX_ALARM)) if table.flag(role)]
        return f" ALARM ({', '.join(tripped)})" if tripped else ""
    if table.flag(InRole.ALARM):
        return "   ALARM"
    return ""


def print_voltage(ctx: ChipContext, feature: Feature) -> None:
    try:
        label = ctx.backend.label(ctx.chip, feature)
    except SensorsError as exc:
        logger.error("Can't get in label for %s: %s", feature.name, exc)
        return

    table = collect_roles(ctx.backend, ctx.chip, feature, InRole)

    out = ctx.out
    print_label(out, label, ctx.label_width)
    if InRole.INPUT in table:
        out.write(f"{table.get(InRole.INPUT):+6.2f} V")
    else:
        out.write(f"{NOT_AVAILABLE:>8}")
    out.write(format_limits(table))
    out.write(format_alarms(table))
    out.write("\n")
