"""Renderers for single-value features: CPU core voltage and beep enable.

Both stay silent when the label or the value cannot be read.
"""

from __future__ import annotations

from typing import Optional, Tuple

from ..logger import get_logger
from ..sensors.base import Feature, SensorsError
from .context import ChipContext
from .layout import print_label

logger = get_logger(__name__)


def _read_single(ctx: ChipContext, feature: Feature) -> Optional[Tuple[str, float]]:
    subfeature = next(iter(ctx.backend.subfeatures(ctx.chip, feature)), None)
    if subfeature is None:
        return None
    try:
        return ctx.backend.label(ctx.chip, feature), ctx.backend.value(ctx.chip, subfeature.number)
    except SensorsError as exc:
        logger.debug("Skipping %s: %s", feature.name, exc)
        return None


def print_vid(ctx: ChipContext, feature: Feature) -> None:
    reading = _read_single(ctx, feature)
    if reading is None:
        return
    label, vid = reading
    print_label(ctx.out, label, ctx.label_width)
    ctx.out.write(f"{vid:+6.3f} V\n")


def print_beep_enable(ctx: ChipContext, feature: Feature) -> None:
    reading = _read_single(ctx, feature)
    if reading is None:
        return
    label, enabled = reading
    print_label(ctx.out, label, ctx.label_width)
    ctx.out.write("enabled\n" if enabled else "disabled\n")
