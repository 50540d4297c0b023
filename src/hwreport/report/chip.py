"""Chip-level report driver and the raw dump listing."""

from __future__ import annotations

from typing import Callable, Dict, Sequence, TextIO

from ..config import ReportConfig
from ..logger import get_logger
from ..sensors.base import ChipName, Feature, FeatureKind, SensorsBackend, SensorsError
from .context import ChipContext
from .fan import print_fan
from .layout import label_width
from .misc import print_beep_enable, print_vid
from .temperature import print_temperature
from .voltage import print_voltage

logger = get_logger(__name__)

Renderer = Callable[[ChipContext, Feature], None]

RENDERERS: Dict[int, Renderer] = {
    FeatureKind.TEMP: print_temperature,
    FeatureKind.IN: print_voltage,
    FeatureKind.FAN: print_fan,
    FeatureKind.VID: print_vid,
    FeatureKind.BEEP_ENABLE: print_beep_enable,
}


def print_chip(backend: SensorsBackend, chip: ChipName, config: ReportConfig, out: TextIO) -> None:
    """Render every feature of ``chip`` in enumeration order.

    Features of a kind without a renderer are skipped.
    """

    ctx = ChipContext(backend=backend, chip=chip, label_width=label_width(backend, chip), config=config, out=out)
    for feature in backend.features(chip):
        renderer = RENDERERS.get(feature.kind)
        if renderer is None:
            continue
        renderer(ctx, feature)


def print_chip_raw(backend: SensorsBackend, chip: ChipName, out: TextIO) -> None:
    """List every subfeature of every feature with its raw value."""

    for feature in backend.features(chip):
        try:
            label = backend.label(chip, feature)
        except SensorsError:
            out.write("ERROR: Can't get feature label!\n")
            continue
        out.write(f"{label}:\n")

        for subfeature in backend.subfeatures(chip, feature):
            if not subfeature.readable:
                out.write(f"  {subfeature.name}: (not readable)\n")
                continue
            try:
                value = backend.value(chip, subfeature.number)
            except SensorsError:
                out.write(f"ERROR: Can't get feature `{subfeature.name}' data!\n")
                continue
            out.write(f"  {subfeature.name}: {value:.2f}\n")


def print_chips(
    backend: SensorsBackend,
    config: ReportConfig,
    out: TextIO,
    names: Sequence[str] = (),
    raw: bool = False,
) -> int:
    """Print the report of every selected chip and return how many were printed."""

    chips = backend.select_chips(tuple(names))
    logger.info("Reporting on %d chips from the %s backend", len(chips), backend.name)
    for chip in chips:
        out.write(f"{chip}\n")
        if chip.adapter:
            out.write(f"Adapter: {chip.adapter}\n")
        try:
            if raw:
                print_chip_raw(backend, chip, out)
            else:
                print_chip(backend, chip, config, out)
        except SensorsError as exc:
            logger.error("Can't read chip %s: %s", chip, exc)
        out.write("\n")
    return len(chips)
