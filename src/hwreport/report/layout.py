"""Label column layout."""

from __future__ import annotations

from typing import TextIO

from ..sensors.base import ChipName, SensorsBackend, SensorsError

MIN_LABEL_WIDTH = 11


def label_width(backend: SensorsBackend, chip: ChipName) -> int:
    """Return the column at which values start for every feature of ``chip``.

    Features whose label cannot be fetched do not take part.
    """

    longest = MIN_LABEL_WIDTH
    for feature in backend.features(chip):
        try:
            longest = max(longest, len(backend.label(chip, feature)))
        except SensorsError:
            continue
    return longest + 1


def print_label(out: TextIO, label: str, width: int) -> None:
    """Write ``label:`` padded with spaces to ``width`` columns."""

    out.write(f"{label}:" + " " * max(width - len(label) - 1, 0))
