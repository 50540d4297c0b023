"""Per-chip rendering context shared by the feature renderers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TextIO

from ..config import ReportConfig
from ..sensors.base import ChipName, SensorsBackend

NOT_AVAILABLE = "N/A"


@dataclass(frozen=True)
class ChipContext:
    """Everything a renderer needs besides the feature itself."""

    backend: SensorsBackend
    chip: ChipName
    label_width: int
    config: ReportConfig
    out: TextIO
