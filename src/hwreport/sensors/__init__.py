"""Sensor access layer: data model, query contract and backends."""

from ..logger import get_logger
from .base import (
    BeepEnableRole,
    ChipName,
    ErrorCode,
    FanRole,
    Feature,
    FeatureKind,
    InRole,
    SensorsBackend,
    SensorsError,
    Subfeature,
    TempRole,
    VidRole,
)
from .hwmon import HwmonBackend
from .memory import MemoryBackend, SnapshotError, load_snapshot

get_logger(__name__).debug("Sensor access package loaded")

__all__ = [
    "BeepEnableRole",
    "ChipName",
    "ErrorCode",
    "FanRole",
    "Feature",
    "FeatureKind",
    "HwmonBackend",
    "InRole",
    "MemoryBackend",
    "SensorsBackend",
    "SensorsError",
    "SnapshotError",
    "Subfeature",
    "TempRole",
    "VidRole",
    "load_snapshot",
]
