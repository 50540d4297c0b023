"""Sensor backend reading the Linux sysfs hwmon interface.

Walks ``/sys/class/hwmon/hwmon*/`` and groups attribute files such as
``temp1_input``, ``temp1_max`` or ``in0_min`` into features and
subfeatures. Values are read on demand; nothing is cached between reads.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

from ..logger import get_logger
from .base import (
    ALARM_BLOCK,
    ROLE_ENUMS,
    ChipName,
    ErrorCode,
    Feature,
    FeatureKind,
    SensorsBackend,
    SensorsError,
    Subfeature,
    input_role_code,
    is_flag_role,
)

logger = get_logger(__name__)

FAMILIES: Dict[str, FeatureKind] = {
    "in": FeatureKind.IN,
    "fan": FeatureKind.FAN,
    "temp": FeatureKind.TEMP,
    "power": FeatureKind.POWER,
    "energy": FeatureKind.ENERGY,
    "curr": FeatureKind.CURR,
    "humidity": FeatureKind.HUMIDITY,
}
# sysfs reports milli-units, and micro-units for power and energy.
KIND_DIVISORS: Dict[FeatureKind, float] = {
    FeatureKind.IN: 1e3,
    FeatureKind.TEMP: 1e3,
    FeatureKind.CURR: 1e3,
    FeatureKind.HUMIDITY: 1e3,
    FeatureKind.POWER: 1e6,
    FeatureKind.ENERGY: 1e6,
    FeatureKind.VID: 1e3,
}
ATTRIBUTE_PATTERN = re.compile(r"^(?P<family>[a-z]+)(?P<index>\d+)_(?P<suffix>[a-z_]+)$")
VID_PATTERN = re.compile(r"^cpu\d+_vid$")
BEEP_ENABLE_ATTRIBUTE = "beep_enable"
UNKNOWN_ROLE_OFFSET = 0x7F
FLAG_SUFFIXES = ("alarm", "fault", "beep")


@dataclass
class _Attribute:
    path: Path
    subfeature: Subfeature
    scale: float


@dataclass
class _Chip:
    name: ChipName
    directory: Path
    features: List[Tuple[Feature, List[Subfeature]]] = field(default_factory=list)
    attributes: Dict[int, _Attribute] = field(default_factory=dict)


def _read_text(path: Path) -> Optional[str]:
    try:
        return path.read_text().strip()
    except OSError:
        return None


def _role_code(kind: FeatureKind, suffix: str) -> int:
    """Map an attribute suffix (``max_hyst``) to a raw role code."""

    role_enum = ROLE_ENUMS.get(kind)
    if role_enum is not None and suffix.upper() in role_enum.__members__:
        return int(role_enum[suffix.upper()])
    if suffix == "input":
        return input_role_code(kind)
    # Attributes this build does not know keep a code outside every role enum.
    if suffix.endswith(FLAG_SUFFIXES):
        return input_role_code(kind) | ALARM_BLOCK | UNKNOWN_ROLE_OFFSET
    return input_role_code(kind) | UNKNOWN_ROLE_OFFSET


def _scale(kind: FeatureKind, role: int) -> float:
    if is_flag_role(role):
        return 1.0
    return KIND_DIVISORS.get(kind, 1.0)


def _adapter_name(directory: Path) -> str:
    subsystem = directory / "device" / "subsystem"
    if not subsystem.exists():
        return "Virtual device"
    bus = subsystem.resolve().name
    return {
        "platform": "ISA adapter",
        "pci": "PCI adapter",
        "i2c": "SMBus adapter",
        "acpi": "ACPI interface",
        "virtio": "Virtio adapter",
    }.get(bus, f"{bus} adapter")


def _feature_key(entry: Path) -> Optional[Tuple[FeatureKind, str, str, int]]:
    """Return (kind, feature name, suffix, sort index) for a hwmon attribute file."""

    name = entry.name
    if name == BEEP_ENABLE_ATTRIBUTE:
        return FeatureKind.BEEP_ENABLE, name, "beep_enable", 0
    if VID_PATTERN.match(name):
        return FeatureKind.VID, name, "vid", int(re.sub(r"\D", "", name) or 0)
    match = ATTRIBUTE_PATTERN.match(name)
    if not match or match.group("suffix") == "label":
        return None
    kind = FAMILIES.get(match.group("family"))
    if kind is None:
        return None
    index = int(match.group("index"))
    return kind, f"{match.group('family')}{index}", match.group("suffix"), index


class HwmonBackend(SensorsBackend):
    """Backend for ``/sys/class/hwmon``."""

    name = "hwmon"

    def __init__(self, sysfs_root: Path | str = "/sys/class/hwmon") -> None:
        self.sysfs_root = Path(sysfs_root)
        self._chips: Optional[Dict[ChipName, _Chip]] = None

    def _discover(self) -> Dict[ChipName, _Chip]:
        if self._chips is not None:
            return self._chips
        chips: Dict[ChipName, _Chip] = {}
        if not self.sysfs_root.is_dir():
            logger.warning("hwmon directory %s does not exist", self.sysfs_root)
            self._chips = chips
            return chips
        try:
            directories = sorted(self.sysfs_root.iterdir(), key=lambda path: (len(path.name), path.name))
        except OSError as exc:
            logger.warning("Cannot list hwmon directory %s: %s", self.sysfs_root, exc)
            directories = []
        for directory in directories:
            if not directory.is_dir():
                continue
            prefix = _read_text(directory / "name") or directory.name
            try:
                chip_name = ChipName(prefix=prefix, address=directory.name, adapter=_adapter_name(directory))
                chips[chip_name] = self._scan_chip(chip_name, directory)
            except OSError as exc:
                # The device went away while it was being scanned.
                logger.warning("Skipping hwmon device %s: %s", directory, exc)
                continue
            logger.debug("Discovered hwmon chip %s with %d features", chip_name, len(chips[chip_name].features))
        self._chips = chips
        return chips

    def _scan_chip(self, chip_name: ChipName, directory: Path) -> _Chip:
        chip = _Chip(name=chip_name, directory=directory)
        grouped: Dict[Tuple[FeatureKind, str], List[Tuple[str, Path]]] = {}
        order: Dict[Tuple[FeatureKind, str], int] = {}
        for entry in sorted(directory.iterdir()):
            if not entry.is_file():
                continue
            key = _feature_key(entry)
            if key is None:
                continue
            kind, feature_name, suffix, index = key
            grouped.setdefault((kind, feature_name), []).append((suffix, entry))
            order[(kind, feature_name)] = index

        # libsensors order: grouped by kind, then by channel index.
        for kind, feature_name in sorted(grouped, key=lambda item: (int(item[0]), order[item])):
            feature = Feature(name=feature_name, number=len(chip.features), kind=int(kind))
            subfeatures: List[Subfeature] = []
            for suffix, path in sorted(grouped[(kind, feature_name)], key=lambda item: _role_code(kind, item[0])):
                role = _role_code(kind, suffix)
                subfeature = Subfeature(
                    name=path.name,
                    number=len(chip.attributes),
                    role=role,
                    readable=os.access(path, os.R_OK),
                    writable=os.access(path, os.W_OK),
                )
                chip.attributes[subfeature.number] = _Attribute(path=path, subfeature=subfeature, scale=_scale(kind, role))
                subfeatures.append(subfeature)
            chip.features.append((feature, subfeatures))
        return chip

    def _chip(self, chip: ChipName) -> _Chip:
        try:
            return self._discover()[chip]
        except KeyError as exc:
            raise SensorsError(ErrorCode.CHIP_NAME, str(chip)) from exc

    def chips(self) -> List[ChipName]:
        return list(self._discover())

    def features(self, chip: ChipName) -> Iterator[Feature]:
        for feature, _subfeatures in self._chip(chip).features:
            yield feature

    def subfeatures(self, chip: ChipName, feature: Feature) -> Iterator[Subfeature]:
        yield from self._chip(chip).features[feature.number][1]

    def label(self, chip: ChipName, feature: Feature) -> str:
        directory = self._chip(chip).directory
        label_path = directory / f"{feature.name}_label"
        if not label_path.exists():
            return feature.name
        try:
            return label_path.read_text().strip()
        except OSError as exc:
            raise SensorsError(ErrorCode.KERNEL, f"{label_path}: {exc.strerror or exc}") from exc

    def value(self, chip: ChipName, number: int) -> float:
        try:
            attribute = self._chip(chip).attributes[number]
        except KeyError as exc:
            raise SensorsError(ErrorCode.NO_ENTRY, f"subfeature #{number}") from exc
        if not attribute.subfeature.readable:
            raise SensorsError(ErrorCode.ACCESS_R, attribute.subfeature.name)
        try:
            raw = attribute.path.read_text().strip()
        except OSError as exc:
            raise SensorsError(ErrorCode.KERNEL, f"{attribute.path}: {exc.strerror or exc}") from exc
        try:
            return float(raw) / attribute.scale
        except ValueError as exc:
            raise SensorsError(ErrorCode.IO, f"{attribute.path}: unexpected content {raw!r}") from exc
