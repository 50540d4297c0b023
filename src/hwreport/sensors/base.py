"""Data model and query contract for the sensor access layer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from fnmatch import fnmatchcase
from enum import IntEnum
from typing import Dict, Iterator, List, Optional, Type

from ..logger import get_logger

logger = get_logger(__name__)

ALARM_BLOCK = 0x80


class FeatureKind(IntEnum):
    """Kind of a logical measurement channel."""

    IN = 0x00
    FAN = 0x01
    TEMP = 0x02
    POWER = 0x03
    ENERGY = 0x04
    CURR = 0x05
    HUMIDITY = 0x06
    VID = 0x10
    BEEP_ENABLE = 0x18


class InRole(IntEnum):
    INPUT = FeatureKind.IN << 8
    MIN = INPUT + 1
    MAX = INPUT + 2
    ALARM = INPUT | ALARM_BLOCK
    MIN_ALARM = ALARM + 1
    MAX_ALARM = ALARM + 2


class FanRole(IntEnum):
    INPUT = FeatureKind.FAN << 8
    MIN = INPUT + 1
    DIV = INPUT + 2
    ALARM = INPUT | ALARM_BLOCK
    FAULT = ALARM + 1


class TempRole(IntEnum):
    INPUT = FeatureKind.TEMP << 8
    MAX = INPUT + 1
    MAX_HYST = INPUT + 2
    MIN = INPUT + 3
    CRIT = INPUT + 4
    CRIT_HYST = INPUT + 5
    ALARM = INPUT | ALARM_BLOCK
    MAX_ALARM = ALARM + 1
    MIN_ALARM = ALARM + 2
    CRIT_ALARM = ALARM + 3
    FAULT = ALARM + 4
    TYPE = ALARM + 5


class VidRole(IntEnum):
    VID = FeatureKind.VID << 8


class BeepEnableRole(IntEnum):
    BEEP_ENABLE = FeatureKind.BEEP_ENABLE << 8


ROLE_ENUMS: Dict[FeatureKind, Type[IntEnum]] = {
    FeatureKind.IN: InRole,
    FeatureKind.FAN: FanRole,
    FeatureKind.TEMP: TempRole,
    FeatureKind.VID: VidRole,
    FeatureKind.BEEP_ENABLE: BeepEnableRole,
}


def input_role_code(kind: int) -> int:
    """Return the raw role code of the main reading of a feature kind."""

    return int(kind) << 8


def is_flag_role(role: int) -> bool:
    """Alarm, fault and type roles live in the upper half of a kind's block."""

    return bool(role & ALARM_BLOCK)


class ErrorCode(IntEnum):
    WILDCARDS = 1
    NO_ENTRY = 2
    ACCESS_R = 3
    KERNEL = 4
    DIV_ZERO = 5
    CHIP_NAME = 6
    BUS_NAME = 7
    PARSE = 8
    ACCESS_W = 9
    IO = 10
    RECURSION = 11


ERROR_MESSAGES: Dict[ErrorCode, str] = {
    ErrorCode.WILDCARDS: "Wildcard found in chip name",
    ErrorCode.NO_ENTRY: "No such subfeature known",
    ErrorCode.ACCESS_R: "Can't read",
    ErrorCode.KERNEL: "Kernel interface error",
    ErrorCode.DIV_ZERO: "Divide by zero",
    ErrorCode.CHIP_NAME: "Can't parse chip name",
    ErrorCode.BUS_NAME: "Can't parse bus name",
    ErrorCode.PARSE: "General parse error",
    ErrorCode.ACCESS_W: "Can't write",
    ErrorCode.IO: "I/O error",
    ErrorCode.RECURSION: "Evaluation recurses too deep",
}


class SensorsError(RuntimeError):
    """Raised by a backend when a label or value cannot be obtained."""

    def __init__(self, code: ErrorCode, detail: Optional[str] = None) -> None:
        self.code = ErrorCode(code)
        self.detail = detail
        message = ERROR_MESSAGES[self.code]
        super().__init__(f"{message} ({detail})" if detail else message)


@dataclass(frozen=True)
class ChipName:
    """Identity of one monitored chip."""

    prefix: str
    address: str = ""
    adapter: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.prefix}-{self.address}" if self.address else self.prefix

    def matches(self, pattern: str) -> bool:
        """Return True if ``pattern`` names this chip.

        ``pattern`` is the chip prefix alone or the full ``prefix-address``
        name; either form may use shell wildcards (``coretemp-*``).
        """

        return fnmatchcase(self.prefix, pattern) or fnmatchcase(str(self), pattern)


@dataclass(frozen=True)
class Feature:
    """One logical measurement channel of a chip."""

    name: str
    number: int
    kind: int


@dataclass(frozen=True)
class Subfeature:
    """One datum of a feature: a reading, a limit or a flag."""

    name: str
    number: int
    role: int
    readable: bool = True
    writable: bool = False


class SensorsBackend(ABC):
    """Read-only query contract of the sensor access layer."""

    name: str = "base"

    @abstractmethod
    def chips(self) -> List[ChipName]:
        """Return the detected chips."""

    @abstractmethod
    def features(self, chip: ChipName) -> Iterator[Feature]:
        """Yield the features of ``chip`` in a stable order."""

    @abstractmethod
    def subfeatures(self, chip: ChipName, feature: Feature) -> Iterator[Subfeature]:
        """Yield every subfeature attached to ``feature``."""

    @abstractmethod
    def label(self, chip: ChipName, feature: Feature) -> str:
        """Return the display label of ``feature`` or raise SensorsError."""

    @abstractmethod
    def value(self, chip: ChipName, number: int) -> float:
        """Return the value of the subfeature numbered ``number`` or raise SensorsError."""

    def select_chips(self, patterns: List[str] | tuple[str, ...] = ()) -> List[ChipName]:
        """Return the chips matching any of ``patterns`` (all chips when empty)."""

        chips = self.chips()
        if not patterns:
            return chips
        selected = [chip for chip in chips if any(chip.matches(pattern) for pattern in patterns)]
        logger.debug("Selected %d of %d chips for patterns %s", len(selected), len(chips), patterns)
        return selected
