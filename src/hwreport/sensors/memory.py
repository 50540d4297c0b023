"""In-memory sensor backend and JSON snapshot loading."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

from ..logger import get_logger
from .base import (
    ROLE_ENUMS,
    ChipName,
    ErrorCode,
    Feature,
    FeatureKind,
    SensorsBackend,
    SensorsError,
    Subfeature,
)

logger = get_logger(__name__)


class SnapshotError(SensorsError):
    """Raised when a snapshot file cannot be read or parsed."""

    def __init__(self, detail: str) -> None:
        super().__init__(ErrorCode.PARSE, detail)


@dataclass
class MemoryFeature:
    feature: Feature
    label: Optional[str]
    subfeatures: List[Subfeature] = field(default_factory=list)


class MemoryBackend(SensorsBackend):
    """Backend serving chips held in memory.

    Subfeature numbers are unique per chip. A value stored as a
    ``SensorsError`` is raised when read, and a feature without a label
    fails its label lookup, so failures can be replayed exactly.
    """

    name = "memory"

    def __init__(self) -> None:
        self._chips: Dict[ChipName, List[MemoryFeature]] = {}
        self._values: Dict[ChipName, Dict[int, Union[float, SensorsError]]] = {}

    def add_chip(self, chip: ChipName) -> ChipName:
        self._chips.setdefault(chip, [])
        self._values.setdefault(chip, {})
        return chip

    def add_feature(self, chip: ChipName, name: str, kind: int, label: Optional[str] = "") -> Feature:
        """Append a feature; an empty ``label`` defaults to the feature name."""

        features = self._chips[chip]
        feature = Feature(name=name, number=len(features), kind=int(kind))
        features.append(MemoryFeature(feature=feature, label=name if label == "" else label))
        return feature

    def add_subfeature(
        self,
        chip: ChipName,
        feature: Feature,
        name: str,
        role: int,
        value: Union[float, SensorsError] = 0.0,
        *,
        readable: bool = True,
        writable: bool = False,
    ) -> Subfeature:
        values = self._values[chip]
        subfeature = Subfeature(name=name, number=len(values), role=int(role), readable=readable, writable=writable)
        values[subfeature.number] = value
        self._chips[chip][feature.number].subfeatures.append(subfeature)
        return subfeature

    def chips(self) -> List[ChipName]:
        return list(self._chips)

    def features(self, chip: ChipName) -> Iterator[Feature]:
        for entry in self._chips.get(chip, []):
            yield entry.feature

    def subfeatures(self, chip: ChipName, feature: Feature) -> Iterator[Subfeature]:
        yield from self._chips[chip][feature.number].subfeatures

    def label(self, chip: ChipName, feature: Feature) -> str:
        label = self._chips[chip][feature.number].label
        if label is None:
            raise SensorsError(ErrorCode.NO_ENTRY, f"no label for {feature.name}")
        return label

    def value(self, chip: ChipName, number: int) -> float:
        try:
            value = self._values[chip][number]
        except KeyError as exc:
            raise SensorsError(ErrorCode.NO_ENTRY, f"subfeature #{number}") from exc
        if isinstance(value, SensorsError):
            raise value
        return value


def _kind_code(value: Union[int, str]) -> int:
    if isinstance(value, int):
        return value
    try:
        return int(FeatureKind[value.strip().upper()])
    except KeyError as exc:
        raise ValueError(f"Unknown feature kind: {value!r}") from exc


class SubfeatureSnapshot(BaseModel):
    name: str
    role: Union[int, str] = "input"
    value: float = 0.0
    readable: bool = True
    writable: bool = False
    error: Optional[str] = Field(default=None, description="ErrorCode name raised when the value is read.")

    @field_validator("error")
    @classmethod
    def _known_error(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and value.upper() not in ErrorCode.__members__:
            raise ValueError(f"Unknown error code: {value!r}")
        return value

    def role_code(self, kind: int) -> int:
        if isinstance(self.role, int):
            return self.role
        role_enum = ROLE_ENUMS.get(kind)
        if role_enum is None:
            if self.role.lower() == "input":
                return int(kind) << 8
            raise ValueError(f"Feature kind {kind:#x} has no named roles (got {self.role!r})")
        try:
            return int(role_enum[self.role.strip().upper()])
        except KeyError as exc:
            raise ValueError(f"Unknown {role_enum.__name__} member: {self.role!r}") from exc


class FeatureSnapshot(BaseModel):
    name: str
    kind: Union[int, str]
    label: Optional[str] = ""
    subfeatures: List[SubfeatureSnapshot] = Field(default_factory=list)

    @field_validator("kind")
    @classmethod
    def _normalise_kind(cls, value: Union[int, str]) -> int:
        return _kind_code(value)


class ChipSnapshot(BaseModel):
    name: str
    address: str = ""
    adapter: Optional[str] = None
    features: List[FeatureSnapshot] = Field(default_factory=list)


class Snapshot(BaseModel):
    chips: List[ChipSnapshot] = Field(default_factory=list)

    def to_backend(self) -> MemoryBackend:
        backend = MemoryBackend()
        for chip_snapshot in self.chips:
            chip = backend.add_chip(
                ChipName(prefix=chip_snapshot.name, address=chip_snapshot.address, adapter=chip_snapshot.adapter)
            )
            for feature_snapshot in chip_snapshot.features:
                feature = backend.add_feature(chip, feature_snapshot.name, feature_snapshot.kind, feature_snapshot.label)
                for sub in feature_snapshot.subfeatures:
                    value: Union[float, SensorsError] = sub.value
                    if sub.error is not None:
                        value = SensorsError(ErrorCode[sub.error.upper()])
                    backend.add_subfeature(
                        chip,
                        feature,
                        sub.name,
                        sub.role_code(feature.kind),
                        value,
                        readable=sub.readable,
                        writable=sub.writable,
                    )
        return backend


def load_snapshot(path: Path) -> MemoryBackend:
    """Load a JSON snapshot file into a MemoryBackend."""

    logger.debug("Loading sensor snapshot from %s", path)
    try:
        payload = json.loads(Path(path).read_text())
    except OSError as exc:
        raise SnapshotError(f"cannot read {path}: {exc.strerror or exc}") from exc
    except json.JSONDecodeError as exc:
        raise SnapshotError(f"{path} is not valid JSON: {exc.msg}") from exc
    try:
        snapshot = Snapshot.model_validate(payload)
        backend = snapshot.to_backend()
    except (ValidationError, ValueError) as exc:
        raise SnapshotError(f"{path} is not a valid snapshot: {exc}") from exc
    logger.info("Loaded snapshot %s with %d chips", path, len(snapshot.chips))
    return backend
