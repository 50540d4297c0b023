"""Collect the subfeature values of one feature into a role-keyed table."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, Generic, Type, TypeVar

from ..logger import get_logger
from ..sensors.base import ChipName, Feature, SensorsBackend, SensorsError

logger = get_logger(__name__)

R = TypeVar("R", bound=IntEnum)


@dataclass
class RoleTable(Generic[R]):
    """Values present for one feature instance, keyed by role.

    A role is only in the table if its subfeature exists and its value was
    read successfully.
    """

    values: Dict[R, float] = field(default_factory=dict)

    def __contains__(self, role: object) -> bool:
        return role in self.values

    def get(self, role: R, default: float = 0.0) -> float:
        return self.values.get(role, default)

    def flag(self, role: R) -> bool:
        """True when the role is present and its value is non-zero."""

        return bool(self.values.get(role, 0.0))

    def any_present(self, *roles: R) -> bool:
        return any(role in self.values for role in roles)


def collect_roles(backend: SensorsBackend, chip: ChipName, feature: Feature, roles: Type[R]) -> RoleTable[R]:
    """Read every subfeature of ``feature`` whose role belongs to ``roles``.

    Subfeatures with a role outside ``roles`` are skipped. A failed read is
    logged once and leaves that role absent.
    """

    table: RoleTable[R] = RoleTable()
    for subfeature in backend.subfeatures(chip, feature):
        try:
            role = roles(subfeature.role)
        except ValueError:
            continue
        try:
            table.values[role] = backend.value(chip, subfeature.number)
        except SensorsError as exc:
            logger.error("Can't get %s data: %s", subfeature.name, exc)
    return table
