"""Feature classification and report rendering."""

from .chip import RENDERERS, print_chip, print_chip_raw, print_chips
from .collector import RoleTable, collect_roles
from .layout import MIN_LABEL_WIDTH, label_width
from .temperature import LIMIT_LAYOUTS, LimitLayout

__all__ = [
    "LIMIT_LAYOUTS",
    "LimitLayout",
    "MIN_LABEL_WIDTH",
    "RENDERERS",
    "RoleTable",
    "collect_roles",
    "label_width",
    "print_chip",
    "print_chip_raw",
    "print_chips",
]
