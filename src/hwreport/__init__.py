"""hwreport: column-aligned reports of hardware sensor chips."""

from importlib.metadata import PackageNotFoundError, version

from .config import ReportConfig, TemperatureUnit
from .report import print_chips
from .sensors import HwmonBackend, MemoryBackend, SensorsError, load_snapshot

try:
    __version__ = version("hwreport")
except PackageNotFoundError:  # pragma: no cover - running from a source tree
    __version__ = "0.0.0"


__all__ = [
    "HwmonBackend",
    "MemoryBackend",
    "ReportConfig",
    "SensorsError",
    "TemperatureUnit",
    "__version__",
    "load_snapshot",
    "print_chips",
]
