"""Application configuration for hwreport."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from threading import RLock
from typing import Any, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SYSFS_ROOT = "/sys/class/hwmon"
DEFAULT_LOG_ERROR_ENABLED = True
DEFAULT_LOG_WARNING_ENABLED = True
DEFAULT_LOG_INFO_ENABLED = False
DEFAULT_LOG_DEBUG_ENABLED = False
DEGREE_SIGN = "\N{DEGREE SIGN}"


class TemperatureUnit(str, Enum):
    """Display unit for temperature values."""

    CELSIUS = "celsius"
    FAHRENHEIT = "fahrenheit"

    @property
    def letter(self) -> str:
        return "F" if self is TemperatureUnit.FAHRENHEIT else "C"


class AppSettings(BaseSettings):
    """Settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="HWREPORT_",
        env_file=".env",
        extra="ignore",
    )

    temperature_unit: TemperatureUnit = Field(
        default=TemperatureUnit.CELSIUS,
        description="Scale used for every temperature reading and limit.",
    )
    ascii_degrees: bool = Field(
        default=False,
        description="Omit the degree sign from temperature units.",
    )
    sysfs_root: Path = Field(
        default=Path(DEFAULT_SYSFS_ROOT),
        description="Directory holding the hwmon class devices.",
    )
    snapshot_path: Optional[Path] = Field(
        default=None,
        description="JSON snapshot to report on instead of reading sysfs.",
    )
    log_error_enabled: bool = Field(
        default=DEFAULT_LOG_ERROR_ENABLED,
        description="Emit error-level log records.",
    )
    log_warning_enabled: bool = Field(
        default=DEFAULT_LOG_WARNING_ENABLED,
        description="Emit warning-level log records.",
    )
    log_info_enabled: bool = Field(
        default=DEFAULT_LOG_INFO_ENABLED,
        description="Emit information-level log records.",
    )
    log_debug_enabled: bool = Field(
        default=DEFAULT_LOG_DEBUG_ENABLED,
        description="Emit debug-level log records.",
    )

    @field_validator("temperature_unit", mode="before")
    @classmethod
    def _parse_temperature_unit(cls, value: Any) -> Any:
        """Accept single-letter unit names (``C``/``F``) as well as full names."""

        if isinstance(value, str):
            normalised = value.strip().lower()
            if normalised in ("c", "celsius"):
                return TemperatureUnit.CELSIUS
            if normalised in ("f", "fahrenheit"):
                return TemperatureUnit.FAHRENHEIT
        return value


@dataclass(frozen=True)
class ReportConfig:
    """Immutable rendering options shared by every renderer of one report."""

    fahrenheit: bool = False
    degree_suffix: str = f"{DEGREE_SIGN}C"

    @classmethod
    def create(cls, unit: TemperatureUnit = TemperatureUnit.CELSIUS, ascii_degrees: bool = False) -> "ReportConfig":
        sign = " " if ascii_degrees else DEGREE_SIGN
        return cls(fahrenheit=unit is TemperatureUnit.FAHRENHEIT, degree_suffix=f"{sign}{unit.letter}")

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "ReportConfig":
        return cls.create(settings.temperature_unit, settings.ascii_degrees)

    def temperature(self, value_c: float) -> float:
        """Return ``value_c`` in the configured scale."""

        unit = TemperatureUnit.FAHRENHEIT if self.fahrenheit else TemperatureUnit.CELSIUS
        return convert_temperature(value_c, unit)


_SETTINGS_LOCK = RLock()
_SETTINGS: AppSettings | None = None


def get_settings() -> AppSettings:
    """Return the current application settings, loading them if necessary."""

    global _SETTINGS
    with _SETTINGS_LOCK:
        if _SETTINGS is None:
            _SETTINGS = AppSettings()
        return _SETTINGS


def reload_settings() -> AppSettings:
    """Reload settings from the environment, replacing the current cache."""

    global _SETTINGS
    with _SETTINGS_LOCK:
        _SETTINGS = AppSettings()
        return _SETTINGS


def convert_temperature(value_c: float, unit: TemperatureUnit) -> float:
    """Convert a Celsius reading into the configured unit."""

    if unit is TemperatureUnit.FAHRENHEIT:
        return value_c * 9.0 / 5.0 + 32.0
    return value_c
