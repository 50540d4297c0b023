"""Diagnostics for hwreport.

The report itself goes to stdout; everything logged under the ``hwreport``
namespace goes to stderr so the two can be redirected separately. Which
levels are shown is decided per record by the ``log_*_enabled`` settings,
and ``--verbose`` switches on info and debug records for one run.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

from .config import AppSettings, get_settings

LOGGER_NAME = "hwreport"
LOG_FORMAT = "%(name)s: %(levelname)s: %(message)s"
VERBOSE_LOG_FORMAT = "%(asctime)s %(name)s: %(levelname)s: %(message)s"


class _LevelToggleFilter(logging.Filter):
    """Drop records whose level is switched off in the settings."""

    def __init__(self, settings: AppSettings) -> None:
        super().__init__()
        self._settings = settings

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401
        if record.levelno >= logging.ERROR:
            return self._settings.log_error_enabled
        if record.levelno >= logging.WARNING:
            return self._settings.log_warning_enabled
        if record.levelno >= logging.INFO:
            return self._settings.log_info_enabled
        return self._settings.log_debug_enabled

    def update(self, settings: AppSettings) -> None:
        self._settings = settings


_filter: Optional[_LevelToggleFilter] = None


def verbose_settings(settings: AppSettings) -> AppSettings:
    """Return a copy of ``settings`` with every log level switched on."""

    return settings.model_copy(
        update={
            "log_error_enabled": True,
            "log_warning_enabled": True,
            "log_info_enabled": True,
            "log_debug_enabled": True,
        }
    )


def configure_logging(
    settings: Optional[AppSettings] = None,
    *,
    verbose: bool = False,
    force: bool = False,
    stream: Optional[TextIO] = None,
) -> None:
    """Attach the stderr handler to the ``hwreport`` logger.

    Called again without ``force`` it only refreshes the level toggles, so
    modules can call it at import time without piling up handlers.
    """

    global _filter
    settings = settings or get_settings()
    if verbose:
        settings = verbose_settings(settings)
    logger = logging.getLogger(LOGGER_NAME)

    if _filter is not None and not force:
        _filter.update(settings)
        return

    logger.setLevel(logging.DEBUG)
    logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(VERBOSE_LOG_FORMAT if verbose else LOG_FORMAT))
    _filter = _LevelToggleFilter(settings)
    handler.addFilter(_filter)

    logger.addHandler(handler)
    logger.propagate = False


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return ``hwreport`` or a child of it for ``name``."""

    configure_logging()
    if not name or name == LOGGER_NAME:
        return logging.getLogger(LOGGER_NAME)
    if name.startswith(f"{LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
