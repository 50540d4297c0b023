import io
import logging

import pytest

from hwreport.config import AppSettings
from hwreport.logger import LOGGER_NAME, configure_logging, get_logger, verbose_settings


@pytest.fixture()
def stream():
    buffer = io.StringIO()
    yield buffer
    configure_logging(force=True)


def test_loggers_share_the_namespace() -> None:
    assert get_logger().name == LOGGER_NAME
    assert get_logger("hwreport.report.chip").name == "hwreport.report.chip"
    assert get_logger("plugins").name == "hwreport.plugins"


def test_level_toggles_filter_records(stream: io.StringIO) -> None:
    configure_logging(AppSettings(log_warning_enabled=False), force=True, stream=stream)
    logger = get_logger("hwreport.test")
    logger.info("hidden info")
    logger.warning("hidden warning")
    logger.error("Can't get temp1_max data")
    assert stream.getvalue() == "hwreport.test: ERROR: Can't get temp1_max data\n"


def test_verbose_enables_every_level(stream: io.StringIO) -> None:
    configure_logging(AppSettings(), verbose=True, force=True, stream=stream)
    get_logger("hwreport.test").debug("Selected %d of %d chips", 1, 2)
    assert "hwreport.test: DEBUG: Selected 1 of 2 chips" in stream.getvalue()


def test_reconfiguring_keeps_one_handler(stream: io.StringIO) -> None:
    configure_logging(AppSettings(), force=True, stream=stream)
    configure_logging(AppSettings(log_info_enabled=True))
    assert len(logging.getLogger(LOGGER_NAME).handlers) == 1
    get_logger("hwreport.test").info("now shown")
    assert stream.getvalue() == "hwreport.test: INFO: now shown\n"


def test_verbose_settings_leave_original_untouched() -> None:
    settings = AppSettings(log_debug_enabled=False)
    assert verbose_settings(settings).log_debug_enabled
    assert not settings.log_debug_enabled
