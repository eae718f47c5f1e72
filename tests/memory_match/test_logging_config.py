import logging

import pytest
from rich.logging import RichHandler

from memory_match.logging_config import (
    EVENT_BUS_LOGGER,
    setup_dev_logging,
    setup_logging,
    setup_prod_logging,
)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    event_bus_level = logging.getLogger(EVENT_BUS_LOGGER).level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
    logging.getLogger(EVENT_BUS_LOGGER).setLevel(event_bus_level)


@pytest.mark.unit
class TestLoggingConfig:

    def test_rich_handler_installed(self, restore_root_logger):
        setup_logging(level="DEBUG", use_rich=True)

        assert restore_root_logger.level == logging.DEBUG
        assert len(restore_root_logger.handlers) == 1
        assert isinstance(restore_root_logger.handlers[0], RichHandler)

    def test_plain_handler_for_production(self, restore_root_logger):
        setup_prod_logging(level="WARNING")

        assert restore_root_logger.level == logging.WARNING
        assert len(restore_root_logger.handlers) == 1
        assert not isinstance(restore_root_logger.handlers[0], RichHandler)

    def test_unknown_level_falls_back_to_info(self, restore_root_logger):
        setup_logging(level="chatty", use_rich=False)
        assert restore_root_logger.level == logging.INFO

    def test_level_from_environment(self, restore_root_logger, monkeypatch):
        monkeypatch.setenv("MEMORY_MATCH_LOG_LEVEL", "error")

        setup_logging(use_rich=False)

        assert restore_root_logger.level == logging.ERROR

    def test_event_bus_quiet_unless_traced(self, restore_root_logger):
        setup_logging(level="DEBUG", use_rich=False)
        assert logging.getLogger(EVENT_BUS_LOGGER).level == logging.INFO

    def test_dev_logging_traces_event_bus(self, restore_root_logger):
        setup_dev_logging()

        assert restore_root_logger.level == logging.DEBUG
        assert logging.getLogger(EVENT_BUS_LOGGER).level == logging.DEBUG
