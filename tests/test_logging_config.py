import logging

import pytest
import structlog

from wallet_debugger.logging_config import setup_logging
from wallet_debugger.telemetry.diagnostic_log import CONSOLE_LOGGER


@pytest.fixture
def restore_logging():
    root, mirror = logging.getLogger(), logging.getLogger(CONSOLE_LOGGER)
    saved = (root.handlers[:], root.level, mirror.handlers[:], mirror.level, mirror.propagate)
    yield
    root.handlers[:], mirror.handlers[:] = saved[0], saved[2]
    root.setLevel(saved[1])
    mirror.setLevel(saved[3])
    mirror.propagate = saved[4]


def test_setup_logging_installs_single_structlog_handler(restore_logging):
    root = logging.getLogger()

    setup_logging("DEBUG")

    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, structlog.stdlib.ProcessorFormatter)
    assert logging.getLogger("httpx").level == logging.WARNING


def test_mirror_logger_has_its_own_level_and_handler(restore_logging):
    setup_logging("WARNING", "ERROR")

    mirror = logging.getLogger(CONSOLE_LOGGER)
    assert logging.getLogger().level == logging.WARNING
    assert mirror.level == logging.ERROR
    assert mirror.propagate is False
    assert len(mirror.handlers) == 1
    assert mirror.handlers[0] not in logging.getLogger().handlers
    assert isinstance(mirror.handlers[0].formatter, structlog.stdlib.ProcessorFormatter)


def test_mirror_level_is_independent_of_root(restore_logging):
    setup_logging("ERROR", "INFO")

    assert logging.getLogger(CONSOLE_LOGGER).isEnabledFor(logging.INFO)
    assert not logging.getLogger("wallet_debugger.core").isEnabledFor(logging.INFO)
