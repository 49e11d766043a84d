from __future__ import annotations

import logging
from typing import Generator

import pytest

import upstream_version.utils.logger as logger_module
from upstream_version.utils.console import reconfigure_console


@pytest.fixture(autouse=True)
def reset_logging_state() -> Generator[None, None, None]:
    """Restore the upstream_version logger between tests.

    CLI invocations install a stderr handler and disable propagation;
    resetting keeps ``caplog`` working in every test.
    """
    root_logger = logging.getLogger(logger_module.ROOT_LOGGER_NAME)

    def _reset() -> None:
        root_logger.handlers.clear()
        root_logger.setLevel(logging.NOTSET)
        root_logger.propagate = True

    _reset()
    reconfigure_console()
    yield
    _reset()
    reconfigure_console()
