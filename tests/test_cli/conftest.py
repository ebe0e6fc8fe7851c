from __future__ import annotations

import logging

import pytest
from click.testing import CliRunner


@pytest.fixture(autouse=True)
def restore_logger():
    log = logging.getLogger("vibeflow")
    handlers, level = list(log.handlers), log.level
    yield
    log.handlers[:] = handlers
    log.setLevel(level)


@pytest.fixture
def runner():
    return CliRunner()
