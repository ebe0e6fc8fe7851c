from __future__ import annotations

import logging

import pytest

from vibeflow.config import VibeflowConfig
from vibeflow.web.app import create_app


@pytest.fixture(autouse=True)
def restore_logger():
    """create_app configures the vibeflow logger; undo that after each test."""
    log = logging.getLogger("vibeflow")
    handlers, level = list(log.handlers), log.level
    yield
    log.handlers[:] = handlers
    log.setLevel(level)


def make_app(**overrides):
    """A test-mode app with config fields overridden."""
    application = create_app(VibeflowConfig(**{"environment": "test", **overrides}))
    application.config["TESTING"] = True
    return application


@pytest.fixture
def app():
    """Create a Flask app for testing."""
    return make_app()


@pytest.fixture
def client(app):
    """Create a Flask test client."""
    return app.test_client()
