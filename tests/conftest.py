"""Pytest configuration and shared fixtures for result-envelope tests."""

import os

import pytest

from result_envelope import _config
from result_envelope._logging import clear_log_hooks, reset_logging


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Start every test from default configuration, no log hooks and no library handler."""
    for name in list(os.environ):
        if name.startswith(_config.ENV_PREFIX):
            monkeypatch.delenv(name)
    _config.reset()
    clear_log_hooks()
    yield
    _config.reset()
    clear_log_hooks()
    reset_logging()


@pytest.fixture
def sample_success():
    """Sample success value for testing."""
    from result_envelope import success

    return success({'id': 1, 'tags': ['a', 'b']}, 'loaded', request_id='req-1')


@pytest.fixture
def sample_error():
    """Sample error value for testing."""
    from result_envelope import ErrorKind, error

    return error('User not found', 'trace line', ErrorKind.NOT_FOUND, request_id='req-1')
