"""Shared fixtures for the lazyenv test-suite."""

import pytest

from lazyenv.config import settings


@pytest.fixture
def no_mode_variable(monkeypatch):
    """Remove the runtime-mode variable from the process environment."""
    monkeypatch.delenv(settings.mode_variable, raising=False)


# pytest re-installs its capture stream on sys.stdout for every test phase,
# so fixtures patch the terminal check itself rather than sys.stdout.
@pytest.fixture
def tty_stdout(monkeypatch):
    """Pretend stdout is attached to a terminal."""
    monkeypatch.setattr("lazyenv.runtime._stdout_is_terminal", lambda: True)


@pytest.fixture
def piped_stdout(monkeypatch):
    """Pretend stdout is redirected to a pipe or file."""
    monkeypatch.setattr("lazyenv.runtime._stdout_is_terminal", lambda: False)
