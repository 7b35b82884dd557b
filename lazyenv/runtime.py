"""Development / production detection.

:func:`env` answers ``"development"`` when ``ENVIRONMENT`` starts with
``dev`` or when standard output is an interactive terminal, and
``"production"`` otherwise. The variable name and prefix come from
``LAZYENV_MODE_VARIABLE`` and ``LAZYENV_DEVELOPMENT_PREFIX``. Nothing is
cached: each call re-reads the environment.
"""

from __future__ import annotations

import os
import sys

from lazyenv.config import settings

PRODUCTION = "production"
DEVELOPMENT = "development"


def _stdout_is_terminal() -> bool:
    stream = sys.stdout
    if stream is None:
        return False
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        # Replaced by an object without isatty, or already closed.
        return False


def env() -> str:
    """Return :data:`DEVELOPMENT` or :data:`PRODUCTION`.

    For the raw value read ``os.environ["ENVIRONMENT"]`` directly.
    """
    if os.environ.get(settings.mode_variable, "").startswith(settings.development_prefix):
        return DEVELOPMENT
    if _stdout_is_terminal():
        return DEVELOPMENT
    return PRODUCTION


def is_production() -> bool:
    return env() == PRODUCTION


def is_development() -> bool:
    return env() == DEVELOPMENT


__all__ = ["DEVELOPMENT", "PRODUCTION", "env", "is_development", "is_production"]
