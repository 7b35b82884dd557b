"""Settings for lazyenv itself.

These are separate from the records that :func:`lazyenv.fill` populates: they
only tune the library (log level, runtime-mode detection) and follow the
``LAZYENV_`` environment prefix.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LazyEnvSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="LAZYENV_")

    log_level: str = Field(
        default="WARNING",
        description="Level applied to the lazyenv loggers by configure_logging().",
    )
    mode_variable: str = Field(
        default="ENVIRONMENT",
        description="Variable inspected by lazyenv.env() to detect development.",
    )
    development_prefix: str = Field(
        default="dev",
        description="Value prefix of mode_variable that marks development.",
    )


def load_settings(*, overrides: dict[str, Any] | None = None) -> LazyEnvSettings:
    """Construct :class:`LazyEnvSettings`.

    Explicit ``overrides`` take precedence over ``LAZYENV_*`` variables.
    """
    return LazyEnvSettings(**(overrides or {}))


# Export a singleton instance for convenient imports throughout the package.
settings = LazyEnvSettings()


__all__ = ["LazyEnvSettings", "load_settings", "settings"]
