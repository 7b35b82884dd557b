"""Configuration package for lazyenv.

Exports a singleton ``settings`` instance that reads the library's own
``LAZYENV_*`` environment variables using :class:`pydantic_settings.BaseSettings`.
"""

from .settings import LazyEnvSettings, load_settings, settings

__all__ = ["LazyEnvSettings", "load_settings", "settings"]
