"""Fill configuration records from environment variables.

Field names are turned into variable names (``DBName`` reads ``DB_NAME``),
nested records are read with their parent's name as prefix, and values are
converted to the field types: ``str``, ``int``, ``float``, ``bool``,
optionals, lists and tuples (comma separated) and dicts
(``key:value`` pairs, comma separated).

Example:
    >>> from dataclasses import dataclass, field
    >>> import lazyenv
    >>> @dataclass
    ... class DB:
    ...     name: str = ""
    ...     password: str = field(default="", metadata={"env": "PASS"})
    >>> @dataclass
    ... class Config:
    ...     db: DB = field(default_factory=DB)
    ...     user_id: int = 0
    >>> cfg = lazyenv.fill(Config(), environ={"DB_NAME": "app", "DB_PASS": "s3", "USER_ID": "42"})
    >>> cfg.db.name, cfg.db.password, cfg.user_id
    ('app', 's3', 42)
"""

import logging
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _version

from lazyenv.coercion import coerce
from lazyenv.errors import CoercionError, LazyEnvError, NotARecordError
from lazyenv.filler import fill
from lazyenv.naming import derive_env_name
from lazyenv.runtime import DEVELOPMENT, PRODUCTION, env, is_development, is_production
from lazyenv.shapes import ENV_TAG, EnvName, FieldDescriptor, Shape, ShapeKind, describe_record

try:  # pragma: no cover - trivial metadata access
    __version__ = _version("lazyenv")
except PackageNotFoundError:  # Local, editable, or missing dist metadata
    __version__ = "0.0.0.dev0"

logging.getLogger("lazyenv").addHandler(logging.NullHandler())

__all__ = [
    "DEVELOPMENT",
    "ENV_TAG",
    "PRODUCTION",
    "CoercionError",
    "EnvName",
    "FieldDescriptor",
    "LazyEnvError",
    "NotARecordError",
    "Shape",
    "ShapeKind",
    "__version__",
    "coerce",
    "derive_env_name",
    "describe_record",
    "env",
    "fill",
    "is_development",
    "is_production",
]
