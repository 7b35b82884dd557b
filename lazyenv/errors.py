"""Exception types raised by lazyenv."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from lazyenv.shapes import Shape


class LazyEnvError(Exception):
    """Base class for all lazyenv errors."""


class NotARecordError(LazyEnvError, TypeError):
    """Raised when a value that is not a dataclass or pydantic model is filled."""

    def __init__(self, value: Any):
        self.value = value
        kind = value.__name__ if isinstance(value, type) else type(value).__name__
        super().__init__(f"expected a dataclass or pydantic model instance, got {kind}")


class CoercionError(LazyEnvError, ValueError):
    """A raw environment string could not be converted into a field's shape.

    ``fill`` never lets this escape; it is raised by :func:`lazyenv.coerce`
    and collected into the optional ``errors`` list of a fill.
    """

    def __init__(self, raw: str, shape: Shape, reason: str, key: str = ""):
        self.raw = raw
        self.shape = shape
        self.reason = reason
        self.key = key
        where = f" for {key}" if key else ""
        super().__init__(f"cannot convert {raw!r} to {shape.kind.value}{where}: {reason}")


__all__ = ["CoercionError", "LazyEnvError", "NotARecordError"]
