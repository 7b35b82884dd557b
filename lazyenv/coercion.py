"""String to typed value conversion for environment variables."""

from __future__ import annotations

import math
import re
from collections.abc import Callable
from typing import Any

from lazyenv.errors import CoercionError
from lazyenv.shapes import Shape, ShapeKind, zero_value
from lazyenv.utils.logger import get_logger

logger = get_logger("coercion")

ITEM_SEPARATOR = ","
KEY_VALUE_SEPARATOR = ":"

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_HEX_FLOAT_RE = re.compile(
    r"[+-]?0[xX]([0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)[pP][+-]?[0-9]+"
)
_TRUE = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def parse_int(raw: str) -> int:
    if not _INTEGER_RE.fullmatch(raw):
        raise ValueError("not a base-10 integer")
    return int(raw)


def parse_float(raw: str) -> float:
    """Parse a decimal float, ``inf``/``infinity``/``nan``, or a hex float with exponent."""
    if _HEX_FLOAT_RE.fullmatch(raw):
        try:
            return float.fromhex(raw)
        except OverflowError:
            raise ValueError("hex float out of range") from None
    # float() tolerates padding and digit separators; environment values must not.
    if raw != raw.strip() or "_" in raw:
        raise ValueError("not a decimal float")
    try:
        value = float(raw)
    except ValueError:
        raise ValueError("not a decimal float") from None
    if math.isinf(value) and "inf" not in raw.lower():
        raise ValueError("float out of range")
    return value


def parse_bool(raw: str) -> bool:
    if raw in _TRUE:
        return True
    if raw in _FALSE:
        return False
    raise ValueError("not a boolean literal")


_PARSERS: dict[ShapeKind, Callable[[str], Any]] = {
    ShapeKind.STRING: str,
    ShapeKind.INTEGER: parse_int,
    ShapeKind.FLOAT: parse_float,
    ShapeKind.BOOLEAN: parse_bool,
}


def coerce(
    shape: Shape,
    raw: str,
    *,
    key: str = "",
    errors: list[CoercionError] | None = None,
) -> Any:
    """Convert ``raw`` into a value of ``shape``.

    Primitive shapes raise :class:`CoercionError` when ``raw`` does not parse.
    Optionals, sequences and mappings always succeed: each element is
    converted into a fresh slot, and an element that fails keeps the zero
    value of its shape. Those absorbed failures are appended to ``errors``
    when a list is given.

    Sequences split on ``,``; mappings split entries on ``,`` and each entry
    once on the first ``:``. Entries without ``:`` are skipped. Records have
    no string form.
    """
    kind = shape.kind
    if kind is ShapeKind.OPTIONAL:
        return _coerce_slot(shape.inner, raw, key, errors)
    if kind is ShapeKind.SEQUENCE:
        tokens = raw.split(ITEM_SEPARATOR)
        items = [_coerce_slot(shape.inner, token, key, errors) for token in tokens]
        return shape.container(items)
    if kind is ShapeKind.MAPPING:
        result = {}
        for entry in raw.split(ITEM_SEPARATOR):
            entry_key, sep, entry_value = entry.partition(KEY_VALUE_SEPARATOR)
            if not sep:
                logger.debug("map entry skipped", key=key, entry=entry)
                if errors is not None:
                    errors.append(CoercionError(entry, shape, "missing ':' separator", key))
                continue
            mapped = _coerce_slot(shape.key, entry_key, key, errors)
            result[mapped] = _coerce_slot(shape.value, entry_value, key, errors)
        return result

    parser = _PARSERS.get(kind)
    if parser is None:
        raise CoercionError(raw, shape, f"{kind.value} fields have no string form", key)
    try:
        return parser(raw)
    except ValueError as exc:
        raise CoercionError(raw, shape, str(exc), key) from exc


def _coerce_slot(shape: Shape, raw: str, key: str, errors: list[CoercionError] | None) -> Any:
    try:
        return coerce(shape, raw, key=key, errors=errors)
    except CoercionError as exc:
        logger.debug("coercion failed", key=key, shape=shape.kind.value, reason=exc.reason)
        if errors is not None:
            errors.append(exc)
        return zero_value(shape)


__all__ = [
    "ITEM_SEPARATOR",
    "KEY_VALUE_SEPARATOR",
    "coerce",
    "parse_bool",
    "parse_float",
    "parse_int",
]
