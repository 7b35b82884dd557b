"""Populate configuration records from environment variables."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import ValidationError

from lazyenv.coercion import coerce
from lazyenv.errors import CoercionError, NotARecordError
from lazyenv.shapes import FieldDescriptor, describe_record, is_record, new_record
from lazyenv.utils.logger import get_logger

logger = get_logger("filler")

KEY_SEPARATOR = "_"

R = TypeVar("R")


def fill(
    record: R,
    prefix: str = "",
    *,
    environ: Mapping[str, str] | None = None,
    errors: list[CoercionError] | None = None,
) -> R:
    """Fill the fields of ``record`` from the environment and return it.

    Each field is read from the variable named after it: the explicit tag
    when one is set (``EnvName`` marker, or ``env`` in dataclass metadata or
    pydantic ``json_schema_extra``), otherwise the upper snake case form of
    the field name, so ``DBName`` reads ``DB_NAME``. Nested records are
    walked with the parent key and ``_`` as prefix, so ``DB.name`` reads
    ``DB_NAME``. An optional nested record that is ``None`` is replaced by a
    zero-valued record before its fields are read.

    Values that do not convert, or that the record refuses on assignment,
    leave the field untouched. Pass a list as ``errors`` to collect those
    failures.

    ``environ`` defaults to ``os.environ``; empty values count as unset.
    """
    if isinstance(record, type) or not is_record(record):
        raise NotARecordError(record)
    if environ is None:
        environ = os.environ
    _fill(record, prefix, environ, errors)
    return record


def _assign(
    record: Any,
    field: FieldDescriptor,
    value: Any,
    key: str,
    raw: str,
    errors: list[CoercionError] | None,
) -> bool:
    """Set one attribute, reporting rejected assignments like conversion failures.

    Pydantic models with ``validate_assignment`` raise ``ValidationError`` for
    values outside field constraints; frozen records raise on any write.
    """
    try:
        setattr(record, field.name, value)
    except (ValidationError, TypeError, AttributeError) as exc:
        reason = f"assignment rejected: {exc}"
        logger.debug("assignment rejected", key=key, field=field.name, reason=str(exc))
        if errors is not None:
            errors.append(CoercionError(raw, field.shape, reason, key))
        return False
    return True


def _fill(
    record: Any,
    prefix: str,
    environ: Mapping[str, str],
    errors: list[CoercionError] | None,
) -> None:
    for field in describe_record(record):
        key = prefix + field.env_name
        shape = field.shape
        nested = shape.nested_record

        raw = environ.get(key, "")
        if raw and nested is None:
            try:
                value = coerce(shape, raw, key=key, errors=errors)
            except CoercionError as exc:
                logger.debug("coercion failed", key=key, shape=shape.kind.value, reason=exc.reason)
                if errors is not None:
                    errors.append(exc)
            else:
                if _assign(record, field, value, key, raw, errors):
                    logger.debug("field filled", key=key)

        if nested is None:
            continue
        child = getattr(record, field.name, None)
        if child is None:
            child = new_record(nested)
            if not _assign(record, field, child, key, "", errors):
                continue
            # Validating models may store a copy of the assigned record.
            child = getattr(record, field.name)
        _fill(child, key + KEY_SEPARATOR, environ, errors)


__all__ = ["KEY_SEPARATOR", "fill"]
