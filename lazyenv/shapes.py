"""Shape introspection for configuration records.

A *record* is a dataclass or a pydantic model. :func:`describe_record` turns
a record class into a tuple of :class:`FieldDescriptor` objects, each with a
:class:`Shape` that tells the coercer and the filler how to treat the field.
Descriptors are computed from the class definition alone, so the same class
always yields the same environment keys.
"""

from __future__ import annotations

import collections.abc
import dataclasses
import types
import typing
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Union, get_args, get_origin

from pydantic import BaseModel

from lazyenv.errors import NotARecordError
from lazyenv.naming import derive_env_name

ENV_TAG = "env"
"""Metadata key holding an explicit variable name override."""

_SEQUENCE_ORIGINS = (
    list,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
)
_MAPPING_ORIGINS = (
    dict,
    collections.abc.Mapping,
    collections.abc.MutableMapping,
)


class ShapeKind(Enum):
    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    OPTIONAL = "optional"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    RECORD = "record"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class EnvName:
    """``Annotated`` marker overriding the derived variable name of a field.

    >>> from typing import Annotated
    >>> @dataclass
    ... class DB:
    ...     password: Annotated[str, EnvName("PASS")] = ""
    """

    name: str


@dataclass(frozen=True)
class Shape:
    """Tagged description of a field type."""

    kind: ShapeKind
    inner: Shape | None = None
    key: Shape | None = None
    value: Shape | None = None
    record_type: type | None = None
    container: type = list
    python_type: Any = None

    @property
    def nested_record(self) -> type | None:
        """Record class walked by the filler for this shape, if any.

        Plain records and optional records both qualify.
        """
        if self.kind is ShapeKind.RECORD:
            return self.record_type
        if self.kind is ShapeKind.OPTIONAL and self.inner.kind is ShapeKind.RECORD:
            return self.inner.record_type
        return None


@dataclass(frozen=True)
class FieldDescriptor:
    """One field of a record class."""

    name: str
    shape: Shape
    tag: str | None = None

    @property
    def env_name(self) -> str:
        if self.tag:
            return self.tag
        return derive_env_name(self.name)


_PRIMITIVES = {
    str: ShapeKind.STRING,
    int: ShapeKind.INTEGER,
    float: ShapeKind.FLOAT,
    bool: ShapeKind.BOOLEAN,
}

STRING = Shape(ShapeKind.STRING, python_type=str)


def is_record(value: Any) -> bool:
    """Return True for dataclass and pydantic model classes or instances."""
    cls = value if isinstance(value, type) else type(value)
    return dataclasses.is_dataclass(cls) or issubclass(cls, BaseModel)


def _unwrap_annotated(hint: Any) -> tuple[Any, str | None]:
    tag = None
    while get_origin(hint) is Annotated:
        hint, *extras = get_args(hint)
        for extra in extras:
            if isinstance(extra, EnvName) and tag is None:
                tag = extra.name
    return hint, tag


def shape_of(hint: Any) -> Shape:
    """Build the :class:`Shape` for a type hint."""
    hint, _ = _unwrap_annotated(hint)
    origin = get_origin(hint)
    args = get_args(hint)

    if origin is Union or origin is types.UnionType:
        members = [arg for arg in args if arg is not type(None)]
        if len(members) == 1 and len(args) == 2:
            return Shape(ShapeKind.OPTIONAL, inner=shape_of(members[0]), python_type=hint)
        return Shape(ShapeKind.UNSUPPORTED, python_type=hint)

    if hint is list or origin in _SEQUENCE_ORIGINS:
        inner = shape_of(args[0]) if args else STRING
        return Shape(ShapeKind.SEQUENCE, inner=inner, container=list, python_type=hint)
    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return Shape(
                ShapeKind.SEQUENCE, inner=shape_of(args[0]), container=tuple, python_type=hint
            )
        return Shape(ShapeKind.UNSUPPORTED, python_type=hint)
    if hint is dict or origin in _MAPPING_ORIGINS:
        key, value = (shape_of(args[0]), shape_of(args[1])) if args else (STRING, STRING)
        return Shape(ShapeKind.MAPPING, key=key, value=value, python_type=hint)

    # Exact match only: str and int enums stay UNSUPPORTED.
    if hint in _PRIMITIVES:
        return Shape(_PRIMITIVES[hint], python_type=hint)
    if isinstance(hint, type) and is_record(hint):
        return Shape(ShapeKind.RECORD, record_type=hint, python_type=hint)
    return Shape(ShapeKind.UNSUPPORTED, python_type=hint)


def _describe_dataclass(cls: type) -> tuple[FieldDescriptor, ...]:
    hints = typing.get_type_hints(cls, include_extras=True)
    descriptors = []
    for f in dataclasses.fields(cls):
        hint, tag = _unwrap_annotated(hints.get(f.name, Any))
        if tag is None:
            tag = f.metadata.get(ENV_TAG)
        descriptors.append(FieldDescriptor(f.name, shape_of(hint), tag))
    return tuple(descriptors)


def _describe_model(cls: type[BaseModel]) -> tuple[FieldDescriptor, ...]:
    descriptors = []
    for name, info in cls.model_fields.items():
        tag = next((m.name for m in info.metadata if isinstance(m, EnvName)), None)
        extra = info.json_schema_extra
        if tag is None and isinstance(extra, dict):
            tag = extra.get(ENV_TAG)
        descriptors.append(FieldDescriptor(name, shape_of(info.annotation), tag))
    return tuple(descriptors)


def describe_record(record: Any) -> tuple[FieldDescriptor, ...]:
    """Return the field descriptors of a record class or instance, in declaration order.

    Raises :class:`NotARecordError` for anything that is not a dataclass or
    pydantic model.
    """
    cls = record if isinstance(record, type) else type(record)
    if dataclasses.is_dataclass(cls):
        return _describe_dataclass(cls)
    if issubclass(cls, BaseModel):
        return _describe_model(cls)
    raise NotARecordError(record)


def zero_value(shape: Shape) -> Any:
    """Value held by a fresh slot of ``shape`` before anything is written to it."""
    kind = shape.kind
    if kind is ShapeKind.STRING:
        return ""
    if kind is ShapeKind.INTEGER:
        return 0
    if kind is ShapeKind.FLOAT:
        return 0.0
    if kind is ShapeKind.BOOLEAN:
        return False
    if kind is ShapeKind.SEQUENCE:
        return shape.container()
    if kind is ShapeKind.MAPPING:
        return {}
    if kind is ShapeKind.RECORD:
        return new_record(shape.record_type)
    return None


def new_record(cls: type) -> Any:
    """Create a zero-valued instance of a record class.

    Declared defaults are kept; required fields get the zero value of their
    shape. Pydantic models are built with ``model_construct`` so that zero
    values are not validated.
    """
    if dataclasses.is_dataclass(cls):
        kwargs = {}
        shapes = {d.name: d.shape for d in _describe_dataclass(cls)}
        for f in dataclasses.fields(cls):
            required = f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING
            if f.init and required:
                kwargs[f.name] = zero_value(shapes[f.name])
        return cls(**kwargs)
    if issubclass(cls, BaseModel):
        kwargs = {
            d.name: zero_value(d.shape)
            for d in _describe_model(cls)
            if cls.model_fields[d.name].is_required()
        }
        return cls.model_construct(**kwargs)
    raise NotARecordError(cls)


__all__ = [
    "ENV_TAG",
    "EnvName",
    "FieldDescriptor",
    "Shape",
    "ShapeKind",
    "describe_record",
    "is_record",
    "new_record",
    "shape_of",
    "zero_value",
]
