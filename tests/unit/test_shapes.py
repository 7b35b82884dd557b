"""Unit tests for record introspection."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Annotated, Dict, List, Optional, Union

import pytest
from pydantic import BaseModel, Field

from lazyenv.errors import NotARecordError
from lazyenv.shapes import (
    EnvName,
    ShapeKind,
    describe_record,
    is_record,
    new_record,
    shape_of,
    zero_value,
)


@dataclass
class Endpoint:
    host: str
    port: int = 5432


@dataclass
class Tagged:
    password: str = field(default="", metadata={"env": "PASS"})
    token: Annotated[str, EnvName("API_TOKEN")] = ""
    HTTPServer: str = ""


class ModelTagged(BaseModel):
    password: str = Field(default="", json_schema_extra={"env": "PASS"})
    token: Annotated[str, EnvName("API_TOKEN")] = ""
    user_id: int = 0


class Required(BaseModel):
    name: str
    retries: int
    endpoint: Endpoint
    backup: Optional[Endpoint] = None
    labels: Dict[str, str] = Field(default_factory=lambda: {"team": "core"})


class TestShapeOf:
    """Type hints map onto shapes."""

    @pytest.mark.parametrize(
        ("hint", "kind"),
        [
            (str, ShapeKind.STRING),
            (int, ShapeKind.INTEGER),
            (float, ShapeKind.FLOAT),
            (bool, ShapeKind.BOOLEAN),
            (Endpoint, ShapeKind.RECORD),
            (ModelTagged, ShapeKind.RECORD),
            (datetime, ShapeKind.UNSUPPORTED),
            (Union[int, str], ShapeKind.UNSUPPORTED),
            (tuple[int, str], ShapeKind.UNSUPPORTED),
        ],
    )
    def test_simple_hints(self, hint, kind):
        assert shape_of(hint).kind is kind

    def test_optional_spellings(self):
        for hint in (Optional[int], int | None, Union[None, int]):
            shape = shape_of(hint)
            assert shape.kind is ShapeKind.OPTIONAL
            assert shape.inner.kind is ShapeKind.INTEGER

    def test_sequences(self):
        for hint in (list[int], List[int], Sequence[int]):
            shape = shape_of(hint)
            assert shape.kind is ShapeKind.SEQUENCE
            assert shape.inner.kind is ShapeKind.INTEGER
            assert shape.container is list

    def test_variadic_tuple(self):
        shape = shape_of(tuple[float, ...])
        assert shape.kind is ShapeKind.SEQUENCE
        assert shape.container is tuple
        assert shape.inner.kind is ShapeKind.FLOAT

    def test_bare_containers_hold_strings(self):
        assert shape_of(list).inner.kind is ShapeKind.STRING
        mapping = shape_of(dict)
        assert mapping.key.kind is ShapeKind.STRING
        assert mapping.value.kind is ShapeKind.STRING

    def test_mappings(self):
        for hint in (dict[str, int], Dict[str, int], Mapping[str, int]):
            shape = shape_of(hint)
            assert shape.kind is ShapeKind.MAPPING
            assert shape.key.kind is ShapeKind.STRING
            assert shape.value.kind is ShapeKind.INTEGER

    def test_nested_record_detection(self):
        assert shape_of(Endpoint).nested_record is Endpoint
        assert shape_of(Optional[Endpoint]).nested_record is Endpoint
        assert shape_of(list[Endpoint]).nested_record is None
        assert shape_of(Optional[int]).nested_record is None

    def test_annotated_is_unwrapped(self):
        assert shape_of(Annotated[int, EnvName("X")]).kind is ShapeKind.INTEGER


class TestDescribeRecord:
    """Field descriptors, names and tags."""

    def test_dataclass_tags(self):
        fields = {d.name: d for d in describe_record(Tagged)}
        assert fields["password"].env_name == "PASS"
        assert fields["token"].env_name == "API_TOKEN"
        assert fields["HTTPServer"].tag is None
        assert fields["HTTPServer"].env_name == "HTTP_SERVER"

    def test_pydantic_tags(self):
        fields = {d.name: d for d in describe_record(ModelTagged)}
        assert fields["password"].env_name == "PASS"
        assert fields["token"].env_name == "API_TOKEN"
        assert fields["user_id"].env_name == "USER_ID"

    def test_declaration_order(self):
        assert [d.name for d in describe_record(Endpoint)] == ["host", "port"]
        assert [d.name for d in describe_record(Tagged())] == ["password", "token", "HTTPServer"]

    def test_describe_is_deterministic(self):
        assert describe_record(Required) == describe_record(Required)

    def test_non_record_rejected(self):
        with pytest.raises(NotARecordError):
            describe_record({"a": 1})
        with pytest.raises(TypeError):
            describe_record(42)

    def test_is_record(self):
        assert is_record(Endpoint)
        assert is_record(Endpoint(host="db"))
        assert is_record(ModelTagged)
        assert not is_record(dict)
        assert not is_record("text")


class TestZeroValues:
    """Fresh slots and fresh records."""

    def test_primitive_zeros(self):
        assert zero_value(shape_of(str)) == ""
        assert zero_value(shape_of(int)) == 0
        assert zero_value(shape_of(float)) == 0.0
        assert zero_value(shape_of(bool)) is False
        assert zero_value(shape_of(Optional[int])) is None
        assert zero_value(shape_of(list[int])) == []
        assert zero_value(shape_of(tuple[int, ...])) == ()
        assert zero_value(shape_of(dict[str, int])) == {}

    def test_new_dataclass_keeps_defaults(self):
        endpoint = new_record(Endpoint)
        assert endpoint == Endpoint(host="", port=5432)

    def test_new_model_fills_required_fields(self):
        record = new_record(Required)
        assert record.name == ""
        assert record.retries == 0
        assert record.endpoint == Endpoint(host="", port=5432)
        assert record.backup is None
        assert record.labels == {"team": "core"}
