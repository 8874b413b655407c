"""Tests for the wire schema building blocks."""

from typing import Annotated, Dict, List, Optional

import pytest
from pydantic import Field

from maasapi.schema import (
    OBJECT,
    OBJECT_LIST,
    ForceInt,
    ForceUint,
    JSONObject,
    NullAsEmpty,
    SchemaError,
    WireModel,
    null_as,
    validate,
)


class Sample(WireModel):
    id: ForceInt
    name: str
    size: ForceUint = 0
    enabled: bool = False
    label: NullAsEmpty = ""
    tags: List[str] = Field(default_factory=list)
    parts: Annotated[List[str], null_as([])] = Field(default_factory=list)
    vlan: Optional[JSONObject] = None
    owner_data: Dict[str, str] = Field(default_factory=dict)


def check(**fields):
    return validate(Sample, {"id": 1, "name": "eth0", **fields})


def message(**fields):
    with pytest.raises(SchemaError) as excinfo:
        check(**fields)
    return str(excinfo.value)


def test_schema_error_is_value_error():
    assert issubclass(SchemaError, ValueError)


def test_drops_undeclared_keys():
    result = check(extra=True)
    assert result.id == 1
    assert result.name == "eth0"
    assert not hasattr(result, "extra")


@pytest.mark.parametrize("value, expected", [
    (42, 42),
    (4.9, 4),
    ("42", 42),
    ("4.5", 4),
    (-3, -3),
])
def test_force_int_coerces_numbers(value, expected):
    assert check(id=value).id == expected


@pytest.mark.parametrize("value, text", [
    (True, "id: expected number, got bool(true)"),
    ("abc", 'id: expected number, got string("abc")'),
    (None, "id: expected number, got nothing"),
    ([], "id: expected number, got list([])"),
])
def test_force_int_rejects_non_numbers(value, text):
    assert message(id=value) == text


@pytest.mark.parametrize("value, rendered", [
    (float("nan"), "float(NaN)"),
    (float("inf"), "float(Infinity)"),
    (float("-inf"), "float(-Infinity)"),
    ("NaN", 'string("NaN")'),
    ("Infinity", 'string("Infinity")'),
])
def test_force_int_rejects_non_finite(value, rendered):
    with pytest.raises(SchemaError) as excinfo:
        check(id=value)
    assert str(excinfo.value).startswith("id: expected finite number, got ")
    if isinstance(value, float):
        assert str(excinfo.value).endswith(rendered)


def test_force_uint():
    assert check(size="8589934592").size == 8589934592
    assert message(size=-1) == "size: expected unsigned number, got int(-1)"


def test_strings_are_strict():
    assert message(name=1) == "name: expected string, got int(1)"
    assert message(name=[]) == "name: expected string, got list([])"


def test_bool_is_strict():
    assert check(enabled=False).enabled is False
    assert message(enabled="true") == 'enabled: expected bool, got string("true")'


def test_missing_required_field_reads_as_null():
    with pytest.raises(SchemaError) as excinfo:
        validate(Sample, {"id": 3})
    assert str(excinfo.value) == "name: expected string, got nothing"
    assert excinfo.value.loc == ("name",)


def test_defaults_fill_absent_keys():
    result = check()
    assert result.size == 0
    assert result.label == ""
    assert result.tags == []
    assert result.vlan is None
    assert result.owner_data == {}


def test_mutable_defaults_are_not_shared():
    first = check()
    first.tags.append("changed")
    assert check().tags == []


def test_null_as_default():
    assert check(label=None).label == ""
    assert check(parts=None).parts == []
    assert message(tags=None) == "tags: expected list, got nothing"


def test_list_reports_index_of_bad_element():
    assert check(tags=["a", "b"]).tags == ["a", "b"]
    assert message(tags=["a", 1]) == "tags[1]: expected string, got int(1)"


def test_string_map_reports_key():
    assert check(owner_data={"fez": "phil fish"}).owner_data == {"fez": "phil fish"}
    assert message(owner_data={"count": 3}) == "owner_data.count: expected string, got int(3)"


def test_nested_object_must_be_map():
    assert check(vlan={"vid": 2}).vlan == {"vid": 2}
    assert message(vlan="x") == 'vlan: expected map, got string("x")'


def test_rejects_non_mapping():
    with pytest.raises(SchemaError) as excinfo:
        validate(Sample, [1])
    assert str(excinfo.value) == "expected map, got list([1])"


def test_top_level_mismatch_has_no_path():
    with pytest.raises(SchemaError) as excinfo:
        validate(OBJECT_LIST, "wat?")
    assert str(excinfo.value) == 'expected list, got string("wat?")'
    with pytest.raises(SchemaError) as excinfo:
        validate(OBJECT, "wat?")
    assert str(excinfo.value) == 'expected map, got string("wat?")'


def test_object_list_reports_bad_element():
    assert validate(OBJECT_LIST, [{"a": 1}, {}]) == [{"a": 1}, {}]
    with pytest.raises(SchemaError) as excinfo:
        validate(OBJECT_LIST, [{}, 1])
    assert str(excinfo.value) == "[1]: expected map, got int(1)"


def test_validated_values_are_frozen():
    result = check()
    with pytest.raises(Exception):
        result.name = "eth1"
