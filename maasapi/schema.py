"""Pydantic building blocks for the wire shapes of MAAS API payloads.

Each reader declares one ``WireModel`` per API version describing the fields
it needs. Validation runs in strict mode, so a field only accepts its own
JSON type; the annotated types below add the few lenient conversions the
server needs (numbers sent as strings, nulls standing in for empty values).
Failures are raised as ``SchemaError`` carrying a path-qualified message.

Example:
    >>> class Link(WireModel):
    ...     id: ForceInt
    ...     mode: str
    >>> validate(Link, {"id": "3", "mode": "auto", "extra": True})
    Link(id=3, mode='auto')
"""

import json
import math
from typing import Annotated, Any, Dict, List

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    NonNegativeInt,
    TypeAdapter,
    ValidationError,
    model_validator,
)
from pydantic_core import PydanticCustomError

# pydantic error types mapped to the shape named in messages
_EXPECTED = {
    "string_type": "string",
    "bool_type": "bool",
    "int_type": "number",
    "number_type": "number",
    "finite_number": "finite number",
    "greater_than_equal": "unsigned number",
    "list_type": "list",
    "dict_type": "map",
    "model_type": "map",
}

_TYPE_NAMES = {
    str: "string",
    bool: "bool",
    int: "int",
    float: "float",
    list: "list",
    dict: "map",
}


def _describe(value: Any) -> str:
    if value is None:
        return "nothing"
    type_name = _TYPE_NAMES.get(type(value), type(value).__name__)
    try:
        rendered = json.dumps(value)
    except (TypeError, ValueError):
        rendered = repr(value)
    return f"{type_name}({rendered})"


def _path_prefix(loc) -> str:
    if not loc:
        return ""
    path = "".join(f"[{part}]" if isinstance(part, int) else f".{part}" for part in loc)
    return path.lstrip(".") + ": "


class SchemaError(ValueError):
    """A value did not match the shape a wire schema expects."""

    def __init__(self, expected: str, got: Any, loc=()):
        self.expected = expected
        self.got = got
        self.loc = tuple(loc)
        super().__init__(f"{_path_prefix(self.loc)}expected {expected}, got {_describe(got)}")

    @classmethod
    def from_validation_error(cls, exc: ValidationError) -> "SchemaError":
        """Build from the first error pydantic reported."""
        error = exc.errors()[0]
        expected = _EXPECTED.get(error["type"], error["msg"])
        return cls(expected, error.get("input"), error["loc"])


class WireModel(BaseModel):
    """Base for per-version payload schemas.

    Undeclared keys are dropped. A required field that is absent is
    validated as null, so only nullable fields tolerate absence.
    """

    model_config = ConfigDict(strict=True, extra="ignore", frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _absent_as_null(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        absent = {
            name: None
            for name, field in cls.model_fields.items()
            if field.is_required() and name not in data
        }
        return {**data, **absent} if absent else data


def _force_int(value: Any) -> Any:
    # bool is an int subclass but never a valid number here
    if isinstance(value, bool):
        raise PydanticCustomError("number_type", "Input should be a number")
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            pass
        try:
            value = float(value)
        except ValueError:
            raise PydanticCustomError("number_type", "Input should be a number")
    if isinstance(value, float):
        if not math.isfinite(value):
            raise PydanticCustomError("finite_number", "Input should be a finite number")
        return int(value)
    return value


def null_as(default: Any) -> BeforeValidator:
    """Validator replacing JSON null with ``default`` (copied if a list)."""
    def replace(value: Any) -> Any:
        if value is None:
            return list(default) if isinstance(default, list) else default
        return value
    return BeforeValidator(replace)


# Integer that also accepts floats (truncated) and numeric strings.
ForceInt = Annotated[int, BeforeValidator(_force_int)]
# Non-negative ForceInt, used for sizes.
ForceUint = Annotated[NonNegativeInt, BeforeValidator(_force_int)]
# String where the server sends null for "not set".
NullAsEmpty = Annotated[str, null_as("")]

JSONObject = Dict[str, Any]
JSONObjectList = List[Dict[str, Any]]

OBJECT = TypeAdapter(JSONObject, config=ConfigDict(strict=True))
OBJECT_LIST = TypeAdapter(JSONObjectList, config=ConfigDict(strict=True))


def validate(schema: Any, value: Any) -> Any:
    """Validate value against a WireModel class or a TypeAdapter.

    Raises:
        SchemaError: For the first mismatch found
    """
    try:
        if isinstance(schema, TypeAdapter):
            return schema.validate_python(value)
        return schema.model_validate(value)
    except ValidationError as e:
        raise SchemaError.from_validation_error(e) from e
