"""
Shape validation for raw INFORMATION_SCHEMA.COLUMNS rows.

A catalog row arrives as a plain mapping keyed by the catalog's upper-case
column names. ``validate_row`` checks it against the fixed field table below
and returns either ``Valid`` with the normalized values or ``Invalid`` with
the error describing the first offending field.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from .exceptions import FieldTypeError, MissingFieldError, ShapeError


def _is_string(value: Any) -> bool:
    return isinstance(value, str)


def _is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and value != ""


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_positive_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _is_nullable_string(value: Any) -> bool:
    return value is None or _is_string(value)


def _is_nullable_number(value: Any) -> bool:
    return value is None or _is_number(value)


def _one_of(*allowed: str) -> Callable[[Any], bool]:
    def check(value: Any) -> bool:
        return isinstance(value, str) and value in allowed

    return check


def _camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


@dataclass(frozen=True)
class FieldSpec:
    """One catalog field: its raw key, Python attribute and accepted shape."""

    raw_name: str
    check: Callable[[Any], bool]
    expected: str
    required: bool = False
    describe_value: bool = False

    @property
    def attribute(self) -> str:
        return self.raw_name.lower()

    @property
    def json_name(self) -> str:
        return _camel_case(self.attribute)

    def describe(self, value: Any) -> str:
        """Describe a rejected value for error messages."""
        if self.describe_value:
            return repr(value)
        return "null" if value is None else type(value).__name__


COLUMN_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("TABLE_CATALOG", _is_string, "string", required=True),
    FieldSpec("TABLE_SCHEMA", _is_string, "string", required=True),
    FieldSpec("TABLE_NAME", _is_string, "string", required=True),
    FieldSpec("COLUMN_NAME", _is_string, "string", required=True),
    FieldSpec("ORDINAL_POSITION", _is_positive_integer, "positive integer", required=True),
    FieldSpec("COLUMN_DEFAULT", _is_nullable_string, "string or null"),
    FieldSpec("IS_NULLABLE", _one_of("YES", "NO"), "'YES' or 'NO'", required=True, describe_value=True),
    FieldSpec("DATA_TYPE", _is_non_empty_string, "non-empty string", required=True),
    FieldSpec("CHARACTER_MAXIMUM_LENGTH", _is_nullable_number, "number or null"),
    FieldSpec("CHARACTER_OCTET_LENGTH", _is_nullable_number, "number or null"),
    FieldSpec("NUMERIC_PRECISION", _is_nullable_number, "number or null"),
    FieldSpec("NUMERIC_SCALE", _is_nullable_number, "number or null"),
    FieldSpec("DATETIME_PRECISION", _is_nullable_number, "number or null"),
    FieldSpec("CHARACTER_SET_NAME", _is_nullable_string, "string or null"),
    FieldSpec("COLLATION_NAME", _is_nullable_string, "string or null"),
    FieldSpec("COLUMN_TYPE", _is_non_empty_string, "non-empty string", required=True),
    FieldSpec(
        "COLUMN_KEY",
        _one_of("PRI", "UNI", "MUL", ""),
        "'PRI', 'UNI', 'MUL' or empty string",
        required=True,
        describe_value=True,
    ),
    FieldSpec("EXTRA", _is_string, "string", required=True),
    FieldSpec("PRIVILEGES", _is_string, "string", required=True),
    FieldSpec("COLUMN_COMMENT", _is_string, "string", required=True),
    # Anything beyond NEVER/ALWAYS is accepted as long as it is a string.
    FieldSpec("IS_GENERATED", _is_string, "'NEVER', 'ALWAYS' or string", required=True, describe_value=True),
    FieldSpec("GENERATION_EXPRESSION", _is_nullable_string, "string or null"),
)

REQUIRED_FIELDS = tuple(spec.raw_name for spec in COLUMN_FIELDS if spec.required)


@dataclass(frozen=True)
class Valid:
    """Successful validation: field values keyed by attribute name."""

    values: dict[str, Any]


@dataclass(frozen=True)
class Invalid:
    """Failed validation: the error naming the offending field."""

    error: ShapeError


ValidationResult = Valid | Invalid


def validate_row(raw: Any) -> ValidationResult:
    """
    Validate one raw catalog row.

    Required fields are checked for presence first, then every field is
    checked against its shape. Absent optional fields count as NULL. Keys not
    in the field table are ignored.

    Args:
        raw: Mapping keyed by INFORMATION_SCHEMA column names

    Returns:
        Valid with normalized values, or Invalid with the first error found
    """
    if not isinstance(raw, Mapping):
        return Invalid(ShapeError(f"Input must be a mapping, got {type(raw).__name__}", "row"))

    for name in REQUIRED_FIELDS:
        if name not in raw:
            return Invalid(MissingFieldError(name))

    values = {}
    for spec in COLUMN_FIELDS:
        value = raw.get(spec.raw_name)
        if not spec.check(value):
            return Invalid(FieldTypeError(spec.raw_name, spec.expected, spec.describe(value)))
        values[spec.attribute] = value

    return Valid(values)


def assert_valid_row(raw: Any) -> dict[str, Any]:
    """
    Validate a raw catalog row, raising on failure.

    Returns:
        Normalized field values keyed by attribute name

    Raises:
        ShapeError: If the row is missing a required field or has a bad value
    """
    result = validate_row(raw)
    if isinstance(result, Invalid):
        raise result.error
    return result.values
