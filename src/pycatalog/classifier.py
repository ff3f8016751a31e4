"""
Column type classification for code generation.

Maps a catalog data type (plus a few column-name heuristics) onto the small
set of field kinds the renderers understand: ``bit``, ``integer``, ``string``
and ``float``.
"""

import re
from typing import TYPE_CHECKING, Literal

from .exceptions import UnsupportedTypeError

if TYPE_CHECKING:
    from .models import ColumnModel

FieldType = Literal["bit", "integer", "string", "float"]

INTEGER_PATTERN = re.compile(r"integer|int|smallint|tinyint|mediumint|bigint")
BOOLEAN_NAME_PATTERN = re.compile(r"^is_|_is_|^has_")
STRING_PATTERN = re.compile(r"char|varchar|tinytext|text|mediumtext|longtext")
FLOAT_PATTERN = re.compile(r"float|double|real|decimal")
DATE_PATTERN = re.compile(r"date|time|datetime|timestamp")


def has_integer_data_type(data_type: str) -> bool:
    """
    Check if a data type is one of the integer types.

    Raises:
        UnsupportedTypeError: For bigint, whose range does not fit a float
    """
    data_type = data_type.lower()
    if "bigint" in data_type:
        raise UnsupportedTypeError("bigint")
    return INTEGER_PATTERN.search(data_type) is not None


def has_boolean_data_type(column_name: str, data_type: str, column_type: str) -> bool:
    """Check if a column holds a boolean flag."""
    if column_type.lower() == "tinyint(1)":
        return True
    if has_integer_data_type(data_type):
        return BOOLEAN_NAME_PATTERN.search(column_name.lower()) is not None
    return data_type.lower() == "boolean"


def has_string_data_type(data_type: str) -> bool:
    return STRING_PATTERN.search(data_type.lower()) is not None


def has_float_data_type(data_type: str) -> bool:
    return FLOAT_PATTERN.search(data_type.lower()) is not None


def has_date_data_type(data_type: str) -> bool:
    """Check if a data type is date or time related. Not used by classify()."""
    return DATE_PATTERN.search(data_type.lower()) is not None


def classify(column_name: str, data_type: str, column_type: str) -> FieldType:
    """
    Classify a column into a field kind.

    Checks run in priority order and the first match wins. Types that match
    nothing fall back to ``string``.

    Args:
        column_name: Column name, used for the is_/has_ flag heuristic
        data_type: Catalog DATA_TYPE (e.g. 'int', 'varchar')
        column_type: Catalog COLUMN_TYPE (e.g. 'tinyint(1)')

    Returns:
        One of 'bit', 'integer', 'string' or 'float'

    Raises:
        UnsupportedTypeError: If the data type is bigint
    """
    if has_boolean_data_type(column_name, data_type, column_type):
        return "bit"
    if has_integer_data_type(data_type):
        return "integer"
    if has_string_data_type(data_type):
        return "string"
    if has_float_data_type(data_type):
        return "float"
    return "string"


def detect_field_type(column: "ColumnModel") -> FieldType:
    """Classify a validated column."""
    return classify(column.column_name, column.data_type, column.column_type)
