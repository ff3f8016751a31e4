"""
Text renderers for database models.

Every renderer reads a ``DatabaseModel`` without modifying it and returns a
string. A missing model or an empty table selection renders as ``""``.
"""

import json
from collections.abc import Callable, Iterable

from .classifier import has_string_data_type
from .models import DatabaseModel, TableModel

COLUMN_METADATA_HEADER = '''"""Column metadata for database `{database}`."""

from typing import Literal, TypedDict


class ColumnMetadata(TypedDict):
    tableCatalog: str
    tableSchema: str
    tableName: str
    columnName: str
    ordinalPosition: int
    columnDefault: str | None
    isNullable: Literal["YES", "NO"]
    dataType: str
    characterMaximumLength: int | None
    characterOctetLength: int | None
    numericPrecision: int | None
    numericScale: int | None
    datetimePrecision: int | None
    characterSetName: str | None
    collationName: str | None
    columnType: str
    columnKey: Literal["PRI", "UNI", "MUL", ""]
    extra: str
    privileges: str
    columnComment: str
    isGenerated: str
    generationExpression: str | None

'''

DATACLASS_HEADER = '''"""Record classes for database `{database}`."""

import math
from dataclasses import dataclass


def _to_number(value):
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan
'''


def _selected_tables(database: DatabaseModel | None, tables: Iterable[str] | None) -> list[TableModel]:
    if database is None:
        return []
    if tables is not None:
        database = database.select(tables)
    return database.get_tables()


def _record_class_name(table_name: str) -> str:
    return table_name[:1].upper() + table_name[1:] + "Item"


def render_json(
    database: DatabaseModel | None,
    tables: Iterable[str] | None = None,
    grouped: bool = False,
) -> str:
    """
    Render column metadata as JSON.

    Args:
        database: Database model to render
        tables: Table names to include (None for all)
        grouped: Emit an object keyed by table name instead of a flat array

    Returns:
        JSON text indented by two spaces
    """
    selected = _selected_tables(database, tables)
    if not selected:
        return ""

    by_table = {
        table.name: [
            column.serialize()
            for column in sorted(table.get_columns(), key=lambda column: column.ordinal_position)
        ]
        for table in selected
    }
    if grouped:
        data = by_table
    else:
        data = [entry for entries in by_table.values() for entry in entries]
    return json.dumps(data, indent=2, ensure_ascii=False)


def render_create_tables(
    database: DatabaseModel | None,
    tables: Iterable[str] | None = None,
    engine: str | None = None,
    charset: str | None = None,
    collation: str | None = None,
    comment: str | None = None,
) -> str:
    """
    Render one CREATE TABLE statement per table, separated by blank lines.

    Raises:
        EmptyTableError: If a selected table has no columns
    """
    statements = [
        table.generate_create_table(engine=engine, charset=charset, collation=collation, comment=comment)
        for table in _selected_tables(database, tables)
    ]
    return "\n\n".join(statements)


def render_object_literals(database: DatabaseModel | None, tables: Iterable[str] | None = None) -> str:
    """Render a Python module with one dict literal of column metadata per table."""
    selected = _selected_tables(database, tables)
    if not selected:
        return ""

    lines = [COLUMN_METADATA_HEADER.format(database=database.name)]
    for table in selected:
        lines.append(f"{table.name}: dict[str, ColumnMetadata] = {{")
        for column in table.get_columns():
            lines.append(f"    {column.column_name!r}: {{")
            for key, value in column.serialize().items():
                lines.append(f"        {key!r}: {value!r},")
            lines.append("    },")
        lines.append("}")
        lines.append("")
    return "\n".join(lines)


def render_dataclasses(database: DatabaseModel | None, tables: Iterable[str] | None = None) -> str:
    """
    Render a Python module with one dataclass per table.

    String-like columns become ``str`` fields and everything else ``float``.
    The generated ``from_dict`` coerces loosely: a value that is not numeric
    becomes ``math.nan`` instead of raising.
    """
    selected = _selected_tables(database, tables)
    if not selected:
        return ""

    lines = [DATACLASS_HEADER.format(database=database.name)]
    for table in selected:
        columns = table.get_columns()
        lines.append("")
        lines.append("@dataclass")
        lines.append(f"class {_record_class_name(table.name)}:")
        for column in columns:
            field_type = "str" if has_string_data_type(column.data_type) else "float"
            lines.append(f"    {column.column_name}: {field_type}")
        lines.append("")
        lines.append("    @classmethod")
        lines.append("    def from_dict(cls, data):")
        lines.append("        return cls(")
        for column in columns:
            name = column.column_name
            if has_string_data_type(column.data_type):
                lines.append(f"            {name}=str(data.get({name!r})),")
            else:
                lines.append(f"            {name}=_to_number(data.get({name!r})),")
        lines.append("        )")
        lines.append("")
    return "\n".join(lines)


RENDERERS: dict[str, Callable[..., str]] = {
    "json": render_json,
    "sql": render_create_tables,
    "dict": render_object_literals,
    "dataclass": render_dataclasses,
}


def render(
    database: DatabaseModel | None,
    fmt: str,
    tables: Iterable[str] | None = None,
    **options,
) -> str:
    """
    Render a database in the given format.

    Args:
        database: Database model to render
        fmt: One of 'json', 'sql', 'dict' or 'dataclass'
        tables: Table names to include (None for all)
        **options: Extra renderer options (e.g. engine/charset for 'sql')

    Raises:
        ValueError: If the format is unknown
    """
    if fmt not in RENDERERS:
        raise ValueError(f"Unknown format '{fmt}'. Expected one of: {', '.join(RENDERERS)}")
    return RENDERERS[fmt](database, tables, **options)
