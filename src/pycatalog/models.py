"""
Data models for catalog schema structures.
"""

import json
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from .classifier import FieldType, detect_field_type
from .exceptions import EmptyTableError, MissingFieldError, TableMismatchError, TableNotFoundError
from .validation import COLUMN_FIELDS, assert_valid_row

logger = logging.getLogger(__name__)

STRING_DEFAULT_TYPES = ("char", "varchar", "text", "enum", "set")
TEMPORAL_DEFAULT_TYPES = ("timestamp", "datetime")
BINARY_DEFAULT_TYPES = ("blob", "binary")

DEFAULT_CHARSET = "utf8mb4"
DEFAULT_COLLATION = "utf8mb4_unicode_ci"


@dataclass(frozen=True)
class ColumnModel:
    """
    Validated metadata for one table column.

    Build instances with ``from_raw`` (catalog keys) or ``from_dict``
    (serialized keys) so the values always pass validation.
    """

    table_catalog: str
    table_schema: str
    table_name: str
    column_name: str
    ordinal_position: int
    column_default: str | None
    is_nullable: str
    data_type: str
    character_maximum_length: int | float | None
    character_octet_length: int | float | None
    numeric_precision: int | float | None
    numeric_scale: int | float | None
    datetime_precision: int | float | None
    character_set_name: str | None
    collation_name: str | None
    column_type: str
    column_key: str
    extra: str
    privileges: str
    column_comment: str
    is_generated: str
    generation_expression: str | None

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "ColumnModel":
        """
        Create a column from a raw INFORMATION_SCHEMA.COLUMNS row.

        Raises:
            ShapeError: If the row fails validation
        """
        return cls(**assert_valid_row(raw))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ColumnModel":
        """Create a column from the output of ``serialize``."""
        raw = {spec.raw_name: data[spec.json_name] for spec in COLUMN_FIELDS if spec.json_name in data}
        return cls.from_raw(raw)

    def is_primary_key(self) -> bool:
        return self.column_key == "PRI"

    def allows_null(self) -> bool:
        return self.is_nullable == "YES"

    def is_auto_increment(self) -> bool:
        return "auto_increment" in self.extra

    def field_type(self) -> FieldType:
        """Classify the column; see ``classifier.classify``."""
        return detect_field_type(self)

    def column_definition(self) -> str:
        """Get a short column definition, e.g. ``id int PRIMARY KEY AUTO_INCREMENT NOT NULL``."""
        definition = f"{self.column_name} {self.column_type}"
        if self.is_primary_key():
            definition += " PRIMARY KEY"
        if self.is_auto_increment():
            definition += " AUTO_INCREMENT"
        if not self.allows_null():
            definition += " NOT NULL"
        return definition

    def serialize(self) -> dict[str, Any]:
        """Get every field as a plain dict keyed by camel-cased names."""
        return {spec.json_name: getattr(self, spec.attribute) for spec in COLUMN_FIELDS}


def escape_string(value: str) -> str:
    """Escape a string for use inside a single-quoted SQL literal."""
    return value.replace("'", "''").replace("\\", "\\\\")


def format_default_value(column: ColumnModel) -> str:
    """
    Format a column default for a CREATE TABLE statement.

    String-family defaults are quoted, CURRENT_TIMESTAMP on temporal columns
    stays a keyword, binary defaults become hex literals and anything else is
    emitted as-is.
    """
    default = column.column_default
    if default is None:
        return "NULL"

    data_type = column.data_type.lower()
    if data_type in STRING_DEFAULT_TYPES:
        return f"'{escape_string(default)}'"
    if data_type in TEMPORAL_DEFAULT_TYPES and default.upper() == "CURRENT_TIMESTAMP":
        return "CURRENT_TIMESTAMP"
    if data_type in BINARY_DEFAULT_TYPES:
        return f"x'{default}'"
    return default


@dataclass
class TableModel:
    """A table and its columns, keyed by column name in insertion order."""

    name: str
    columns: dict[str, ColumnModel] = field(default_factory=dict)

    @classmethod
    def from_rows(cls, name: str, rows: Iterable[Mapping[str, Any]]) -> "TableModel":
        """
        Create a table from raw catalog rows.

        Raises:
            ShapeError: If a row fails validation or belongs to another table
        """
        table = cls(name)
        for raw in rows:
            table.add_column(ColumnModel.from_raw(raw))
        return table

    def __len__(self) -> int:
        return len(self.columns)

    def add_column(self, column: ColumnModel) -> None:
        """
        Add a column, replacing any existing column with the same name.

        Raises:
            TableMismatchError: If the column belongs to a different table
        """
        if column.table_name != self.name:
            raise TableMismatchError(self.name, column.table_name)
        self.columns[column.column_name] = column

    def get_columns(self) -> list[ColumnModel]:
        return list(self.columns.values())

    def get_column(self, column_name: str) -> ColumnModel | None:
        return self.columns.get(column_name)

    def indexed_columns(self) -> list[str]:
        """Names of columns carrying a non-unique index (MUL)."""
        return [column.column_name for column in self.columns.values() if column.column_key == "MUL"]

    def generate_create_table(
        self,
        engine: str | None = None,
        charset: str | None = None,
        collation: str | None = None,
        comment: str | None = None,
    ) -> str:
        """
        Generate a CREATE TABLE statement for this table.

        Non-unique indexes are not part of the statement.

        Args:
            engine: Storage engine (e.g. 'InnoDB')
            charset: Table charset; defaults to the first column's charset
            collation: Table collation; defaults to the first column's collation
            comment: Table comment

        Returns:
            The statement, terminated by a semicolon

        Raises:
            EmptyTableError: If the table has no columns
        """
        columns = self.get_columns()
        if not columns:
            raise EmptyTableError(self.name)

        definitions = []
        primary_keys = []
        unique_keys = []

        for column in columns:
            definition = f"`{column.column_name}` {column.column_type}"
            if not column.allows_null():
                definition += " NOT NULL"
            if column.column_default is not None:
                definition += f" DEFAULT {format_default_value(column)}"
            if column.is_auto_increment():
                definition += " AUTO_INCREMENT"
            if column.column_comment:
                definition += f" COMMENT '{escape_string(column.column_comment)}'"
            definitions.append(definition)

            if column.is_primary_key():
                primary_keys.append(column.column_name)
            elif column.column_key == "UNI":
                unique_keys.append(column.column_name)

        if primary_keys:
            definitions.append("PRIMARY KEY (" + ", ".join(f"`{name}`" for name in primary_keys) + ")")
        for name in unique_keys:
            definitions.append(f"UNIQUE KEY `{name}_unique` (`{name}`)")

        statement = f"CREATE TABLE `{self.name}` (\n  " + ",\n  ".join(definitions) + "\n)"

        if engine:
            statement += f" ENGINE={engine}"

        charset = charset or columns[0].character_set_name or DEFAULT_CHARSET
        collation = collation or columns[0].collation_name or DEFAULT_COLLATION
        statement += f" DEFAULT CHARSET={charset} COLLATE={collation}"

        if comment:
            statement += f" COMMENT='{escape_string(comment)}'"

        return statement + ";"


@dataclass
class DatabaseModel:
    """A database and its tables, keyed by table name in first-seen order."""

    name: str
    tables: dict[str, TableModel] = field(default_factory=dict)

    @classmethod
    def from_rows(cls, name: str, rows: Iterable[Mapping[str, Any]]) -> "DatabaseModel":
        """
        Fold raw catalog rows into a database.

        Each row is validated, then added to the table it names; tables are
        created the first time they are seen. A later row for an existing
        table and column replaces the earlier one.

        Raises:
            ShapeError: If a row fails validation
        """
        database = cls(name)
        count = 0
        for raw in rows:
            column = ColumnModel.from_raw(raw)
            table = database.tables.get(column.table_name)
            if table is None:
                table = TableModel(column.table_name)
                database.add_table(table)
            table.add_column(column)
            count += 1

        logger.debug("Built database %s: %d tables from %d rows", name, len(database.tables), count)
        return database

    def __len__(self) -> int:
        return len(self.tables)

    def add_table(self, table: TableModel) -> None:
        self.tables[table.name] = table

    def get_table(self, table_name: str) -> TableModel:
        """
        Get a table by name.

        Raises:
            TableNotFoundError: If the table doesn't exist
        """
        if table_name not in self.tables:
            raise TableNotFoundError(f"Table '{table_name}' not found")
        return self.tables[table_name]

    def get_tables(self) -> list[TableModel]:
        return list(self.tables.values())

    def table_names(self) -> list[str]:
        return list(self.tables)

    def select(self, table_names: Iterable[str]) -> "DatabaseModel":
        """Get a database restricted to the given tables, keeping this database's order."""
        wanted = set(table_names)
        return DatabaseModel(
            self.name,
            {name: table for name, table in self.tables.items() if name in wanted},
        )


def build_database(
    rows: list[Mapping[str, Any]], database_name: str | None = None
) -> DatabaseModel | None:
    """
    Build a database model from raw catalog rows.

    Args:
        rows: INFORMATION_SCHEMA.COLUMNS rows, usually ordered by table name
              and ordinal position
        database_name: Name for the model; defaults to the first row's TABLE_SCHEMA

    Returns:
        The database model, or None if there are no rows

    Raises:
        ShapeError: If a row fails validation
    """
    if not rows:
        return None

    if database_name is None:
        if not isinstance(rows[0], Mapping) or "TABLE_SCHEMA" not in rows[0]:
            raise MissingFieldError("TABLE_SCHEMA")
        database_name = rows[0]["TABLE_SCHEMA"]

    return DatabaseModel.from_rows(database_name, rows)


def load_json(text: str, database_name: str | None = None) -> DatabaseModel | None:
    """
    Rebuild a database model from JSON renderer output.

    Accepts both the flat array and the grouped (keyed by table) forms.

    Raises:
        ShapeError: If an entry fails validation
    """
    data = json.loads(text) if text else []
    if isinstance(data, Mapping):
        data = [entry for entries in data.values() for entry in entries]

    columns = [ColumnModel.from_dict(entry) for entry in data]
    if not columns:
        return None

    database = DatabaseModel(database_name or columns[0].table_schema)
    for column in columns:
        if column.table_name not in database.tables:
            database.add_table(TableModel(column.table_name))
        database.tables[column.table_name].add_column(column)
    return database
