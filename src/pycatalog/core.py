"""
Core SchemaInspector class for reading and rendering database schemas.
"""

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import pandas as pd

from .backend import CatalogBackend, create_backend
from .config import ConnectionSettings
from .exceptions import TableNotFoundError, UnsupportedTypeError
from .models import DatabaseModel, TableModel, build_database
from .renderers import render
from .validation import COLUMN_FIELDS

logger = logging.getLogger(__name__)


class SchemaInspector:
    """
    Main class for inspecting database schemas.

    Reads column catalogs from a backend, builds schema models from them and
    renders those models as JSON, SQL or Python source.
    """

    def __init__(self, backend: CatalogBackend):
        """
        Initialize the inspector.

        Args:
            backend: Source of catalog rows
        """
        self.backend = backend
        self._databases_cache: list[str] | None = None
        self._rows_cache: dict[str, list[dict[str, Any]]] = {}

    @classmethod
    def connect(cls, source: str | Path | ConnectionSettings) -> "SchemaInspector":
        """
        Create an inspector for a MySQL server or a JSON catalog file.

        Raises:
            DatabaseConnectionError: If a catalog file cannot be read
        """
        return cls(create_backend(source))

    def get_databases(self) -> list[str]:
        """
        Get list of all databases.

        Returns:
            List of database names
        """
        if self._databases_cache is None:
            self._databases_cache = self.backend.list_databases()
        return self._databases_cache.copy()

    def get_catalog_rows(self, database_name: str) -> list[dict[str, Any]]:
        """
        Get the raw column catalog of a database.

        Returns:
            Copies of the INFORMATION_SCHEMA.COLUMNS rows
        """
        if database_name not in self._rows_cache:
            self._rows_cache[database_name] = self.backend.get_catalog_rows(database_name)
            logger.debug("Cached %d rows for %s", len(self._rows_cache[database_name]), database_name)
        return [dict(row) for row in self._rows_cache[database_name]]

    def load_database(self, database_name: str) -> DatabaseModel | None:
        """
        Build the schema model of a database.

        Returns:
            DatabaseModel, or None if the database has no columns

        Raises:
            ShapeError: If a catalog row fails validation
        """
        return build_database(self.get_catalog_rows(database_name), database_name)

    def get_table_names(self, database_name: str) -> list[str]:
        """Get table names of a database in catalog order."""
        database = self.load_database(database_name)
        return database.table_names() if database else []

    def get_table_info(self, database_name: str, table_name: str) -> TableModel:
        """
        Get the model of a single table.

        Raises:
            TableNotFoundError: If the table doesn't exist
        """
        database = self.load_database(database_name)
        if database is None:
            raise TableNotFoundError(f"Table '{table_name}' not found")
        return database.get_table(table_name)

    def render(
        self,
        database_name: str,
        fmt: str = "json",
        tables: Iterable[str] | None = None,
        **options,
    ) -> str:
        """
        Render a database schema.

        Args:
            database_name: Name of the database
            fmt: One of 'json', 'sql', 'dict' or 'dataclass'
            tables: Table names to include (None for all)
            **options: Extra renderer options (e.g. engine/charset for 'sql')

        Returns:
            Rendered text; empty if nothing was selected

        Raises:
            TableNotFoundError: If a requested table doesn't exist
            ShapeError: If a catalog row fails validation
            UnsupportedTypeError: If classification meets an unsupported type
        """
        database = self.load_database(database_name)
        if tables is not None:
            tables = list(tables)
            known = database.table_names() if database else []
            missing = [name for name in tables if name not in known]
            if missing:
                raise TableNotFoundError(f"Table '{missing[0]}' not found")
        return render(database, fmt, tables, **options)

    def get_columns_frame(self, database_name: str, tables: Iterable[str] | None = None) -> pd.DataFrame:
        """
        Get the column catalog as a pandas DataFrame.

        One row per column with the serialized column fields plus a
        ``fieldType`` column. Columns whose type cannot be classified get
        ``None`` there.

        Args:
            database_name: Name of the database
            tables: Table names to include (None for all)

        Returns:
            pandas DataFrame, empty (with headers) if nothing was selected
        """
        headers = [spec.json_name for spec in COLUMN_FIELDS] + ["fieldType"]
        database = self.load_database(database_name)
        if database is None:
            return pd.DataFrame(columns=headers)
        if tables is not None:
            database = database.select(tables)

        records = []
        for table in database.get_tables():
            for column in table.get_columns():
                record = column.serialize()
                try:
                    record["fieldType"] = column.field_type()
                except UnsupportedTypeError as e:
                    logger.warning("Cannot classify %s.%s: %s", table.name, column.column_name, e)
                    record["fieldType"] = None
                records.append(record)

        return pd.DataFrame.from_records(records, columns=headers)

    def export_schema_to_csv(
        self,
        database_name: str,
        output_path: str | Path,
        tables: Iterable[str] | None = None,
    ) -> None:
        """
        Export the column catalog to a CSV file.

        Args:
            database_name: Name of the database
            output_path: Path to output CSV file
            tables: Table names to export (None for all)
        """
        self.get_columns_frame(database_name, tables).to_csv(output_path, index=False)

    def close(self) -> None:
        """Close the backend and drop cached catalog data."""
        self.backend.close()
        self._databases_cache = None
        self._rows_cache = {}

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
