"""
JSON file backend for catalog rows captured earlier.
"""

import json
import logging
from pathlib import Path
from typing import Any

from ..exceptions import DatabaseConnectionError
from .base import CatalogBackend

logger = logging.getLogger(__name__)


class JsonFileBackend(CatalogBackend):
    """
    Catalog source backed by a JSON file.

    The file holds either an array of INFORMATION_SCHEMA.COLUMNS rows (the
    databases are taken from their TABLE_SCHEMA values) or an object mapping
    database names to such arrays.
    """

    def __init__(self, path: str | Path):
        """
        Load the catalog file.

        Args:
            path: Path to the JSON file

        Raises:
            DatabaseConnectionError: If the file is missing or malformed
        """
        self.path = Path(path)
        if not self.path.exists():
            raise DatabaseConnectionError(f"Catalog file not found: {path}")

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise DatabaseConnectionError(f"Cannot read catalog file: {path}. Error: {e}") from e

        self._catalog = self._group_by_database(data)
        logger.debug("Loaded %d databases from %s", len(self._catalog), self.path)

    def _group_by_database(self, data: Any) -> dict[str, list[dict[str, Any]]]:
        if isinstance(data, dict):
            for rows in data.values():
                if not isinstance(rows, list) or not all(isinstance(row, dict) for row in rows):
                    raise DatabaseConnectionError(f"Catalog file {self.path} must map database names to arrays of rows")
            return {name: list(rows) for name, rows in data.items()}

        if not isinstance(data, list):
            raise DatabaseConnectionError(f"Catalog file {self.path} must hold an array or an object")

        catalog: dict[str, list[dict[str, Any]]] = {}
        for row in data:
            if not isinstance(row, dict) or not isinstance(row.get("TABLE_SCHEMA"), str):
                raise DatabaseConnectionError(f"Catalog file {self.path} has a row without TABLE_SCHEMA")
            catalog.setdefault(row["TABLE_SCHEMA"], []).append(row)
        return catalog

    def list_databases(self) -> list[str]:
        return list(self._catalog)

    def get_catalog_rows(self, database_name: str) -> list[dict[str, Any]]:
        return [dict(row) for row in self._catalog.get(database_name, [])]

    def close(self) -> None:
        self._catalog = {}
