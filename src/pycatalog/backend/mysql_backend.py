"""
MySQL backend reading the server's INFORMATION_SCHEMA through SQLAlchemy.
"""

import logging
from typing import Any

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.exc import DBAPIError, SQLAlchemyError

from ..config import ConnectionSettings
from ..exceptions import CatalogError, DatabaseConnectionError
from .base import CatalogBackend

logger = logging.getLogger(__name__)

DATABASES_QUERY = "SHOW DATABASES"

CATALOG_QUERY = (
    "SELECT * FROM INFORMATION_SCHEMA.COLUMNS "
    "WHERE TABLE_SCHEMA = :schema "
    "ORDER BY TABLE_NAME, ORDINAL_POSITION"
)


def _decode_row(row) -> dict[str, Any]:
    """Copy a result row into a plain dict, decoding any bytes values."""
    return {
        key: value.decode("utf-8") if isinstance(value, (bytes, bytearray)) else value
        for key, value in row.items()
    }


class MySQLBackend(CatalogBackend):
    """Backend implementation using SQLAlchemy with the PyMySQL driver."""

    def __init__(self, settings: ConnectionSettings | None = None, engine: Engine | None = None):
        """
        Initialize the backend.

        Args:
            settings: Server credentials (defaults from the environment)
            engine: Pre-built SQLAlchemy engine to use instead of creating one
        """
        self.settings = settings or ConnectionSettings.from_env()
        self._engine = engine

    def _get_engine(self) -> Engine:
        """
        Get or create the SQLAlchemy engine.

        Returns:
            SQLAlchemy Engine instance
        """
        if self._engine is None:
            self._engine = create_engine(self.settings.url(), pool_pre_ping=True)
        return self._engine

    def _execute(self, sql: str, **params) -> list:
        engine = self._get_engine()
        try:
            connection = engine.connect()
        except SQLAlchemyError as e:
            raise DatabaseConnectionError(
                f"Cannot connect to {self.settings.host}:{self.settings.port}. Error: {e}"
            ) from e

        with connection:
            try:
                result = connection.execute(text(sql), params)
                return list(result.mappings())
            except DBAPIError as e:
                if e.connection_invalidated:
                    raise DatabaseConnectionError(f"Connection lost during query. Error: {e}") from e
                raise CatalogError(f"Query failed: {sql}. Error: {e}") from e
            except SQLAlchemyError as e:
                raise CatalogError(f"Query failed: {sql}. Error: {e}") from e

    def list_databases(self) -> list[str]:
        rows = self._execute(DATABASES_QUERY)
        # The result column is "Database" on MySQL and MariaDB.
        return [next(iter(row.values())) for row in rows]

    def get_catalog_rows(self, database_name: str) -> list[dict[str, Any]]:
        rows = [_decode_row(row) for row in self._execute(CATALOG_QUERY, schema=database_name)]
        logger.debug("Fetched %d catalog rows for %s", len(rows), database_name)
        return rows

    def close(self) -> None:
        """Dispose the engine and its connection pool."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
