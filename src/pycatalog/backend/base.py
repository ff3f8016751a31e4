"""
Abstract base class for catalog sources.
"""

from abc import ABC, abstractmethod
from typing import Any


class CatalogBackend(ABC):
    """
    Abstract base class for sources of INFORMATION_SCHEMA.COLUMNS rows.

    All backend implementations must inherit from this class and implement
    all abstract methods.
    """

    @abstractmethod
    def list_databases(self) -> list[str]:
        """
        Get list of all databases visible to the source.

        Returns:
            List of database names

        Raises:
            DatabaseConnectionError: If the source cannot be reached
        """
        pass

    @abstractmethod
    def get_catalog_rows(self, database_name: str) -> list[dict[str, Any]]:
        """
        Get the column catalog of a database.

        Args:
            database_name: Name of the database (TABLE_SCHEMA)

        Returns:
            Raw rows ordered by table name and ordinal position; empty if the
            database is unknown

        Raises:
            DatabaseConnectionError: If the source cannot be reached
            CatalogError: If the catalog query fails
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Release any resources held by the source."""
        pass

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
