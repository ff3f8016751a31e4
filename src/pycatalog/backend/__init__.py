"""
Backend module for pycatalog catalog sources.

This module provides different sources of INFORMATION_SCHEMA.COLUMNS rows,
with a unified interface through the CatalogBackend base class.
"""

from pathlib import Path

from ..config import ConnectionSettings
from .base import CatalogBackend
from .json_backend import JsonFileBackend
from .mysql_backend import MySQLBackend

__all__ = [
    "CatalogBackend",
    "JsonFileBackend",
    "MySQLBackend",
    "create_backend",
]


def create_backend(source: str | Path | ConnectionSettings) -> CatalogBackend:
    """
    Create the appropriate backend for a catalog source.

    Args:
        source: Server credentials, or the path of a JSON catalog file

    Returns:
        An instance of the appropriate backend class

    Raises:
        DatabaseConnectionError: If a catalog file cannot be read
    """
    if isinstance(source, ConnectionSettings):
        return MySQLBackend(source)
    return JsonFileBackend(source)
