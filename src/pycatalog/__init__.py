"""
pycatalog - MySQL schema metadata converter

This library reads a MySQL database's column catalog (INFORMATION_SCHEMA.COLUMNS),
validates it into a typed schema model and renders that model as JSON,
CREATE TABLE statements or Python source.
"""

from .classifier import classify, detect_field_type, has_date_data_type, has_string_data_type
from .config import ConnectionSettings
from .core import SchemaInspector
from .exceptions import (
    CatalogError,
    DatabaseConnectionError,
    EmptyTableError,
    FieldTypeError,
    MissingFieldError,
    ShapeError,
    TableMismatchError,
    TableNotFoundError,
    UnsupportedTypeError,
)
from .models import ColumnModel, DatabaseModel, TableModel, build_database, load_json
from .renderers import render, render_create_tables, render_dataclasses, render_json, render_object_literals
from .validation import Invalid, Valid, validate_row

__version__ = "0.1.0"
__all__ = [
    "SchemaInspector",
    "ConnectionSettings",
    "ColumnModel",
    "TableModel",
    "DatabaseModel",
    "build_database",
    "load_json",
    "validate_row",
    "Valid",
    "Invalid",
    "classify",
    "detect_field_type",
    "has_string_data_type",
    "has_date_data_type",
    "render",
    "render_json",
    "render_create_tables",
    "render_object_literals",
    "render_dataclasses",
    "CatalogError",
    "DatabaseConnectionError",
    "TableNotFoundError",
    "ShapeError",
    "MissingFieldError",
    "FieldTypeError",
    "TableMismatchError",
    "UnsupportedTypeError",
    "EmptyTableError",
]
