"""
Shared pytest fixtures and configuration for pycatalog tests.
"""

import json

import pytest

from pycatalog import SchemaInspector, build_database


def make_row(table_name="users", column_name="id", ordinal_position=1, **overrides):
    """Build a valid INFORMATION_SCHEMA.COLUMNS row, overriding any field."""
    row = {
        "TABLE_CATALOG": "def",
        "TABLE_SCHEMA": "shop",
        "TABLE_NAME": table_name,
        "COLUMN_NAME": column_name,
        "ORDINAL_POSITION": ordinal_position,
        "COLUMN_DEFAULT": None,
        "IS_NULLABLE": "NO",
        "DATA_TYPE": "int",
        "CHARACTER_MAXIMUM_LENGTH": None,
        "CHARACTER_OCTET_LENGTH": None,
        "NUMERIC_PRECISION": 10,
        "NUMERIC_SCALE": 0,
        "DATETIME_PRECISION": None,
        "CHARACTER_SET_NAME": None,
        "COLLATION_NAME": None,
        "COLUMN_TYPE": "int",
        "COLUMN_KEY": "",
        "EXTRA": "",
        "PRIVILEGES": "select,insert,update,references",
        "COLUMN_COMMENT": "",
        "IS_GENERATED": "NEVER",
        "GENERATION_EXPRESSION": None,
    }
    row.update(overrides)
    return row


def varchar_row(table_name, column_name, ordinal_position, length=255, **overrides):
    """Build a utf8mb4 varchar column row."""
    fields = {
        "DATA_TYPE": "varchar",
        "COLUMN_TYPE": f"varchar({length})",
        "CHARACTER_MAXIMUM_LENGTH": length,
        "CHARACTER_OCTET_LENGTH": length * 4,
        "NUMERIC_PRECISION": None,
        "NUMERIC_SCALE": None,
        "CHARACTER_SET_NAME": "utf8mb4",
        "COLLATION_NAME": "utf8mb4_0900_ai_ci",
    }
    fields.update(overrides)
    return make_row(table_name, column_name, ordinal_position, **fields)


@pytest.fixture
def row_factory():
    """Factory for valid catalog rows."""
    return make_row


@pytest.fixture
def catalog_rows():
    """Catalog of the `shop` database: users(id, email, name, is_active) and orders(id, user_id, total, created_at)."""
    return [
        make_row("users", "id", 1, COLUMN_KEY="PRI", EXTRA="auto_increment"),
        varchar_row("users", "email", 2, COLUMN_KEY="UNI", COLUMN_COMMENT="Login e-mail"),
        varchar_row("users", "name", 3, length=100, IS_NULLABLE="YES"),
        make_row(
            "users",
            "is_active",
            4,
            DATA_TYPE="tinyint",
            COLUMN_TYPE="tinyint(1)",
            NUMERIC_PRECISION=3,
            COLUMN_DEFAULT="1",
        ),
        make_row("orders", "id", 1, COLUMN_KEY="PRI", EXTRA="auto_increment"),
        make_row("orders", "user_id", 2, COLUMN_KEY="MUL"),
        make_row(
            "orders",
            "total",
            3,
            DATA_TYPE="decimal",
            COLUMN_TYPE="decimal(10,2)",
            NUMERIC_SCALE=2,
            COLUMN_DEFAULT="0.00",
        ),
        make_row(
            "orders",
            "created_at",
            4,
            DATA_TYPE="timestamp",
            COLUMN_TYPE="timestamp",
            NUMERIC_PRECISION=None,
            NUMERIC_SCALE=None,
            DATETIME_PRECISION=0,
            COLUMN_DEFAULT="CURRENT_TIMESTAMP",
            EXTRA="DEFAULT_GENERATED",
        ),
    ]


@pytest.fixture
def database(catalog_rows):
    """DatabaseModel built from the `shop` catalog."""
    return build_database(catalog_rows)


@pytest.fixture
def catalog_file(tmp_path, catalog_rows):
    """JSON catalog file holding the `shop` rows and an empty `blog` database."""
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps({"shop": catalog_rows, "blog": []}), encoding="utf-8")
    return path


@pytest.fixture
def inspector(catalog_file):
    """SchemaInspector over the JSON catalog file."""
    with SchemaInspector.connect(catalog_file) as inspector:
        yield inspector
