"""
Exception classes for pycatalog schema operations.
"""


class CatalogError(Exception):
    """Base exception for catalog and schema operations."""

    pass


class DatabaseConnectionError(CatalogError):
    """Exception raised when a catalog source cannot be reached or read."""

    pass


class TableNotFoundError(CatalogError):
    """Exception raised when a requested table is not found."""

    pass


class ShapeError(CatalogError):
    """Exception raised when a catalog row does not match the expected shape."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class MissingFieldError(ShapeError):
    """Exception raised when a required catalog field is absent."""

    def __init__(self, field: str):
        super().__init__(f"Missing required field: {field}", field)


class FieldTypeError(ShapeError):
    """Exception raised when a catalog field holds a value of the wrong type."""

    def __init__(self, field: str, expected: str, actual: str):
        super().__init__(f"Invalid {field}: Expected {expected}, got {actual}", field)
        self.expected = expected
        self.actual = actual


class TableMismatchError(ShapeError):
    """Exception raised when a column is added to a table it does not belong to."""

    def __init__(self, table_name: str, column_table_name: str):
        super().__init__(
            f"Column belongs to table '{column_table_name}', not '{table_name}'",
            "TABLE_NAME",
        )
        self.table_name = table_name
        self.column_table_name = column_table_name


class UnsupportedTypeError(CatalogError):
    """Exception raised for column types the classifier cannot represent."""

    def __init__(self, data_type: str):
        super().__init__(f"{data_type} not supported")
        self.data_type = data_type


class EmptyTableError(CatalogError):
    """Exception raised when DDL is requested for a table without columns."""

    def __init__(self, table_name: str):
        super().__init__(f"Table {table_name} has no columns")
        self.table_name = table_name
