"""
Tests for catalog row validation.
"""

import pytest

from pycatalog import FieldTypeError, Invalid, MissingFieldError, ShapeError, Valid, validate_row
from pycatalog.validation import COLUMN_FIELDS, REQUIRED_FIELDS, assert_valid_row


class TestValidateRow:
    """Test validate_row results."""

    def test_valid_row(self, row_factory):
        """Test a complete row validates and values are keyed by attribute."""
        result = validate_row(row_factory())
        assert isinstance(result, Valid)
        assert result.values["table_name"] == "users"
        assert result.values["ordinal_position"] == 1
        assert len(result.values) == len(COLUMN_FIELDS)

    def test_required_fields(self):
        """Test the required field set."""
        assert set(REQUIRED_FIELDS) == {
            "TABLE_CATALOG",
            "TABLE_SCHEMA",
            "TABLE_NAME",
            "COLUMN_NAME",
            "ORDINAL_POSITION",
            "IS_NULLABLE",
            "DATA_TYPE",
            "COLUMN_TYPE",
            "COLUMN_KEY",
            "EXTRA",
            "PRIVILEGES",
            "COLUMN_COMMENT",
            "IS_GENERATED",
        }

    @pytest.mark.parametrize("field", REQUIRED_FIELDS)
    def test_missing_required_field(self, row_factory, field):
        """Test removing a required field fails naming exactly that field."""
        row = row_factory()
        del row[field]
        result = validate_row(row)
        assert isinstance(result, Invalid)
        assert isinstance(result.error, MissingFieldError)
        assert result.error.field == field

    def test_missing_optional_fields_are_null(self, row_factory):
        """Test absent optional fields are treated as NULL."""
        row = row_factory()
        del row["COLUMN_DEFAULT"]
        del row["GENERATION_EXPRESSION"]
        result = validate_row(row)
        assert isinstance(result, Valid)
        assert result.values["column_default"] is None

    def test_extra_keys_ignored(self, row_factory):
        """Test unknown keys such as SRS_ID are ignored."""
        result = validate_row(row_factory(SRS_ID=None))
        assert isinstance(result, Valid)
        assert "srs_id" not in result.values

    def test_not_a_mapping(self):
        """Test non-mapping input is rejected."""
        result = validate_row(["TABLE_NAME", "users"])
        assert isinstance(result, Invalid)
        assert result.error.field == "row"

    @pytest.mark.parametrize(
        "field, value",
        [
            ("TABLE_NAME", 5),
            ("ORDINAL_POSITION", "1"),
            ("ORDINAL_POSITION", 0),
            ("ORDINAL_POSITION", True),
            ("COLUMN_DEFAULT", 0),
            ("IS_NULLABLE", "yes"),
            ("DATA_TYPE", ""),
            ("COLUMN_TYPE", None),
            ("NUMERIC_PRECISION", "10"),
            ("CHARACTER_MAXIMUM_LENGTH", False),
            ("CHARACTER_SET_NAME", 1),
            ("COLUMN_KEY", "FOREIGN"),
            ("IS_GENERATED", None),
            ("GENERATION_EXPRESSION", 3),
        ],
    )
    def test_type_mismatch(self, row_factory, field, value):
        """Test a wrongly typed field fails naming that field."""
        result = validate_row(row_factory(**{field: value}))
        assert isinstance(result, Invalid)
        assert isinstance(result.error, FieldTypeError)
        assert result.error.field == field

    def test_type_mismatch_reports_expected_and_actual(self, row_factory):
        """Test errors report what was expected and what was received."""
        result = validate_row(row_factory(NUMERIC_PRECISION="10"))
        assert result.error.expected == "number or null"
        assert result.error.actual == "str"
        assert "NUMERIC_PRECISION" in str(result.error)

    def test_enum_mismatch_reports_value(self, row_factory):
        """Test enumerated fields report the rejected value."""
        result = validate_row(row_factory(COLUMN_KEY="FOREIGN"))
        assert result.error.actual == "'FOREIGN'"

    @pytest.mark.parametrize("value", ["NEVER", "ALWAYS", "VIRTUAL GENERATED"])
    def test_is_generated_accepts_any_string(self, row_factory, value):
        """Test IS_GENERATED accepts NEVER, ALWAYS or any other string."""
        assert isinstance(validate_row(row_factory(IS_GENERATED=value)), Valid)

    @pytest.mark.parametrize("key", ["PRI", "UNI", "MUL", ""])
    def test_column_key_values(self, row_factory, key):
        """Test every allowed COLUMN_KEY value."""
        assert isinstance(validate_row(row_factory(COLUMN_KEY=key)), Valid)

    def test_float_numbers_accepted(self, row_factory):
        """Test nullable number fields accept floats."""
        assert isinstance(validate_row(row_factory(NUMERIC_SCALE=2.0)), Valid)

    def test_input_not_mutated(self, row_factory):
        """Test validation leaves the raw row untouched."""
        row = row_factory()
        snapshot = dict(row)
        validate_row(row)
        assert row == snapshot


class TestAssertValidRow:
    """Test the raising form of validation."""

    def test_returns_values(self, row_factory):
        """Test a valid row returns its values."""
        assert assert_valid_row(row_factory())["column_name"] == "id"

    def test_raises_shape_error(self, row_factory):
        """Test an invalid row raises the ShapeError."""
        row = row_factory()
        del row["EXTRA"]
        with pytest.raises(ShapeError, match="Missing required field: EXTRA"):
            assert_valid_row(row)
