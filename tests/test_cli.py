"""
Tests for the pycatalog command line.
"""

import json

from typer.testing import CliRunner

from pycatalog.cli import app

runner = CliRunner()


class TestCli:
    """Test CLI commands over a JSON catalog."""

    def test_databases(self, catalog_file):
        """Test listing databases."""
        result = runner.invoke(app, ["--source", str(catalog_file), "databases"])
        assert result.exit_code == 0
        assert result.stdout.split() == ["shop", "blog"]

    def test_tables(self, catalog_file):
        """Test listing tables."""
        result = runner.invoke(app, ["--source", str(catalog_file), "tables", "shop"])
        assert result.exit_code == 0
        assert result.stdout.split() == ["users", "orders"]

    def test_tables_empty(self, catalog_file):
        """Test listing tables of an empty database."""
        result = runner.invoke(app, ["--source", str(catalog_file), "tables", "blog"])
        assert result.exit_code == 0
        assert "No tables found" in result.stdout

    def test_render_json(self, catalog_file):
        """Test the default JSON output."""
        result = runner.invoke(app, ["--source", str(catalog_file), "render", "shop", "--table", "orders"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert {entry["tableName"] for entry in data} == {"orders"}

    def test_render_sql_to_file(self, catalog_file, tmp_path):
        """Test writing SQL output to a file."""
        output = tmp_path / "schema.sql"
        result = runner.invoke(
            app,
            ["--source", str(catalog_file), "render", "shop", "-f", "sql", "--engine", "InnoDB", "-o", str(output)],
        )
        assert result.exit_code == 0
        text = output.read_text(encoding="utf-8")
        assert text.startswith("CREATE TABLE `users` (")
        assert "ENGINE=InnoDB" in text

    def test_render_dataclass(self, catalog_file):
        """Test the dataclass output."""
        result = runner.invoke(app, ["--source", str(catalog_file), "render", "shop", "--format", "dataclass"])
        assert result.exit_code == 0
        assert "class UsersItem:" in result.stdout

    def test_unknown_format(self, catalog_file):
        """Test an unknown format exits with an error."""
        result = runner.invoke(app, ["--source", str(catalog_file), "render", "shop", "-f", "yaml"])
        assert result.exit_code == 1
        assert "Unknown format" in result.stdout

    def test_unknown_table(self, catalog_file):
        """Test a missing table exits with an error and no output."""
        result = runner.invoke(app, ["--source", str(catalog_file), "render", "shop", "-t", "missing"])
        assert result.exit_code == 1
        assert "not found" in result.stdout
        assert "CREATE TABLE" not in result.stdout

    def test_missing_source(self, tmp_path):
        """Test a missing catalog file exits with an error."""
        result = runner.invoke(app, ["--source", str(tmp_path / "missing.json"), "databases"])
        assert result.exit_code == 1
        assert "Catalog file not found" in result.stdout
