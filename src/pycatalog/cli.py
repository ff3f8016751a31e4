"""
pycatalog CLI - render MySQL table metadata as JSON, SQL or Python source.
"""

from pathlib import Path
from typing import List, Optional

import typer
from rich import print as rprint
from rich.markup import escape

from .config import ConnectionSettings, configure_logging
from .core import SchemaInspector
from .exceptions import CatalogError
from .renderers import RENDERERS

app = typer.Typer(help="pycatalog - convert MySQL table metadata to JSON, SQL and Python")


def get_inspector(ctx: typer.Context) -> SchemaInspector:
    """Create an inspector from the global options."""
    options = ctx.obj
    if options["source"] is not None:
        return SchemaInspector.connect(options["source"])
    settings = ConnectionSettings.from_env(
        host=options["db_host"],
        port=options["db_port"],
        user=options["user"],
        password=options["password"],
    )
    return SchemaInspector.connect(settings)


def fail(message: str) -> None:
    rprint(f"[red]✗[/red] {escape(message)}")
    raise typer.Exit(1)


@app.callback()
def main(
    ctx: typer.Context,
    db_host: Optional[str] = typer.Option(None, "--db-host", help="MySQL host (default: localhost)"),
    db_port: Optional[int] = typer.Option(None, "--db-port", help="MySQL port (default: 3306)"),
    user: Optional[str] = typer.Option(None, "--user", help="MySQL user (default: root)"),
    password: Optional[str] = typer.Option(None, "--password", help="MySQL password (default: empty)"),
    source: Optional[Path] = typer.Option(
        None, "--source", "-s", help="Read catalog rows from a JSON file instead of a server"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Convert MySQL table metadata to JSON, SQL and Python."""
    configure_logging(verbose)
    ctx.obj = {
        "db_host": db_host,
        "db_port": db_port,
        "user": user,
        "password": password,
        "source": source,
    }


@app.command("databases")
def list_databases(ctx: typer.Context):
    """List databases."""
    try:
        with get_inspector(ctx) as inspector:
            names = inspector.get_databases()
    except CatalogError as e:
        fail(f"Failed to list databases: {e}")

    if not names:
        rprint("[yellow]No databases found[/yellow]")
        return
    for name in names:
        print(name)


@app.command("tables")
def list_tables(
    ctx: typer.Context,
    database: str = typer.Argument(..., help="Database to inspect"),
):
    """List tables of a database."""
    try:
        with get_inspector(ctx) as inspector:
            names = inspector.get_table_names(database)
    except CatalogError as e:
        fail(f"Failed to list tables: {e}")

    if not names:
        rprint(f"[yellow]No tables found in '{database}'[/yellow]")
        return
    for name in names:
        print(name)


@app.command("render")
def render_schema(
    ctx: typer.Context,
    database: str = typer.Argument(..., help="Database to render"),
    format: str = typer.Option("json", "--format", "-f", help=f"Output format: {', '.join(RENDERERS)}"),
    tables: Optional[List[str]] = typer.Option(None, "--table", "-t", help="Table to include (repeatable)"),
    engine: Optional[str] = typer.Option(None, "--engine", help="Storage engine for sql output"),
    charset: Optional[str] = typer.Option(None, "--charset", help="Table charset for sql output"),
    collation: Optional[str] = typer.Option(None, "--collation", help="Table collation for sql output"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write to a file instead of stdout"),
):
    """Render the schema of a database."""
    if format not in RENDERERS:
        fail(f"Unknown format '{format}'. Expected one of: {', '.join(RENDERERS)}")

    options = {}
    if format == "sql":
        options = {"engine": engine, "charset": charset, "collation": collation}

    try:
        with get_inspector(ctx) as inspector:
            text = inspector.render(database, format, tables or None, **options)
    except CatalogError as e:
        fail(f"Failed to render '{database}': {e}")

    if not text:
        rprint(f"[yellow]Nothing to render for '{database}'[/yellow]")
        return

    if output is not None:
        output.write_text(text + "\n", encoding="utf-8")
        rprint(f"[green]✓[/green] Wrote {format} output to [bold]{output}[/bold]")
    else:
        print(text)


if __name__ == "__main__":
    app()
