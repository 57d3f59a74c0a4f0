"""
CLI entry point for shelfdb.

This module provides a thin Typer-based shell for inspecting saved stores.
Row types are not known here, so rows are shown as plain JSON values.

Commands:
    tables      List the tables in a store
    show        Print the rows of one table
    clear       Remove every table from a store

The store file is taken from --store, else from the `path` of the --config
file, else ./shelfdb.json.
"""

import json
from pathlib import Path
from typing import Annotated, Any, Optional

import typer
from rich.console import Console
from rich.table import Table

from shelfdb import __version__
from shelfdb.errors import ConfigError
from shelfdb.logging_config import configure_logging
from shelfdb.schema import StoreConfig, load_config
from shelfdb.store import ShelfDB

DEFAULT_STORE = Path("shelfdb.json")

# Initialize Typer app with metadata
app = typer.Typer(
    name="shelfdb",
    help="Inspect shelfdb store files.",
    add_completion=False,
    no_args_is_help=True,
)

# Rich console for formatted output
console = Console()

StoreOption = Annotated[
    Optional[Path],
    typer.Option(
        "--store",
        "-s",
        help="Path to the store file. Defaults to the config path or ./shelfdb.json.",
        resolve_path=True,
    ),
]
JsonOption = Annotated[
    bool,
    typer.Option("--json", help="Output in JSON format."),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold]shelfdb[/bold] version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    config_path: Annotated[
        Optional[Path],
        typer.Option(
            "--config",
            "-c",
            help="Path to a store config YAML file.",
            exists=True,
            readable=True,
            resolve_path=True,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Log store events at DEBUG level."),
    ] = False,
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """
    shelfdb - Embedded record store.

    Read-only views and maintenance for saved store files.
    """
    config = StoreConfig()
    if config_path is not None:
        try:
            config = load_config(config_path)
        except ConfigError as e:
            console.print(f"[red]{e}[/red]")
            raise typer.Exit(code=1)
    configure_logging("DEBUG" if verbose else config.log_level)
    ctx.obj = config


def _open_store(ctx: typer.Context, store: Path | None) -> tuple[ShelfDB, Path]:
    """Load the store named on the command line, or exit with an error."""
    config: StoreConfig = ctx.obj or StoreConfig()
    path = store or config.path or DEFAULT_STORE

    if not path.exists():
        console.print(f"[yellow]No store found at {path}[/yellow]")
        raise typer.Exit(code=1)

    db = ShelfDB.from_config(config.model_copy(update={"path": None}))
    if not db.load(path):
        console.print(f"[red]Not a valid store file: {path}[/red]")
        raise typer.Exit(code=1)
    return db, path


@app.command()
def tables(ctx: typer.Context, store: StoreOption = None, json_output: JsonOption = False) -> None:
    """
    List the tables in a store.

    Example:
        $ shelfdb tables --store people.json
    """
    db, path = _open_store(ctx, store)
    infos = db.table_info()

    if json_output:
        print(json.dumps([info.model_dump() for info in infos], indent=2))
        return

    if not infos:
        console.print("[dim]No tables found.[/dim]")
        return

    table = Table(title=str(path), show_header=True, header_style="bold")
    table.add_column("Table", style="cyan")
    table.add_column("Type")
    table.add_column("Rows", justify="right")
    table.add_column("Bytes", justify="right")

    for info in infos:
        table.add_row(
            info.name,
            info.type_tag or "[dim]empty[/dim]",
            str(info.row_count) if info.row_count is not None else "-",
            str(info.size_bytes),
        )

    console.print(table)


def _row_columns(rows: list[Any]) -> list[str] | None:
    """Column names if every row is a JSON object, else None."""
    if not rows or not all(isinstance(row, dict) for row in rows):
        return None
    columns: list[str] = []
    for row in rows:
        for key in row:
            if key not in columns:
                columns.append(key)
    return columns


@app.command()
def show(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Table name.")],
    store: StoreOption = None,
    limit: Annotated[
        int,
        typer.Option("--limit", "-n", help="Maximum number of rows to show."),
    ] = 50,
    json_output: JsonOption = False,
) -> None:
    """
    Print the rows of a table.

    Example:
        $ shelfdb show Person --store people.json
    """
    db, _ = _open_store(ctx, store)

    if not db.has_table(name):
        console.print(f"[red]No table named {name!r}[/red]")
        raise typer.Exit(code=1)

    rows = db.get_table(name, Any) or []

    if json_output:
        print(json.dumps(rows[:limit], indent=2, default=str))
        return

    if not rows:
        console.print("[dim]Table is empty.[/dim]")
        return

    shown = rows[:limit]
    columns = _row_columns(shown)
    table = Table(title=name, show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")

    if columns is None:
        table.add_column("Value")
        for i, row in enumerate(shown):
            table.add_row(str(i), json.dumps(row, default=str))
    else:
        for column in columns:
            table.add_column(column)
        for i, row in enumerate(shown):
            cells = [
                json.dumps(row[column], default=str) if column in row else ""
                for column in columns
            ]
            table.add_row(str(i), *cells)

    console.print(table)
    if len(rows) > limit:
        console.print(f"[dim]... {len(rows) - limit} more rows[/dim]")


@app.command()
def clear(
    ctx: typer.Context,
    store: StoreOption = None,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Don't ask for confirmation."),
    ] = False,
) -> None:
    """
    Remove every table from a store file.

    Example:
        $ shelfdb clear --store people.json --yes
    """
    db, path = _open_store(ctx, store)

    if not yes:
        typer.confirm(f"Remove all {len(db.tables)} tables from {path}?", abort=True)

    db.clear()
    if not db.save(path):
        console.print(f"[red]Failed to write {path}[/red]")
        raise typer.Exit(code=1)
    console.print(f"[green]Cleared {path}[/green]")


if __name__ == "__main__":
    app()
