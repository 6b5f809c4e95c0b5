"""
Todolist CLI - Display ID commands.

Show how display IDs (task-3, tag-1, project-2) map onto the UUIDs stored
in the database. Mappings are rebuilt from the database in creation order,
the same way the tool server seeds them at startup.
"""

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from todolist.cli.db import DB_OPTION_HELP, resolve_config
from todolist.cli.errors import ExitCode, print_database_not_found_error, print_error
from todolist.core.db import connect
from todolist.core.ids import IdMapService, Namespace, get_namespace, hydrate_id_map

app = typer.Typer(
    name="ids",
    help="Inspect display ID mappings",
    no_args_is_help=True,
)

console = Console()


def _load_id_map(db: Path | None) -> IdMapService:
    config = resolve_config(db)
    if not config.db_path.exists():
        print_database_not_found_error(config.db_path)
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    id_map = IdMapService()
    with connect(config.db_path) as conn:
        hydrate_id_map(conn, id_map)
    return id_map


@app.command(name="list")
def list_ids(
    namespace: Namespace = typer.Argument(Namespace.TASK, help="Namespace to list"),
    db: Path | None = typer.Option(None, "--db", help=DB_OPTION_HELP),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """
    List display IDs for one namespace.

    Examples:
        todolist ids list
        todolist ids list tag
        todolist ids list project --json
    """
    id_map = _load_id_map(db)
    mappings = id_map.list_mappings(namespace)
    next_id = id_map.peek_next_id(namespace)

    if json_output:
        output = {
            "namespace": namespace.value,
            "mappings": [{"id": d, "key": k} for d, k in mappings],
            "next_id": next_id,
        }
        typer.echo(json.dumps(output, indent=2))
        return

    if not mappings:
        console.print(f"[dim]No {namespace.value} entries.[/dim]")
    else:
        table = Table(show_header=True, header_style="bold")
        table.add_column("ID", style="cyan", no_wrap=True)
        table.add_column("Key", no_wrap=True)
        for display_id, key in mappings:
            table.add_row(display_id, key)
        console.print(table)

    console.print(f"[dim]Next ID: {next_id}[/dim]")


@app.command()
def resolve(
    identifier: str = typer.Argument(..., help="Display ID to resolve, e.g. task-3"),
    db: Path | None = typer.Option(None, "--db", help=DB_OPTION_HELP),
) -> None:
    """
    Print the UUID behind a display ID.

    Examples:
        todolist ids resolve task-3
    """
    namespace = get_namespace(identifier)
    if namespace is None:
        print_error(
            f"Not a display ID: {identifier}",
            reason="Expected task-N, tag-N or project-N",
        )
        raise typer.Exit(ExitCode.USER_ERROR)

    key = _load_id_map(db).to_internal_key(identifier, namespace)
    if key is None:
        print_error(f"{namespace.value.capitalize()} not found: {identifier}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    typer.echo(key)
