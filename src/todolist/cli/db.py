"""
Todolist CLI - Database commands.

Inspect the schema version and migrate the task database forward or back.
These commands expect exclusive access to the database file: stop the
tool server before running migrate or rollback.
"""

import json
import sqlite3
from pathlib import Path

import typer
from rich.console import Console

from todolist.cli.errors import (
    ExitCode,
    print_database_not_found_error,
    print_error,
    print_migration_failed_error,
    print_precondition_error,
)
from todolist.core.config import TodolistConfig, load_config
from todolist.core.db import init_db
from todolist.core.migrations import (
    BackupError,
    MigrationFailedError,
    MigrationManager,
    MigrationOutcome,
    MigrationPreconditionError,
    MigrationStatus,
)

app = typer.Typer(
    name="db",
    help="Inspect and migrate the task database",
    no_args_is_help=True,
)

console = Console()

DB_OPTION_HELP = "Database file (defaults to TODO_DB_PATH or ~/.todo-list-mcp/todos.sqlite)"


def resolve_config(db: Path | None) -> TodolistConfig:
    """Apply a --db override on top of the loaded configuration."""
    config = load_config()
    if db is None:
        return config
    return TodolistConfig(db_path=db, backup_path=config.backup_path)


def _get_manager(db: Path | None) -> MigrationManager:
    config = resolve_config(db)
    manager = MigrationManager(config.db_path, config.resolved_backup_path)
    if not manager.db_path.exists():
        print_database_not_found_error(manager.db_path)
        raise typer.Exit(ExitCode.GENERAL_ERROR)
    return manager


def _yes_no(value: bool) -> str:
    return "[green]Yes[/green]" if value else "[dim]No[/dim]"


def _confirm_data_loss(status: MigrationStatus) -> bool:
    """Ask the operator to type "yes" before discarding project data."""
    console.print(f"[yellow]{status.message}[/yellow]")
    console.print()
    console.print(
        "[bold yellow]WARNING:[/bold yellow] Rolling back will lose project data "
        "and project assignments."
    )
    try:
        answer = typer.prompt(
            'Type "yes" to continue, or anything else to cancel',
            default="",
            show_default=False,
        )
    except typer.Abort:
        # End of input or Ctrl-C counts as "no"
        console.print()
        return False
    return answer.strip().lower() == "yes"


@app.command()
def status(
    db: Path | None = typer.Option(None, "--db", help=DB_OPTION_HELP),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """
    Show the current schema version and what can be done next.

    Examples:
        todolist db status
        todolist db status --json
    """
    config = resolve_config(db)
    current = MigrationManager(config.db_path, config.resolved_backup_path).get_status()

    if json_output:
        typer.echo(json.dumps(current.model_dump(mode="json"), indent=2))
        return

    console.print()
    console.print("[bold]Migration Status:[/bold]")
    console.print(f"  Current Version: {current.current_version}")
    console.print(f"  Can Migrate: {_yes_no(current.can_migrate)}")
    console.print(f"  Can Rollback: {_yes_no(current.can_rollback)}")
    console.print(f"  Message: {current.message}")
    console.print()


@app.command()
def migrate(
    db: Path | None = typer.Option(None, "--db", help=DB_OPTION_HELP),
) -> None:
    """
    Migrate the database to the next schema version.

    A backup is written next to the database first. If any statement
    fails the backup is restored and the command exits with status 1.

    Examples:
        todolist db migrate
        todolist db migrate --db ./todos.sqlite
    """
    manager = _get_manager(db)

    try:
        manager.migrate()
    except MigrationPreconditionError as e:
        print_precondition_error("migrate", e.status)
        raise typer.Exit(ExitCode.GENERAL_ERROR)
    except BackupError as e:
        print_error("Could not create backup", reason=str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)
    except MigrationFailedError as e:
        print_migration_failed_error(e)
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    console.print("[green]Migration completed successfully![/green]")
    console.print(f"Database is now at {manager.get_status().current_version}.")


@app.command()
def rollback(
    db: Path | None = typer.Option(None, "--db", help=DB_OPTION_HELP),
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Confirm data loss without prompting",
    ),
) -> None:
    """
    Roll the database back to the previous schema version.

    WARNING: Rolling back discards data stored by the newer schema. When
    such data exists you are asked to type "yes"; anything else cancels.

    Examples:
        todolist db rollback           # Prompts if data would be lost
        todolist db rollback --yes     # No prompt
    """
    manager = _get_manager(db)

    try:
        outcome = manager.rollback(confirm=_confirm_data_loss, force=yes)
    except MigrationPreconditionError as e:
        print_precondition_error("rollback", e.status)
        raise typer.Exit(ExitCode.GENERAL_ERROR)
    except BackupError as e:
        print_error("Could not create backup", reason=str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)
    except MigrationFailedError as e:
        print_migration_failed_error(e)
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    if outcome is MigrationOutcome.CANCELLED:
        console.print("[yellow]Rollback cancelled.[/yellow]")
        raise typer.Exit(ExitCode.SUCCESS)

    console.print("[green]Rollback completed successfully![/green]")
    console.print(f"Database is now at {manager.get_status().current_version}.")


@app.command()
def init(
    db: Path | None = typer.Option(None, "--db", help=DB_OPTION_HELP),
) -> None:
    """
    Create the database with the baseline schema.

    Existing tables are left untouched.

    Examples:
        todolist db init
    """
    config = resolve_config(db)
    existed = config.db_path.exists()

    try:
        init_db(config.db_path)
    except (OSError, sqlite3.Error) as e:
        print_error(f"Could not initialize {config.db_path}", reason=str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    if existed:
        console.print(f"[dim]Database already exists at {config.db_path}[/dim]")
    else:
        console.print(f"[green]Created:[/green] {config.db_path}")
