"""
Todolist CLI - Main application entry point.

This module sets up the Typer CLI application with all subcommands.
"""

import logging
import sys

import typer
from rich.console import Console

from todolist import __version__
from todolist.cli import db, ids
from todolist.core.config import load_env_files

app = typer.Typer(
    name="todolist",
    help="Administer the todo-list task database",
    no_args_is_help=True,
    add_completion=False,
    context_settings={"help_option_names": ["--help", "-h"]},
)

console = Console()

# Help panel names for command grouping
PANEL_DATABASE = "Manage the Database"
PANEL_IDS = "Inspect Display IDs"
PANEL_INSTALL = "About todolist"


@app.callback()
def main(
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug output with detailed logging",
    ),
) -> None:
    """
    Todolist - task database administration.

    Common Workflows:
        todolist db status           # Which schema version is the database at?
        todolist db migrate          # Upgrade to the next version
        todolist db rollback         # Downgrade (asks before losing data)
        todolist ids list task       # Show task-N → UUID mappings

    The database path comes from TODO_DB_PATH (also read from .env files)
    or --db on each command.
    """
    # Precedence: OS env > .env in cwd > user .env
    load_env_files()

    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            stream=sys.stderr,
        )


app.add_typer(db.app, name="db", rich_help_panel=PANEL_DATABASE)
app.add_typer(ids.app, name="ids", rich_help_panel=PANEL_IDS)


@app.command(rich_help_panel=PANEL_INSTALL)
def version() -> None:
    """Show todolist version and exit."""
    console.print(f"todolist version {__version__}")
    raise typer.Exit(0)


def cli_main() -> None:
    """Main CLI entry point."""
    app()


__all__ = ["app", "cli_main"]
