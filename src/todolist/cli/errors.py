"""
Standardized error handling and exit codes for the todolist CLI.

This module provides consistent error messaging with actionable guidance
and standardized exit codes across all CLI commands.
"""

from enum import IntEnum
from pathlib import Path

from rich.console import Console

from todolist.core.migrations import MigrationFailedError, MigrationStatus

console = Console(stderr=True)


class ExitCode(IntEnum):
    """Standard exit codes for todolist CLI operations."""

    SUCCESS = 0
    """Operation completed successfully (including a cancelled rollback)."""

    GENERAL_ERROR = 1
    """Precondition violation or failed migration."""

    USER_ERROR = 2
    """User configuration or input error (actionable by user)."""


def print_error(
    problem: str,
    *,
    reason: str | None = None,
    solution: str | None = None,
) -> None:
    """
    Print a standardized error message with actionable guidance.

    Args:
        problem: Brief description of what went wrong
        reason: Optional explanation of why it happened
        solution: Optional command or action to fix it

    Example:
        >>> print_error(
        ...     "Cannot migrate",
        ...     reason="Database is at v2.",
        ...     solution="todolist db status",
        ... )
    """
    console.print(f"[red]Error:[/red] {problem}")

    if reason:
        console.print(f"[dim]{reason}[/dim]")

    if solution:
        console.print(f"[cyan]→ Try:[/cyan] {solution}")


def print_database_not_found_error(db_path: Path) -> None:
    """Print error when the database file does not exist."""
    print_error(
        f"Database not found: {db_path}",
        reason="Set TODO_DB_PATH or pass --db to point at an existing database",
        solution=f"todolist db init --db {db_path}",
    )


def print_precondition_error(operation: str, status: MigrationStatus) -> None:
    """Print error when migrate/rollback is not allowed from the current version."""
    print_error(
        f"Cannot {operation}",
        reason=status.message,
        solution="todolist db status",
    )


def print_migration_failed_error(error: MigrationFailedError) -> None:
    """Print error when a migration or rollback failed mid-transaction."""
    if error.restored:
        reason = "The backup was restored. The database is unchanged."
    else:
        reason = "The backup could NOT be restored. Check the database before retrying."
    print_error(f"{error.operation.capitalize()} failed: {error.cause}", reason=reason)
