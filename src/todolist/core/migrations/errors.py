"""Exceptions raised by the migration manager."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from todolist.core.migrations.models import MigrationStatus


class MigrationError(Exception):
    """Base class for migration failures."""


class BackupError(MigrationError):
    """Raised when a backup cannot be created or restored."""


class MigrationPreconditionError(MigrationError):
    """Raised when the database is not in a state the operation can start from."""

    def __init__(self, operation: str, status: MigrationStatus):
        super().__init__(f"Cannot {operation}: {status.message}")
        self.operation = operation
        self.status = status


class MigrationFailedError(MigrationError):
    """
    Raised when the storage engine rejected a statement mid-transaction.

    ``restored`` tells whether the pre-operation backup was copied back
    over the database file.
    """

    def __init__(self, operation: str, cause: Exception, *, restored: bool):
        super().__init__(f"{operation.capitalize()} failed: {cause}")
        self.operation = operation
        self.cause = cause
        self.restored = restored
