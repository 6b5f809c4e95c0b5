"""
Schema migrations for the todolist store.

Public API:
    - MigrationManager: status, migrate and rollback for one database file
    - MigrationStatus, DataLoss, MigrationOutcome: result models
    - BackupManager: fixed-path backup and restore
    - Migration, MIGRATIONS: the registered schema versions
    - MigrationError and subclasses: failure types
"""

from todolist.core.migrations.backup import BackupManager
from todolist.core.migrations.errors import (
    BackupError,
    MigrationError,
    MigrationFailedError,
    MigrationPreconditionError,
)
from todolist.core.migrations.manager import MIGRATIONS_TABLE, MigrationManager
from todolist.core.migrations.models import DataLoss, MigrationOutcome, MigrationStatus
from todolist.core.migrations.versions import MIGRATIONS, PROJECTS_MIGRATION, Migration

__all__ = [
    "BackupError",
    "BackupManager",
    "DataLoss",
    "MIGRATIONS",
    "MIGRATIONS_TABLE",
    "Migration",
    "MigrationError",
    "MigrationFailedError",
    "MigrationManager",
    "MigrationOutcome",
    "MigrationPreconditionError",
    "MigrationStatus",
    "PROJECTS_MIGRATION",
]
