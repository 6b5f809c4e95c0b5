"""
Schema migration manager.

Moves the database between schema versions, one step at a time, with a
backup taken before every change. The version history lives in the
``schema_migrations`` table; its absence (or an empty table) means the
database is at the baseline version.

Every operation re-reads the version from the file instead of trusting
state from a previous call, so it is safe to rerun after a crash.

Safety sequence for migrate and rollback:
1. Check the precondition with get_status()
2. Copy the database to the backup path
3. Apply the change and the version record in one transaction
4. On a storage error, restore the backup and raise MigrationFailedError

Usage:
    manager = MigrationManager(db_path, backup_path)
    status = manager.get_status()
    if status.can_migrate:
        manager.migrate()
"""

import logging
import sqlite3
from collections.abc import Callable, Sequence
from datetime import datetime, timezone
from pathlib import Path

from todolist.core.config import load_config
from todolist.core.db.connection import connect, transaction
from todolist.core.db.schema import BASELINE_VERSION, table_exists
from todolist.core.migrations.backup import BackupManager
from todolist.core.migrations.errors import (
    BackupError,
    MigrationFailedError,
    MigrationPreconditionError,
)
from todolist.core.migrations.models import DataLoss, MigrationOutcome, MigrationStatus
from todolist.core.migrations.versions import MIGRATIONS, Migration

logger = logging.getLogger(__name__)

MIGRATIONS_TABLE = "schema_migrations"

MIGRATIONS_TABLE_DDL = f"""
    CREATE TABLE IF NOT EXISTS {MIGRATIONS_TABLE} (
        id INTEGER PRIMARY KEY,
        version TEXT NOT NULL UNIQUE,
        applied_at TEXT NOT NULL
    )
"""

ConfirmCallback = Callable[[MigrationStatus], bool]


def _utcnow() -> str:
    return datetime.now(timezone.utc).isoformat()


class MigrationManager:
    """Forward migration, rollback and status for one database file."""

    def __init__(
        self,
        db_path: Path | str | None = None,
        backup_path: Path | str | None = None,
        *,
        migrations: Sequence[Migration] = MIGRATIONS,
    ):
        """
        Args:
            db_path: Database file (defaults to the configured path)
            backup_path: Backup file (defaults to the configured backup path)
            migrations: Ordered migrations after the baseline
        """
        if db_path is None or backup_path is None:
            config = load_config()
            db_path = db_path if db_path is not None else config.db_path
            backup_path = (
                backup_path if backup_path is not None else config.resolved_backup_path
            )

        self.db_path = Path(db_path)
        self.backup = BackupManager(self.db_path, backup_path)
        self.migrations = tuple(migrations)

    @property
    def versions(self) -> list[str]:
        """All known versions, baseline first."""
        return [BASELINE_VERSION] + [m.version for m in self.migrations]

    def _migration_for(self, version: str) -> Migration | None:
        for migration in self.migrations:
            if migration.version == version:
                return migration
        return None

    def _next_migration(self, version: str) -> Migration | None:
        versions = self.versions
        index = versions.index(version)
        if index + 1 >= len(versions):
            return None
        return self.migrations[index]

    def _read_version(self, conn: sqlite3.Connection) -> str:
        if not table_exists(conn, MIGRATIONS_TABLE):
            return BASELINE_VERSION
        row = conn.execute(
            f"SELECT version FROM {MIGRATIONS_TABLE} ORDER BY applied_at DESC, id DESC LIMIT 1"
        ).fetchone()
        if row is None:
            return BASELINE_VERSION
        return str(row["version"])

    def get_status(self) -> MigrationStatus:
        """
        Read the current schema version from the database file.

        Never raises: a missing file or a storage error is reported as an
        ``unknown`` version from which neither migrate nor rollback is allowed.
        """
        if not self.db_path.exists():
            return MigrationStatus(
                current_version="unknown",
                can_migrate=False,
                can_rollback=False,
                message=f"Database not found at {self.db_path}",
            )

        try:
            with connect(self.db_path) as conn:
                version = self._read_version(conn)

                if version not in self.versions:
                    return MigrationStatus(
                        current_version=version,
                        can_migrate=False,
                        can_rollback=False,
                        message=f"Unknown database version: {version}",
                    )

                next_migration = self._next_migration(version)
                current = self._migration_for(version)
                data_loss: DataLoss | None = current.data_loss(conn) if current else None
        except sqlite3.Error as e:
            return MigrationStatus(
                current_version="unknown",
                can_migrate=False,
                can_rollback=False,
                message=f"Error checking migration status: {e}",
            )

        message = f"Database is at {version}."
        if next_migration is not None:
            message += f" Ready to migrate to {next_migration.version}."
        if data_loss is not None and data_loss.total > 0:
            message += f" Warning: {data_loss.describe()}"

        return MigrationStatus(
            current_version=version,
            can_migrate=next_migration is not None,
            can_rollback=current is not None,
            message=message,
            data_loss=data_loss,
        )

    def _apply(self, operation: str, change: Callable[[sqlite3.Connection], None]) -> None:
        """Back up, run ``change`` in one transaction, restore the backup on failure."""
        self.backup.create()

        try:
            # Foreign keys are off for the whole transaction; integrity is
            # checked with foreign_key_check before commit.
            with connect(self.db_path, foreign_keys=False) as conn:
                with transaction(conn):
                    before = len(conn.execute("PRAGMA foreign_key_check").fetchall())
                    change(conn)
                    after = len(conn.execute("PRAGMA foreign_key_check").fetchall())
                    if after > before:
                        raise sqlite3.IntegrityError(
                            f"{after - before} new foreign key violation(s) during {operation}"
                        )
        except sqlite3.Error as e:
            logger.error("%s failed: %s", operation.capitalize(), e)
            try:
                self.backup.restore()
            except BackupError:
                logger.exception("Could not restore backup after failed %s", operation)
                raise MigrationFailedError(operation, e, restored=False) from e
            raise MigrationFailedError(operation, e, restored=True) from e

    def migrate(self) -> MigrationOutcome:
        """
        Apply the next migration.

        Raises:
            MigrationPreconditionError: If the database cannot be migrated
            BackupError: If the backup could not be taken (nothing was changed)
            MigrationFailedError: If the change failed; the backup has been restored
        """
        status = self.get_status()
        if not status.can_migrate:
            raise MigrationPreconditionError("migrate", status)

        migration = self._next_migration(status.current_version)
        assert migration is not None
        logger.info(
            "Starting migration %s → %s: %s",
            status.current_version,
            migration.version,
            migration.description,
        )

        def change(conn: sqlite3.Connection) -> None:
            migration.upgrade(conn)
            conn.execute(MIGRATIONS_TABLE_DDL)
            logger.info("Recording migration %s", migration.version)
            conn.execute(
                f"INSERT INTO {MIGRATIONS_TABLE} (version, applied_at) VALUES (?, ?)",
                (migration.version, _utcnow()),
            )

        self._apply("migration", change)
        logger.info("Migration completed. Database is now at %s", migration.version)
        return MigrationOutcome.APPLIED

    def rollback(
        self,
        confirm: ConfirmCallback | None = None,
        *,
        force: bool = False,
    ) -> MigrationOutcome:
        """
        Revert the most recently applied migration.

        When the rollback would discard data, ``confirm`` is called with the
        current status and must return True to proceed. Without a callback
        (and without ``force``) a destructive rollback is cancelled.

        Args:
            confirm: Asked for permission when data would be lost
            force: Proceed without asking

        Returns:
            APPLIED, or CANCELLED if permission was not given

        Raises:
            MigrationPreconditionError: If there is nothing to roll back
            BackupError: If the backup could not be taken (nothing was changed)
            MigrationFailedError: If the change failed; the backup has been restored
        """
        status = self.get_status()
        if not status.can_rollback:
            raise MigrationPreconditionError("rollback", status)

        migration = self._migration_for(status.current_version)
        assert migration is not None
        previous = self.versions[self.versions.index(migration.version) - 1]

        if status.has_destructive_data and not force:
            if confirm is None or not confirm(status):
                logger.info("Rollback cancelled")
                return MigrationOutcome.CANCELLED

        logger.info("Starting rollback %s → %s", migration.version, previous)

        def change(conn: sqlite3.Connection) -> None:
            migration.downgrade(conn)
            logger.info("Removing migration record %s", migration.version)
            conn.execute(
                f"DELETE FROM {MIGRATIONS_TABLE} WHERE version = ?", (migration.version,)
            )

        self._apply("rollback", change)
        logger.info("Rollback completed. Database is now at %s", previous)
        return MigrationOutcome.APPLIED
