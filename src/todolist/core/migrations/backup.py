"""
Pre-migration backup and restore.

A single backup file is kept at a fixed path and overwritten by every
migrate or rollback attempt. It is a byte-for-byte copy of the database
taken before any statement runs, so restoring it returns the file to
exactly the state the operator started from.
"""

import logging
import shutil
import sqlite3
from pathlib import Path

from todolist.core.migrations.errors import BackupError

logger = logging.getLogger(__name__)

# SQLite side files that belong to the live database, not to the backup.
_SIDE_FILE_SUFFIXES = ("-wal", "-shm", "-journal")


class BackupManager:
    """Copies the database to its backup path and back."""

    def __init__(self, db_path: Path | str, backup_path: Path | str):
        """Initialize backup manager.

        Args:
            db_path: Path to the SQLite database
            backup_path: Fixed path the backup is written to
        """
        self.db_path = Path(db_path)
        self.backup_path = Path(backup_path)

    def exists(self) -> bool:
        return self.backup_path.exists()

    def _checkpoint(self) -> None:
        """Fold any write-ahead log into the main file so the copy is complete."""
        conn = sqlite3.connect(str(self.db_path))
        try:
            conn.execute("PRAGMA wal_checkpoint(TRUNCATE)")
        finally:
            conn.close()

    def create(self) -> Path:
        """
        Copy the database to the backup path, replacing any previous backup.

        Returns:
            Path to the backup file

        Raises:
            BackupError: If the database does not exist or cannot be copied
        """
        if not self.db_path.exists():
            raise BackupError(f"Database not found: {self.db_path}")

        logger.info("Creating backup at %s", self.backup_path)
        try:
            self._checkpoint()
            self.backup_path.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(self.db_path, self.backup_path)
        except (OSError, sqlite3.Error) as e:
            raise BackupError(f"Failed to create backup at {self.backup_path}: {e}") from e

        logger.info("Backup created")
        return self.backup_path

    def restore(self) -> None:
        """
        Copy the backup over the database file.

        Stale journal files next to the database are removed so SQLite does
        not replay them on top of the restored copy.

        Raises:
            BackupError: If no backup exists or it cannot be copied
        """
        if not self.exists():
            raise BackupError("No backup file found. Cannot restore.")

        logger.info("Restoring from %s", self.backup_path)
        try:
            shutil.copyfile(self.backup_path, self.db_path)
            for suffix in _SIDE_FILE_SUFFIXES:
                self.db_path.with_name(self.db_path.name + suffix).unlink(missing_ok=True)
        except OSError as e:
            raise BackupError(f"Failed to restore backup from {self.backup_path}: {e}") from e

        logger.info("Backup restored")
