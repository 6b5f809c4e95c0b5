"""
Configuration data models for todolist.

These models define the structure of ~/.config/todolist/config.json,
with validation and type safety via Pydantic.
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_DB_FOLDER = Path.home() / ".todo-list-mcp"
DEFAULT_DB_FILE = "todos.sqlite"
BACKUP_SUFFIX = ".backup"


class TodolistConfig(BaseModel):
    """
    Storage locations for the task database.

    The backup path is fixed per database: every migration or rollback
    overwrites the same file rather than keeping a history.

    Example:
        >>> config = TodolistConfig(db_path=Path("/tmp/todos.sqlite"))
        >>> config.resolved_backup_path
        PosixPath('/tmp/todos.sqlite.backup')
    """

    db_path: Path = Field(
        default=DEFAULT_DB_FOLDER / DEFAULT_DB_FILE,
        description="Path to the SQLite database file",
    )
    backup_path: Path | None = Field(
        default=None,
        description="Where pre-migration backups are written (defaults next to the database)",
    )

    model_config = ConfigDict(frozen=True)

    @field_validator("db_path", "backup_path")
    @classmethod
    def expand_user(cls, v: Path | None) -> Path | None:
        """Expand ~ in configured paths."""
        if v is None:
            return None
        return Path(v).expanduser()

    @property
    def resolved_backup_path(self) -> Path:
        if self.backup_path is not None:
            return self.backup_path
        return self.db_path.with_name(self.db_path.name + BACKUP_SUFFIX)
