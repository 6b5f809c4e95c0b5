"""
Data models for migration status and results.
"""

from enum import Enum

from pydantic import BaseModel, Field


class MigrationOutcome(str, Enum):
    """How a migrate or rollback call ended."""

    APPLIED = "applied"
    CANCELLED = "cancelled"


class DataLoss(BaseModel):
    """Rows that a rollback of the projects migration would discard."""

    project_count: int = Field(default=0, ge=0, description="Rows in the projects table")
    assigned_todo_count: int = Field(
        default=0, ge=0, description="Todos with a non-null project_id"
    )

    @property
    def total(self) -> int:
        return self.project_count + self.assigned_todo_count

    def describe(self) -> str:
        return (
            f"Rolling back will lose {self.project_count} project(s) "
            f"and {self.assigned_todo_count} project assignment(s)."
        )


class MigrationStatus(BaseModel):
    """
    Schema version as read from the database file.

    Example:
        >>> status = MigrationStatus(
        ...     current_version="v1",
        ...     can_migrate=True,
        ...     can_rollback=False,
        ...     message="Database is at v1. Ready to migrate to v2.",
        ... )
        >>> status.has_destructive_data
        False
    """

    current_version: str
    can_migrate: bool
    can_rollback: bool
    message: str
    data_loss: DataLoss | None = None

    @property
    def has_destructive_data(self) -> bool:
        return self.data_loss is not None and self.data_loss.total > 0
