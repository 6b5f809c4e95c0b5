"""
Schema versions after the baseline.

Each Migration moves the schema one step forward (``upgrade``) or back
(``downgrade``). Both run inside the manager's transaction with foreign
key enforcement switched off, and must not commit.

v1 → v2 (projects):
- Creates the projects table
- Adds a nullable project_id column to todos

v2 → v1:
- Drops the projects table
- Rebuilds todos without project_id (SQLite cannot drop the column in place)
"""

import logging
import sqlite3
from collections.abc import Callable
from dataclasses import dataclass

from todolist.core.db.schema import TODOS_V1_COLUMNS, table_columns, table_exists, todos_table_ddl
from todolist.core.migrations.models import DataLoss

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Migration:
    """A reversible schema change identified by its version label."""

    version: str
    description: str
    upgrade: Callable[[sqlite3.Connection], None]
    downgrade: Callable[[sqlite3.Connection], None]
    data_loss: Callable[[sqlite3.Connection], DataLoss]


def _upgrade_projects(conn: sqlite3.Connection) -> None:
    logger.info("Creating projects table")
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS projects (
            id TEXT PRIMARY KEY,
            username TEXT NOT NULL,
            name TEXT NOT NULL,
            description TEXT NOT NULL,
            createdAt TEXT NOT NULL,
            updatedAt TEXT NOT NULL,
            FOREIGN KEY (username) REFERENCES users(username) ON DELETE CASCADE
        )
        """
    )

    logger.info("Adding project_id column to todos table")
    conn.execute("ALTER TABLE todos ADD COLUMN project_id TEXT NULL")


def _downgrade_projects(conn: sqlite3.Connection) -> None:
    logger.info("Dropping projects table")
    conn.execute("DROP TABLE IF EXISTS projects")

    logger.info("Removing project_id column from todos table")
    # Clean up a leftover temp table from a previously interrupted rebuild.
    conn.execute("DROP TABLE IF EXISTS todos_new")
    conn.execute(todos_table_ddl("todos_new"))
    col_list = ", ".join(TODOS_V1_COLUMNS)
    conn.execute(f"INSERT INTO todos_new ({col_list}) SELECT {col_list} FROM todos")
    conn.execute("DROP TABLE todos")
    conn.execute("ALTER TABLE todos_new RENAME TO todos")


def _projects_data_loss(conn: sqlite3.Connection) -> DataLoss:
    project_count = 0
    if table_exists(conn, "projects"):
        project_count = conn.execute("SELECT COUNT(*) FROM projects").fetchone()[0]

    assigned_todo_count = 0
    if "project_id" in table_columns(conn, "todos"):
        assigned_todo_count = conn.execute(
            "SELECT COUNT(*) FROM todos WHERE project_id IS NOT NULL"
        ).fetchone()[0]

    return DataLoss(project_count=project_count, assigned_todo_count=assigned_todo_count)


PROJECTS_MIGRATION = Migration(
    version="v2",
    description="Add projects table and todos.project_id",
    upgrade=_upgrade_projects,
    downgrade=_downgrade_projects,
    data_loss=_projects_data_loss,
)

# Ordered oldest to newest. Bump by appending; never reorder.
MIGRATIONS: tuple[Migration, ...] = (PROJECTS_MIGRATION,)
