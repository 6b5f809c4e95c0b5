"""
SQLite schema for the todolist store.

Defines the baseline (v1) schema that the tool server writes before any
migration has been applied. Later versions are expressed as migrations in
todolist.core.migrations and never edited into the baseline.

Schema Design:
- users: owners of todos and projects
- todos: tasks, keyed by UUID
- tags: named labels, keyed by UUID
- todo_tags: many-to-many between todos and tags
- todo_dependencies: blocker/blocked pairs between todos
"""

import sqlite3

BASELINE_VERSION = "v1"

# Columns of the todos table at baseline, in declaration order.
TODOS_V1_COLUMNS = (
    "id",
    "username",
    "title",
    "priority",
    "description",
    "completedAt",
    "createdAt",
    "updatedAt",
)


def todos_table_ddl(table_name: str = "todos") -> str:
    """
    Return the CREATE TABLE statement for the baseline todos table.

    The table name is a parameter so the same definition can be used to
    rebuild todos under a temporary name.
    """
    return f"""
        CREATE TABLE IF NOT EXISTS {table_name} (
            id TEXT PRIMARY KEY,
            username TEXT NOT NULL,
            title TEXT NOT NULL,
            priority TEXT NOT NULL,
            description TEXT NOT NULL,
            completedAt TEXT NULL,
            createdAt TEXT NOT NULL,
            updatedAt TEXT NOT NULL,
            FOREIGN KEY (username) REFERENCES users(username) ON DELETE CASCADE
        )
    """


BASELINE_DDL: tuple[str, ...] = (
    """
    CREATE TABLE IF NOT EXISTS users (
        username TEXT PRIMARY KEY,
        createdAt TEXT NOT NULL
    )
    """,
    todos_table_ddl(),
    """
    CREATE TABLE IF NOT EXISTS tags (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL UNIQUE,
        color TEXT NULL,
        createdAt TEXT NOT NULL,
        updatedAt TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS todo_tags (
        tag_id TEXT NOT NULL,
        todo_id TEXT NOT NULL,
        PRIMARY KEY (tag_id, todo_id),
        FOREIGN KEY (tag_id) REFERENCES tags(id) ON DELETE CASCADE,
        FOREIGN KEY (todo_id) REFERENCES todos(id) ON DELETE CASCADE
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS todo_dependencies (
        blocked_todo_id TEXT NOT NULL,
        blocker_todo_id TEXT NOT NULL,
        createdAt DATETIME NOT NULL DEFAULT CURRENT_TIMESTAMP,
        PRIMARY KEY (blocked_todo_id, blocker_todo_id),
        FOREIGN KEY (blocked_todo_id) REFERENCES todos(id) ON DELETE CASCADE,
        FOREIGN KEY (blocker_todo_id) REFERENCES todos(id) ON DELETE CASCADE
    )
    """,
)


def table_exists(conn: sqlite3.Connection, table: str) -> bool:
    """
    Check whether a table exists in the database.

    Example:
        >>> conn = sqlite3.connect(":memory:")
        >>> table_exists(conn, "todos")
        False
    """
    row = conn.execute(
        "SELECT name FROM sqlite_master WHERE type='table' AND name=?", (table,)
    ).fetchone()
    return row is not None


def table_columns(conn: sqlite3.Connection, table: str) -> list[str]:
    """Return the column names of a table in declaration order."""
    return [row[1] for row in conn.execute(f"PRAGMA table_info({table})").fetchall()]


def create_baseline_schema(conn: sqlite3.Connection) -> None:
    """
    Create the baseline schema.

    This is idempotent - safe to call multiple times. Statements are run
    one at a time so the caller's transaction is respected.

    Args:
        conn: SQLite database connection
    """
    for statement in BASELINE_DDL:
        conn.execute(statement)
