"""
Pytest configuration and shared fixtures.

Provides fixtures for temporary databases at each schema version, a fresh
identifier map, and an environment isolated from the user's configuration.
"""

import os
import sqlite3
from pathlib import Path

import pytest

from todolist.core.config import clear_cache
from todolist.core.db import connect, init_db, transaction
from todolist.core.ids import IdMapService
from todolist.core.migrations import MigrationManager

# Sample rows, created in this order.
TODO_IDS = [
    "7b0d7c2a-1f1e-4a59-9a55-2f1b9c0e0001",
    "7b0d7c2a-1f1e-4a59-9a55-2f1b9c0e0002",
    "7b0d7c2a-1f1e-4a59-9a55-2f1b9c0e0003",
]
TAG_IDS = [
    "c3e1a9f4-55b2-4c7d-8e0a-6d2f4b1a0001",
    "c3e1a9f4-55b2-4c7d-8e0a-6d2f4b1a0002",
]
PROJECT_ID = "9d4f2e6b-0c3a-4b8e-a1d7-5e9c3f2b0001"


# ==============================================================================
# Environment Fixtures
# ==============================================================================


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """
    Provide a clean environment without TODO_* env vars.

    Points XDG_CONFIG_HOME at an empty temp directory and drops the cached
    configuration so every test loads config from scratch.
    """
    for key in list(os.environ.keys()):
        if key.startswith("TODO_"):
            monkeypatch.delenv(key, raising=False)

    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))
    clear_cache()
    yield monkeypatch
    clear_cache()


# ==============================================================================
# Database Fixtures
# ==============================================================================


def insert_sample_rows(db_path: Path) -> None:
    """Insert one user, three todos, two tags, tag links and a dependency."""
    with connect(db_path) as conn:
        with transaction(conn):
            conn.execute(
                "INSERT INTO users (username, createdAt) VALUES (?, ?)",
                ("alice", "2024-01-01T00:00:00Z"),
            )
            for i, todo_id in enumerate(TODO_IDS, start=1):
                conn.execute(
                    "INSERT INTO todos (id, username, title, priority, description, "
                    "completedAt, createdAt, updatedAt) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
                    (
                        todo_id,
                        "alice",
                        f"Todo {i}",
                        "medium",
                        f"Description {i}",
                        None,
                        f"2024-01-0{i}T00:00:00Z",
                        f"2024-01-0{i}T00:00:00Z",
                    ),
                )
            for i, tag_id in enumerate(TAG_IDS, start=1):
                conn.execute(
                    "INSERT INTO tags (id, name, color, createdAt, updatedAt) "
                    "VALUES (?, ?, ?, ?, ?)",
                    (tag_id, f"tag{i}", None, f"2024-02-0{i}T00:00:00Z", f"2024-02-0{i}T00:00:00Z"),
                )
            conn.execute(
                "INSERT INTO todo_tags (tag_id, todo_id) VALUES (?, ?)", (TAG_IDS[0], TODO_IDS[0])
            )
            conn.execute(
                "INSERT INTO todo_tags (tag_id, todo_id) VALUES (?, ?)", (TAG_IDS[1], TODO_IDS[1])
            )
            conn.execute(
                "INSERT INTO todo_dependencies (blocked_todo_id, blocker_todo_id) VALUES (?, ?)",
                (TODO_IDS[2], TODO_IDS[0]),
            )


def insert_sample_project(db_path: Path, *, assign_todo: bool = True) -> None:
    """Insert one project into a v2 database, optionally assigning the first todo."""
    with connect(db_path) as conn:
        with transaction(conn):
            conn.execute(
                "INSERT INTO projects (id, username, name, description, createdAt, updatedAt) "
                "VALUES (?, ?, ?, ?, ?, ?)",
                (PROJECT_ID, "alice", "Launch", "", "2024-03-01T00:00:00Z", "2024-03-01T00:00:00Z"),
            )
            if assign_todo:
                conn.execute(
                    "UPDATE todos SET project_id = ? WHERE id = ?", (PROJECT_ID, TODO_IDS[0])
                )


@pytest.fixture
def row_count():
    """Return a helper that counts the rows of a table."""

    def count(db_path: Path, table: str) -> int:
        conn = sqlite3.connect(str(db_path))
        try:
            return conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]
        finally:
            conn.close()

    return count


@pytest.fixture
def db_path(tmp_path):
    """Provide an empty baseline (v1) database."""
    return init_db(tmp_path / "data" / "todos.sqlite")


@pytest.fixture
def backup_path(tmp_path):
    """Provide the backup location used alongside db_path."""
    return tmp_path / "data" / "todos.sqlite.backup"


@pytest.fixture
def baseline_db(db_path):
    """Provide a v1 database populated with sample rows."""
    insert_sample_rows(db_path)
    return db_path


@pytest.fixture
def manager(baseline_db, backup_path):
    """Provide a MigrationManager for the populated baseline database."""
    return MigrationManager(baseline_db, backup_path)


@pytest.fixture
def upgraded_db(baseline_db, backup_path):
    """Provide a populated database migrated to v2 (no projects yet)."""
    MigrationManager(baseline_db, backup_path).migrate()
    return baseline_db


# ==============================================================================
# Identifier Map Fixtures
# ==============================================================================


@pytest.fixture
def id_map():
    """Provide an empty IdMapService."""
    return IdMapService()


@pytest.fixture
def project_db(upgraded_db):
    """Provide a v2 database with one project assigned to the first todo."""
    insert_sample_project(upgraded_db)
    return upgraded_db


@pytest.fixture
def todo_ids():
    """UUIDs of the sample todos, in creation order."""
    return list(TODO_IDS)


@pytest.fixture
def tag_ids():
    """UUIDs of the sample tags, in creation order."""
    return list(TAG_IDS)


@pytest.fixture
def project_id():
    return PROJECT_ID
