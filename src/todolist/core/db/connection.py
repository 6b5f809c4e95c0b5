"""
Database connection management for the todolist store.

Connections opened here run in explicit-transaction mode
(isolation_level=None): nothing is committed implicitly, and schema
changes only become durable inside a ``transaction()`` block. This lets
DDL statements (CREATE, ALTER, DROP) participate in the same atomic unit
as the data they move.

Usage:
    from todolist.core.db import connect, transaction

    with connect(db_path) as conn:
        with transaction(conn):
            conn.execute("ALTER TABLE todos ADD COLUMN project_id TEXT NULL")
"""

import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from todolist.core.db.schema import create_baseline_schema

logger = logging.getLogger(__name__)


def configure_connection(conn: sqlite3.Connection, *, foreign_keys: bool = True) -> None:
    """
    Configure a SQLite connection.

    Settings applied:
    - Foreign keys: enforce referential integrity (unless disabled for a rebuild)
    - sqlite3.Row: name and index access to result rows

    The journal mode is left as found.

    Args:
        conn: SQLite connection to configure
        foreign_keys: Whether to enforce foreign key constraints
    """
    conn.execute(f"PRAGMA foreign_keys={'ON' if foreign_keys else 'OFF'}")
    conn.row_factory = sqlite3.Row


@contextmanager
def connect(db_path: Path | str, *, foreign_keys: bool = True) -> Iterator[sqlite3.Connection]:
    """
    Open a configured connection as a context manager.

    The connection is always closed when the context exits. Any open
    transaction left behind by an exception is rolled back.

    Args:
        db_path: Path to the SQLite database file
        foreign_keys: Whether to enforce foreign key constraints

    Yields:
        Configured SQLite connection in explicit-transaction mode
    """
    conn = sqlite3.connect(str(db_path), isolation_level=None)
    try:
        configure_connection(conn, foreign_keys=foreign_keys)
        yield conn
    finally:
        if conn.in_transaction:
            conn.rollback()
        conn.close()


@contextmanager
def transaction(conn: sqlite3.Connection) -> Iterator[sqlite3.Connection]:
    """
    Run a block inside a single BEGIN ... COMMIT.

    On any exception the transaction is rolled back and the exception
    re-raised, so the database is left exactly as it was before BEGIN.
    """
    conn.execute("BEGIN")
    try:
        yield conn
    except BaseException:
        # SQLITE_FULL, SQLITE_IOERR and similar errors end the transaction themselves.
        if conn.in_transaction:
            logger.debug("Rolling back transaction")
            conn.execute("ROLLBACK")
        raise
    else:
        conn.execute("COMMIT")


def init_db(db_path: Path | str) -> Path:
    """
    Create the database file with the baseline schema.

    Creates parent directories as needed. Safe to call on an existing
    database: baseline tables are only created when missing.

    Args:
        db_path: Path to the SQLite database file

    Returns:
        The database path
    """
    db_path = Path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    with connect(db_path) as conn:
        with transaction(conn):
            create_baseline_schema(conn)

    logger.info("Initialized database at %s", db_path)
    return db_path
