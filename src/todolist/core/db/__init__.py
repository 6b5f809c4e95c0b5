"""
Database layer for the todolist store.

Provides the baseline SQLite schema and connection/transaction helpers
shared by the identifier map rehydration and the migration manager.

Main components:
- schema.py: baseline DDL and introspection helpers
- connection.py: connection configuration, transactions, initialization
"""

from todolist.core.db.connection import configure_connection, connect, init_db, transaction
from todolist.core.db.schema import (
    BASELINE_VERSION,
    create_baseline_schema,
    table_columns,
    table_exists,
)

__all__ = [
    "BASELINE_VERSION",
    "configure_connection",
    "connect",
    "create_baseline_schema",
    "init_db",
    "table_columns",
    "table_exists",
    "transaction",
]
