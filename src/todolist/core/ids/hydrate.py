"""
Rebuild display ID mappings from the store.

Mappings live in process memory only. After a restart the map is empty,
so display IDs handed out by a previous process would otherwise be
reassigned in whatever order entities happen to be touched.

Rehydration replays every existing entity through ``register`` in a
stable order (creation time, then rowid), so the same database always
yields the same display IDs at startup. Entities created afterwards are
numbered from the high-water mark left by the replay.
"""

import logging
import sqlite3

from todolist.core.db.schema import table_exists
from todolist.core.ids.models import Namespace
from todolist.core.ids.service import IdMapService

logger = logging.getLogger(__name__)

# Table backing each namespace.
NAMESPACE_TABLES: dict[Namespace, str] = {
    Namespace.TASK: "todos",
    Namespace.TAG: "tags",
    Namespace.PROJECT: "projects",
}


def hydrate_namespace(
    conn: sqlite3.Connection, id_map: IdMapService, namespace: Namespace
) -> int:
    """
    Replay all entities of one namespace into the map.

    The namespace is cleared first. A missing table (for example
    ``projects`` before the v2 migration) hydrates nothing.

    Returns:
        Number of mappings registered
    """
    table = NAMESPACE_TABLES[namespace]
    id_map.clear(namespace)

    if not table_exists(conn, table):
        logger.debug("Skipping %s: table %s does not exist", namespace.value, table)
        return 0

    rows = conn.execute(f"SELECT id FROM {table} ORDER BY createdAt, rowid").fetchall()
    for number, row in enumerate(rows, start=1):
        id_map.register(namespace.display_id(number), row[0], namespace)

    logger.info("Hydrated %d %s mapping(s)", len(rows), namespace.value)
    return len(rows)


def hydrate_id_map(conn: sqlite3.Connection, id_map: IdMapService) -> dict[Namespace, int]:
    """
    Replay every namespace into the map.

    Returns:
        Count of registered mappings per namespace
    """
    return {ns: hydrate_namespace(conn, id_map, ns) for ns in NAMESPACE_TABLES}
