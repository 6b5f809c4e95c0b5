"""
Tests for rebuilding display ID mappings from the database.
"""

from todolist.core.db import connect
from todolist.core.ids import IdMapService, Namespace, hydrate_id_map, hydrate_namespace
from todolist.core.migrations import MigrationManager


class TestHydrate:
    """Tests for hydrate_id_map and hydrate_namespace."""

    def test_hydrate_in_creation_order(self, baseline_db, id_map, todo_ids, tag_ids) -> None:
        """Test that rows are numbered by creation time."""
        with connect(baseline_db) as conn:
            counts = hydrate_id_map(conn, id_map)

        assert counts == {Namespace.TASK: 3, Namespace.TAG: 2, Namespace.PROJECT: 0}
        assert id_map.list_mappings(Namespace.TASK) == [
            ("task-1", todo_ids[0]),
            ("task-2", todo_ids[1]),
            ("task-3", todo_ids[2]),
        ]
        assert id_map.to_internal_key("tag-2", Namespace.TAG) == tag_ids[1]

    def test_hydrate_sets_next_id(self, baseline_db, id_map) -> None:
        """Test that new entities are numbered after the hydrated ones."""
        with connect(baseline_db) as conn:
            hydrate_id_map(conn, id_map)

        assert id_map.peek_next_id(Namespace.TASK) == "task-4"
        assert id_map.peek_next_id(Namespace.TAG) == "tag-3"
        assert id_map.peek_next_id(Namespace.PROJECT) == "project-1"

    def test_hydrate_is_stable(self, baseline_db) -> None:
        """Test that two processes hydrating the same database agree."""
        first, second = IdMapService(), IdMapService()
        with connect(baseline_db) as conn:
            hydrate_id_map(conn, first)
            hydrate_id_map(conn, second)

        for ns in Namespace:
            assert first.list_mappings(ns) == second.list_mappings(ns)

    def test_hydrate_replaces_existing_mappings(self, baseline_db, id_map, todo_ids) -> None:
        """Test that hydration clears mappings left from before."""
        id_map.to_display_id("stale-key", Namespace.TASK)
        with connect(baseline_db) as conn:
            hydrate_namespace(conn, id_map, Namespace.TASK)

        assert id_map.count(Namespace.TASK) == 3
        assert id_map.to_internal_key("task-1", Namespace.TASK) == todo_ids[0]

    def test_hydrate_projects(self, project_db, id_map, project_id) -> None:
        """Test that projects are hydrated once the table exists."""
        with connect(project_db) as conn:
            count = hydrate_namespace(conn, id_map, Namespace.PROJECT)

        assert count == 1
        assert id_map.to_internal_key("project-1", Namespace.PROJECT) == project_id

    def test_hydrate_missing_table(self, db_path, backup_path, id_map) -> None:
        """Test that a namespace without a table hydrates nothing."""
        assert MigrationManager(db_path, backup_path).get_status().current_version == "v1"
        with connect(db_path) as conn:
            assert hydrate_namespace(conn, id_map, Namespace.PROJECT) == 0
        assert id_map.peek_next_id(Namespace.PROJECT) == "project-1"
