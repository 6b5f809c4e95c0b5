"""
Display ID system for tasks, tags and projects.

This package translates between the UUIDs that key rows in the store and
the short, sequential identifiers shown to callers.

Public API:
    Models:
        - Namespace: Entity kinds with their own sequence (task, tag, project)
        - DisplayId: Display ID model (task-3)

    Parser functions:
        - parse_display_id: Parse string ID into typed model
        - validate_display_id: Check if string is valid ID format
        - get_namespace: Determine namespace without full parsing
        - looks_like_display_id: Check an ID belongs to a namespace

    Service:
        - IdMapService: Namespace-scoped bidirectional map

    Rehydration:
        - hydrate_id_map: Replay existing rows into an IdMapService

Example:
    >>> from todolist.core.ids import IdMapService, Namespace
    >>> ids = IdMapService()
    >>> ids.to_display_id("0b7e...", Namespace.TAG)
    'tag-1'
"""

from todolist.core.ids.hydrate import hydrate_id_map, hydrate_namespace
from todolist.core.ids.models import DisplayId, Namespace
from todolist.core.ids.parser import (
    get_namespace,
    looks_like_display_id,
    parse_display_id,
    validate_display_id,
)
from todolist.core.ids.service import IdMapService

__all__ = [
    # Models
    "DisplayId",
    "Namespace",
    # Parser functions
    "get_namespace",
    "looks_like_display_id",
    "parse_display_id",
    "validate_display_id",
    # Service
    "IdMapService",
    # Rehydration
    "hydrate_id_map",
    "hydrate_namespace",
]
