"""
Bidirectional mapping between internal keys and display IDs.

The store addresses every row by UUID. Callers outside the service layer
use short display IDs (``task-3``) instead, and every entity service
translates at its boundary through an IdMapService.

Each namespace owns an independent pair of maps and an independent
counter, so allocating ``task-2`` never advances the ``tag`` sequence.

Numbering uses an explicit high-water mark per namespace that is never
decremented. Unregistering ``task-1`` therefore leaves a gap: the next
allocation is ``task-3``, not ``task-1`` or ``task-2`` again.

Example:
    >>> ids = IdMapService()
    >>> ids.to_display_id("6f1c...", Namespace.TASK)
    'task-1'
    >>> ids.to_internal_key("task-1", Namespace.TASK)
    '6f1c...'
    >>> ids.peek_next_id(Namespace.TASK)
    'task-2'
"""

import logging
import threading
from dataclasses import dataclass, field

from todolist.core.ids.models import Namespace
from todolist.core.ids.parser import get_namespace, looks_like_display_id, parse_display_id

logger = logging.getLogger(__name__)


@dataclass
class _NamespaceMap:
    """Mapping state for a single namespace."""

    by_display_id: dict[str, str] = field(default_factory=dict)
    by_internal_key: dict[str, str] = field(default_factory=dict)
    high_water: int = 0

    def drop_display_id(self, display_id: str) -> None:
        key = self.by_display_id.pop(display_id, None)
        if key is not None and self.by_internal_key.get(key) == display_id:
            del self.by_internal_key[key]

    def drop_internal_key(self, internal_key: str) -> None:
        display_id = self.by_internal_key.pop(internal_key, None)
        if display_id is not None and self.by_display_id.get(display_id) == internal_key:
            del self.by_display_id[display_id]


class IdMapService:
    """
    Namespace-scoped bidirectional map between internal keys and display IDs.

    None of the operations raise for unknown IDs or keys: a missing mapping
    is a normal condition (the entity was never touched in this process, or
    has been deleted) and is reported as None.

    All operations are serialized by one lock, so a service instance may be
    shared between threads.
    """

    def __init__(self) -> None:
        self._maps: dict[Namespace, _NamespaceMap] = {ns: _NamespaceMap() for ns in Namespace}
        self._lock = threading.RLock()

    def to_display_id(self, internal_key: str, namespace: Namespace) -> str:
        """
        Get the display ID for an internal key, allocating one if needed.

        Repeated calls with the same key return the same display ID.

        Args:
            internal_key: The UUID of the entity
            namespace: The entity's namespace

        Returns:
            The display ID (e.g., task-1, tag-5)
        """
        with self._lock:
            state = self._maps[namespace]
            existing = state.by_internal_key.get(internal_key)
            if existing is not None:
                return existing

            state.high_water += 1
            display_id = namespace.display_id(state.high_water)
            state.by_display_id[display_id] = internal_key
            state.by_internal_key[internal_key] = display_id
            logger.debug("Allocated %s for %s", display_id, internal_key)
            return display_id

    def to_internal_key(self, display_id: str, namespace: Namespace) -> str | None:
        """
        Get the internal key for a display ID.

        Returns:
            The internal key, or None if the display ID is unknown in this namespace
        """
        with self._lock:
            return self._maps[namespace].by_display_id.get(display_id)

    def register(self, display_id: str, internal_key: str, namespace: Namespace) -> None:
        """
        Install a mapping, replacing whatever either side was mapped to before.

        Used when seeding mappings for entities already known from a
        previous load. Registration does not allocate, but a registered
        number above the current high-water mark raises the mark so that
        a later allocation cannot hand out the same display ID again.
        """
        with self._lock:
            state = self._maps[namespace]
            state.drop_display_id(display_id)
            state.drop_internal_key(internal_key)
            state.by_display_id[display_id] = internal_key
            state.by_internal_key[internal_key] = display_id

            if get_namespace(display_id) is namespace:
                number = parse_display_id(display_id).number
                state.high_water = max(state.high_water, number)

    def unregister(self, display_id: str, internal_key: str, namespace: Namespace) -> None:
        """
        Remove a mapping in both directions.

        Unknown IDs or keys are ignored. The number is not reclaimed.
        """
        with self._lock:
            state = self._maps[namespace]
            state.drop_display_id(display_id)
            state.drop_internal_key(internal_key)

    def peek_next_id(self, namespace: Namespace) -> str:
        """Return the display ID the next allocation would produce, without allocating it."""
        with self._lock:
            return namespace.display_id(self._maps[namespace].high_water + 1)

    def list_mappings(self, namespace: Namespace) -> list[tuple[str, str]]:
        """Return (display_id, internal_key) pairs in insertion order."""
        with self._lock:
            return list(self._maps[namespace].by_display_id.items())

    def count(self, namespace: Namespace) -> int:
        with self._lock:
            return len(self._maps[namespace].by_display_id)

    def resolve(self, identifier: str, namespace: Namespace) -> str | None:
        """
        Translate a caller-supplied identifier into an internal key.

        Callers may pass either a display ID or a raw internal key. A
        display ID of this namespace is looked up (None when unknown);
        anything else is assumed to already be an internal key.
        """
        if looks_like_display_id(identifier, namespace):
            return self.to_internal_key(identifier, namespace)
        return identifier

    def clear(self, namespace: Namespace | None = None) -> None:
        """Forget all mappings and reset numbering for one namespace, or all of them."""
        with self._lock:
            targets = [namespace] if namespace is not None else list(Namespace)
            for ns in targets:
                self._maps[ns] = _NamespaceMap()
