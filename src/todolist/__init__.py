"""
Todolist - task-tracking storage core.

Human-readable identifier mapping and schema migrations for the
todo-list tool server's SQLite store.
"""

__version__ = "0.3.0"

from todolist.core.ids.models import Namespace
from todolist.core.ids.service import IdMapService
from todolist.core.migrations.manager import MigrationManager

__all__ = ["IdMapService", "MigrationManager", "Namespace", "__version__"]
