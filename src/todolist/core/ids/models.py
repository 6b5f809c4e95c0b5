"""
Display ID models.

Entities in the store are keyed by UUID. Callers see short, sequential,
namespace-prefixed identifiers instead:

ID Format Examples:
    - Task:    task-3
    - Tag:     tag-1
    - Project: project-12

Each namespace numbers its entities independently, starting at 1.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator


class Namespace(str, Enum):
    """Entity kinds that carry display IDs. The value is the display prefix."""

    TASK = "task"
    TAG = "tag"
    PROJECT = "project"

    @property
    def prefix(self) -> str:
        return self.value

    def display_id(self, number: int) -> str:
        """Render a display ID for this namespace, e.g. ``task-3``."""
        return f"{self.value}-{number}"


class DisplayId(BaseModel):
    """
    Display ID: {namespace}-{number} → task-3

    The number is positive and unique within its namespace for the
    lifetime of the process.
    """

    namespace: Namespace
    number: int

    model_config = ConfigDict(frozen=True)

    @field_validator("number")
    @classmethod
    def validate_number(cls, v: int) -> int:
        """Validate that number is positive."""
        if v < 1:
            raise ValueError("Display ID number must be positive (starts at 1)")
        return v

    def __str__(self) -> str:
        """Format as {namespace}-{number}"""
        return self.namespace.display_id(self.number)
