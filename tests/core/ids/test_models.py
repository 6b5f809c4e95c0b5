"""
Tests for display ID models.

These tests verify namespace prefixes, display ID formatting and number
validation.
"""

import pytest
from pydantic import ValidationError

from todolist.core.ids import DisplayId, Namespace


class TestNamespace:
    """Tests for the Namespace enum."""

    def test_prefixes(self) -> None:
        """Test that each namespace's prefix is its value."""
        assert Namespace.TASK.prefix == "task"
        assert Namespace.TAG.prefix == "tag"
        assert Namespace.PROJECT.prefix == "project"

    def test_display_id(self) -> None:
        """Test rendering a display ID from a number."""
        assert Namespace.TASK.display_id(3) == "task-3"
        assert Namespace.PROJECT.display_id(12) == "project-12"

    def test_str_methods_are_not_shadowed(self) -> None:
        """Test that members still behave as plain strings."""
        assert "{}-1".format(Namespace.TAG.value) == "tag-1"
        assert Namespace.TAG.format() == "tag"
        assert Namespace.TAG.upper() == "TAG"

    def test_lookup_by_value(self) -> None:
        """Test that namespaces can be constructed from their string value."""
        assert Namespace("tag") is Namespace.TAG


class TestDisplayId:
    """Tests for the DisplayId model."""

    def test_str(self) -> None:
        """Test string formatting."""
        display_id = DisplayId(namespace=Namespace.TAG, number=5)
        assert str(display_id) == "tag-5"

    def test_number_must_be_positive(self) -> None:
        """Test that zero and negative numbers are rejected."""
        with pytest.raises(ValidationError):
            DisplayId(namespace=Namespace.TASK, number=0)
        with pytest.raises(ValidationError):
            DisplayId(namespace=Namespace.TASK, number=-1)

    def test_frozen(self) -> None:
        """Test that display IDs are immutable."""
        display_id = DisplayId(namespace=Namespace.TASK, number=1)
        with pytest.raises(ValidationError):
            display_id.number = 2  # type: ignore[misc]

    def test_equality(self) -> None:
        """Test that equal fields compare equal."""
        assert DisplayId(namespace=Namespace.TASK, number=1) == DisplayId(
            namespace=Namespace.TASK, number=1
        )
        assert DisplayId(namespace=Namespace.TASK, number=1) != DisplayId(
            namespace=Namespace.TAG, number=1
        )
