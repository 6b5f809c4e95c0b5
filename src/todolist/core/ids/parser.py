"""
Display ID parser and validator.

Parses strings such as ``task-3`` back into typed DisplayId models.
Numbers never carry leading zeros, so ``task-03`` is rejected rather than
silently aliased to ``task-3``.

Public API:
    - parse_display_id: Parse string ID into a DisplayId
    - validate_display_id: Check if string is a valid display ID
    - get_namespace: Determine the namespace without full parsing
    - looks_like_display_id: Check membership in one namespace
"""

import re

from todolist.core.ids.models import DisplayId, Namespace

_NAMESPACE_PATTERN = "|".join(ns.value for ns in Namespace)
_NUMBER_PATTERN = r"[1-9][0-9]*"

_DISPLAY_ID_REGEX = re.compile(rf"^({_NAMESPACE_PATTERN})-({_NUMBER_PATTERN})$")


def validate_display_id(id_str: str) -> bool:
    """
    Check if a string is a valid display ID.

    Examples:
        >>> validate_display_id("task-1")
        True
        >>> validate_display_id("project-42")
        True
        >>> validate_display_id("task-0")
        False
        >>> validate_display_id("epic-1")
        False
    """
    return _DISPLAY_ID_REGEX.match(id_str) is not None


def get_namespace(id_str: str) -> Namespace | None:
    """
    Determine the namespace of a display ID.

    Returns:
        The namespace, or None if the string is not a valid display ID

    Examples:
        >>> get_namespace("tag-5")
        <Namespace.TAG: 'tag'>
        >>> get_namespace("tag-x") is None
        True
    """
    match = _DISPLAY_ID_REGEX.match(id_str)
    if match is None:
        return None
    return Namespace(match.group(1))


def parse_display_id(id_str: str) -> DisplayId:
    """
    Parse a string display ID into a DisplayId model.

    Raises:
        ValueError: If the string is not a valid display ID

    Examples:
        >>> str(parse_display_id("task-12"))
        'task-12'
    """
    match = _DISPLAY_ID_REGEX.match(id_str)
    if match is None:
        raise ValueError(
            f"Invalid display ID: {id_str!r}. "
            f"Expected <{'|'.join(ns.value for ns in Namespace)}>-<number>"
        )
    return DisplayId(namespace=Namespace(match.group(1)), number=int(match.group(2)))


def looks_like_display_id(id_str: str, namespace: Namespace) -> bool:
    """Check that a string is a valid display ID belonging to ``namespace``."""
    return get_namespace(id_str) is namespace
