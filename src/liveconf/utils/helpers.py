"""
Helper utility functions for liveconf.
"""

from typing import Any, Dict, Iterable


def qualified_name(cls: type) -> str:
    """
    Get the fully-qualified name of a class.

    Args:
        cls: Class to name

    Returns:
        Module path joined with the class qualname (e.g. "robot.drive.Drive")
    """
    return f"{cls.__module__}.{cls.__qualname__}"


def starts_with_any(name: str, prefixes: Iterable[str]) -> bool:
    """
    Check whether a name starts with any of the given prefixes.

    Args:
        name: Name to check
        prefixes: Candidate prefixes

    Returns:
        True if at least one prefix matches
    """
    for prefix in prefixes:
        if name.startswith(prefix):
            return True
    return False


def join_path(parent: str, name: str) -> str:
    """Join a dotted variable path and a child name."""
    return f"{parent}.{name}" if parent else name


def count_variables(tree: Any) -> Dict[str, int]:
    """
    Count composite and basic variables in a variable tree.

    Args:
        tree: Root CustomVariable

    Returns:
        Dictionary with "custom" and "basic" counts (the root itself excluded)
    """
    counts = {"custom": 0, "basic": 0}
    for _, variable in tree.items():
        if variable.type.is_basic:
            counts["basic"] += 1
        else:
            counts["custom"] += 1
            nested = count_variables(variable)
            counts["custom"] += nested["custom"]
            counts["basic"] += nested["basic"]
    return counts
