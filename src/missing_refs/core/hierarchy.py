"""Hierarchy path reconstruction with cycle detection."""

from typing import List

from .errors import CyclicHierarchyError


def build_full_path(node, separator: str = "/") -> str:
    """
    Build the full hierarchy path of a node by walking its parent links.

    Args:
        node: Any object exposing ``name`` and ``parent``
        separator: String placed between names

    Returns:
        Names from the traversal root down to ``node``, root-most first

    Raises:
        CyclicHierarchyError: If a node is reachable from itself via parent links
    """
    names: List[str] = []
    seen = set()
    current = node

    while current is not None:
        if id(current) in seen:
            names.append(current.name)
            names.reverse()
            raise CyclicHierarchyError(names)
        seen.add(id(current))
        names.append(current.name)
        current = getattr(current, "parent", None)

    names.reverse()
    return separator.join(names)
