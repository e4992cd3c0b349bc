"""Exception classes raised by the scanner and its host collaborators."""

from typing import List


class MissingReferencesError(Exception):
    """Base class for all errors raised by missing_refs."""


class CyclicHierarchyError(MissingReferencesError):
    """Raised when walking parent links from an object loops back on itself."""

    def __init__(self, cycle: List[str]):
        self.cycle = cycle
        super().__init__(f"Cyclic hierarchy detected: {' -> '.join(cycle)}")


class HostError(MissingReferencesError):
    """Raised by a host environment for unknown contexts or objects."""


class DocumentError(HostError):
    """Raised when a scene or asset document cannot be parsed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")
