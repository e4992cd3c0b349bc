"""Result capability contract: lets a host act on a scan result."""

from typing import Any, List, Protocol

from .data_classes import ScanResult


class Navigator(Protocol):
    """Host collaborator that brings the object behind a result into view."""

    def focus(self, result: ScanResult) -> Any:
        ...


class SelectableResult:
    """
    A scan result bound to a host navigator.

    Selecting it may switch the host's current context, e.g. open the scene
    the object originates from.
    """

    def __init__(self, result: ScanResult, navigator: Navigator):
        self.result = result
        self.navigator = navigator

    @property
    def name(self) -> str:
        return self.result.name

    @property
    def path(self) -> str:
        return self.result.path

    def select(self) -> Any:
        return self.navigator.focus(self.result)

    def __repr__(self) -> str:
        return f"SelectableResult({self.result.context}:{self.path})"


def bind_results(results: List[ScanResult], navigator: Navigator) -> List[SelectableResult]:
    """Wrap results so a display can call select() on each one."""
    return [SelectableResult(result, navigator) for result in results]
