"""Host collaborator interfaces consumed by the finder."""

from abc import ABC, abstractmethod
from typing import Any, Iterable, List, Protocol

from ..core.data_classes import ComponentHandle, FieldDescriptor, ScanResult, SceneObject


class FieldIntrospector(Protocol):
    """Produces a uniform field view of a resolved component."""

    def fields(self, component: ComponentHandle) -> Iterable[FieldDescriptor]:
        ...


class HostEnvironment(ABC):
    """Enumeration and navigation services provided by an authoring host."""

    @property
    @abstractmethod
    def introspector(self) -> FieldIntrospector:
        """Introspector for components produced by this host."""

    @abstractmethod
    def current_context(self) -> str:
        """Name of the currently open scene."""

    @abstractmethod
    def scene_objects(self) -> List[SceneObject]:
        """Every non-hidden object of the open scene, depth-first pre-order."""

    @abstractmethod
    def enabled_contexts(self) -> List[str]:
        """Enabled scenes in build order."""

    @abstractmethod
    def open_context(self, name: str) -> None:
        """Make ``name`` the current scene."""

    @abstractmethod
    def asset_objects(self, path_prefix: str) -> List[SceneObject]:
        """Every object of the assets whose path starts with ``path_prefix``, depth-first pre-order."""

    @abstractmethod
    def focus(self, result: ScanResult) -> Any:
        """Bring the object behind ``result`` into view and return it."""
