"""Data classes for the missing references scanner."""

import os
import re
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .hierarchy import build_full_path


class FieldKind(str, Enum):
    """Kind of an introspected component field."""

    OBJECT_REFERENCE = "ObjectReference"
    OTHER = "Other"


class ResultReason(str, Enum):
    """Why a scan result was emitted."""

    MISSING_COMPONENT = "MissingComponent"
    DANGLING_REFERENCE = "DanglingReference"


@dataclass
class FieldDescriptor:
    """One introspectable property of a resolved component."""

    name: str
    kind: FieldKind = FieldKind.OTHER
    resolved_value: Any = None
    # None means the host cannot tell whether the field was ever assigned
    had_assigned_identity: Optional[bool] = False

    @classmethod
    def reference(cls, name: str, resolved_value: Any = None, had_assigned_identity: Optional[bool] = False):
        """Build an object reference field."""
        return cls(
            name=name,
            kind=FieldKind.OBJECT_REFERENCE,
            resolved_value=resolved_value,
            had_assigned_identity=had_assigned_identity,
        )

    @property
    def is_dangling(self) -> bool:
        return (
            self.kind == FieldKind.OBJECT_REFERENCE
            and self.resolved_value is None
            and self.had_assigned_identity is True
        )


@dataclass(eq=False)
class ComponentHandle:
    """A component attached to a scene object, either resolved or missing."""

    type_name: str = ""
    fields: List[FieldDescriptor] = field(default_factory=list)
    missing: bool = False
    properties: Dict[str, Any] = field(default_factory=dict)  # raw host payload
    owner: Optional["SceneObject"] = field(default=None, repr=False)

    @classmethod
    def resolved(cls, type_name: str, fields: List[FieldDescriptor] = None) -> "ComponentHandle":
        return cls(type_name=type_name, fields=list(fields or []))

    @classmethod
    def missing_slot(cls, type_name: str = "") -> "ComponentHandle":
        """Placeholder for a component whose backing type could not be resolved."""
        return cls(type_name=type_name, missing=True)

    @property
    def owner_path(self) -> str:
        return self.owner.hierarchy_path if self.owner is not None else ""


@dataclass(eq=False)
class SceneObject:
    """A scannable node (scene object or asset root) owned by the host."""

    name: str
    components: List[ComponentHandle] = field(default_factory=list)
    parent: Optional["SceneObject"] = field(default=None, repr=False)
    children: List["SceneObject"] = field(default_factory=list, repr=False)
    hidden: bool = False
    object_id: Any = None
    source: str = ""  # scene or asset document the object came from

    def __post_init__(self):
        for component in self.components:
            component.owner = self
        for child in self.children:
            child.parent = self

    def add_child(self, child: "SceneObject") -> "SceneObject":
        child.parent = self
        self.children.append(child)
        return child

    def add_component(self, component: ComponentHandle) -> ComponentHandle:
        component.owner = self
        self.components.append(component)
        return component

    @property
    def hierarchy_path(self) -> str:
        """Slash-joined names from the traversal root down to this object."""
        return build_full_path(self)

    def walk(self):
        """Yield this object and all descendants, depth-first pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


_NICIFY_PREFIX = re.compile(r"^(m_|_|k(?=[A-Z]))")
_NICIFY_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def nicify_field_name(name: str) -> str:
    """Turn a serialized field name into a display label (m_targetObject -> Target Object)."""
    stripped = _NICIFY_PREFIX.sub("", name)
    if not stripped:
        return name
    words = _NICIFY_BOUNDARY.sub(" ", stripped).replace("_", " ").split()
    label = " ".join(words)
    return label[:1].upper() + label[1:]


@dataclass(frozen=True)
class ScanResult:
    """One finding produced by a scan. Immutable."""

    object_name: str
    full_path: str
    context: str
    reason: ResultReason
    field_name: str = ""
    component_name: str = ""

    @property
    def name(self) -> str:
        return self.object_name

    @property
    def path(self) -> str:
        return self.full_path

    @property
    def display_field_name(self) -> str:
        return nicify_field_name(self.field_name) if self.field_name else ""

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["reason"] = self.reason.value
        return data


@dataclass
class ScanStats:
    """Counters collected while scanning."""

    roots_scanned: int = 0
    components_scanned: int = 0
    fields_inspected: int = 0
    missing_components: int = 0
    dangling_references: int = 0
    unknown_identity_fields: int = 0
    scan_time_ms: float = 0.0

    @property
    def total_findings(self) -> int:
        return self.missing_components + self.dangling_references


@dataclass
class ScannerConfig:
    """Configuration for ReferenceScanner."""

    report_unknown_identity: bool = False
    path_separator: str = "/"

    @classmethod
    def from_env(cls) -> "ScannerConfig":
        """Create configuration from environment variables."""
        return cls(
            report_unknown_identity=os.getenv("REPORT_UNKNOWN_IDENTITY", "false").lower() == "true",
        )

    @classmethod
    def from_config(cls, config) -> "ScannerConfig":
        """Create config from a cli Config object."""
        return cls(report_unknown_identity=config.report_unknown_identity)
