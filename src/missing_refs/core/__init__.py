"""Core scanner: data model, reference scanning and result capabilities."""

from .data_classes import (ComponentHandle, FieldDescriptor, FieldKind, ResultReason, ScannerConfig,
                           ScanResult, ScanStats, SceneObject, nicify_field_name)
from .errors import CyclicHierarchyError, DocumentError, HostError, MissingReferencesError
from .hierarchy import build_full_path
from .reference_scanner import AttachedFieldIntrospector, ReferenceScanner
from .results import Navigator, SelectableResult, bind_results

__all__ = [
    "AttachedFieldIntrospector",
    "ComponentHandle",
    "CyclicHierarchyError",
    "DocumentError",
    "FieldDescriptor",
    "FieldKind",
    "HostError",
    "MissingReferencesError",
    "Navigator",
    "ReferenceScanner",
    "ResultReason",
    "ScannerConfig",
    "ScanResult",
    "ScanStats",
    "SceneObject",
    "SelectableResult",
    "bind_results",
    "build_full_path",
    "nicify_field_name",
]
