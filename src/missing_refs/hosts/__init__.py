"""Host collaborators: enumeration, introspection and navigation."""

from .base import FieldIntrospector, HostEnvironment
from .document_parser import DocumentParser, ParseResult
from .file_host import (PROJECT_CONTEXT, AssetDatabase, AssetReference, DocumentIntrospector, LoadedDocument,
                        ProjectHost)
from .project_scanner import ProjectScanner, ProjectScannerConfig

__all__ = [
    "PROJECT_CONTEXT",
    "AssetDatabase",
    "AssetReference",
    "DocumentIntrospector",
    "DocumentParser",
    "FieldIntrospector",
    "HostEnvironment",
    "LoadedDocument",
    "ParseResult",
    "ProjectHost",
    "ProjectScanner",
    "ProjectScannerConfig",
]
