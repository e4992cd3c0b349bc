"""File-backed host: a project directory of YAML/JSON scene and asset documents."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Set, Tuple

from ..core.data_classes import ComponentHandle, FieldDescriptor, FieldKind, ScanResult, SceneObject
from ..core.errors import DocumentError, HostError
from .base import HostEnvironment
from .document_parser import DocumentParser
from .project_scanner import ProjectScanner, ProjectScannerConfig

logger = logging.getLogger(__name__)

PROJECT_CONTEXT = "Project"
UNKNOWN_IDENTITY = "?"
SCENE_KIND = "scene"
ASSET_KIND = "asset"


@dataclass(frozen=True)
class AssetReference:
    """An indexed reference into another document. Never loaded on inspection."""

    path: str
    object_id: Any


@dataclass
class LoadedDocument:
    """A parsed document turned into live scene objects."""

    path: str
    kind: str
    roots: List[SceneObject] = field(default_factory=list)
    objects_by_id: Dict[Any, SceneObject] = field(default_factory=dict)

    def all_objects(self) -> Iterator[SceneObject]:
        for root in self.roots:
            yield from root.walk()

    def find_by_path(self, full_path: str) -> Optional[SceneObject]:
        for obj in self.all_objects():
            if obj.hierarchy_path == full_path:
                return obj
        return None


def split_reference(ref: Any) -> Tuple[Optional[str], Any]:
    """Split "Assets/x.yaml#12" into (path, id); local ids return (None, id)."""
    if isinstance(ref, str) and "#" in ref:
        path, _, raw_id = ref.rpartition("#")
        return path, _coerce_id(raw_id)
    return None, ref


def _coerce_id(raw: str) -> Any:
    try:
        return int(raw)
    except ValueError:
        return raw


def _iter_object_ids(objects: List[Dict[str, Any]]) -> Iterator[Any]:
    stack = list(objects)
    while stack:
        obj = stack.pop()
        if not isinstance(obj, dict):
            continue
        if obj.get("id") is not None:
            yield obj["id"]
        for component in obj.get("components") or []:
            if isinstance(component, dict) and component.get("id") is not None and not component.get("missing"):
                yield component["id"]
        stack.extend(obj.get("children") or [])


class AssetDatabase:
    """Index of every project document and the object ids it declares."""

    def __init__(
        self,
        project_dir: str,
        scanner: ProjectScanner = None,
        parser: DocumentParser = None,
        exclude: Set[str] = None,
    ):
        self.project_dir = Path(project_dir)
        self.scanner = scanner or ProjectScanner()
        self.parser = parser or DocumentParser()
        self.exclude = exclude or set()
        self._documents: Dict[str, Dict[str, Any]] = {}
        self._ids: Dict[str, Set[Any]] = {}

    def refresh(self) -> None:
        """Parse every document under the project directory and rebuild the id index."""
        self._documents.clear()
        self._ids.clear()

        for rel_path in self.scanner.scan_for_documents(str(self.project_dir)):
            if rel_path in self.exclude:
                continue
            result = self.parser.parse_file(self.project_dir / rel_path)
            if not result.success:
                raise DocumentError(rel_path, result.error)
            self._documents[rel_path] = result.data
            self._ids[rel_path] = set(_iter_object_ids(result.data["objects"]))

        logger.info(f"Asset database indexed {len(self._documents)} documents in {self.project_dir}")

    @property
    def paths(self) -> List[str]:
        return list(self._documents)

    def kind_of(self, path: str) -> str:
        return str(self.document(path).get("kind", ASSET_KIND)).lower()

    def document(self, path: str) -> Dict[str, Any]:
        try:
            return self._documents[path]
        except KeyError:
            raise HostError(f"Unknown document: {path}") from None

    def contains(self, path: str, object_id: Any) -> bool:
        return object_id in self._ids.get(path, ())


class DocumentIntrospector:
    """
    Builds FieldDescriptors from the raw field payload of document components.

    Reference encoding: ``{ref: <id>}`` for an object in the same document,
    ``{ref: "<path>#<id>"}`` for an object in another document, ``{ref: null}``
    or ``{ref: 0}`` for a field that was never assigned, and ``{ref: "?"}`` when
    the origin cannot tell. Nested mappings and lists are walked in declaration
    order and reported as ``parent.child`` and ``items[0]``.
    """

    def __init__(self, asset_db: AssetDatabase, documents: Dict[str, LoadedDocument]):
        self.asset_db = asset_db
        self.documents = documents

    def fields(self, component: ComponentHandle) -> List[FieldDescriptor]:
        source = component.owner.source if component.owner is not None else ""
        descriptors: List[FieldDescriptor] = []
        for name, value in component.properties.items():
            self._collect(str(name), value, source, descriptors)
        return descriptors

    def _collect(self, name: str, value: Any, source: str, out: List[FieldDescriptor]) -> None:
        if isinstance(value, dict) and "ref" in value:
            out.append(self._describe_reference(name, value["ref"], source))
        elif isinstance(value, dict):
            for key, child in value.items():
                self._collect(f"{name}.{key}", child, source, out)
        elif isinstance(value, list):
            for index, item in enumerate(value):
                self._collect(f"{name}[{index}]", item, source, out)
        else:
            out.append(FieldDescriptor(name=name, kind=FieldKind.OTHER))

    def _describe_reference(self, name: str, ref: Any, source: str) -> FieldDescriptor:
        if ref is not None and (isinstance(ref, bool) or not isinstance(ref, (int, str))):
            raise DocumentError(source, f"Field '{name}' holds an invalid reference: {ref!r}")
        if ref is None or ref == 0 or ref == "":
            return FieldDescriptor.reference(name, None, had_assigned_identity=False)
        if ref == UNKNOWN_IDENTITY:
            return FieldDescriptor.reference(name, None, had_assigned_identity=None)

        path, object_id = split_reference(ref)
        if path is None or path == source:
            document = self.documents.get(source)
            target = document.objects_by_id.get(object_id) if document else None
            return FieldDescriptor.reference(name, target, had_assigned_identity=True)

        # Cross-document: answer from the index only, the target document stays unloaded
        target = AssetReference(path, object_id) if self.asset_db.contains(path, object_id) else None
        return FieldDescriptor.reference(name, target, had_assigned_identity=True)


class ProjectHost(HostEnvironment):
    """Host environment backed by a project directory."""

    def __init__(
        self,
        project_dir: str,
        build_settings_path: str = "ProjectSettings/build_settings.yaml",
        scanner_config: ProjectScannerConfig = None,
        default_scene: str = "",
    ):
        self.project_dir = Path(project_dir)
        self.build_settings_path = build_settings_path
        self.parser = DocumentParser()
        self.asset_db = AssetDatabase(
            project_dir,
            scanner=ProjectScanner(scanner_config),
            parser=self.parser,
            exclude={build_settings_path},
        )
        self._loaded: Dict[str, LoadedDocument] = {}
        self._introspector = DocumentIntrospector(self.asset_db, self._loaded)
        self._build_scenes: List[Tuple[str, bool]] = []
        self._current: Optional[str] = None

        self.refresh()
        # Opened by the first current_context() call
        self._initial_scene = default_scene or self._first_build_scene()

    def refresh(self) -> None:
        """Re-index documents and reload build settings. Drops loaded documents."""
        self.asset_db.refresh()
        self._loaded.clear()
        self._build_scenes = self._load_build_settings()

    @property
    def introspector(self) -> DocumentIntrospector:
        return self._introspector

    def current_context(self) -> str:
        if self._current is None and self._initial_scene:
            self.open_context(self._initial_scene)
        if self._current is None:
            raise HostError("No scene is open")
        return self._current

    def scene_objects(self) -> List[SceneObject]:
        document = self._load(self.current_context())
        return [obj for obj in document.all_objects() if not obj.hidden]

    def enabled_contexts(self) -> List[str]:
        return [path for path, enabled in self._build_scenes if enabled]

    def open_context(self, name: str) -> None:
        if name not in self.asset_db.paths or self.asset_db.kind_of(name) != SCENE_KIND:
            raise HostError(f"Unknown scene: {name}")
        if name != self._current:
            logger.info(f"Opening scene {name}")
        self._current = name

    def asset_objects(self, path_prefix: str) -> List[SceneObject]:
        objects: List[SceneObject] = []
        for path in self.asset_db.paths:
            if path.startswith(path_prefix) and self.asset_db.kind_of(path) == ASSET_KIND:
                objects.extend(self._load(path).all_objects())
        return objects

    def focus(self, result: ScanResult) -> SceneObject:
        """Open the result's scene when needed and return the live object."""
        if result.context == PROJECT_CONTEXT:
            for path in self.asset_db.paths:
                if self.asset_db.kind_of(path) != ASSET_KIND:
                    continue
                obj = self._load(path).find_by_path(result.full_path)
                if obj is not None:
                    return obj
            raise HostError(f"Asset object not found: {result.full_path}")

        self.open_context(result.context)
        obj = self._load(result.context).find_by_path(result.full_path)
        if obj is None:
            raise HostError(f"Object not found in {result.context}: {result.full_path}")
        return obj

    def _load(self, path: str) -> LoadedDocument:
        if path not in self._loaded:
            data = self.asset_db.document(path)
            document = LoadedDocument(path=path, kind=self.asset_db.kind_of(path))
            for raw in data["objects"]:
                document.roots.append(self._build_object(raw, path, document))
            self._loaded[path] = document
        return self._loaded[path]

    def _build_object(self, raw: Dict[str, Any], path: str, document: LoadedDocument) -> SceneObject:
        if not isinstance(raw, dict) or raw.get("name") in (None, ""):
            raise DocumentError(path, f"Object entry must be a mapping with a non-empty name: {raw!r}")

        obj = SceneObject(
            name=str(raw["name"]),
            hidden=bool(raw.get("hidden", False)),
            object_id=raw.get("id"),
            source=path,
        )
        if obj.object_id is not None:
            document.objects_by_id[obj.object_id] = obj

        for raw_component in raw.get("components") or []:
            obj.add_component(self._build_component(raw_component, path, document))

        for raw_child in raw.get("children") or []:
            obj.add_child(self._build_object(raw_child, path, document))

        return obj

    def _build_component(self, raw: Any, path: str, document: LoadedDocument) -> ComponentHandle:
        if not isinstance(raw, dict):
            raise DocumentError(path, f"Component entry must be a mapping: {raw!r}")

        type_name = str(raw.get("type") or "")
        if raw.get("missing", False):
            return ComponentHandle.missing_slot(type_name)

        component = ComponentHandle(type_name=type_name, properties=dict(raw.get("fields") or {}))
        if raw.get("id") is not None:
            document.objects_by_id[raw["id"]] = component
        return component

    def _load_build_settings(self) -> List[Tuple[str, bool]]:
        """Scenes listed in build settings, or every scene document when there are none."""
        settings_file = self.project_dir / self.build_settings_path
        if not settings_file.is_file():
            return [(path, True) for path in self.asset_db.paths if self.asset_db.kind_of(path) == SCENE_KIND]

        result = self.parser.parse_file(settings_file)
        if not result.success:
            raise DocumentError(self.build_settings_path, result.error)

        scenes: List[Tuple[str, bool]] = []
        for entry in result.data.get("scenes") or []:
            if isinstance(entry, str):
                scenes.append((entry, True))
            elif isinstance(entry, dict) and "path" in entry:
                scenes.append((entry["path"], bool(entry.get("enabled", True))))
            else:
                raise DocumentError(self.build_settings_path, f"Invalid scene entry: {entry!r}")

        known = set(self.asset_db.paths)
        for path, _ in scenes:
            if path not in known:
                logger.warning(f"Build settings list a scene that does not exist: {path}")
        return [(path, enabled) for path, enabled in scenes if path in known]

    def _first_build_scene(self) -> str:
        enabled = self.enabled_contexts()
        scenes = enabled or [path for path, _ in self._build_scenes]
        return scenes[0] if scenes else ""
