"""Loading of scene and asset documents from JSON or YAML files."""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Union

import yaml

FILE_TYPES = {".json": "json", ".yaml": "yaml", ".yml": "yaml"}


@dataclass
class ParseResult:
    """Outcome of loading one document: its payload or why it could not be used."""

    success: bool
    data: Dict[str, Any] = None
    error: str = None
    file_type: str = None  # 'json' or 'yaml'


class DocumentParser:
    """
    Loads a document and checks its outline.

    A usable document is empty or a mapping whose ``objects`` entry, when
    present, is a list. Object and component entries are validated later by
    the host that builds scene objects from them.
    """

    def parse_file(self, file_path: Union[str, Path]) -> ParseResult:
        path = Path(file_path)
        file_type = FILE_TYPES.get(path.suffix.lower())
        if file_type is None:
            return ParseResult(success=False, error=f"Unsupported file extension: {path.suffix}")

        if not path.is_file():
            return ParseResult(success=False, error=f"File not found: {path}", file_type=file_type)

        try:
            content = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            return ParseResult(success=False, error=f"Unable to read file as UTF-8: {e}", file_type=file_type)
        except OSError as e:
            return ParseResult(success=False, error=f"Error reading file: {e}", file_type=file_type)

        try:
            data = json.loads(content) if file_type == "json" else yaml.safe_load(content)
        except json.JSONDecodeError as e:
            return ParseResult(success=False, error=f"Invalid JSON format: {e}", file_type=file_type)
        except yaml.YAMLError as e:
            return ParseResult(success=False, error=f"Invalid YAML format: {e}", file_type=file_type)

        return self._check_outline(data, file_type)

    def _check_outline(self, data: Any, file_type: str) -> ParseResult:
        if data is None:
            return ParseResult(success=True, data={"objects": []}, file_type=file_type)
        if not isinstance(data, dict):
            return ParseResult(success=False, error="Document root must be a mapping", file_type=file_type)

        objects = data.get("objects")
        if objects is None:
            data["objects"] = []
        elif not isinstance(objects, list):
            return ParseResult(success=False, error="'objects' must be a list", file_type=file_type)
        return ParseResult(success=True, data=data, file_type=file_type)
