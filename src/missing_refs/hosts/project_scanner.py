"""Directory Scanner for scene and asset documents."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List

logger = logging.getLogger(__name__)


@dataclass
class ProjectScannerConfig:
    """Configuration for the project directory scanner."""

    skip_hidden_files: bool = True
    supported_extensions: List[str] = None

    def __post_init__(self):
        if self.supported_extensions is None:
            self.supported_extensions = [".yaml", ".yml", ".json"]


class ProjectScanner:
    """Scans a project directory for scene and asset documents."""

    def __init__(self, config: ProjectScannerConfig = None):
        self.config = config or ProjectScannerConfig()

    def scan_for_documents(self, root_dir: str) -> Iterator[str]:
        """
        Recursively scan for documents, in sorted order.

        Args:
            root_dir: Project directory to scan

        Yields:
            Project relative paths using forward slashes
        """
        root_path = Path(root_dir)

        if not root_path.exists():
            raise FileNotFoundError(f"Directory not found: {root_dir}")

        if not root_path.is_dir():
            raise NotADirectoryError(f"Path is not a directory: {root_dir}")

        for file_path in self._walk_directory(root_path):
            yield file_path.relative_to(root_path).as_posix()

    def _walk_directory(self, path: Path) -> Iterator[Path]:
        """Recursively walk directory tree and yield matching files."""
        try:
            items = sorted(path.iterdir(), key=lambda item: item.name)
        except PermissionError:
            logger.warning(f"Skipping unreadable directory: {path}")
            return

        for item in items:
            if self.config.skip_hidden_files and item.name.startswith("."):
                continue

            if item.is_file():
                if self._is_document(item):
                    yield item
            elif item.is_dir():
                yield from self._walk_directory(item)

    def _is_document(self, file_path: Path) -> bool:
        return file_path.suffix.lower() in self.config.supported_extensions
