"""Entry points for finding missing references in scenes and assets."""

import logging
from typing import List, Optional

from .core.data_classes import ScannerConfig, ScanResult
from .core.errors import HostError
from .core.reference_scanner import ReferenceScanner
from .hosts.base import HostEnvironment
from .hosts.file_host import PROJECT_CONTEXT

logger = logging.getLogger(__name__)

DEFAULT_ASSET_PREFIX = "Assets/"


class MissingReferencesFinder:
    """Selects what to scan on a host, runs the scanner and hands results to a display."""

    def __init__(self, host: HostEnvironment, display=None, config: ScannerConfig = None):
        """
        Args:
            host: Host environment providing objects and field introspection
            display: Optional collaborator with ``show(context, results)``
            config: Scanner configuration
        """
        self.host = host
        self.display = display
        self.scanner = ReferenceScanner(host.introspector, config)

    def scan_current_context(self) -> List[ScanResult]:
        """Find all missing references in the currently open scene."""
        context = self.host.current_context()
        return self._run(context, self.host.scene_objects())

    def scan_all_contexts(self) -> List[ScanResult]:
        """
        Find missing references in every enabled scene.

        Scenes are opened one by one in build order; each scene's results are
        shown separately and the concatenation is returned. The scene that was
        open before the call is reopened afterwards.
        """
        previous = self._current_or_none()
        results: List[ScanResult] = []
        try:
            for context in self.host.enabled_contexts():
                self.host.open_context(context)
                results.extend(self.scan_current_context())
        finally:
            if previous is not None:
                self.host.open_context(previous)
        return results

    def scan_asset_collection(self, path_prefix: str = DEFAULT_ASSET_PREFIX) -> List[ScanResult]:
        """Find missing references in assets whose path starts with ``path_prefix``."""
        return self._run(PROJECT_CONTEXT, self.host.asset_objects(path_prefix))

    def _run(self, context: str, roots) -> List[ScanResult]:
        results = self.scanner.scan(context, roots)
        if self.display is not None:
            self.display.show(context, results)
        return results

    def _current_or_none(self) -> Optional[str]:
        try:
            return self.host.current_context()
        except HostError:
            logger.debug("No scene open before scanning all scenes")
            return None
