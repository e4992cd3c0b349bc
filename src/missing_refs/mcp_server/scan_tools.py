"""Tool implementations for the MCP server."""

import logging

from ..core.data_classes import ResultReason, ScanResult
from ..core.errors import MissingReferencesError
from .response_assembler import ResponseAssembler
from .shared_resources import get_shared_resources

logger = logging.getLogger(__name__)

NOT_INITIALIZED = """Error: Server not properly initialized.

The MCP server needs to be started with 'missing-refs serve' so the project can be opened.

---
Status: not initialized"""


def run_scan(target: str, scene: str = "", path_prefix: str = "", max_response_length: int = 0) -> str:
    """
    Run one of the finder's scans and return a markdown report.

    Args:
        target: "scene", "all-scenes" or "assets"
        scene: Scene to open before a "scene" scan (empty keeps the current scene)
        path_prefix: Asset prefix for an "assets" scan (empty uses the configured prefix)
        max_response_length: Token budget (0 uses the configured budget)
    """
    resources = get_shared_resources()
    if not resources.is_ready():
        return NOT_INITIALIZED

    finder = resources.finder
    config = resources.config
    try:
        if target == "scene":
            if scene:
                finder.host.open_context(scene)
            finder.scan_current_context()
        elif target == "all-scenes":
            finder.scan_all_contexts()
        elif target == "assets":
            finder.scan_asset_collection(path_prefix or config.asset_path_prefix)
        else:
            return f"Error: unknown scan target '{target}'"
    except MissingReferencesError as e:
        logger.error(f"Scan failed: {e}")
        return f"Error: scan failed.\n\nTechnical details: {e}"
    finally:
        scans = resources.take_scans()

    assembler = ResponseAssembler()
    return assembler.assemble_response(scans, max_response_length or config.mcp_max_response_tokens)


def focus_object(context: str, full_path: str) -> str:
    """Open the object's scene when needed and describe the object."""
    resources = get_shared_resources()
    if not resources.is_ready():
        return NOT_INITIALIZED

    # Focus only needs identity; the reason is not used by the host
    result = ScanResult(
        object_name=full_path.rsplit("/", 1)[-1],
        full_path=full_path,
        context=context,
        reason=ResultReason.DANGLING_REFERENCE,
    )
    try:
        obj = resources.finder.host.focus(result)
    except MissingReferencesError as e:
        return f"Error: {e}"

    lines = [f"Focused `{full_path}` in `{context}`", ""]
    lines.append(f"- Source: {obj.source or '-'}")
    lines.append(f"- Children: {len(obj.children)}")
    lines.append("- Components:")
    for component in obj.components:
        state = "missing" if component.missing else "resolved"
        lines.append(f"  - {component.type_name or '<unknown>'} ({state})")
    return "\n".join(lines)
