"""FastMCP server exposing missing reference scans of a project."""

from mcp.server.fastmcp import FastMCP

from ..cli.config import Config
from ..utils.logging_config import setup_logging
from .scan_tools import focus_object as focus_object_impl
from .scan_tools import run_scan
from .shared_resources import initialize_shared_resources

# Setup logging for MCP (silent mode - ERROR level only)
setup_logging(verbose=False)


async def scan_scene(scene: str = "", max_response_length: int = 0) -> str:
    """
    Find missing components and dangling object references in one scene.

    Args:
        scene: Scene document path to open first (empty scans the currently open scene)
        max_response_length: Token limit for the response (0 uses the server default)

    Returns:
        Markdown table of findings, or an explicit "No missing references found" line
    """
    return run_scan("scene", scene=scene, max_response_length=max_response_length)


async def scan_all_scenes(max_response_length: int = 0) -> str:
    """
    Find missing references in every enabled scene, in build order.

    Args:
        max_response_length: Token limit for the response (0 uses the server default)

    Returns:
        One markdown section per scene
    """
    return run_scan("all-scenes", max_response_length=max_response_length)


async def scan_assets(path_prefix: str = "", max_response_length: int = 0) -> str:
    """
    Find missing references in asset documents whose path starts with path_prefix.

    Args:
        path_prefix: Project relative prefix, e.g. "Assets/Prefabs/" (empty uses the configured prefix)
        max_response_length: Token limit for the response (0 uses the server default)

    Returns:
        Markdown table of findings under the "Project" context
    """
    return run_scan("assets", path_prefix=path_prefix, max_response_length=max_response_length)


async def focus_object(context: str, full_path: str) -> str:
    """
    Bring an object from a previous finding into view.

    Args:
        context: Context of the finding (scene path or "Project")
        full_path: Full hierarchy path of the object, e.g. "Level/Enemies/Orc"

    Returns:
        Description of the focused object and its components
    """
    return focus_object_impl(context, full_path)


TOOLS = [scan_scene, scan_all_scenes, scan_assets, focus_object]


def create_server(name: str = "Missing References") -> FastMCP:
    """Create a FastMCP server with every scan tool registered."""
    mcp = FastMCP(name)
    for tool in TOOLS:
        mcp.tool()(tool)
    return mcp


def start_server(config: Config):
    """Open the project and start the MCP server."""
    initialize_shared_resources(config)
    create_server(config.mcp_server_name).run()


if __name__ == "__main__":
    start_server(Config())
