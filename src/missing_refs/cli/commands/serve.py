"""Serve command - starts the MCP server over the configured project."""

import logging
import sys
from pathlib import Path

from ..config import Config

logger = logging.getLogger(__name__)


def serve_command(config: Config, verbose: bool = False):
    """Start MCP server for the configured project directory."""
    if verbose:
        logger.info(f"🚀 Starting {config.mcp_server_name}...")
        logger.info(f"📁 Project: {config.project_dir}")

    if not Path(config.project_dir).is_dir():
        logger.error(f"Project directory not found at {config.project_dir}")
        logger.error("Set PROJECT_DIR or pass --config with a .env file")
        sys.exit(1)

    try:
        from ...mcp_server.server import start_server

        start_server(config)
    except ImportError as e:
        logger.error(f"Failed to import MCP server: {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Failed to start MCP server: {e}")
        sys.exit(1)
