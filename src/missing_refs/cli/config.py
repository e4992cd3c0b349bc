"""Configuration management for the missing references CLI and MCP server."""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


class Config:
    """Configuration loaded from .env file and environment."""

    def __init__(self, env_file: Optional[str] = None):
        """Load configuration from .env file."""
        if env_file:
            load_dotenv(env_file)
        else:
            # Load from the working directory's .env
            env_path = Path.cwd() / ".env"
            if env_path.exists():
                load_dotenv(env_path)

        # Project layout
        self.project_dir = os.getenv("PROJECT_DIR", ".")
        self.asset_path_prefix = os.getenv("ASSET_PATH_PREFIX", "Assets/")
        self.build_settings_path = os.getenv("BUILD_SETTINGS_PATH", "ProjectSettings/build_settings.yaml")
        self.document_extensions = [
            ext.strip() for ext in os.getenv("DOCUMENT_EXTENSIONS", ".yaml,.yml,.json").split(",") if ext.strip()
        ]
        self.skip_hidden_files = os.getenv("SKIP_HIDDEN_FILES", "true").lower() == "true"
        self.default_scene = os.getenv("DEFAULT_SCENE", "")

        # Scanning
        self.report_unknown_identity = os.getenv("REPORT_UNKNOWN_IDENTITY", "false").lower() == "true"

        # Output
        self.output_format = os.getenv("OUTPUT_FORMAT", "text")

        # MCP Server
        self.mcp_server_name = os.getenv("MCP_SERVER_NAME", "Missing References")
        self.mcp_max_response_tokens = int(os.getenv("MCP_MAX_RESPONSE_TOKENS", "4000"))

    def ensure_project_dir(self):
        """Fail early when the configured project directory is missing."""
        if not Path(self.project_dir).is_dir():
            raise FileNotFoundError(f"Project directory not found: {self.project_dir}")
