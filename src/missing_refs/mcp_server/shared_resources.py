"""Shared resources for MCP server - holds the project host and finder."""

from typing import Optional

from ..cli.commands.scan import create_finder
from ..cli.config import Config
from ..finder import MissingReferencesFinder
from ..reporting.report_formatter import CollectingDisplay


class SharedResources:
    """Manages the project opened at server start."""

    def __init__(self):
        self.finder: Optional[MissingReferencesFinder] = None
        self.display: Optional[CollectingDisplay] = None
        self.config: Optional[Config] = None

    def load_from_config(self, config: Config):
        """Open the configured project."""
        self.config = config
        self.display = CollectingDisplay()
        self.finder = create_finder(config, self.display)

    def is_ready(self) -> bool:
        """Check if the project is open."""
        return self.finder is not None and self.config is not None

    def take_scans(self):
        """Return and clear the scans shown since the last call."""
        scans = list(self.display.scans)
        self.display.scans.clear()
        return scans


# Global shared resources instance
_shared_resources = SharedResources()


def get_shared_resources() -> SharedResources:
    """Get the global shared resources instance."""
    return _shared_resources


def initialize_shared_resources(config: Config):
    """Initialize shared resources from configuration."""
    _shared_resources.load_from_config(config)
