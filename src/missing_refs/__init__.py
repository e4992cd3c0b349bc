"""Missing references finder for scene and asset object graphs."""

__version__ = "0.1.0"
