"""Display collaborators for scan results."""

from .report_formatter import OUTPUT_FORMATS, CollectingDisplay, ConsoleDisplay, ReportFormatter

__all__ = ["OUTPUT_FORMATS", "CollectingDisplay", "ConsoleDisplay", "ReportFormatter"]
