"""Formatting of scan results and the display collaborators built on it."""

import json
import sys
from collections import Counter
from typing import Dict, List, TextIO, Tuple

from ..core.data_classes import ResultReason, ScanResult

OUTPUT_FORMATS = ("text", "json", "markdown")


class ReportFormatter:
    """Renders the results of one scan as text, JSON or markdown."""

    def format(self, context: str, results: List[ScanResult], output_format: str = "text") -> str:
        if output_format == "json":
            return self.format_json(context, results)
        elif output_format == "markdown":
            return self.format_markdown(context, results)
        elif output_format == "text":
            return self.format_text(context, results)
        raise ValueError(f"Unknown output format: {output_format}")

    def format_text(self, context: str, results: List[ScanResult]) -> str:
        if not results:
            return self.format_no_results(context)

        lines = [f"Missing references in [{context}]: {self._summary(results)}"]
        for result in results:
            lines.append(f"  {self.describe(result)}")
        return "\n".join(lines)

    def format_json(self, context: str, results: List[ScanResult]) -> str:
        counts = Counter(result.reason.value for result in results)
        payload = {
            "context": context,
            "ok": True,
            "total": len(results),
            "counts": {reason.value: counts.get(reason.value, 0) for reason in ResultReason},
            "results": [result.to_dict() for result in results],
        }
        return json.dumps(payload, indent=2)

    def format_markdown(self, context: str, results: List[ScanResult]) -> str:
        if not results:
            return self.format_no_results(context)

        parts = self.markdown_header(context, results)
        for i, result in enumerate(results, 1):
            parts.append(self.markdown_row(i, result))
        return "\n".join(parts)

    def markdown_header(self, context: str, results: List[ScanResult]) -> List[str]:
        """Title, summary and table head of a markdown report, one list item per line."""
        return [
            f"## Missing references in `{context}`",
            "",
            self._summary(results),
            "",
            "| # | Object | Reason | Component | Property |",
            "|---|---|---|---|---|",
        ]

    def markdown_row(self, index: int, result: ScanResult) -> str:
        return (
            f"| {index} | `{result.full_path}` | {result.reason.value} | "
            f"{result.component_name or '-'} | {result.display_field_name or '-'} |"
        )

    def format_no_results(self, context: str) -> str:
        return f"No missing references found in [{context}]."

    def describe(self, result: ScanResult) -> str:
        """One-line description of a single finding."""
        component = result.component_name or "<unknown>"
        if result.reason == ResultReason.MISSING_COMPONENT:
            return f"{result.full_path}: missing component ({component})"
        return f"{result.full_path}: {component}.{result.display_field_name} points to a deleted object"

    def _summary(self, results: List[ScanResult]) -> str:
        missing = sum(1 for r in results if r.reason == ResultReason.MISSING_COMPONENT)
        dangling = len(results) - missing
        return f"{missing} missing components, {dangling} dangling references"


class ConsoleDisplay:
    """Writes each scan's report to a stream."""

    def __init__(self, stream: TextIO = None, output_format: str = "text"):
        if output_format not in OUTPUT_FORMATS:
            raise ValueError(f"Unknown output format: {output_format}")
        self.stream = stream or sys.stdout
        self.output_format = output_format
        self.formatter = ReportFormatter()

    def show(self, context: str, results: List[ScanResult]) -> None:
        self.stream.write(self.formatter.format(context, results, self.output_format) + "\n")
        self.stream.flush()


class CollectingDisplay:
    """Keeps every shown scan in memory, in order."""

    def __init__(self):
        self.scans: List[Tuple[str, List[ScanResult]]] = []

    def show(self, context: str, results: List[ScanResult]) -> None:
        self.scans.append((context, list(results)))

    def by_context(self) -> Dict[str, List[ScanResult]]:
        grouped: Dict[str, List[ScanResult]] = {}
        for context, results in self.scans:
            grouped.setdefault(context, []).extend(results)
        return grouped
