"""Response assembler for formatting scan reports within a token budget."""

from typing import List, Tuple

import tiktoken

from ..core.data_classes import ScanResult
from ..reporting.report_formatter import ReportFormatter

OMITTED_NOTE = "*... {count} more findings omitted to fit the response limit*"


class ResponseAssembler:
    """Assembles per-context reports into one markdown response with a length limit."""

    def __init__(self, encoding_name: str = "cl100k_base"):
        """Initialize with token encoding for length calculation."""
        self.encoding = tiktoken.get_encoding(encoding_name)
        self.formatter = ReportFormatter()

    def assemble_response(self, scans: List[Tuple[str, List[ScanResult]]], max_response_length: int = 4000) -> str:
        """
        Render each scan as a markdown section, adding rows until the budget is used up.

        Every row is tokenized once and the running total is kept, so the cost
        is linear in the number of findings.

        Args:
            scans: (context, results) pairs in the order they were produced
            max_response_length: Maximum response length in tokens

        Returns:
            Markdown report followed by a footer with totals
        """
        total = sum(len(results) for _, results in scans)
        footer = self._build_footer(scans, total)
        # Reserve space for footer and a worst-case truncation note
        available = (
            max_response_length
            - self._count_tokens(footer)
            - self._count_tokens(OMITTED_NOTE.format(count=total))
        )

        parts: List[str] = []
        used = 0
        included = 0
        truncated = False

        for context, results in scans:
            # One separator token between sections
            separator = 1 if parts else 0

            if not results:
                section = self.formatter.format_no_results(context)
                cost = self._count_tokens(section) + separator
                if used + cost > available:
                    truncated = True
                    break
                parts.append(section)
                used += cost
                continue

            lines = self.formatter.markdown_header(context, results)
            cost = self._count_tokens("\n".join(lines)) + separator
            rows = 0
            for i, result in enumerate(results, 1):
                row = self.formatter.markdown_row(i, result)
                row_cost = self._count_tokens(row) + 1
                if used + cost + row_cost > available:
                    truncated = True
                    break
                lines.append(row)
                cost += row_cost
                rows += 1

            # A table head without rows says nothing
            if rows:
                parts.append("\n".join(lines))
                used += cost
                included += rows
            if truncated:
                break

        if truncated:
            parts.append(OMITTED_NOTE.format(count=total - included))

        parts.append(footer)
        return "\n\n".join(parts)

    def _build_footer(self, scans: List[Tuple[str, List[ScanResult]]], total: int) -> str:
        contexts = ", ".join(context for context, _ in scans) or "none"
        return f"---\nScanned: {contexts}\nFindings: {total}"

    def _count_tokens(self, text: str) -> int:
        return len(self.encoding.encode(text))
