"""
Two-column rendering of input lines next to their results.

Each row is the input line padded to the width of the longest input line,
then " |", then " <result>" when the result is non-empty:

    # Foo |
    1     | 1

Widths are counted in code points, so "£" counts as one column.
"""

from __future__ import annotations

from typing import Sequence

import structlog

from .domain import AlignedOutput, InputDocument, MisalignmentError, ZippedDocument


logger = structlog.get_logger(__name__)

SEPARATOR = "|"


def column_width(lines: Sequence[str]) -> int:
    """Length of the longest line in code points (0 for no lines)."""
    return max((len(line) for line in lines), default=0)


def render_row(input_line: str, output_line: str, width: int) -> str:
    """Render one report row."""
    padded = input_line.ljust(width)
    if not output_line:
        return f"{padded} {SEPARATOR}"
    return f"{padded} {SEPARATOR} {output_line}"


def zip_rows(input_lines: Sequence[str], output_lines: Sequence[str]) -> ZippedDocument:
    """
    Pair input lines with output lines into a report.
    
    Raises:
        MisalignmentError: If the two sequences differ in length
    """
    if len(input_lines) != len(output_lines):
        logger.debug(
            "misalignment_detected",
            input_lines=len(input_lines),
            output_lines=len(output_lines),
        )
        raise MisalignmentError(len(input_lines), len(output_lines))
    
    width = column_width(input_lines)
    rows = [
        render_row(input_line, output_line, width)
        for input_line, output_line in zip(input_lines, output_lines)
    ]
    return ZippedDocument.from_rows(rows, width)


def zip_lines(input_lines: Sequence[str], output_lines: Sequence[str]) -> str:
    """Render the report as text, rows joined by newlines."""
    return zip_rows(input_lines, output_lines).text


def zip_documents(document: InputDocument, output: AlignedOutput) -> ZippedDocument:
    """Typed wrapper over `zip_rows`."""
    return zip_rows(document.lines, output.lines)
