"""
Leading-line inference for calculator output.

The calculator swallows blank and comment lines at the top of the input
instead of emitting an empty result for each. This module counts those
lines and puts the missing empty lines back.

The count is a heuristic: it is correct exactly when the calculator drops
the lines matched by `is_blank_or_comment` and nothing else. If a
calculator release changes what it drops, only `is_blank_or_comment`
needs revision.
"""

from __future__ import annotations

from typing import Iterable

import structlog

from .domain import AlignedOutput, InputDocument


logger = structlog.get_logger(__name__)


# =============================================================================
# CONFIGURATION CONSTANTS
# =============================================================================

COMMENT_PREFIXES = ("#", "//")


# =============================================================================
# INFERENCE
# =============================================================================

def is_blank_or_comment(line: str) -> bool:
    """True if the line is empty or starts with a comment prefix."""
    return line == "" or line.startswith(COMMENT_PREFIXES)


def count_leading_blank_or_comment(lines: Iterable[str]) -> int:
    """
    Count consecutive blank/comment lines at the start of the document.
    
    Stops at the first line that is neither, or at the end of the lines.
    """
    count = 0
    for line in lines:
        if not is_blank_or_comment(line):
            break
        count += 1
    return count


def repair(raw_output: str, leading_count: int) -> str:
    """
    Prepend `leading_count` empty lines to raw calculator output.
    
    Raises:
        ValueError: If leading_count is negative
    """
    if leading_count < 0:
        raise ValueError(f"leading_count must be >= 0, got {leading_count}")
    if leading_count == 0:
        return raw_output
    return "\n" * leading_count + raw_output


def realign(document: InputDocument, raw_output: str) -> AlignedOutput:
    """Restore the leading lines the calculator dropped for this document."""
    leading_count = count_leading_blank_or_comment(document.lines)
    
    logger.debug(
        "leading_lines_inferred",
        leading_count=leading_count,
        input_lines=len(document),
    )
    
    return AlignedOutput(
        text=repair(raw_output, leading_count),
        leading_count=leading_count,
    )
