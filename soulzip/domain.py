"""
Core Domain Objects for SoulZip.

Domain Objects:
    InputDocument   — The user's text, trimmed and split into lines
    AlignedOutput   — Calculator output with dropped leading lines restored
    ZippedDocument  — The two-column report

Errors:
    SoulZipError          — Base for every failure raised by this package
    EvaluatorSpawnError   — The calculator could not be started
    EvaluatorExitError    — The calculator exited unsuccessfully
    DecodingError         — The calculator produced non UTF-8 output
    MisalignmentError     — Input and output line counts disagree
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence


# =============================================================================
# ERRORS
# =============================================================================

class SoulZipError(Exception):
    """Base exception for all SoulZip failures."""
    pass


class EvaluatorError(SoulZipError):
    """Base exception for calculator failures."""
    pass


class EvaluatorSpawnError(EvaluatorError):
    """The calculator executable could not be started."""
    
    def __init__(self, command: str, reason: str):
        self.command = command
        self.reason = reason
        super().__init__(f"failed to start '{command}': {reason}")


class EvaluatorExitError(EvaluatorError):
    """The calculator exited with a non-zero status."""
    
    def __init__(self, returncode: Optional[int], stderr: str = ""):
        self.returncode = returncode
        self.stderr = stderr
        if returncode is None:
            message = "calculator did not finish before the timeout"
        else:
            message = f"calculator exited with non-zero exit code {returncode}"
        if stderr.strip():
            message = f"{message}: {stderr.strip()}"
        super().__init__(message)


class DecodingError(EvaluatorError):
    """The calculator output is not valid UTF-8."""
    pass


class MisalignmentError(SoulZipError):
    """Raised when realigned output does not have one line per input line."""
    
    def __init__(self, input_lines: int, output_lines: int):
        self.input_lines = input_lines
        self.output_lines = output_lines
        super().__init__(
            f"input has {input_lines} lines but output has {output_lines} lines"
        )


# =============================================================================
# LINE SPLITTING
# =============================================================================

def split_lines(text: str) -> list[str]:
    """
    Split text into lines.
    
    Lines are separated by "\\n" or "\\r\\n". A "\\r" not followed by "\\n"
    stays in the line. A final terminator does not produce an extra empty
    line, so "" has no lines and "a\\n" has one. Unlike str.splitlines(),
    form feeds and other Unicode separators stay inside the line.
    """
    if not text:
        return []

    lines = text.split("\n")
    last = lines.pop()

    lines = [line[:-1] if line.endswith("\r") else line for line in lines]
    if last:
        lines.append(last)
    return lines


def trim_document(text: str) -> str:
    """Strip trailing whitespace and newlines from the whole document."""
    return text.rstrip()


# =============================================================================
# DOCUMENTS
# =============================================================================

@dataclass(frozen=True)
class InputDocument:
    """
    The user's text as sent to the calculator.
    
    `text` is already trimmed; `lines` is derived from it and is what the
    report is built from.
    """
    text: str
    lines: tuple[str, ...]
    
    @classmethod
    def from_text(cls, raw: str) -> InputDocument:
        """Trim raw user text and split it into lines."""
        trimmed = trim_document(raw)
        return cls(text=trimmed, lines=tuple(split_lines(trimmed)))
    
    def __len__(self) -> int:
        return len(self.lines)


@dataclass(frozen=True)
class AlignedOutput:
    """
    Calculator output with the dropped leading lines put back.
    
    `leading_count` records how many empty lines were synthesized.
    """
    text: str
    leading_count: int = 0
    
    @property
    def lines(self) -> tuple[str, ...]:
        return tuple(split_lines(self.text))
    
    def __len__(self) -> int:
        return len(self.lines)


@dataclass(frozen=True)
class ZippedDocument:
    """The rendered two-column report."""
    rows: tuple[str, ...]
    width: int
    
    @property
    def text(self) -> str:
        return "\n".join(self.rows)
    
    @classmethod
    def from_rows(cls, rows: Sequence[str], width: int) -> ZippedDocument:
        return cls(rows=tuple(rows), width=width)
