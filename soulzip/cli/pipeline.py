"""
Pipeline Orchestrator for SoulZip.

Pipeline stages:
    1. Trim trailing whitespace from the document
    2. Evaluate it with the calculator
    3. Restore leading lines the calculator dropped
    4. Zip input and output into a report (zipped mode only)

Each run is independent: no retries, no caching, no persistence.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import structlog

from ..alignment import realign
from ..domain import AlignedOutput, InputDocument, ZippedDocument
from ..evaluator import Evaluator, SoulverEvaluator
from ..zipper import zip_documents


logger = structlog.get_logger(__name__)


# =============================================================================
# PIPELINE RESULT
# =============================================================================

@dataclass(frozen=True)
class CalculationResult:
    """
    Complete result of one calculation.
    
    `zipped` is None in plain mode.
    """
    document: InputDocument
    output: AlignedOutput
    zipped: Optional[ZippedDocument] = None
    
    @property
    def leading_count(self) -> int:
        return self.output.leading_count
    
    @property
    def text(self) -> str:
        """The text to show the user."""
        if self.zipped is not None:
            return self.zipped.text
        return self.output.text


# =============================================================================
# PIPELINE EXECUTION
# =============================================================================

def run_calculation(
    text: str,
    zip_output: bool = True,
    evaluator: Optional[Evaluator] = None,
) -> CalculationResult:
    """
    Run a document through the calculator and realign the result.
    
    Args:
        text: Raw user text
        zip_output: Render the two-column report instead of plain output
        evaluator: Calculator to use (defaults to SoulverEvaluator)
    
    Returns:
        CalculationResult with the aligned output and, if zipped, the report
    
    Raises:
        EvaluatorError: If the calculator fails
        MisalignmentError: If zipping finds mismatched line counts
    """
    if evaluator is None:
        evaluator = SoulverEvaluator()
    
    document = InputDocument.from_text(text)
    raw_output = evaluator.evaluate(document.text)
    output = realign(document, raw_output)
    
    zipped = zip_documents(document, output) if zip_output else None
    
    logger.debug(
        "calculation_finished",
        input_lines=len(document),
        leading_count=output.leading_count,
        zipped=zip_output,
    )
    
    return CalculationResult(document=document, output=output, zipped=zipped)


def run_plain(text: str, evaluator: Optional[Evaluator] = None) -> str:
    """Calculator output realigned with the input, one line per input line."""
    return run_calculation(text, zip_output=False, evaluator=evaluator).text


def run_zipped(text: str, evaluator: Optional[Evaluator] = None) -> str:
    """Input and calculator output side by side."""
    return run_calculation(text, zip_output=True, evaluator=evaluator).text
