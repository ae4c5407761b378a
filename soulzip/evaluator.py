"""
Calculator Collaborator for SoulZip.

The calculator is an opaque command: it receives the whole document as a
single argument and prints one result per line on stdout. Everything in
this package talks to it through the `Evaluator` interface so that tests
can substitute `StaticEvaluator` and never spawn a process.

Configuration (environment):
    SOULZIP_SOULVER  — calculator executable (default: "soulver")
    SOULZIP_TIMEOUT  — seconds before the calculator is abandoned
                       (default: no timeout)
"""

from __future__ import annotations

import os
import subprocess
from abc import ABC, abstractmethod
from typing import Mapping, Optional

import structlog

from .domain import DecodingError, EvaluatorExitError, EvaluatorSpawnError


logger = structlog.get_logger(__name__)


# =============================================================================
# CONFIGURATION CONSTANTS
# =============================================================================

DEFAULT_SOULVER_COMMAND = "soulver"
SOULVER_COMMAND_ENV = "SOULZIP_SOULVER"
TIMEOUT_ENV = "SOULZIP_TIMEOUT"


def resolve_command(command: Optional[str] = None) -> str:
    """Explicit command, then environment, then the default."""
    if command:
        return command
    return os.environ.get(SOULVER_COMMAND_ENV) or DEFAULT_SOULVER_COMMAND


def resolve_timeout(timeout: Optional[float] = None) -> Optional[float]:
    """
    Explicit timeout, then environment, then no timeout.
    
    Raises:
        ValueError: If the environment value is not a number
    """
    if timeout is not None:
        return timeout
    
    value = os.environ.get(TIMEOUT_ENV, "").strip()
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{TIMEOUT_ENV} must be a number of seconds, got {value!r}")


def strip_final_newline(text: str) -> str:
    """Remove exactly one trailing newline, if present."""
    return text[:-1] if text.endswith("\n") else text


# =============================================================================
# INTERFACE
# =============================================================================

class Evaluator(ABC):
    """
    Abstract interface for the calculator.
    
    Implementations return the calculator's output with its final newline
    stripped, and raise an EvaluatorError subclass on failure.
    """
    
    @abstractmethod
    def evaluate(self, text: str) -> str:
        """
        Evaluate a document of expressions.
        
        Args:
            text: Expressions separated by newlines
            
        Returns:
            Raw calculator output without the trailing newline
            
        Raises:
            EvaluatorError: If the calculator fails
        """
        pass


# =============================================================================
# SUBPROCESS IMPLEMENTATION
# =============================================================================

class SoulverEvaluator(Evaluator):
    """Runs the soulver command once per document."""
    
    def __init__(
        self,
        command: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.command = resolve_command(command)
        self.timeout = resolve_timeout(timeout)
    
    def evaluate(self, text: str) -> str:
        logger.debug(
            "evaluator_started",
            command=self.command,
            input_chars=len(text),
        )
        
        try:
            completed = subprocess.run(
                [self.command, text],
                capture_output=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            logger.debug("evaluator_timeout", command=self.command, timeout=self.timeout)
            raise EvaluatorExitError(None, _decode_stderr(e.stderr)) from e
        except (OSError, ValueError) as e:
            logger.debug("evaluator_spawn_failed", command=self.command, reason=str(e))
            raise EvaluatorSpawnError(self.command, str(e)) from e
        
        if completed.returncode != 0:
            stderr = _decode_stderr(completed.stderr)
            logger.debug(
                "evaluator_failed",
                command=self.command,
                returncode=completed.returncode,
                stderr=stderr,
            )
            raise EvaluatorExitError(completed.returncode, stderr)
        
        try:
            stdout = completed.stdout.decode("utf-8")
        except UnicodeDecodeError as e:
            logger.debug("evaluator_output_undecodable", command=self.command, reason=str(e))
            raise DecodingError(f"calculator output is not valid UTF-8: {e}") from e
        
        output = strip_final_newline(stdout)
        logger.debug("evaluator_finished", output_chars=len(output))
        return output


def _decode_stderr(stderr: Optional[bytes]) -> str:
    """Best-effort stderr text for error messages."""
    if not stderr:
        return ""
    return stderr.decode("utf-8", errors="replace")


# =============================================================================
# IN-MEMORY IMPLEMENTATION
# =============================================================================

class StaticEvaluator(Evaluator):
    """
    Returns canned output for known documents.
    
    Canned outputs are given as the calculator would return them, final
    newline already stripped. Used for tests and dry runs. Unknown
    documents return `default` when it is set, otherwise raise
    EvaluatorExitError like a failing calculator.
    """
    
    def __init__(
        self,
        responses: Optional[Mapping[str, str]] = None,
        default: Optional[str] = None,
    ):
        self.responses = dict(responses or {})
        self.default = default
        self.calls: list[str] = []
    
    def evaluate(self, text: str) -> str:
        self.calls.append(text)
        if text in self.responses:
            return self.responses[text]
        if self.default is not None:
            return self.default
        raise EvaluatorExitError(1, f"no canned output for {text!r}")
