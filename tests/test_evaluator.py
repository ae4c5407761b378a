"""
Tests for the calculator collaborator.

No real process is started: subprocess.run is patched.
"""

import subprocess

import pytest

from soulzip.domain import (
    DecodingError,
    EvaluatorError,
    EvaluatorExitError,
    EvaluatorSpawnError,
)
from soulzip.evaluator import (
    DEFAULT_SOULVER_COMMAND,
    SOULVER_COMMAND_ENV,
    TIMEOUT_ENV,
    SoulverEvaluator,
    StaticEvaluator,
    resolve_command,
    resolve_timeout,
    strip_final_newline,
)


def fake_run(stdout=b"", stderr=b"", returncode=0, calls=None):
    """Build a stand-in for subprocess.run."""
    def _run(args, **kwargs):
        if calls is not None:
            calls.append((args, kwargs))
        return subprocess.CompletedProcess(args, returncode, stdout, stderr)
    return _run


# =============================================================================
# CONFIGURATION TESTS
# =============================================================================

class TestConfiguration:
    """Test command and timeout resolution."""
    
    def test_default_command(self, monkeypatch):
        """Without overrides the command is 'soulver'."""
        monkeypatch.delenv(SOULVER_COMMAND_ENV, raising=False)
        
        assert resolve_command() == DEFAULT_SOULVER_COMMAND
    
    def test_env_command(self, monkeypatch):
        """The environment overrides the default."""
        monkeypatch.setenv(SOULVER_COMMAND_ENV, "/opt/bin/soulver")
        
        assert resolve_command() == "/opt/bin/soulver"
    
    def test_explicit_command_wins(self, monkeypatch):
        """An explicit command beats the environment."""
        monkeypatch.setenv(SOULVER_COMMAND_ENV, "/opt/bin/soulver")
        
        assert resolve_command("./soulver") == "./soulver"
    
    def test_no_timeout_by_default(self, monkeypatch):
        """Unset timeout means wait forever."""
        monkeypatch.delenv(TIMEOUT_ENV, raising=False)
        
        assert resolve_timeout() is None
    
    def test_env_timeout(self, monkeypatch):
        """Timeout is read as seconds."""
        monkeypatch.setenv(TIMEOUT_ENV, "2.5")
        
        assert resolve_timeout() == 2.5
    
    def test_bad_env_timeout(self, monkeypatch):
        """A non-numeric timeout is rejected."""
        monkeypatch.setenv(TIMEOUT_ENV, "soon")
        
        with pytest.raises(ValueError, match=TIMEOUT_ENV):
            SoulverEvaluator()
    
    def test_strip_final_newline_removes_one(self):
        """Only a single trailing newline is removed."""
        assert strip_final_newline("1\n\n") == "1\n"
        assert strip_final_newline("1") == "1"
        assert strip_final_newline("") == ""


# =============================================================================
# SUBPROCESS TESTS
# =============================================================================

class TestSoulverEvaluator:
    """Test the subprocess-backed evaluator."""
    
    def test_passes_document_as_argument(self, monkeypatch):
        """The document is a single argument after the command."""
        calls = []
        monkeypatch.setattr(subprocess, "run", fake_run(b"1\n3\n", calls=calls))
        
        output = SoulverEvaluator(command="soulver").evaluate("Foo = 1\nFoo + 2")
        
        assert output == "1\n3"
        args, kwargs = calls[0]
        assert args == ["soulver", "Foo = 1\nFoo + 2"]
        assert kwargs["capture_output"] is True
    
    def test_keeps_inner_blank_lines(self, monkeypatch):
        """Only the final newline is stripped."""
        monkeypatch.setattr(subprocess, "run", fake_run(b"1\n\n\n"))
        
        assert SoulverEvaluator().evaluate("1\n\n\n") == "1\n\n"
    
    def test_decodes_utf8(self, monkeypatch):
        """Multi-byte output decodes to text."""
        monkeypatch.setattr(subprocess, "run", fake_run("£1.00\n".encode("utf-8")))
        
        assert SoulverEvaluator().evaluate("Bar = £1") == "£1.00"
    
    def test_non_zero_exit(self, monkeypatch):
        """A failing calculator raises and its output is ignored."""
        monkeypatch.setattr(
            subprocess, "run",
            fake_run(b"partial\n", b"parse error", returncode=1),
        )
        
        with pytest.raises(EvaluatorExitError) as exc_info:
            SoulverEvaluator().evaluate("1 +")
        
        assert exc_info.value.returncode == 1
        assert exc_info.value.stderr == "parse error"
    
    def test_missing_executable(self, monkeypatch):
        """A command that cannot start raises EvaluatorSpawnError."""
        def _run(args, **kwargs):
            raise FileNotFoundError(2, "No such file or directory", args[0])
        monkeypatch.setattr(subprocess, "run", _run)
        
        with pytest.raises(EvaluatorSpawnError) as exc_info:
            SoulverEvaluator(command="no-such-soulver").evaluate("1")
        
        assert exc_info.value.command == "no-such-soulver"
    
    def test_null_byte_in_document(self, monkeypatch):
        """A document that cannot be passed as an argument is a spawn error."""
        def _run(args, **kwargs):
            raise ValueError("embedded null byte")
        monkeypatch.setattr(subprocess, "run", _run)

        with pytest.raises(EvaluatorError) as exc_info:
            SoulverEvaluator(command="soulver").evaluate("1\x002")

        assert isinstance(exc_info.value, EvaluatorSpawnError)
        assert "embedded null byte" in str(exc_info.value)

    def test_invalid_utf8(self, monkeypatch):
        """Undecodable output raises DecodingError."""
        monkeypatch.setattr(subprocess, "run", fake_run(b"\xff\xfe\n"))
        
        with pytest.raises(DecodingError):
            SoulverEvaluator().evaluate("1")
    
    def test_timeout(self, monkeypatch):
        """An expired timeout is reported as an exit error."""
        def _run(args, **kwargs):
            raise subprocess.TimeoutExpired(args, kwargs["timeout"])
        monkeypatch.setattr(subprocess, "run", _run)
        
        with pytest.raises(EvaluatorExitError) as exc_info:
            SoulverEvaluator(timeout=0.1).evaluate("1")
        
        assert exc_info.value.returncode is None


# =============================================================================
# STATIC EVALUATOR TESTS
# =============================================================================

class TestStaticEvaluator:
    """Test the in-memory evaluator."""
    
    def test_canned_response(self):
        """Known documents return their canned output."""
        evaluator = StaticEvaluator({"1": "1"})
        
        assert evaluator.evaluate("1") == "1"
        assert evaluator.calls == ["1"]
    
    def test_default_response(self):
        """Unknown documents fall back to the default."""
        assert StaticEvaluator(default="").evaluate("anything") == ""
    
    def test_unknown_document_fails(self):
        """Without a default, unknown documents fail like the calculator."""
        with pytest.raises(EvaluatorExitError):
            StaticEvaluator().evaluate("1")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
