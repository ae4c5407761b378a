"""Shared fixtures for SoulZip tests."""

import logging

import pytest

from soulzip.evaluator import StaticEvaluator


@pytest.fixture
def static_evaluator():
    """Factory for a StaticEvaluator with canned responses."""
    def _make(responses=None, default=None):
        return StaticEvaluator(responses=responses, default=default)
    return _make


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers bound to captured streams between tests."""
    yield
    logging.getLogger().handlers.clear()
