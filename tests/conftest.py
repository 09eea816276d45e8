"""Shared fixtures for rulecheck tests."""

import pytest

from rulecheck.defaults import create_default_registry
from rulecheck.evaluator import Evaluator


@pytest.fixture
def registry():
    """Isolated registry with the built-in rules."""
    return create_default_registry()


@pytest.fixture
def evaluator(registry):
    """Evaluator over the isolated registry."""
    return Evaluator(registry)


@pytest.fixture
def recording_registry(registry):
    """Registry with predicates that record the values they were called with."""
    calls = []

    def passing(x, options=None, failure_description=None):
        calls.append(("passing", x))
        return True

    def failing(x, options=None, failure_description=None):
        calls.append(("failing", x))
        return False

    registry.register_validator("passing", passing)
    registry.register_validator("failing", failing)
    registry.calls = calls
    return registry
