"""Shared fixtures for Crisp tests."""

import pytest

from crisp import Crisp, CrispBufferingTraceWatcher


@pytest.fixture
def crisp():
    """Create a fresh Crisp instance for each test."""
    return Crisp()


@pytest.fixture
def crisp_custom():
    """Factory for Crisp instances with custom configuration."""
    def _create_crisp(
        max_depth: int = 250,
        swallow_else_substitution_errors: bool = True,
        call_non_callable_returns_callee: bool = True,
        strict_substitution: bool = False
    ) -> Crisp:
        return Crisp(
            max_depth=max_depth,
            swallow_else_substitution_errors=swallow_else_substitution_errors,
            call_non_callable_returns_callee=call_non_callable_returns_callee,
            strict_substitution=strict_substitution
        )
    return _create_crisp


@pytest.fixture
def trace_watcher():
    """Provide a buffering trace watcher."""
    return CrispBufferingTraceWatcher()
