"""
Shared pytest fixtures for pyprovider tests.
"""

import pytest

from pyprovider.core.debug import clear_traces, disable_tracing
from pyprovider.core.runtime import clear_pending_renders


@pytest.fixture(autouse=True)
def reset_runtime():
    """Start every test with an empty render queue and tracing off."""
    clear_pending_renders()
    disable_tracing()
    clear_traces()
    yield
    clear_pending_renders()
    disable_tracing()
    clear_traces()


@pytest.fixture
def calls():
    """A list to record callback invocations into."""
    return []


def _walk(ctx):
    yield ctx
    for child in ctx.children:
        yield from _walk(child)


@pytest.fixture
def find_nodes():
    """Return every mounted node named ``name`` below ``root``, in document order."""

    def _find(root, name):
        return [ctx for ctx in _walk(root) if ctx.name == name]

    return _find
