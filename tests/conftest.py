"""Test configuration for package."""

import pytest

from flex_equality.registry import get_registry_state, restore_registry_state

pytest_plugins = ["pytester", "flex_equality.pytest_plugin"]


@pytest.fixture
def isolated_registry():
    """Let a test register rules without leaking them into other tests."""
    state = get_registry_state()
    yield
    restore_registry_state(state)
