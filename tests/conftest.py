"""Global pytest configuration and fixtures."""

from collections.abc import Generator

import pytest

from swapspy.core.mock_store import MockStore, restore_every_store

# Import shared fixtures
from tests.fixtures.config_helpers import restriction_file
from tests.fixtures.targets import mark, target

__all__ = ["mark", "restriction_file", "target"]


@pytest.fixture
def store() -> Generator[MockStore, None, None]:
    """An isolated mock store, restored and emptied after the test."""
    mock_store = MockStore()
    yield mock_store
    mock_store.remove()


@pytest.fixture(autouse=True)
def restore_context_stores() -> Generator[None, None, None]:
    """Restore mocks left in context stores, even when the plugin is not installed."""
    yield
    restore_every_store()
