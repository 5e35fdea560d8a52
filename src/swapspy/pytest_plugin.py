"""pytest plugin that restores every mock after each test.

Installed through the ``pytest11`` entry point, so no conftest changes are
needed. Pass ``--swapspy-keep-mocks`` to leave mocks in place between tests.
"""

import logging
from collections.abc import Generator
from types import ModuleType
from typing import Any

import pytest

import swapspy
from swapspy.core.mock_store import current_store, restore_every_store

KEEP_MOCKS_OPTION = "--swapspy-keep-mocks"

logger = logging.getLogger(__name__)


def pytest_addoption(parser: Any) -> None:
    """Add command line options for mock cleanup."""
    group = parser.getgroup("swapspy")
    group.addoption(
        KEEP_MOCKS_OPTION,
        action="store_true",
        default=False,
        help="Leave swapspy mocks in place after each test instead of restoring them",
    )


def restore_after_test(keep_mocks: bool = False) -> int:
    """Restore all mocks without watching, unless asked to keep them.

    Returns:
        The number of mocks that were restored
    """
    if keep_mocks:
        return 0
    return restore_every_store()


@pytest.fixture(autouse=True)
def _swapspy_restore_mocks(request: Any) -> Generator[None, None, None]:
    """Restore every mock once the test finishes."""
    # Bind the store before the test runs so asyncio tasks inherit it
    current_store()

    yield

    restored = restore_after_test(request.config.getoption(KEEP_MOCKS_OPTION))
    if restored:
        logger.debug(f"Restored {restored} mocks after {request.node.nodeid}")


@pytest.fixture(name="swapspy")
def swapspy_fixture() -> ModuleType:
    """The swapspy module, for tests that prefer fixtures over imports."""
    return swapspy
