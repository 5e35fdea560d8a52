"""
Module-level helpers for mocking and spying.

Nearly all interaction with swapspy should go through these functions. They
act on the mock store of the current thread or asyncio task.
"""

from typing import Any

from swapspy import config
from swapspy.core.executions import MockExecutions
from swapspy.core.mock_method import MockMethod
from swapspy.core.mock_store import MockStore, current_store


def mock_store() -> MockStore:
    """The store of mocked methods for the current context."""
    return current_store()


def mock(klass: type, method: str, return_value: Any = None) -> MockMethod:
    """Mock a method to return the given value.

    Example:
        my_mock = swapspy.mock(MyClass, "some_method", True)

    Args:
        klass: The class of the method to mock
        method: The name of the method to mock
        return_value: The value the method returns while mocked

    Raises:
        SwapSpyError: If the method is restricted, unknown or already mocked
    """
    return MockMethod(klass, method, watch=False).mock_return_value(return_value)


def spy_on(klass: type, method: str) -> MockMethod:
    """Watch a method, recording calls without changing its behaviour.

    Example:
        my_spy = swapspy.spy_on(MyClass, "some_method")

    Raises:
        SwapSpyError: If the method is restricted, unknown or already mocked
    """
    return MockMethod(klass, method)


def is_mocked(klass: type, method: str) -> bool:
    """Check whether the method is currently mocked in this context."""
    return MockMethod.hash_key(klass, method) in mock_store()


def is_restricted(klass: type, method: str) -> bool:
    """Check whether the method is on the restricted list.

    Example:
        swapspy.is_restricted(str, "upper")
        #=> True
    """
    return config.is_restricted(klass, method)


def clear_mocks(klass: type) -> list[MockExecutions]:
    """Forget the recorded calls of every mocked method of a class."""
    return [mock_method.mock_clear() for mock_method in mock_store().mocks(klass=klass)]


def clear_all_mocks() -> list[MockExecutions]:
    """Forget the recorded calls of every mocked method."""
    return [mock_method.mock_clear() for mock_method in mock_store().mocks()]


def reset_mocks(klass: type) -> list[MockExecutions]:
    """Clear and mock to return None every mocked method of a class."""
    return [mock_method.mock_reset() for mock_method in mock_store().mocks(klass=klass)]


def reset_all_mocks() -> list[MockExecutions]:
    """Clear and mock to return None every mocked method."""
    return [mock_method.mock_reset() for mock_method in mock_store().mocks()]


def restore_mocks(
    klass: type, watch: bool = False
) -> list[MockExecutions] | MockStore:
    """Restore the original methods of a class.

    Args:
        klass: The class whose mocks are restored
        watch: Keep watching the methods instead of dropping the mocks

    Returns:
        The new executions when watching, otherwise the updated store
    """
    if watch:
        return [
            mock_method.mock_restore(watch=True)
            for mock_method in mock_store().mocks(klass=klass)
        ]
    return mock_store().remove(klass=klass)


def restore_all_mocks(watch: bool = False) -> list[MockExecutions] | MockStore:
    """Restore every mocked method.

    Args:
        watch: Keep watching the methods instead of dropping the mocks

    Returns:
        The new executions when watching, otherwise the updated store
    """
    if watch:
        return [mock_method.mock_restore(watch=True) for mock_method in mock_store().mocks()]
    return mock_store().remove()
