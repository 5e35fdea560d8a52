"""Registry of active mocks, scoped to the current thread or asyncio task."""

import logging
import threading
import weakref
from contextvars import ContextVar
from typing import TYPE_CHECKING, Any

from swapspy.errors import DuplicateError, NotAUnitError

if TYPE_CHECKING:
    from swapspy.core.mock_method import MockMethod


class MockStore:
    """Tracks which methods are mocked and cleans them up.

    Keys are the ``"<module>.<Class>#<method>"`` strings produced by
    ``MockMethod.hash_key``. A store is meant for internal use; most callers
    go through ``swapspy.mock_store()`` and the module-level helpers.
    """

    def __init__(self) -> None:
        self._mocks: dict[str, "MockMethod"] = {}
        self.logger = logging.getLogger(__name__)

    def store(self, mock_method: "MockMethod") -> "MockMethod":
        """Add a mock to the store.

        Args:
            mock_method: The mock to add

        Returns:
            The mock that was added

        Raises:
            NotAUnitError: If mock_method is not a MockMethod
            DuplicateError: If the store already holds a mock for that method
        """
        from swapspy.core.mock_method import MockMethod

        if not isinstance(mock_method, MockMethod):
            raise NotAUnitError(
                f"Must only store swapspy mocks, got {type(mock_method).__name__}"
            )
        if mock_method in self:
            raise DuplicateError(f"Store already contains a mock for {mock_method}")

        self._mocks[str(mock_method)] = mock_method
        self.logger.debug(f"Stored mock for {mock_method}")
        return mock_method

    def get(self, key: Any) -> "MockMethod | None":
        """Return the mock stored under a mock's key, or None."""
        return self._mocks.get(str(key))

    def mocks(
        self, klass: type | None = None, method: str | None = None
    ) -> list["MockMethod"]:
        """Search the store, optionally filtering by class and/or method name.

        With no filters every mock in the store is returned.
        """
        return list(self._search(klass=klass, method=method).values())

    def remove(self, klass: type | None = None, method: str | None = None) -> "MockStore":
        """Restore and drop the matching mocks.

        With no filters every mock in the store is restored and dropped.

        Returns:
            The store itself
        """
        for key, mock_method in self._search(klass=klass, method=method).items():
            mock_method.mock_restore(watch=False)
            self._mocks.pop(key, None)

        return self

    def delete(self, mock_method: Any) -> "MockStore":
        """Restore and drop a single mock, given the mock or its key.

        Mocks that are not in the store are ignored.

        Returns:
            The store itself
        """
        key = str(mock_method)
        stored = self._mocks.get(key)
        if stored is not None:
            stored.mock_restore(watch=False)
            self._mocks.pop(key, None)

        return self

    def evict(self, mock_method: "MockMethod") -> None:
        """Drop a mock without restoring it.

        Only the exact mock instance is dropped; a different mock stored under
        the same key is left alone.
        """
        key = str(mock_method)
        if self._mocks.get(key) is mock_method:
            del self._mocks[key]

    def is_empty(self) -> bool:
        return not self._mocks

    def __contains__(self, mock_method: Any) -> bool:
        return str(mock_method) in self._mocks

    def __len__(self) -> int:
        return len(self._mocks)

    def __repr__(self) -> str:
        return f"MockStore({sorted(self._mocks)})"

    def _search(
        self, klass: type | None = None, method: str | None = None
    ) -> dict[str, "MockMethod"]:
        if klass is None and method is None:
            return dict(self._mocks)

        return {
            key: mock_method
            for key, mock_method in self._mocks.items()
            if (klass is None or mock_method.klass is klass)
            and (method is None or mock_method.method_name == method)
        }


_current_store: ContextVar[MockStore | None] = ContextVar(
    "swapspy_mock_store", default=None
)
# An installed mock keeps its store alive through the patched class, so a
# store can only be collected once nothing it holds is still patched.
_known_stores: "weakref.WeakSet[MockStore]" = weakref.WeakSet()
_known_stores_lock = threading.Lock()

logger = logging.getLogger(__name__)


def current_store() -> MockStore:
    """Return the mock store for the current context, creating it on first use.

    Each thread, and each asyncio task that first touches swapspy, gets its own
    store. Tasks inherit the store of the context they were created from.
    """
    store = _current_store.get()
    if store is None:
        store = MockStore()
        _current_store.set(store)
        with _known_stores_lock:
            _known_stores.add(store)
    return store


def restore_every_store() -> int:
    """Restore and drop every mock in every context's store.

    Returns:
        The number of mocks that were restored
    """
    with _known_stores_lock:
        stores = list(_known_stores)

    restored = 0
    for store in stores:
        restored += len(store)
        store.remove()

    if restored:
        logger.debug(f"Restored {restored} mocks across {len(stores)} stores")
    return restored
