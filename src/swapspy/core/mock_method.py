"""A mock for one method of one class. This is the core of swapspy."""

import functools
import inspect
import logging
from collections import deque
from collections.abc import Callable, Iterable
from enum import Enum
from typing import Any

from swapspy.config import is_restricted
from swapspy.core.arguments import MockArguments
from swapspy.core.executions import MockExecutions
from swapspy.core.mock_store import MockStore, current_store
from swapspy.core.target import (
    MemberAccess,
    MemberDefinition,
    MemberKind,
    MockTarget,
    resolve_member,
)
from swapspy.errors import (
    AlreadyCachedError,
    AlreadyInterceptedError,
    MissingReplacementError,
    NotCachedError,
    RestrictedTargetError,
    SwapSpyError,
    UnknownMemberError,
)

CACHE_METHOD_PREFIX = "_swapspy_cache"

# (receiver, positional args, keyword args) -> result
Behavior = Callable[[Any, tuple[Any, ...], dict[str, Any]], Any]


class MockState(Enum):
    """Lifecycle state of a MockMethod."""

    UNARMED = "unarmed"
    WATCHING = "watching"
    SUBSTITUTED = "substituted"


class MockMethod:
    """A mock for a given class and method.

    Usually created through ``swapspy.mock`` or ``swapspy.spy_on``. While
    the method is mocked every call is recorded in ``mock`` and either passed
    through to the original (watching) or answered by a substitute.

    Example:
        spy = swapspy.spy_on(Target, "full_name")
        Target(first_name="Buster").full_name()
        spy.mock.results
        #=> ['Buster Funke']
        spy.mock_return_value("Lucille").mock_restore()
    """

    def __init__(
        self,
        klass: type,
        method_name: str,
        watch: bool = True,
        store: MockStore | None = None,
    ):
        """Create a mock, watching the method straight away unless told not to.

        Args:
            klass: The class whose method is mocked
            method_name: The name of the method to mock
            watch: Whether to start watching the method immediately
            store: Mock store to register in; the current context's store if None

        Raises:
            RestrictedTargetError: If the method is on the restricted list
            UnknownMemberError: If no callable member of that name exists
            AlreadyInterceptedError: If another mock already cached the method
        """
        if not isinstance(klass, type):
            raise TypeError(f"Can only mock methods of classes, got {klass!r}")

        if is_restricted(klass, method_name):
            raise RestrictedTargetError(
                f"Cannot mock restricted method {method_name} for class {klass.__qualname__}"
            )

        definition = resolve_member(klass, method_name)
        if definition is None:
            raise UnknownMemberError(
                f"Cannot mock unknown method {method_name} for class {klass.__qualname__}"
            )

        cache_method_name = f"{CACHE_METHOD_PREFIX}_{definition.attribute_name}"
        if cache_method_name in vars(klass):
            raise AlreadyInterceptedError(
                f"Cannot mock already mocked method {method_name} for class {klass.__qualname__}"
            )

        self.logger = logging.getLogger(__name__)
        self._target = MockTarget(klass, method_name)
        self._definition = definition
        self._cache_method_name = cache_method_name
        self._store = store if store is not None else current_store()
        self._mock_executions = MockExecutions()
        self._true_method_cached = False
        self._original: Any = None
        self._state = MockState.UNARMED
        self._behavior: Behavior | None = None
        self._remaining_calls: int | None = None

        if watch:
            self._watch_method()

    @property
    def mock(self) -> MockExecutions:
        """The calls and results recorded for this mock.

        Example:
            spy = swapspy.spy_on(Target, "convince")
            target.convince("the earth is flat")
            spy.mock.calls
            #=> [MockArguments('the earth is flat')]
        """
        return self._mock_executions

    @property
    def klass(self) -> type:
        return self._target.klass

    @property
    def method_name(self) -> str:
        return self._target.method_name

    @property
    def target(self) -> MockTarget:
        return self._target

    @property
    def state(self) -> MockState:
        return self._state

    @property
    def method_access(self) -> MemberAccess:
        return self._definition.access

    @property
    def method_kind(self) -> MemberKind:
        return self._definition.kind

    @property
    def inherited(self) -> bool:
        """True if the original definition lives on an ancestor class."""
        return self._definition.inherited

    @property
    def class_method(self) -> bool:
        """True for classmethod and staticmethod members."""
        return self._definition.kind is not MemberKind.INSTANCE

    @property
    def true_method_cached(self) -> bool:
        return self._true_method_cached

    def mock_clear(self) -> MockExecutions:
        """Forget recorded calls but keep the method mocked as before.

        Returns:
            The new, empty executions
        """
        self._mock_executions = MockExecutions()
        return self._mock_executions

    def mock_reset(self) -> MockExecutions:
        """Forget recorded calls and mock the method to return None.

        Returns:
            The new, empty executions
        """
        executions = self.mock_clear()
        self.mock_return_value(None)
        return executions

    def mock_restore(self, watch: bool = False) -> MockExecutions:
        """Forget recorded calls and put the original method back.

        Unless ``watch`` is set the mock also drops out of its store, which
        fully cleans up the mocking.

        Args:
            watch: Whether to keep watching the method after restoring it

        Returns:
            The new, empty executions
        """
        executions = self.mock_clear()
        if self._true_method_cached:
            self._unmock_method()
        if watch:
            self._watch_method()
        else:
            self._store.evict(self)
        return executions

    def mock_implementation(self, implementation: Callable[..., Any]) -> "MockMethod":
        """Run the given callable instead of the original method.

        The callable receives the call's arguments without ``self``/``cls``.

        Example:
            swapspy.spy_on(Target, "mimic").mock_implementation(
                lambda first, second: [second, first]
            )
            Target.mimic(1, 2)
            #=> [2, 1]

        Returns:
            The mock itself
        """
        self._check_implementation(implementation)
        return self._substitute(self._implementation_behavior(implementation))

    def mock_return_value(self, return_value: Any = None) -> "MockMethod":
        """Return the given value instead of running the original method.

        Returns:
            The mock itself
        """
        return self._substitute(self._value_behavior(return_value))

    def mock_implementation_once(
        self, implementation: Callable[..., Any]
    ) -> "MockMethod":
        """Run the callable for the next call only, then watch again."""
        return self.mock_implementation_times(1, implementation)

    def mock_return_value_once(self, return_value: Any = None) -> "MockMethod":
        """Return the value for the next call only, then watch again."""
        return self.mock_return_value_times(1, return_value)

    def mock_implementation_times(
        self, times: int, implementation: Callable[..., Any]
    ) -> "MockMethod":
        """Run the callable for the next ``times`` calls, then watch again."""
        self._check_times(times)
        self._check_implementation(implementation)
        return self._substitute(
            self._implementation_behavior(implementation), limit=times
        )

    def mock_return_value_times(
        self, times: int, return_value: Any = None
    ) -> "MockMethod":
        """Return the value for the next ``times`` calls, then watch again."""
        self._check_times(times)
        return self._substitute(self._value_behavior(return_value), limit=times)

    def mock_return_values_in_order(
        self, return_values: Iterable[Any]
    ) -> "MockMethod":
        """Return the values one per call, first to last, then watch again.

        Example:
            swapspy.spy_on(Target, "full_name").mock_return_values_in_order(["A", "B"])
            [target.full_name() for _ in range(3)]
            #=> ['A', 'B', 'Tobias Funke']

        Raises:
            MissingReplacementError: If no values are given
        """
        if return_values is None:
            raise MissingReplacementError("A list of return values is required")
        pending = deque(return_values)
        if not pending:
            raise MissingReplacementError("At least one return value is required")

        def behavior(receiver: Any, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
            return pending.popleft()

        return self._substitute(behavior, limit=len(pending))

    def __enter__(self) -> "MockMethod":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.mock_restore(watch=False)

    def __str__(self) -> str:
        return str(self._target)

    def __repr__(self) -> str:
        return f"<MockMethod {self._target} state={self._state.value}>"

    @staticmethod
    def hash_key(klass: type, method_name: str) -> str:
        """Key used to track mocks in a store.

        Example:
            MockMethod.hash_key(Target, "full_name")
            #=> 'tests.fixtures.targets.Target#full_name'
        """
        return str(MockTarget(klass, method_name))

    def _watch_method(self) -> "MockMethod":
        """Record calls while passing them through to the original method."""
        return self._install(MockState.WATCHING, self._call_original)

    def _substitute(self, behavior: Behavior, limit: int | None = None) -> "MockMethod":
        return self._install(MockState.SUBSTITUTED, behavior, limit)

    def _install(
        self, state: MockState, behavior: Behavior, limit: int | None = None
    ) -> "MockMethod":
        self._premock_setup()

        klass = self._target.klass
        name = self._definition.attribute_name
        if not self._definition.inherited and self._method_defined():
            delattr(klass, name)
        setattr(klass, name, self._build_wrapper())

        self._behavior = behavior
        self._remaining_calls = limit
        self._state = state
        self.logger.debug(f"{self._target} is now {state.value}")
        return self

    def _unmock_method(self) -> None:
        """Remove the wrapper and put the cached original back.

        Raises:
            NotCachedError: If the original method is not cached
        """
        if not self._true_method_cached:
            raise NotCachedError(f"Method {self._target} is not cached")

        klass = self._target.klass
        name = self._definition.attribute_name
        if self._method_defined():
            delattr(klass, name)
        if not self._definition.inherited:
            setattr(klass, name, self._original)
        delattr(klass, self._cache_method_name)

        self._original = None
        self._true_method_cached = False
        self._behavior = None
        self._remaining_calls = None
        self._state = MockState.UNARMED
        self.logger.debug(f"{self._target} restored")

    def _cache_method(self) -> None:
        """Set the original method aside on the class.

        Raises:
            AlreadyCachedError: If this or another mock already cached it
        """
        if self._true_method_cached:
            raise AlreadyCachedError(f"Method {self._target} already cached")

        klass = self._target.klass
        if self._cache_method_name in vars(klass):
            raise AlreadyCachedError(
                f"Method {self._target} already cached by another mock"
            )

        definition = resolve_member(klass, self._target.method_name)
        if definition is None:
            raise UnknownMemberError(f"Method {self._target} no longer exists")

        # The class attribute only marks the method as taken; calls go
        # through self._original
        setattr(klass, self._cache_method_name, definition.raw)
        self._original = definition.raw
        self._true_method_cached = True

    def _uncache_method(self) -> None:
        delattr(self._target.klass, self._cache_method_name)
        self._original = None
        self._true_method_cached = False

    def _premock_setup(self) -> None:
        """Cache the original method and add the mock to its store."""
        newly_cached = not self._true_method_cached
        if newly_cached:
            self._cache_method()

        if self._store.get(self) is not self:
            try:
                self._store.store(self)
            except SwapSpyError:
                if newly_cached:
                    self._uncache_method()
                raise

    def _method_defined(self) -> bool:
        """Whether the class itself (not an ancestor) defines the method now."""
        return self._definition.attribute_name in vars(self._target.klass)

    def _build_wrapper(self) -> Any:
        """Create the replacement attribute for the mocked method.

        The wrapper has the original's descriptor kind and metadata so callers
        see the same shape of method.
        """
        mock_method = self
        kind = self._definition.kind

        if self._definition.is_async:
            if kind is MemberKind.STATIC:

                async def wrapper(*args: Any, **kwargs: Any) -> Any:
                    return await mock_method._acall(mock_method.klass, args, kwargs)

            else:

                async def wrapper(receiver: Any, /, *args: Any, **kwargs: Any) -> Any:
                    return await mock_method._acall(receiver, args, kwargs)

        else:
            if kind is MemberKind.STATIC:

                def wrapper(*args: Any, **kwargs: Any) -> Any:
                    return mock_method._call(mock_method.klass, args, kwargs)

            else:

                def wrapper(receiver: Any, /, *args: Any, **kwargs: Any) -> Any:
                    return mock_method._call(receiver, args, kwargs)

        functools.update_wrapper(wrapper, self._definition.function)

        if kind is MemberKind.STATIC:
            return staticmethod(wrapper)
        if kind is MemberKind.CLASS:
            return classmethod(wrapper)
        return wrapper

    def _call(self, receiver: Any, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
        result = self._active_behavior()(receiver, args, kwargs)
        return self._record(args, kwargs, result)

    async def _acall(
        self, receiver: Any, args: tuple[Any, ...], kwargs: dict[str, Any]
    ) -> Any:
        result = self._active_behavior()(receiver, args, kwargs)
        if inspect.isawaitable(result):
            result = await result
        return self._record(args, kwargs, result)

    def _active_behavior(self) -> Behavior:
        if self._behavior is None:
            raise NotCachedError(f"Method {self._target} is not mocked")
        return self._behavior

    def _record(self, args: tuple[Any, ...], kwargs: dict[str, Any], result: Any) -> Any:
        self._mock_executions.store(MockArguments(args=args, kwargs=kwargs), result)

        if self._remaining_calls is not None:
            self._remaining_calls -= 1
            if self._remaining_calls <= 0:
                # The running wrapper is already bound to this call, so
                # replacing the class attribute only affects later calls
                self._watch_method()

        return result

    def _call_original(
        self, receiver: Any, args: tuple[Any, ...], kwargs: dict[str, Any]
    ) -> Any:
        return self._bind_original(receiver)(*args, **kwargs)

    def _bind_original(self, receiver: Any) -> Any:
        """Bind the original definition to the receiver of this call.

        Inherited methods are looked up on the ancestors at call time, so a
        mock on a parent class is passed through (and can be restored) while
        this one is installed.
        """
        if self._definition.inherited:
            raw = self._ancestor_definition()
        else:
            raw = self._original

        kind = self._definition.kind
        if kind is MemberKind.STATIC:
            return raw.__get__(None, self._target.klass)
        if kind is MemberKind.CLASS:
            return raw.__get__(None, receiver)
        return raw.__get__(receiver, type(receiver))

    def _ancestor_definition(self) -> Any:
        name = self._definition.attribute_name
        for owner in self._target.klass.__mro__[1:]:
            if name in vars(owner):
                return vars(owner)[name]
        raise NotCachedError(
            f"Method {self._target} is no longer defined on any ancestor"
        )

    def _check_implementation(self, implementation: Any) -> None:
        if implementation is None or not callable(implementation):
            raise MissingReplacementError(
                f"A callable implementation is required to mock {self._target}"
            )

    def _check_times(self, times: Any) -> None:
        if type(times) is not int or times < 1:
            raise MissingReplacementError(
                f"times must be a positive integer, got {times!r}"
            )

    @staticmethod
    def _value_behavior(return_value: Any) -> Behavior:
        def behavior(receiver: Any, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
            return return_value

        return behavior

    @staticmethod
    def _implementation_behavior(implementation: Callable[..., Any]) -> Behavior:
        def behavior(receiver: Any, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
            return implementation(*args, **kwargs)

        return behavior
