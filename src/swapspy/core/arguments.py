"""Immutable capture of the arguments used in one call to a mocked method."""

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import Any

from swapspy.errors import UnsupportedKeyTypeError


class MockArguments:
    """The positional and keyword arguments of a single call.

    Positional arguments are addressed by integer index and keyword arguments
    by parameter name::

        spy = swapspy.spy_on(Request, "send")
        Request().send("/users", method="GET")
        spy.mock.calls[-1][0]
        #=> '/users'
        spy.mock.calls[-1]["method"]
        #=> 'GET'

    Both groups are frozen at construction.
    """

    __slots__ = ("_args", "_kwargs")

    def __init__(
        self, args: Iterable[Any] = (), kwargs: Mapping[str, Any] | None = None
    ) -> None:
        self._args = tuple(args)
        self._kwargs = MappingProxyType(dict(kwargs or {}))

    @property
    def args(self) -> tuple[Any, ...]:
        """Positional arguments in call order."""
        return self._args

    @property
    def kwargs(self) -> Mapping[str, Any]:
        """Keyword arguments in the order they were passed (read-only)."""
        return self._kwargs

    def __getitem__(self, key: Any) -> Any:
        """Retrieve an argument by position or by keyword.

        Args:
            key: An int for positional arguments, a str for keyword arguments

        Returns:
            The argument value, or None when no such argument was passed

        Raises:
            UnsupportedKeyTypeError: If key is neither an int nor a str
        """
        # bool is an int subclass but never a meaningful position
        if type(key) is int:
            try:
                return self._args[key]
            except IndexError:
                return None
        if isinstance(key, str):
            return self._kwargs.get(key)
        raise UnsupportedKeyTypeError(
            f"Cannot access by type '{type(key).__name__}'. Expected an int or a str"
        )

    def __iter__(self) -> Iterator[Any]:
        return iter(self.values())

    def __len__(self) -> int:
        return len(self._args) + len(self._kwargs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MockArguments):
            return NotImplemented
        return self._args == other._args and dict(self._kwargs) == dict(other._kwargs)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        parts = [repr(value) for value in self._args]
        parts.extend(f"{key}={value!r}" for key, value in self._kwargs.items())
        return f"MockArguments({', '.join(parts)})"

    def is_empty(self) -> bool:
        """Return True if the call was made without any arguments."""
        return not self._args and not self._kwargs

    def keys(self) -> list[str]:
        """Keyword parameter names; positional arguments have no keys."""
        return list(self._kwargs.keys())

    def values(self) -> list[Any]:
        """Positional values followed by keyword values."""
        return [*self._args, *self._kwargs.values()]

    def first(self) -> Any:
        values = self.values()
        return values[0] if values else None

    def last(self) -> Any:
        values = self.values()
        return values[-1] if values else None
