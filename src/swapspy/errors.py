"""Exceptions raised by swapspy.

Every error is a usage error: it is raised synchronously, aborts the requested
operation and is never retried or swallowed by the library.
"""


class SwapSpyError(Exception):
    """Base class for all swapspy errors."""


class RestrictedTargetError(SwapSpyError):
    """The method is on the restricted list and may not be mocked."""


class UnknownMemberError(SwapSpyError, AttributeError):
    """The class and its ancestors define no callable member of that name."""


class AlreadyInterceptedError(SwapSpyError):
    """The method already has a cached original on its class."""


class AlreadyCachedError(SwapSpyError):
    """The original method was asked to be cached a second time."""


class NotCachedError(SwapSpyError):
    """The method was asked to be unmocked but nothing is cached."""


class DuplicateError(SwapSpyError):
    """The mock store already holds a mock for that class and method."""


class NotAUnitError(SwapSpyError, TypeError):
    """Something other than a MockMethod was handed to the mock store."""


class UnsupportedKeyTypeError(SwapSpyError, TypeError):
    """MockArguments was indexed with a key that is not an int or a str."""


class MissingReplacementError(SwapSpyError, ValueError):
    """A substitution was requested without the value, callable or list it needs."""
