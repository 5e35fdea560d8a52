"""swapspy: mock and spy on methods of classes, then put them back.

Usage:
    import swapspy

    # Replace a method's return value
    full_name = swapspy.mock(Target, "full_name", "Gob Bluth")

    # Watch a method without changing it
    convince = swapspy.spy_on(Target, "convince")
    convince.mock.calls  # arguments of every call
    convince.mock.results  # what every call returned

    # Put everything back (the pytest plugin does this after each test)
    swapspy.restore_all_mocks()
"""

from .api import (
    clear_all_mocks,
    clear_mocks,
    is_mocked,
    is_restricted,
    mock,
    mock_store,
    reset_all_mocks,
    reset_mocks,
    restore_all_mocks,
    restore_mocks,
    spy_on,
)
from .core import (
    Execution,
    MemberAccess,
    MemberKind,
    MockArguments,
    MockExecutions,
    MockMethod,
    MockState,
    MockStore,
    MockTarget,
)
from .errors import (
    AlreadyCachedError,
    AlreadyInterceptedError,
    DuplicateError,
    MissingReplacementError,
    NotAUnitError,
    NotCachedError,
    RestrictedTargetError,
    SwapSpyError,
    UnknownMemberError,
    UnsupportedKeyTypeError,
)

__version__ = "0.1.0"
__all__ = [
    # Module-level helpers
    "mock",
    "spy_on",
    "is_mocked",
    "is_restricted",
    "mock_store",
    "clear_mocks",
    "clear_all_mocks",
    "reset_mocks",
    "reset_all_mocks",
    "restore_mocks",
    "restore_all_mocks",
    # Engine
    "Execution",
    "MemberAccess",
    "MemberKind",
    "MockArguments",
    "MockExecutions",
    "MockMethod",
    "MockState",
    "MockStore",
    "MockTarget",
    # Errors
    "SwapSpyError",
    "AlreadyCachedError",
    "AlreadyInterceptedError",
    "DuplicateError",
    "MissingReplacementError",
    "NotAUnitError",
    "NotCachedError",
    "RestrictedTargetError",
    "UnknownMemberError",
    "UnsupportedKeyTypeError",
]
