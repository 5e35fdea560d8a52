"""Interception and call-recording engine."""

from swapspy.core.arguments import MockArguments
from swapspy.core.executions import Execution, MockExecutions
from swapspy.core.mock_method import MockMethod, MockState
from swapspy.core.mock_store import MockStore, current_store, restore_every_store
from swapspy.core.target import MemberAccess, MemberKind, MockTarget

__all__ = [
    "Execution",
    "MemberAccess",
    "MemberKind",
    "MockArguments",
    "MockExecutions",
    "MockMethod",
    "MockState",
    "MockStore",
    "MockTarget",
    "current_store",
    "restore_every_store",
]
