"""Call ledger kept by every MockMethod."""

from collections.abc import Iterable, Iterator
from typing import Any, NamedTuple

from swapspy.core.arguments import MockArguments


class Execution(NamedTuple):
    """One completed call: its arguments and what it returned."""

    args: MockArguments
    result: Any


class MockExecutions:
    """Ordered record of the calls and results of a mocked method.

    The ledger only grows. Clearing a mock swaps in a fresh ledger, so a
    reference taken earlier keeps the calls it had at that time.
    """

    def __init__(self) -> None:
        self._executions: list[Execution] = []

    def store(self, args: MockArguments | Iterable[Any], result: Any) -> Execution:
        """Append an arguments and result pair.

        Args:
            args: The call's arguments; a plain sequence is treated as positional
            result: The value the call returned

        Returns:
            The stored execution record
        """
        if not isinstance(args, MockArguments):
            args = MockArguments(args=args)
        execution = Execution(args, result)
        self._executions.append(execution)
        return execution

    @property
    def calls(self) -> list[MockArguments]:
        """The arguments of each call, oldest first."""
        return [execution.args for execution in self._executions]

    @property
    def results(self) -> list[Any]:
        """The result of each call, aligned with ``calls``."""
        return [execution.result for execution in self._executions]

    @property
    def count(self) -> int:
        return len(self._executions)

    @property
    def last_call(self) -> MockArguments | None:
        return self._executions[-1].args if self._executions else None

    @property
    def last_result(self) -> Any:
        return self._executions[-1].result if self._executions else None

    def is_empty(self) -> bool:
        return not self._executions

    def __len__(self) -> int:
        return len(self._executions)

    def __iter__(self) -> Iterator[Execution]:
        return iter(list(self._executions))

    def __repr__(self) -> str:
        return f"MockExecutions(count={self.count})"
