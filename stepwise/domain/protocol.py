"""
Step protocol - the contract every unit of work implements.

- Step: execute(context) -> bool and undo()
- FunctionStep: adapts plain callables to the Step protocol
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Protocol, runtime_checkable

if TYPE_CHECKING:
    from stepwise.domain.context import ExecutionContext


@runtime_checkable
class Step(Protocol):
    """
    Unified protocol for executable, undoable units.

    Both leaf steps and CompositeStep implement this interface, so
    composites nest inside other composites.
    """

    def execute(self, context: "ExecutionContext") -> bool:
        """
        Attempt the unit of work.

        Returns:
            True when the work was applied and the sequence may advance,
            False when the step cannot complete yet. A step returning False
            must not leave any partial effect behind.
        """
        ...

    def undo(self) -> None:
        """
        Reverse a previously successful execute().

        Only called on steps whose execute() returned True. Must be safe
        to call more than once.
        """
        ...


def _noop() -> None:
    return None


@dataclass
class FunctionStep:
    """
    Leaf step built from callables.

    Example:
        FunctionStep(lambda ctx: dao.insert_person(fnr), lambda: dao.delete_person(fnr))
    """

    action: Callable[["ExecutionContext"], bool]
    compensate: Callable[[], None] = _noop
    name: str | None = None

    def execute(self, context: "ExecutionContext") -> bool:
        return bool(self.action(context))

    def undo(self) -> None:
        self.compensate()

    def __repr__(self) -> str:
        name = self.name or getattr(self.action, "__name__", "step")
        return f"FunctionStep(name={name!r})"


__all__ = ["Step", "FunctionStep"]
