"""
CompositeStep - resumable, undoable sequence of steps.

A CompositeStep runs its children in order and stops at the first child
that returns False. The position reached is kept as a cursor so the next
execute() call retries that same child. Executed children are recorded in
history and undone most-recent-first.

Progress of a whole tree of composites is flattened into a progress
vector by state() and fed back with restore():

    root = CompositeStep([CompositeStep([a, b]), CompositeStep([d])])
    root.execute(ExecutionContext())
    root.state()  # [2, 2, 1]
"""

from collections import deque
from typing import Iterable, Iterator, Sequence

from stepwise.domain.context import ExecutionContext
from stepwise.domain.protocol import Step
from stepwise.runtime.exceptions import (
    CompositeSealedError,
    InvalidCursorError,
    ProgressOverflowError,
    ProgressUnderflowError,
)
from stepwise.utils.logging import get_logger

logger = get_logger(__name__)


class CompositeStep:
    """
    Ordered container of steps with resume cursor and undo history.

    Children may be composites themselves. Only composites contribute to the
    progress vector; leaf steps are invisible to it.

    Subclasses usually build their children in __init__ via add():

        class PaymentNeed(CompositeStep):
            def __init__(self, dao, fnr):
                super().__init__()
                self.add(CreatePerson(dao, fnr))
                self.personalia = self.add(FetchPersonalia(dao))
    """

    def __init__(self, children: Iterable[Step] | None = None):
        self._children: list[Step] = []
        self._cursor = 0
        # Execution order; exposed reversed as history
        self._executed: list[Step] = []
        self._sealed = False
        for child in children or ():
            self.add(child)

    def add(self, step: Step) -> Step:
        """
        Append a child step.

        Returns the step so subclasses can keep a reference to it.

        Raises:
            CompositeSealedError: If execution or restore already began
        """
        if self._sealed:
            raise CompositeSealedError(
                f"cannot add {step!r} to {self!r}: execution already began"
            )
        self._children.append(step)
        return step

    @property
    def children(self) -> tuple[Step, ...]:
        return tuple(self._children)

    @property
    def cursor(self) -> int:
        """Index of the next child to attempt."""
        return self._cursor

    @property
    def history(self) -> list[Step]:
        """Executed children, most recently executed first."""
        return list(reversed(self._executed))

    @property
    def completed(self) -> bool:
        return self._cursor == len(self._children)

    def execute(self, context: ExecutionContext) -> bool:
        """
        Run children from the cursor until one halts or all complete.

        A child returning False leaves cursor and history untouched so the
        next call retries it from scratch.

        Returns:
            True once every child has executed, False on halt
        """
        if not self._sealed:
            self._seal()
        while self._cursor < len(self._children):
            child = self._children[self._cursor]
            if not child.execute(context):
                return False
            self._executed.append(child)
            self._cursor += 1
        return True

    def undo(self) -> None:
        """
        Undo executed children in reverse execution order and reset.

        If a child's undo() raises, the error propagates and this
        composite's cursor and history are left as they were, so undo() can
        be called again. Leaf children undone before the failure are undone
        again on retry; nested composites undone before the failure have
        already reset and are skipped.
        """
        for child in self.history:
            try:
                child.undo()
            except Exception as e:
                logger.error(
                    "composite_undo_failed",
                    composite=repr(self),
                    step=repr(child),
                    cursor=self._cursor,
                    error=str(e),
                )
                raise
        self._reset()

    def state(self) -> list[int]:
        """
        Return the progress vector of this tree.

        Pre-order: own cursor, then each composite child's vector in child
        order. Every composite in the tree is visited whether or not it ran.
        """
        states: list[int] = []
        self._collect_state(states)
        return states

    def _collect_state(self, states: list[int]) -> None:
        states.append(self._cursor)
        for child in self._composites():
            child._collect_state(states)

    def restore(self, states: Sequence[int]) -> None:
        """
        Restore cursors and history from a progress vector.

        Args:
            states: Vector previously returned by state() on a tree of the
                same shape

        Raises:
            ProgressUnderflowError: Vector shorter than the tree requires
            ProgressOverflowError: Cursors left over after the walk
            InvalidCursorError: Cursor not an int or outside 0..len(children)
        """
        self._seal()
        remaining = deque(states)
        self._restore(remaining)
        if remaining:
            raise ProgressOverflowError(
                f"state list contained more states than expected: {list(states)}"
            )
        logger.debug("composite_restored", composite=repr(self), progress=list(states))

    def _restore(self, remaining: deque) -> None:
        if not remaining:
            raise ProgressUnderflowError("state list does not contain enough states")
        cursor = remaining.popleft()
        if isinstance(cursor, bool) or not isinstance(cursor, int):
            raise InvalidCursorError(f"cursor {cursor!r} is not an integer")
        if not 0 <= cursor <= len(self._children):
            raise InvalidCursorError(
                f"cursor {cursor} out of range for {self!r} with {len(self._children)} children"
            )
        self._restore_history(cursor)
        for child in self._composites():
            child._restore(remaining)

    def _restore_history(self, cursor: int) -> None:
        self._cursor = cursor
        self._executed = self._children[:cursor]

    def _seal(self) -> None:
        # The whole subtree keeps its shape once the root starts
        self._sealed = True
        for child in self._composites():
            child._seal()

    def _reset(self) -> None:
        self._cursor = 0
        self._executed = []

    def _composites(self) -> Iterator["CompositeStep"]:
        for child in self._children:
            if isinstance(child, CompositeStep):
                yield child

    def __len__(self) -> int:
        return len(self._children)

    def __iter__(self) -> Iterator[Step]:
        return iter(self._children)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(children={len(self._children)}, "
            f"cursor={self._cursor})"
        )


__all__ = ["CompositeStep"]
