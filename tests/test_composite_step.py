"""
Unit tests for CompositeStep execution and undo.
"""

import pytest

from stepwise import (
    CompositeSealedError,
    CompositeStep,
    ExecutionContext,
    FunctionStep,
)


class Journal:
    """Records execute/undo calls of the steps it creates."""

    def __init__(self):
        self.executed: list[str] = []
        self.undone: list[str] = []

    def step(self, name: str, outcome=lambda: True) -> FunctionStep:
        def action(context):
            self.executed.append(name)
            return outcome()

        return FunctionStep(action, lambda: self.undone.append(name), name=name)


class Gate:
    """Outcome that halts until opened."""

    def __init__(self):
        self.open = False

    def __call__(self) -> bool:
        return self.open


@pytest.fixture
def journal():
    return Journal()


class TestExecute:
    """Test CompositeStep.execute."""

    def test_executes_all_children_in_order(self, journal):
        macro = CompositeStep([journal.step("A"), journal.step("B"), journal.step("C")])

        assert macro.execute(ExecutionContext()) is True
        assert journal.executed == ["A", "B", "C"]
        assert macro.cursor == 3
        assert macro.completed

    def test_empty_composite_completes(self):
        macro = CompositeStep()

        assert macro.execute(ExecutionContext()) is True
        assert macro.state() == [0]

    def test_execution_stops_at_halting_step(self, journal):
        macro = CompositeStep(
            [journal.step("A"), journal.step("B", outcome=lambda: False), journal.step("C")]
        )

        assert macro.execute(ExecutionContext()) is False
        assert journal.executed == ["A", "B"]
        assert macro.cursor == 1
        assert [step.name for step in macro.history] == ["A"]
        assert not macro.completed

    def test_resume_retries_halted_step_only(self, journal):
        gate = Gate()
        macro = CompositeStep([journal.step("A"), journal.step("B", gate), journal.step("C")])

        assert macro.execute(ExecutionContext()) is False
        gate.open = True
        assert macro.execute(ExecutionContext()) is True

        assert journal.executed == ["A", "B", "B", "C"]
        assert macro.state() == [3]

    def test_halt_then_resume_state(self, journal):
        gate = Gate()
        macro = CompositeStep([journal.step("A", gate), journal.step("B")])

        assert macro.execute(ExecutionContext()) is False
        assert macro.state() == [0]

        gate.open = True
        assert macro.execute(ExecutionContext()) is True
        assert macro.state() == [2]

    def test_execute_after_completion_is_noop(self, journal):
        macro = CompositeStep([journal.step("A")])
        macro.execute(ExecutionContext())

        assert macro.execute(ExecutionContext()) is True
        assert journal.executed == ["A"]

    def test_diagnostics_do_not_halt(self):
        def warn(context):
            context.report_error("address looks odd")
            return True

        context = ExecutionContext()
        macro = CompositeStep([FunctionStep(warn), FunctionStep(lambda ctx: True)])

        assert macro.execute(context) is True
        assert context.errors == ("address looks odd",)

    def test_history_is_most_recent_first(self, journal):
        a, b = journal.step("A"), journal.step("B")
        macro = CompositeStep([a, b])
        macro.execute(ExecutionContext())

        assert macro.history == [b, a]


class TestNested:
    """Test composites containing composites."""

    def test_nested_execution_order_and_state(self, journal):
        macro = CompositeStep(
            [
                CompositeStep([journal.step("A1"), journal.step("B1")]),
                CompositeStep([journal.step("A2")]),
            ]
        )

        assert macro.execute(ExecutionContext()) is True
        assert journal.executed == ["A1", "B1", "A2"]
        assert macro.state() == [2, 2, 1]

    def test_nested_halt_and_resume(self, journal):
        gate = Gate()
        macro = CompositeStep(
            [
                CompositeStep([journal.step("A1"), journal.step("B1", gate)]),
                CompositeStep([journal.step("A2")]),
            ]
        )

        assert macro.execute(ExecutionContext()) is False
        assert macro.state() == [0, 1, 0]

        gate.open = True
        assert macro.execute(ExecutionContext()) is True
        assert journal.executed == ["A1", "B1", "B1", "A2"]
        assert macro.state() == [2, 2, 1]

    def test_composites_only_sub_cursor_tracks_halt(self, journal):
        gate = Gate()
        inner = CompositeStep([journal.step("A"), journal.step("B"), journal.step("C", gate)])
        macro = CompositeStep([inner])

        assert macro.execute(ExecutionContext()) is False
        assert macro.state() == [0, 2]


class TestUndo:
    """Test CompositeStep.undo."""

    def test_undo_in_reverse_order(self, journal):
        macro = CompositeStep([journal.step("A"), journal.step("B"), journal.step("C")])
        macro.execute(ExecutionContext())

        macro.undo()

        assert journal.undone == ["C", "B", "A"]
        assert macro.cursor == 0
        assert macro.history == []

    def test_undo_only_executed_steps(self, journal):
        macro = CompositeStep(
            [journal.step("A"), journal.step("B", outcome=lambda: False), journal.step("C")]
        )
        macro.execute(ExecutionContext())

        macro.undo()

        assert journal.undone == ["A"]

    def test_undo_before_execute_is_noop(self, journal):
        macro = CompositeStep([journal.step("A")])

        macro.undo()

        assert journal.undone == []
        assert macro.state() == [0]

    def test_execute_after_undo_runs_from_start(self, journal):
        macro = CompositeStep([journal.step("A"), journal.step("B")])
        macro.execute(ExecutionContext())
        macro.undo()

        assert macro.execute(ExecutionContext()) is True
        assert journal.executed == ["A", "B", "A", "B"]

    def test_nested_undo_reverses_across_levels(self, journal):
        macro = CompositeStep(
            [
                CompositeStep([journal.step("A1"), journal.step("B1")]),
                CompositeStep([journal.step("A2")]),
            ]
        )
        macro.execute(ExecutionContext())

        macro.undo()

        assert journal.undone == ["A2", "B1", "A1"]
        assert macro.state() == [0, 0, 0]

    def test_failing_undo_propagates_and_keeps_progress(self, journal):
        def broken():
            raise RuntimeError("record locked")

        macro = CompositeStep(
            [journal.step("A"), FunctionStep(lambda ctx: True, broken, name="B")]
        )
        macro.execute(ExecutionContext())

        with pytest.raises(RuntimeError, match="record locked"):
            macro.undo()

        assert macro.cursor == 2
        assert journal.undone == []

    def test_retry_after_failing_undo_skips_reset_composites(self, journal):
        attempts = {"count": 0}

        def flaky():
            attempts["count"] += 1
            if attempts["count"] == 1:
                raise RuntimeError("record locked")
            journal.undone.append("B")

        macro = CompositeStep(
            [
                FunctionStep(lambda ctx: True, flaky, name="B"),
                CompositeStep([journal.step("A1")]),
            ]
        )
        macro.execute(ExecutionContext())

        with pytest.raises(RuntimeError):
            macro.undo()

        assert macro.completed
        assert macro.state() == [2, 0]

        macro.undo()

        assert journal.undone == ["A1", "B"]
        assert macro.state() == [0, 0]


class TestStructure:
    """Test building composites."""

    def test_add_returns_step(self, journal):
        macro = CompositeStep()
        step = journal.step("A")

        assert macro.add(step) is step
        assert len(macro) == 1
        assert list(macro) == [step]

    def test_subclass_builds_children(self, journal):
        class TwoSteps(CompositeStep):
            def __init__(self):
                super().__init__()
                self.first = self.add(journal.step("A"))
                self.second = self.add(journal.step("B"))

        macro = TwoSteps()

        assert macro.children == (macro.first, macro.second)
        assert macro.execute(ExecutionContext()) is True

    def test_add_after_execute_rejected(self, journal):
        macro = CompositeStep([journal.step("A", outcome=lambda: False)])
        macro.execute(ExecutionContext())

        with pytest.raises(CompositeSealedError):
            macro.add(journal.step("B"))

    def test_repr(self, journal):
        macro = CompositeStep([journal.step("A")])

        assert repr(macro) == "CompositeStep(children=1, cursor=0)"

    def test_nested_add_rejected_after_root_halts(self, journal):
        later = CompositeStep()
        macro = CompositeStep([journal.step("A", outcome=lambda: False), later])
        macro.execute(ExecutionContext())

        with pytest.raises(CompositeSealedError):
            later.add(CompositeStep())

        assert macro.state() == [0, 0]
