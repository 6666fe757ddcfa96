"""
CaseRunner - drive a composite step across process restarts.

A case is one logical unit of work (for example a payment need created
from an incoming message). The runner loads the case's stored progress
vector, restores it into a freshly built composite tree, executes, and
persists the new vector:

    runner = CaseRunner(InMemoryProgressStore())
    outcome = await runner.run("case-1", PaymentNeed(dao, fnr))
    if not outcome.completed:
        ...  # wait for the missing input, rebuild the tree, run again

The composite itself stays synchronous; only storage access is awaited.
"""

from dataclasses import dataclass, field

from stepwise.config.settings import StepwiseSettings, settings as default_settings
from stepwise.domain import ExecutionContext, ProgressSnapshot
from stepwise.providers.storage.base import ProgressStore
from stepwise.runtime.composite import CompositeStep
from stepwise.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class CaseOutcome:
    """Result of driving a case once."""

    case_id: str
    completed: bool
    progress: list[int] = field(default_factory=list)
    errors: tuple[str, ...] = ()


class CaseRunner:
    """
    Restore, execute or undo, and persist a case's composite step.

    Each call expects a freshly constructed tree with the same shape as the
    one that produced the stored vector. Callers must not drive the same
    case_id from two places at once.
    """

    def __init__(
        self,
        store: ProgressStore,
        settings: StepwiseSettings | None = None,
    ):
        self._store = store
        self._settings = settings or default_settings

    async def run(
        self,
        case_id: str,
        step: CompositeStep,
        context: ExecutionContext | None = None,
    ) -> CaseOutcome:
        """
        Resume the case from stored progress and execute it.

        If a step raises, the progress reached so far is saved before the
        error propagates, so steps that already took effect are not run
        again on the next call.

        Raises:
            ProgressRestoreError: Stored vector does not fit the tree
        """
        context = context or ExecutionContext(case_id=case_id)

        snapshot = await self._store.get(case_id)
        if snapshot is not None:
            step.restore(snapshot.progress)
            logger.info("case_resumed", case_id=case_id, progress=snapshot.progress)

        try:
            completed = step.execute(context)
        except Exception as e:
            progress = step.state()
            await self._save(case_id, progress, False, snapshot)
            logger.error("case_failed", case_id=case_id, progress=progress, error=str(e))
            raise
        progress = step.state()

        if completed and self._settings.delete_on_complete:
            await self._store.delete(case_id)
        else:
            await self._save(case_id, progress, completed, snapshot)

        if completed:
            logger.info("case_completed", case_id=case_id, progress=progress)
        else:
            logger.info("case_halted", case_id=case_id, progress=progress)

        if context.has_errors():
            logger.warning("case_reported_errors", case_id=case_id, errors=list(context.errors))

        return CaseOutcome(
            case_id=case_id,
            completed=completed,
            progress=progress,
            errors=context.errors,
        )

    async def undo(self, case_id: str, step: CompositeStep) -> CaseOutcome:
        """
        Reverse everything the case has executed and drop its progress.

        Raises:
            ProgressRestoreError: Stored vector does not fit the tree
        """
        snapshot = await self._store.get(case_id)
        if snapshot is not None:
            step.restore(snapshot.progress)

        step.undo()
        await self._store.delete(case_id)

        logger.info("case_undone", case_id=case_id)

        return CaseOutcome(case_id=case_id, completed=False, progress=step.state())

    async def progress(self, case_id: str) -> list[int] | None:
        """Stored progress vector of a case, None if nothing is stored."""
        snapshot = await self._store.get(case_id)
        return snapshot.progress if snapshot else None

    async def _save(
        self,
        case_id: str,
        progress: list[int],
        completed: bool,
        previous: ProgressSnapshot | None,
    ) -> None:
        if previous is None:
            snapshot = ProgressSnapshot(case_id=case_id, progress=progress, completed=completed)
        else:
            snapshot = previous.model_copy(
                update={"progress": progress, "completed": completed}
            ).touch()
        await self._store.save(snapshot)
        logger.debug("progress_saved", case_id=case_id, progress=progress)
