"""
Progress store interface and in-memory implementation.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from stepwise.domain import ProgressSnapshot


class ProgressStore(ABC):
    """
    Progress store interface.
    Responsible for persisting progress vectors per case.
    """

    @abstractmethod
    async def save(self, snapshot: ProgressSnapshot) -> None:
        """Save or replace the snapshot of snapshot.case_id"""
        pass

    @abstractmethod
    async def get(self, case_id: str) -> Optional[ProgressSnapshot]:
        """Get snapshot, None when the case has no stored progress"""
        pass

    @abstractmethod
    async def delete(self, case_id: str) -> None:
        """Delete snapshot (no-op when missing)"""
        pass

    @abstractmethod
    async def list(
        self,
        completed: Optional[bool] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[ProgressSnapshot]:
        """
        List snapshots, most recently updated first

        Args:
            completed: Filter by completion flag (optional)
            limit: Maximum number of snapshots
            offset: Number of snapshots to skip
        """
        pass


class InMemoryProgressStore(ProgressStore):
    """
    In-memory implementation (for testing and development)
    """

    def __init__(self):
        self.snapshots: dict[str, ProgressSnapshot] = {}

    async def save(self, snapshot: ProgressSnapshot) -> None:
        existing = self.snapshots.get(snapshot.case_id)
        if existing is not None:
            snapshot = snapshot.model_copy(update={"created_at": existing.created_at})
        self.snapshots[snapshot.case_id] = snapshot.model_copy(deep=True)

    async def get(self, case_id: str) -> Optional[ProgressSnapshot]:
        snapshot = self.snapshots.get(case_id)
        return snapshot.model_copy(deep=True) if snapshot else None

    async def delete(self, case_id: str) -> None:
        self.snapshots.pop(case_id, None)

    async def list(
        self,
        completed: Optional[bool] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[ProgressSnapshot]:
        snapshots = list(self.snapshots.values())

        if completed is not None:
            snapshots = [s for s in snapshots if s.completed == completed]

        snapshots.sort(key=lambda s: s.updated_at, reverse=True)

        return [s.model_copy(deep=True) for s in snapshots[offset : offset + limit]]
