"""
Progress snapshot model.

A snapshot pairs a case identifier with the progress vector produced by
CompositeStep.state(). It is what progress stores persist.
"""

from datetime import datetime

from pydantic import BaseModel, Field, NonNegativeInt


class ProgressSnapshot(BaseModel):
    """
    Persisted progress of one case.

    The progress vector is order-significant and opaque: its shape is fixed
    by the composite tree that produced it.
    """

    case_id: str = Field(description="Case identifier")
    progress: list[NonNegativeInt] = Field(
        default_factory=list,
        description="Pre-order cursors of the composite tree",
    )
    completed: bool = Field(default=False, description="Root composite finished")
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    def touch(self) -> "ProgressSnapshot":
        """Return a copy with updated_at set to now."""
        return self.model_copy(update={"updated_at": datetime.now()})


__all__ = ["ProgressSnapshot"]
