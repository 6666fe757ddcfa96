"""Composite step exceptions."""


class StepwiseError(Exception):
    """Base exception for Stepwise errors."""

    pass


class ProgressRestoreError(StepwiseError, ValueError):
    """Progress vector does not match the composite tree."""

    pass


class ProgressUnderflowError(ProgressRestoreError):
    """Progress vector ran out of cursors before the walk finished."""

    pass


class ProgressOverflowError(ProgressRestoreError):
    """Progress vector has cursors left over after the walk."""

    pass


class InvalidCursorError(ProgressRestoreError):
    """Cursor value outside 0..len(children)."""

    pass


class CompositeSealedError(StepwiseError):
    """Child added after execution or restore began."""

    pass
