"""
Runtime module - the composite step engine and the case runner.
"""

from stepwise.runtime.composite import CompositeStep
from stepwise.runtime.exceptions import (
    CompositeSealedError,
    InvalidCursorError,
    ProgressOverflowError,
    ProgressRestoreError,
    ProgressUnderflowError,
    StepwiseError,
)
from stepwise.runtime.runner import CaseOutcome, CaseRunner

__all__ = [
    "CompositeStep",
    "CaseRunner",
    "CaseOutcome",
    # Exceptions
    "StepwiseError",
    "ProgressRestoreError",
    "ProgressUnderflowError",
    "ProgressOverflowError",
    "InvalidCursorError",
    "CompositeSealedError",
]
