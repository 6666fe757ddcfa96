"""
Stepwise - resumable, undoable composite steps

Top-level exports for easy access to core functionality.
"""

# Domain
from stepwise.domain import ExecutionContext, FunctionStep, ProgressSnapshot, Step

# Engine
from stepwise.runtime import (
    CaseOutcome,
    CaseRunner,
    CompositeSealedError,
    CompositeStep,
    InvalidCursorError,
    ProgressOverflowError,
    ProgressRestoreError,
    ProgressUnderflowError,
    StepwiseError,
)

# Providers
from stepwise.providers.storage import (
    InMemoryProgressStore,
    MongoProgressStore,
    ProgressStore,
    create_progress_store,
)

# Config
from stepwise.config import StepwiseSettings, settings

__version__ = "0.1.0"

__all__ = [
    # Domain
    "Step",
    "FunctionStep",
    "ExecutionContext",
    "ProgressSnapshot",
    # Engine
    "CompositeStep",
    "CaseRunner",
    "CaseOutcome",
    "StepwiseError",
    "ProgressRestoreError",
    "ProgressUnderflowError",
    "ProgressOverflowError",
    "InvalidCursorError",
    "CompositeSealedError",
    # Providers - Storage
    "ProgressStore",
    "InMemoryProgressStore",
    "MongoProgressStore",
    "create_progress_store",
    # Config
    "StepwiseSettings",
    "settings",
]
