"""
Domain module - step contract, execution context and progress models.
"""

# Protocol
from .protocol import FunctionStep, Step

# Execution Context
from .context import ExecutionContext

# Progress
from .progress import ProgressSnapshot

__all__ = [
    "Step",
    "FunctionStep",
    "ExecutionContext",
    "ProgressSnapshot",
]
