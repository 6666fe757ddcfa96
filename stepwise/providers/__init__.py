"""
Providers module - external collaborators of the composite engine.
"""

from stepwise.providers.storage import (
    InMemoryProgressStore,
    MongoProgressStore,
    ProgressStore,
    create_progress_store,
)

__all__ = [
    "ProgressStore",
    "InMemoryProgressStore",
    "MongoProgressStore",
    "create_progress_store",
]
