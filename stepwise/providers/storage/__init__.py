"""
Storage providers module.

This module contains progress store implementations:
- ProgressStore: Abstract progress store interface
- InMemoryProgressStore: In-memory implementation (for testing)
- MongoProgressStore: MongoDB implementation
"""

from .base import InMemoryProgressStore, ProgressStore
from .factory import create_progress_store
from .mongo import MongoProgressStore

__all__ = [
    "ProgressStore",
    "InMemoryProgressStore",
    "MongoProgressStore",
    "create_progress_store",
]
