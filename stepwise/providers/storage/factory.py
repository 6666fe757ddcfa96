"""
Build the configured progress store.
"""

from stepwise.config.settings import StepwiseSettings, settings as default_settings
from stepwise.config.exceptions import ConfigError
from stepwise.providers.storage.base import InMemoryProgressStore, ProgressStore


def create_progress_store(settings: StepwiseSettings | None = None) -> ProgressStore:
    """
    Create the store named by settings.default_store.

    Raises:
        ConfigError: If mongodb is selected without a mongo_uri
    """
    settings = settings or default_settings

    if settings.default_store == "mongodb":
        if not settings.mongo_uri:
            raise ConfigError("STEPWISE_MONGO_URI is required for the mongodb store")
        from stepwise.providers.storage.mongo import MongoProgressStore

        return MongoProgressStore(
            uri=settings.mongo_uri,
            db_name=settings.mongo_db_name,
            collection=settings.mongo_collection,
        )

    return InMemoryProgressStore()
