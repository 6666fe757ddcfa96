"""
MongoDB implementation of ProgressStore.
"""

from typing import List, Optional

from motor.motor_asyncio import AsyncIOMotorClient

from stepwise.domain import ProgressSnapshot
from stepwise.providers.storage.base import ProgressStore
from stepwise.utils.logging import get_logger

logger = get_logger(__name__)


class MongoProgressStore(ProgressStore):
    """
    MongoDB implementation of ProgressStore.

    One document per case, keyed by case_id.
    """

    def __init__(
        self,
        uri: str = "mongodb://localhost:27017",
        db_name: str = "stepwise",
        collection: str = "progress",
    ):
        self.uri = uri
        self.db_name = db_name
        self.collection_name = collection
        self.client: Optional[AsyncIOMotorClient] = None
        self.db = None
        self.collection = None

    async def _ensure_connection(self):
        """Ensure database connection is established."""
        if self.client is None:
            self.client = AsyncIOMotorClient(self.uri)
            self.db = self.client[self.db_name]
            self.collection = self.db[self.collection_name]

            await self.collection.create_index("case_id", unique=True)
            await self.collection.create_index("completed")
            await self.collection.create_index("updated_at")

            logger.info("mongodb_connected", mongo_uri=self.uri, db_name=self.db_name)

    async def save(self, snapshot: ProgressSnapshot) -> None:
        """Upsert the snapshot, keeping the original created_at."""
        await self._ensure_connection()

        try:
            data = snapshot.model_dump(mode="json")
            created_at = data.pop("created_at")
            await self.collection.update_one(
                {"case_id": snapshot.case_id},
                {"$set": data, "$setOnInsert": {"created_at": created_at}},
                upsert=True,
            )
        except Exception as e:
            logger.error("save_progress_failed", error=str(e), case_id=snapshot.case_id)
            raise

    async def get(self, case_id: str) -> Optional[ProgressSnapshot]:
        await self._ensure_connection()

        try:
            doc = await self.collection.find_one({"case_id": case_id})
            if doc:
                doc.pop("_id", None)
                return ProgressSnapshot.model_validate(doc)
            return None
        except Exception as e:
            logger.error("get_progress_failed", error=str(e), case_id=case_id)
            raise

    async def delete(self, case_id: str) -> None:
        await self._ensure_connection()

        try:
            await self.collection.delete_one({"case_id": case_id})
        except Exception as e:
            logger.error("delete_progress_failed", error=str(e), case_id=case_id)
            raise

    async def list(
        self,
        completed: Optional[bool] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[ProgressSnapshot]:
        await self._ensure_connection()

        try:
            query = {}
            if completed is not None:
                query["completed"] = completed

            cursor = self.collection.find(query).sort("updated_at", -1).skip(offset).limit(limit)

            snapshots = []
            async for doc in cursor:
                doc.pop("_id", None)
                snapshots.append(ProgressSnapshot.model_validate(doc))
            return snapshots
        except Exception as e:
            logger.error("list_progress_failed", error=str(e))
            raise

    async def close(self) -> None:
        if self.client is not None:
            self.client.close()
            self.client = None
