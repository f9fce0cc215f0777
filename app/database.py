"""MongoDB database connection using Motor (async driver)."""
import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from app.config import settings

logger = logging.getLogger(__name__)

# Every record lives in this one collection, keyed by its storage key
STORE_COLLECTION = "store"


class Database:
    """MongoDB database connection manager."""

    client: AsyncIOMotorClient | None = None
    db: AsyncIOMotorDatabase | None = None

    async def connect(self) -> None:
        """Connect to MongoDB and make sure the record store exists."""
        self.client = AsyncIOMotorClient(settings.mongodb_url)
        self.db = self.client[settings.mongodb_db_name]
        await self.ensure_store()
        logger.info("Connected to MongoDB: %s", settings.mongodb_db_name)

    async def ensure_store(self) -> None:
        """
        Create the record collection on first start.

        Records are looked up by ``_id`` only; the ``updated_at`` index
        serves listing the most recently written keys when inspecting a
        deployment.
        """
        names = await self.db.list_collection_names()
        if STORE_COLLECTION not in names:
            await self.db.create_collection(STORE_COLLECTION)
            logger.info("Created collection '%s'", STORE_COLLECTION)
        await self.db[STORE_COLLECTION].create_index("updated_at")

    async def disconnect(self) -> None:
        """Disconnect from MongoDB."""
        if self.client:
            self.client.close()
            logger.info("Disconnected from MongoDB")


# Global database instance
database = Database()


async def get_database() -> AsyncIOMotorDatabase:
    """Dependency to get database instance."""
    if database.db is None:
        raise RuntimeError("Database not connected")
    return database.db
