import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

logger = logging.getLogger(__name__)


class MongoDatabase:
    """MongoDB connection manager, owned by the application instance."""

    def __init__(self, url: str, database_name: str):
        self.url = url
        self.database_name = database_name
        self.client: AsyncIOMotorClient | None = None
        self.db: AsyncIOMotorDatabase | None = None

    async def connect(self) -> AsyncIOMotorDatabase:
        """Connect to MongoDB."""
        # tz_aware keeps loaded timestamps comparable with new ones
        self.client = AsyncIOMotorClient(self.url, tz_aware=True)
        self.db = self.client[self.database_name]

        await self.create_indexes()
        logger.info("Connected to MongoDB: %s", self.database_name)
        return self.db

    async def close(self):
        """Disconnect from MongoDB."""
        if self.client is not None:
            self.client.close()
            self.client = None
            self.db = None
            logger.info("Disconnected from MongoDB")

    async def create_indexes(self):
        """Create database indexes."""
        # Orders are always read per customer, oldest first
        await self.db["orders"].create_index([("customer_id", 1), ("created_at", 1)])

        # Transaction log
        await self.db["transactions"].create_index([("entity_id", 1), ("created_at", 1)])
        await self.db["transactions"].create_index([("created_at", -1)])

        # Debt adjustments
        await self.db["debt_adjustments"].create_index([("customer_id", 1), ("created_at", 1)])
