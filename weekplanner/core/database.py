"""
MongoDB connection using Motor (async driver).
The store handle is constructed explicitly and passed to the repositories;
the application lifespan opens it at startup and closes it on shutdown.
"""

from typing import Optional

from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorCollection,
    AsyncIOMotorDatabase,
)
from pymongo import ASCENDING
from pymongo.errors import PyMongoError

from weekplanner.core.config import Settings
from weekplanner.core.errors import StoreError
from weekplanner.core.logger import logger

WEEKS_COLLECTION = "weeks"
TASKS_COLLECTION = "tasks"


class MongoStore:
    """MongoDB connection manager with async support."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.client: Optional[AsyncIOMotorClient] = None
        self.db: Optional[AsyncIOMotorDatabase] = None
        logger.debug("MongoStore initialized")

    @classmethod
    def from_client(cls, client, settings: Settings) -> "MongoStore":
        """
        Build a store around an already constructed client.

        Used when the caller owns the client (tests use an in-memory one).
        """
        store = cls(settings)
        store.client = client
        store.db = client[settings.mongodb_database]
        return store

    @property
    def is_connected(self) -> bool:
        return self.db is not None

    async def connect(self) -> None:
        """
        Establish connection to MongoDB.

        Raises:
            StoreError: If the server cannot be reached
        """
        if self.is_connected:
            logger.debug("MongoStore already connected")
            return

        settings = self.settings
        logger.info(f"📝 Connecting to MongoDB: {settings.masked_mongodb_url}")
        logger.debug(f"Database name: {settings.mongodb_database}")

        try:
            client = AsyncIOMotorClient(
                settings.mongodb_url,
                maxPoolSize=settings.mongodb_max_pool_size,
                minPoolSize=settings.mongodb_min_pool_size,
                serverSelectionTimeoutMS=5000,
                connectTimeoutMS=10000,
                socketTimeoutMS=10000,
            )
            await client.admin.command("ping")
        except PyMongoError as e:
            logger.error(f"❌ Failed to connect to MongoDB: {e}")
            raise StoreError(f"Cannot connect to MongoDB: {e}", cause=e) from e

        self.client = client
        self.db = client[settings.mongodb_database]
        logger.info(f"✅ Connected to MongoDB database: {settings.mongodb_database}")
        logger.debug(
            f"Connection pool: min={settings.mongodb_min_pool_size}, "
            f"max={settings.mongodb_max_pool_size}"
        )

    async def disconnect(self) -> None:
        """Close the connection. Safe to call when not connected."""
        if self.client is None:
            logger.debug("MongoDB client not initialized, nothing to disconnect")
            return

        logger.info("📝 Disconnecting from MongoDB...")
        self.client.close()
        self.client = None
        self.db = None
        logger.info("✅ Disconnected from MongoDB")

    def get_collection(self, collection_name: str) -> AsyncIOMotorCollection:
        """
        Get a MongoDB collection.

        Raises:
            StoreError: If the store is not connected
        """
        if self.db is None:
            error_msg = "Database not connected. Call connect() first."
            logger.error(f"❌ {error_msg}")
            raise StoreError(error_msg)
        return self.db[collection_name]

    async def health_check(self) -> bool:
        """Return True if the server answers a ping."""
        if self.client is None:
            logger.warning("⚠️ MongoDB client not initialized")
            return False

        try:
            await self.client.admin.command("ping")
            logger.debug("✅ MongoDB health check passed")
            return True
        except PyMongoError as e:
            logger.error(f"❌ MongoDB health check failed: {e}")
            return False

    async def create_indexes(self) -> None:
        """
        Create lookup indexes. Neither index is unique: duplicate
        (year, numweek) weeks are allowed.
        """
        try:
            logger.info("📝 Creating MongoDB indexes...")

            weeks = self.get_collection(WEEKS_COLLECTION)
            await weeks.create_index([("year", ASCENDING), ("numweek", ASCENDING)])
            logger.debug("✅ Created index on weeks.year + weeks.numweek")

            tasks = self.get_collection(TASKS_COLLECTION)
            await tasks.create_index("yearweek")
            logger.debug("✅ Created index on tasks.yearweek")

            logger.info("✅ MongoDB indexes created successfully")

        except (PyMongoError, StoreError) as e:
            # Indexes only speed up lookups; the service works without them
            logger.error(f"❌ Failed to create indexes: {e}")
