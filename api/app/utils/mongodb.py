"""
MongoDB Connection - document store for lists and user accounts
"""
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from typing import Optional
import logging

from app.config import settings

logger = logging.getLogger(__name__)

LISTS_COLLECTION = "lists"
USERS_COLLECTION = "users"

# MongoDB client instance
mongo_client: Optional[AsyncIOMotorClient] = None
mongo_db: Optional[AsyncIOMotorDatabase] = None


async def init_mongodb():
    """Initialize MongoDB connection"""
    global mongo_client, mongo_db
    logger.info("Initializing MongoDB connection...")

    mongo_client = AsyncIOMotorClient(settings.MONGODB_URL, tz_aware=True)
    mongo_db = mongo_client[settings.MONGODB_DATABASE]

    # Test connection
    await mongo_client.admin.command('ping')

    # Create indexes
    await create_indexes(mongo_db)

    logger.info("MongoDB connection established")


async def close_mongodb():
    """Close MongoDB connection"""
    global mongo_client
    if mongo_client:
        logger.info("Closing MongoDB connection...")
        mongo_client.close()
        logger.info("MongoDB connection closed")


async def get_mongodb() -> AsyncIOMotorDatabase:
    """
    Dependency that provides MongoDB database
    Usage: db: AsyncIOMotorDatabase = Depends(get_mongodb)
    """
    if mongo_db is None:
        raise RuntimeError("MongoDB client not initialized")
    return mongo_db


async def create_indexes(db: AsyncIOMotorDatabase):
    """Create MongoDB indexes; list names and emails are the document keys"""

    lists = db[LISTS_COLLECTION]
    await lists.create_index("creator_email")
    await lists.create_index("is_visible")
    await lists.create_index("updated_date")

    users = db[USERS_COLLECTION]
    await users.create_index("is_admin")

    logger.info("MongoDB indexes created")
