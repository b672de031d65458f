# course_service/database.py
import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError
from pymongo.server_api import ServerApi

from .config import Settings
from .errors import StoreUnavailable

logger = logging.getLogger("course_service.database")

COURSES_COLLECTION = "courses"


def create_client(settings: Settings) -> AsyncIOMotorClient:
    """Create a client pinned to the Stable API v1"""
    return AsyncIOMotorClient(
        settings.database_uri,
        server_api=ServerApi("1", strict=True, deprecation_errors=True),
        serverSelectionTimeoutMS=settings.server_selection_timeout_ms,
    )


async def connect(settings: Settings) -> AsyncIOMotorClient:
    """Open the client and confirm the deployment answers a ping"""
    client = create_client(settings)
    try:
        await client.admin.command("ping")
    except PyMongoError as e:
        client.close()
        logger.critical(f"Could not connect to MongoDB: {str(e)}")
        raise StoreUnavailable("Unable to connect to the course database") from e

    logger.info("MongoDB connected successfully!")
    return client


def get_database(client: AsyncIOMotorClient, settings: Settings) -> AsyncIOMotorDatabase:
    return client[settings.db_name]
