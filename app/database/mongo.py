import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from app.config import settings

logger = logging.getLogger(__name__)


def create_client(uri: str | None = None) -> AsyncIOMotorClient:
    # motor connects lazily; a short server selection timeout keeps a down
    # MongoDB from stalling startup
    return AsyncIOMotorClient(
        uri or settings.MONGO_URI,
        serverSelectionTimeoutMS=settings.MONGO_TIMEOUT_MS,
    )


def get_database(client: AsyncIOMotorClient, name: str | None = None) -> AsyncIOMotorDatabase:
    return client[name or settings.MONGO_DB]


async def ping(db: AsyncIOMotorDatabase) -> None:
    """Round-trip to the server; raises if MongoDB is unreachable."""
    await db.command("ping")
    logger.info("Connected to MongoDB database %s", db.name)
