# backend/tugas/db/mongo.py
import logging
from typing import Tuple

from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING

from tugas.core.config import Settings

logger = logging.getLogger(__name__)


def connect_to_mongo(settings: Settings) -> Tuple[AsyncIOMotorClient, AsyncIOMotorDatabase]:
    """
    Create the Motor client and database handle.
    Motor connects lazily, so nothing goes over the wire until the first query.
    """
    client = AsyncIOMotorClient(settings.MONGO_URI)
    db = client[settings.MONGO_DB_NAME]
    logger.info("MongoDB client created (db=%s)", settings.MONGO_DB_NAME)
    return client, db


def close_mongo_connection(client: AsyncIOMotorClient | None) -> None:
    if client:
        client.close()
        logger.info("MongoDB connection closed")


async def ensure_indexes(db) -> None:
    # one account per username
    await db["users"].create_index([("username", ASCENDING)], unique=True)
    # owner-scoped listing
    await db["tasks"].create_index([("owner", ASCENDING), ("completed", ASCENDING)])
    # MongoDB reaps sessions once "expires" has passed
    await db["sessions"].create_index([("expires", ASCENDING)], expireAfterSeconds=0)


def get_db(request: Request):
    """
    FastAPI dependency: the database handle the application factory stored on app.state.
    """
    return request.app.state.db
