# shopadmin/db/mongo.py
import logging
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase, AsyncIOMotorGridFSBucket
from shopadmin.core.config import get_settings
import certifi

logger = logging.getLogger(__name__)

_client: AsyncIOMotorClient | None = None
_db: AsyncIOMotorDatabase | None = None
_bucket: AsyncIOMotorGridFSBucket | None = None


def get_client() -> AsyncIOMotorClient:
    assert _client is not None, "Mongo client not initialized"
    return _client


def get_db() -> AsyncIOMotorDatabase:
    assert _db is not None, "Mongo DB not initialized"
    return _db


def get_bucket() -> AsyncIOMotorGridFSBucket:
    assert _bucket is not None, "GridFS bucket not initialized"
    return _bucket


async def connect():
    """
    Create the Motor client and the GridFS bucket used for image assets.
    A failed startup ping is logged but does not abort: the client stays lazy
    and the first real query will attempt to connect again.
    """
    global _client, _db, _bucket
    settings = get_settings()

    tls = settings.MONGO_URI.startswith("mongodb+srv://")
    kwargs = {"tls": True, "tlsCAFile": certifi.where()} if tls else {}
    _client = AsyncIOMotorClient(
        settings.MONGO_URI,
        uuidRepresentation="standard",
        serverSelectionTimeoutMS=6000,
        connectTimeoutMS=6000,
        **kwargs,
    )
    _db = _client[settings.MONGO_DB]
    _bucket = AsyncIOMotorGridFSBucket(_db, bucket_name=settings.assets_bucket)

    try:
        await _client.admin.command("ping")
        logger.info("Mongo ping ok")
    except Exception as e:
        logger.warning("Mongo ping at startup failed, will connect lazily: %s", e)


async def disconnect():
    global _client, _db, _bucket
    if _client:
        _client.close()
    _client = None
    _db = None
    _bucket = None
