# shopadmin/core/lifespan.py
from contextlib import asynccontextmanager
import logging
from fastapi import FastAPI
from shopadmin.db import mongo, redis as r
from shopadmin.core.config import get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()

    # --- Startup ---
    # Content store is mandatory
    try:
        await mongo.connect()
        logger.info("Mongo connected db=%s", settings.MONGO_DB)
    except Exception as e:
        logger.error("Mongo connection failed: %s", e)
        raise

    # Redis is optional
    if settings.REDIS_URL:
        await r.connect()
    else:
        logger.warning("No REDIS_URL provided, sessions are not revocable and dashboard is not cached")

    yield

    # --- Shutdown ---
    if settings.REDIS_URL:
        try:
            await r.disconnect()
        except Exception as e:
            logger.warning("Redis disconnect error: %s", e)

    try:
        await mongo.disconnect()
        logger.info("Mongo disconnected")
    except Exception as e:
        logger.warning("Mongo disconnect error: %s", e)
