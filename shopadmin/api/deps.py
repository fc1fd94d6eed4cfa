# shopadmin/api/deps.py
from fastapi import Depends
from shopadmin.core.config import Settings, get_settings
from shopadmin.db.mongo import get_db, get_bucket
from shopadmin.db.redis import get_redis
from shopadmin.db.content_store import ContentStore
from shopadmin.domain.services.image_svc import ImageService


# Content store bound to the live Mongo database and asset bucket
def content_store(settings: Settings = Depends(get_settings)) -> ContentStore:
    return ContentStore(
        get_db(),
        get_bucket(),
        asset_base_url=settings.ASSET_BASE_URL,
        asset_path=f"{settings.api_prefix}/assets",
    )


# Redis client, or None when not configured
def redis_dep():
    return get_redis()


def image_service(
    store: ContentStore = Depends(content_store),
    settings: Settings = Depends(get_settings),
) -> ImageService:
    return ImageService(
        store,
        timeout_s=settings.image_fetch_timeout_s,
        max_bytes=settings.max_upload_mb * 1024 * 1024,
    )
