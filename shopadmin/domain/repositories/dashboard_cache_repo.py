from typing import Optional
import json
import logging
from shopadmin.domain.models.dashboard import DashboardSummary

logger = logging.getLogger(__name__)

SUMMARY_KEY = "dashboard:summary"


class DashboardCacheRepo:
    """
    Caches the computed dashboard summary in Redis.
    A None client turns every call into a no-op (Redis is optional).
    Redis errors are logged and treated as a cache miss.
    """
    def __init__(self, redis, ttl: int = 60):
        self.cache = redis
        self.ttl = ttl

    async def get(self) -> Optional[DashboardSummary]:
        if self.cache is None:
            return None
        try:
            raw = await self.cache.get(SUMMARY_KEY)
        except Exception as e:
            logger.warning("dashboard cache get error key=%s err=%s", SUMMARY_KEY, e)
            return None
        if not raw:
            return None
        return DashboardSummary.model_validate(json.loads(raw))

    async def set(self, summary: DashboardSummary) -> None:
        if self.cache is None:
            return
        try:
            await self.cache.set(SUMMARY_KEY, summary.model_dump_json(by_alias=True), ex=self.ttl)
        except Exception as e:
            logger.warning("dashboard cache set error key=%s err=%s", SUMMARY_KEY, e)

    async def invalidate(self) -> None:
        if self.cache is None:
            return
        try:
            await self.cache.delete(SUMMARY_KEY)
        except Exception as e:
            logger.warning("dashboard cache delete error key=%s err=%s", SUMMARY_KEY, e)
