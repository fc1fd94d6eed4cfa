from fastapi import APIRouter, Depends

from shopadmin.api.deps import content_store, redis_dep
from shopadmin.core.config import Settings, get_settings
from shopadmin.core.security import require_session
from shopadmin.db.content_store import ContentStore
from shopadmin.domain.models.dashboard import DashboardSummary
from shopadmin.domain.services.dashboard_svc import get_dashboard_summary_svc

router = APIRouter(prefix="/dashboard", tags=["dashboard"], dependencies=[Depends(require_session)])


@router.get("/summary", response_model=DashboardSummary)
async def dashboard_summary(
    store: ContentStore = Depends(content_store),
    redis=Depends(redis_dep),
    settings: Settings = Depends(get_settings),
):
    """Counters for products, inventory, orders by status, reviews and the monthly orders/sales series."""
    return await get_dashboard_summary_svc(store, redis, cache_ttl=settings.dashboard_cache_ttl)
