from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import List
import time

from shopadmin.api.deps import content_store, redis_dep
from shopadmin.core.security import require_session
from shopadmin.db.content_store import ContentStore
from shopadmin.domain.models.order import Order
from shopadmin.domain.repositories.order_repo import OrderRepo
from shopadmin.domain.services.catalog_svc import SORT_CREATED_AT, SORT_KEYS, filter_orders, sort_orders
from shopadmin.domain.services.dashboard_svc import invalidate_dashboard

import logging
logger = logging.getLogger(__name__)

router = APIRouter(tags=["orders"], dependencies=[Depends(require_session)])


@router.get("/orders", response_model=List[Order])
async def list_orders(
    q: str = Query("", description="Case-insensitive match on order number or item names"),
    status_filter: str = Query("", alias="status", description="Exact order status, empty for all"),
    sort_by: str = Query(SORT_CREATED_AT, description=f"One of {', '.join(SORT_KEYS)}"),
    store: ContentStore = Depends(content_store),
):
    if sort_by not in SORT_KEYS:
        raise HTTPException(status_code=400, detail=f"sort_by must be one of {', '.join(SORT_KEYS)}")

    t0 = time.perf_counter()
    orders = await OrderRepo(store).list()
    result = filter_orders(sort_orders(orders, sort_by), q, status_filter)
    logger.info(
        "orders list q=%r status=%r sort_by=%s total=%s items=%s in %.4fs",
        q, status_filter, sort_by, len(orders), len(result), time.perf_counter() - t0,
    )
    return result


@router.get("/orders/{order_id}", response_model=Order)
async def get_order(order_id: str, store: ContentStore = Depends(content_store)):
    order = await OrderRepo(store).get(order_id)
    if order is None:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


@router.delete("/orders/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_order(
    order_id: str,
    store: ContentStore = Depends(content_store),
    redis=Depends(redis_dep),
):
    if not await OrderRepo(store).delete(order_id):
        raise HTTPException(status_code=404, detail="Order not found")
    await invalidate_dashboard(redis)
    logger.info("delete_order id=%s", order_id)
