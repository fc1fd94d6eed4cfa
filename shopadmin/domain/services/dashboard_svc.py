import logging
import time
from typing import Dict, Iterable, Sequence

from shopadmin.db.content_store import ContentStore
from shopadmin.domain.dates import parse_timestamp, month_label, INVALID_DATE_LABEL
from shopadmin.domain.mappers import order_from_doc, _num
from shopadmin.domain.models.order import Order
from shopadmin.domain.models.dashboard import MonthlyBucket, OrderStats, ProductStats, DashboardSummary
from shopadmin.domain.repositories.dashboard_cache_repo import DashboardCacheRepo

logger = logging.getLogger(__name__)

STATUS_COMPLETED = "completed"
STATUS_PENDING = "pending"
STATUS_SHIPPED = "shipped"


def aggregate_orders(orders: Sequence[Order]) -> OrderStats:
    """
    Status counters plus a monthly series of order count and sales total.

    Buckets are keyed by "<Mon> <YYYY>" of createdAt in local time and come
    out in the order each month was first seen. Orders whose createdAt can't
    be parsed all land in one "Invalid Date" bucket flagged valid=False.
    Totals are summed as stored (negative values are not corrected).
    """
    status_counts = {STATUS_COMPLETED: 0, STATUS_PENDING: 0, STATUS_SHIPPED: 0}
    buckets: Dict[str, Dict] = {}  # insertion order == first encounter

    for order in orders:
        if order.order_status in status_counts:
            status_counts[order.order_status] += 1

        dt = parse_timestamp(order.created_at)
        if dt is None:
            logger.warning("dashboard order=%s has unparseable createdAt=%r", order.id or order.order_number, order.created_at)
            label, valid = INVALID_DATE_LABEL, False
        else:
            label, valid = month_label(dt), True

        acc = buckets.setdefault(label, {"order_count": 0, "sales_total": 0, "valid": valid})
        acc["order_count"] += 1
        acc["sales_total"] += order.total

    return OrderStats(
        total_orders=len(orders),
        completed_orders=status_counts[STATUS_COMPLETED],
        pending_orders=status_counts[STATUS_PENDING],
        shipped_orders=status_counts[STATUS_SHIPPED],
        series=[MonthlyBucket(label=label, **acc) for label, acc in buckets.items()],
    )


def summarize_products(products: Iterable[dict]) -> ProductStats:
    """Product count, units in stock and stock value (price x stockLevel) from raw product docs."""
    count = 0
    inventory = 0
    value = 0.0
    for p in products:
        # whole units
        stock = int(_num(p.get("stockLevel")))
        count += 1
        inventory += stock
        value += _num(p.get("price")) * stock
    return ProductStats(total_products=count, total_inventory=inventory, total_inventory_value=value)


async def get_dashboard_summary_svc(store: ContentStore, redis, cache_ttl: int = 60) -> DashboardSummary:
    t0 = time.perf_counter()
    cache = DashboardCacheRepo(redis, ttl=cache_ttl)

    cached = await cache.get()
    if cached is not None:
        logger.info("dashboard cache_hit")
        return cached

    products = await store.fetch("product", ["price", "stockLevel"])
    order_docs = await store.fetch("order", ["orderStatus", "createdAt", "total"])
    reviews = await store.fetch("review", ["_id"])

    summary = DashboardSummary(
        products=summarize_products(products),
        orders=aggregate_orders([order_from_doc(d) for d in order_docs]),
        total_reviews=len(reviews),
    )
    await cache.set(summary)

    logger.info(
        "dashboard done products=%s orders=%s reviews=%s months=%s time=%.3fs",
        summary.products.total_products, summary.orders.total_orders, summary.total_reviews,
        len(summary.orders.series), time.perf_counter() - t0,
    )
    return summary


async def invalidate_dashboard(redis) -> None:
    await DashboardCacheRepo(redis).invalidate()
