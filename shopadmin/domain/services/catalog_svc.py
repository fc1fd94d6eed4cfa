"""
Client-side style search and sort over already materialized lists.
Nothing here talks to the store; every function returns a new list.
"""
import locale
import logging
from typing import List, Sequence

from shopadmin.domain.dates import parse_timestamp
from shopadmin.domain.models.product import Product
from shopadmin.domain.models.order import Order

logger = logging.getLogger(__name__)

SORT_CREATED_AT = "createdAt"
SORT_TOTAL = "total"
SORT_ORDER_NUMBER = "orderNumber"
SORT_KEYS = (SORT_CREATED_AT, SORT_TOTAL, SORT_ORDER_NUMBER)


def _contains(text, needle: str) -> bool:
    return bool(text) and needle in text.lower()


def filter_products(products: Sequence[Product], query: str = "") -> List[Product]:
    """Keep products whose title or category title contains `query` (case-insensitive)."""
    q = (query or "").lower()
    return [
        p for p in products
        if not q
        or _contains(p.title, q)
        or (p.category is not None and _contains(p.category.title, q))
    ]


def filter_orders(orders: Sequence[Order], query: str = "", status: str = "") -> List[Order]:
    """
    Keep orders whose number or any item name contains `query`,
    and whose status equals `status` when one is given.
    """
    q = (query or "").lower()

    def _matches(o: Order) -> bool:
        text_ok = not q or _contains(o.order_number, q) or any(_contains(it.name, q) for it in o.items)
        status_ok = not status or o.order_status == status
        return text_ok and status_ok

    return [o for o in orders if _matches(o)]


def _created_at_key(o: Order):
    dt = parse_timestamp(o.created_at)
    # unparseable timestamps go last
    if dt is None:
        return (1, 0.0)
    try:
        return (0, dt.timestamp())
    except (OverflowError, OSError, ValueError):
        return (1, 0.0)


def sort_orders(orders: Sequence[Order], sort_by: str = SORT_CREATED_AT) -> List[Order]:
    """Stable ascending sort on one of SORT_KEYS. Unknown keys keep the input order."""
    if sort_by == SORT_CREATED_AT:
        return sorted(orders, key=_created_at_key)
    if sort_by == SORT_TOTAL:
        return sorted(orders, key=lambda o: o.total)
    if sort_by == SORT_ORDER_NUMBER:
        return sorted(orders, key=lambda o: locale.strxfrm(o.order_number))
    logger.debug("sort_orders unknown key=%s, keeping input order", sort_by)
    return list(orders)
