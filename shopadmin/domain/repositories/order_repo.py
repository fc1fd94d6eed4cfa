# shopadmin/domain/repositories/order_repo.py

from __future__ import annotations
from typing import Optional, List
from shopadmin.db.content_store import ContentStore
from shopadmin.domain.models.order import Order
from shopadmin.domain.mappers import order_from_doc

ORDER_TYPE = "order"
PROJECTION = ["orderNumber", "createdAt", "total", "items", "orderStatus"]


class OrderRepo:
    """Orders are written by the storefront checkout; the admin side only reads and deletes them."""

    def __init__(self, store: ContentStore):
        self.store = store

    async def list(self) -> List[Order]:
        docs = await self.store.fetch(ORDER_TYPE, PROJECTION)
        return [order_from_doc(d) for d in docs]

    async def get(self, order_id: str) -> Optional[Order]:
        doc = await self.store.get(ORDER_TYPE, order_id, PROJECTION)
        return order_from_doc(doc) if doc else None

    async def delete(self, order_id: str) -> bool:
        return await self.store.delete(ORDER_TYPE, order_id)
