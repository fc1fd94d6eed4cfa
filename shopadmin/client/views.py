# shopadmin/client/views.py
"""
View state for the admin screens.

Each view owns its records, a loading flag and the last error. `refresh()`
goes to the API; search, status filter and sort only recompute `visible` from
records already in memory. Every refresh takes a ticket from the view's
LatestRequestGuard and its result is applied only if no newer refresh has
started since, so a slow superseded response can never overwrite newer state.
"""
from __future__ import annotations
from typing import Generic, List, Optional, TypeVar
import logging

import httpx
from pydantic import ValidationError

from shopadmin.client.admin_client import AdminApiClient, AdminApiError
from shopadmin.domain.models.product import Product
from shopadmin.domain.models.order import Order
from shopadmin.domain.models.dashboard import DashboardSummary
from shopadmin.domain.services.catalog_svc import SORT_CREATED_AT, filter_orders, filter_products, sort_orders

logger = logging.getLogger(__name__)

# transport errors, non-2xx answers and bodies that are not the expected shape
VIEW_ERRORS = (AdminApiError, httpx.HTTPError, ValidationError, ValueError, TypeError)

T = TypeVar("T")


class LatestRequestGuard:
    def __init__(self):
        self._latest = 0

    def begin(self) -> int:
        self._latest += 1
        return self._latest

    def is_current(self, ticket: int) -> bool:
        return ticket == self._latest


class _RemoteView(Generic[T]):
    name = "view"

    def __init__(self, api: AdminApiClient):
        self.api = api
        self.loading = True
        self.error: Optional[str] = None
        self._guard = LatestRequestGuard()

    async def _load(self) -> T:
        raise NotImplementedError

    def _apply(self, result: T) -> None:
        raise NotImplementedError

    async def refresh(self) -> bool:
        """Fetch and apply. Returns False when the call failed or its response was stale."""
        ticket = self._guard.begin()
        self.loading = True
        try:
            result = await self._load()
        except VIEW_ERRORS as e:
            logger.error("%s refresh failed ticket=%s err=%s", self.name, ticket, e)
            if self._guard.is_current(ticket):
                self.error = str(e)
                self.loading = False
            return False

        if not self._guard.is_current(ticket):
            logger.debug("%s discarding stale response ticket=%s", self.name, ticket)
            return False

        self._apply(result)
        self.error = None
        self.loading = False
        return True


class ProductListView(_RemoteView[List[Product]]):
    name = "products"

    def __init__(self, api: AdminApiClient):
        super().__init__(api)
        self.products: List[Product] = []
        self.visible: List[Product] = []
        self.query = ""

    async def _load(self) -> List[Product]:
        return await self.api.list_products()

    def _apply(self, result: List[Product]) -> None:
        self.products = result
        self._recompute()

    def _recompute(self) -> None:
        self.visible = filter_products(self.products, self.query)

    def search(self, query: str) -> List[Product]:
        self.query = query
        self._recompute()
        return self.visible

    async def delete(self, product_id: str) -> bool:
        try:
            await self.api.delete_product(product_id)
        except VIEW_ERRORS as e:
            logger.error("products delete failed id=%s err=%s", product_id, e)
            self.error = str(e)
            return False
        self.products = [p for p in self.products if p.id != product_id]
        self._recompute()
        return True


class OrderListView(_RemoteView[List[Order]]):
    name = "orders"

    def __init__(self, api: AdminApiClient):
        super().__init__(api)
        self.orders: List[Order] = []
        self.visible: List[Order] = []
        self.query = ""
        self.status_filter = ""
        self.sort_by = SORT_CREATED_AT

    async def _load(self) -> List[Order]:
        return await self.api.list_orders()

    def _apply(self, result: List[Order]) -> None:
        self.orders = result
        self._recompute()

    def _recompute(self) -> None:
        self.visible = filter_orders(sort_orders(self.orders, self.sort_by), self.query, self.status_filter)

    def search(self, query: str) -> List[Order]:
        self.query = query
        self._recompute()
        return self.visible

    def set_status_filter(self, status: str) -> List[Order]:
        self.status_filter = status
        self._recompute()
        return self.visible

    def set_sort(self, sort_by: str) -> List[Order]:
        self.sort_by = sort_by
        self._recompute()
        return self.visible

    async def delete(self, order_id: str) -> bool:
        try:
            await self.api.delete_order(order_id)
        except VIEW_ERRORS as e:
            logger.error("orders delete failed id=%s err=%s", order_id, e)
            self.error = str(e)
            return False
        self.orders = [o for o in self.orders if o.id != order_id]
        self._recompute()
        return True


class DashboardView(_RemoteView[DashboardSummary]):
    name = "dashboard"

    def __init__(self, api: AdminApiClient):
        super().__init__(api)
        self.summary: Optional[DashboardSummary] = None

    async def _load(self) -> DashboardSummary:
        return await self.api.dashboard()

    def _apply(self, result: DashboardSummary) -> None:
        self.summary = result
