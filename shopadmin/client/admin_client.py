# shopadmin/client/admin_client.py
"""
Async HTTP client for the admin API, used by the admin views and scripts.
"""
from __future__ import annotations
from typing import Any, Dict, List, Optional
import logging

import httpx

from shopadmin.domain.models.product import Product, Category
from shopadmin.domain.models.order import Order
from shopadmin.domain.models.dashboard import DashboardSummary

logger = logging.getLogger(__name__)


class AdminApiError(Exception):
    def __init__(self, status_code: int, detail: Any):
        super().__init__(f"{status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail


class AdminApiClient:
    """
    Wraps an httpx AsyncClient pointed at the API prefix (e.g. http://host/api).

    Usage:
        async with AdminApiClient("http://localhost:8000/api") as api:
            await api.login("admin@example.com", "secret")
            orders = await api.list_orders()
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.token = token
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> "AdminApiClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        headers = kwargs.pop("headers", {})
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        response = await self._client.request(method, path, headers=headers, **kwargs)
        if response.is_error:
            try:
                body = response.json()
                detail = (body.get("detail") or body.get("error") or body) if isinstance(body, dict) else body
            except ValueError:
                detail = response.text
            logger.debug("admin api %s %s -> %s %s", method, path, response.status_code, detail)
            raise AdminApiError(response.status_code, detail)
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    # ----- auth --------------------------------------------------------------

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        data = await self._request("POST", "/auth/login", json={"email": email, "password": password})
        self.token = data["accessToken"]
        return data

    async def logout(self) -> None:
        try:
            await self._request("POST", "/auth/logout")
        finally:
            self.token = None

    # ----- products ----------------------------------------------------------

    async def list_products(self, q: str = "") -> List[Product]:
        data = await self._request("GET", "/products", params={"q": q} if q else None)
        return [Product.model_validate(p) for p in data]

    async def get_product(self, product_id: str) -> Product:
        return Product.model_validate(await self._request("GET", f"/products/{product_id}"))

    async def create_product(self, payload: Dict[str, Any]) -> Product:
        return Product.model_validate(await self._request("POST", "/products", json=payload))

    async def update_product(self, product_id: str, **fields) -> Product:
        data = await self._request("PUT", "/products/update", json={"id": product_id, **fields})
        return Product.model_validate(data["updatedProduct"])

    async def delete_product(self, product_id: str) -> None:
        await self._request("DELETE", f"/products/{product_id}")

    async def upload_image(self, filename: str, content: bytes, content_type: str = "image/jpeg") -> str:
        data = await self._request("POST", "/products/upload-image", files={"file": (filename, content, content_type)})
        return data["imageUrl"]

    # ----- categories / orders / dashboard -----------------------------------

    async def list_categories(self) -> List[Category]:
        return [Category.model_validate(c) for c in await self._request("GET", "/categories")]

    async def list_orders(self) -> List[Order]:
        return [Order.model_validate(o) for o in await self._request("GET", "/orders")]

    async def delete_order(self, order_id: str) -> None:
        await self._request("DELETE", f"/orders/{order_id}")

    async def dashboard(self) -> DashboardSummary:
        return DashboardSummary.model_validate(await self._request("GET", "/dashboard/summary"))
