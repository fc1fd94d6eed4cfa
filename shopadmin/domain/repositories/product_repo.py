# shopadmin/domain/repositories/product_repo.py

from __future__ import annotations
from typing import Optional, List, Dict, Any
from shopadmin.db.content_store import ContentStore
from shopadmin.domain.models.product import Product
from shopadmin.domain.mappers import product_from_doc, ref_id

PRODUCT_TYPE = "product"

# Fields the admin screens read
LIST_PROJECTION = [
    "title", "slug", "description", "price", "originalPrice", "priceWithoutDiscount",
    "discountPercentage", "stock", "stockLevel", "inventory", "rating", "badge", "tags",
    "dimensions", "image", "category", "isFeaturedProduct",
]


class ProductRepo:
    """
    Products live under the 'product' record type. Category titles and image
    URLs are dereferenced here so callers get ready-to-render Product models.
    """

    def __init__(self, store: ContentStore):
        self.store = store

    async def _categories_for(self, docs: List[dict]) -> Dict[str, dict]:
        ids = sorted({cid for cid in (ref_id(d.get("category")) for d in docs) if cid})
        if not ids:
            return {}
        cats = await self.store.fetch("category", ["title"], {"_id": {"$in": ids}})
        return {str(c["_id"]): c for c in cats}

    def _to_model(self, doc: dict, categories: Dict[str, dict]) -> Product:
        cat = categories.get(ref_id(doc.get("category")) or "")
        return product_from_doc(doc, cat, asset_url=self.store.asset_url)

    async def list(self) -> List[Product]:
        docs = await self.store.fetch(PRODUCT_TYPE, LIST_PROJECTION)
        categories = await self._categories_for(docs)
        return [self._to_model(d, categories) for d in docs]

    async def exists(self, product_id: str) -> bool:
        return await self.store.get(PRODUCT_TYPE, product_id, ["_id"]) is not None

    async def get(self, product_id: str) -> Optional[Product]:
        doc = await self.store.get(PRODUCT_TYPE, product_id, LIST_PROJECTION)
        if not doc:
            return None
        categories = await self._categories_for([doc])
        return self._to_model(doc, categories)

    async def create(self, doc: Dict[str, Any]) -> Product:
        created = await self.store.create(PRODUCT_TYPE, doc)
        categories = await self._categories_for([created])
        return self._to_model(created, categories)

    async def patch(self, product_id: str, fields: Dict[str, Any]) -> Optional[Product]:
        updated = await self.store.patch(PRODUCT_TYPE, product_id, fields)
        if updated is None:
            return None
        categories = await self._categories_for([updated])
        return self._to_model(updated, categories)

    async def delete(self, product_id: str) -> bool:
        return await self.store.delete(PRODUCT_TYPE, product_id)
