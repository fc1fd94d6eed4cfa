# shopadmin/domain/repositories/category_repo.py

from __future__ import annotations
from typing import Optional, List, Dict, Any
from shopadmin.db.content_store import ContentStore
from shopadmin.domain.models.product import Category
from shopadmin.domain.mappers import category_from_doc

CATEGORY_TYPE = "category"
PROJECTION = ["title", "image", "products"]


class CategoryRepo:

    def __init__(self, store: ContentStore):
        self.store = store

    async def list(self) -> List[Category]:
        docs = await self.store.fetch(CATEGORY_TYPE, PROJECTION)
        return [category_from_doc(d, self.store.asset_url) for d in docs]

    async def get(self, category_id: str) -> Optional[Category]:
        doc = await self.store.get(CATEGORY_TYPE, category_id, PROJECTION)
        return category_from_doc(doc, self.store.asset_url) if doc else None

    async def create(self, doc: Dict[str, Any]) -> Category:
        created = await self.store.create(CATEGORY_TYPE, doc)
        return category_from_doc(created, self.store.asset_url)

    async def patch(self, category_id: str, fields: Dict[str, Any]) -> Optional[Category]:
        updated = await self.store.patch(CATEGORY_TYPE, category_id, fields)
        return category_from_doc(updated, self.store.asset_url) if updated else None

    async def delete(self, category_id: str) -> bool:
        return await self.store.delete(CATEGORY_TYPE, category_id)
