# shopadmin/db/content_store.py

from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional, Tuple
from datetime import datetime, timezone
import logging
import uuid

from bson import ObjectId
from bson.errors import InvalidId
from gridfs.errors import NoFile
from motor.motor_asyncio import AsyncIOMotorDatabase, AsyncIOMotorGridFSBucket
from pymongo import ReturnDocument

logger = logging.getLogger(__name__)

# record-type tag -> collection
DOC_TYPES: Dict[str, str] = {
    "product": "products",
    "category": "categories",
    "order": "orders",
    "review": "reviews",
}


class UnknownDocumentType(ValueError):
    pass


def _now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class ContentStore:
    """
    Thin client over the content store (Mongo collections keyed by record type)
    plus the GridFS bucket holding image assets.

    Queries are "type + projection (+ filter)"; mutations are
    "patch by id, set fields" and "delete by id".
    """

    def __init__(
        self,
        db: AsyncIOMotorDatabase,
        bucket: Optional[AsyncIOMotorGridFSBucket] = None,
        asset_base_url: str = "",
        asset_path: str = "/api/assets",
    ):
        self.db = db
        self.bucket = bucket
        self.asset_base_url = asset_base_url.rstrip("/")
        self.asset_path = asset_path

    def _col(self, doc_type: str):
        try:
            return self.db[DOC_TYPES[doc_type]]
        except KeyError:
            raise UnknownDocumentType(doc_type) from None

    # ----- queries -----------------------------------------------------------

    async def fetch(
        self,
        doc_type: str,
        projection: Optional[Iterable[str]] = None,
        filter: Optional[dict] = None,
    ) -> List[dict]:
        proj = {f: 1 for f in projection} if projection else None
        cursor = self._col(doc_type).find(filter or {}, proj)
        docs = [doc async for doc in cursor]
        logger.debug("store fetch type=%s filter=%s docs=%s", doc_type, filter, len(docs))
        return docs

    async def get(self, doc_type: str, doc_id: str, projection: Optional[Iterable[str]] = None) -> Optional[dict]:
        proj = {f: 1 for f in projection} if projection else None
        return await self._col(doc_type).find_one({"_id": doc_id}, proj)

    # ----- mutations ---------------------------------------------------------

    async def create(self, doc_type: str, doc: dict) -> dict:
        now = _now()
        new_doc = {**doc, "_id": doc.get("_id") or uuid.uuid4().hex, "_createdAt": now, "_updatedAt": now}
        await self._col(doc_type).insert_one(new_doc)
        logger.info("store create type=%s id=%s", doc_type, new_doc["_id"])
        return new_doc

    async def patch(self, doc_type: str, doc_id: str, fields: Dict[str, Any]) -> Optional[dict]:
        """Set the named fields on an existing document. Returns the updated document, None if missing."""
        updated = await self._col(doc_type).find_one_and_update(
            {"_id": doc_id},
            {"$set": {**fields, "_updatedAt": _now()}},
            return_document=ReturnDocument.AFTER,
        )
        logger.info("store patch type=%s id=%s fields=%s found=%s", doc_type, doc_id, sorted(fields), updated is not None)
        return updated

    async def delete(self, doc_type: str, doc_id: str) -> bool:
        res = await self._col(doc_type).delete_one({"_id": doc_id})
        logger.info("store delete type=%s id=%s deleted=%s", doc_type, doc_id, res.deleted_count)
        return res.deleted_count > 0

    # ----- assets ------------------------------------------------------------

    async def upload_asset(self, data: bytes, filename: str, content_type: str) -> str:
        assert self.bucket is not None, "asset bucket not configured"
        file_id = await self.bucket.upload_from_stream(
            filename, data, metadata={"contentType": content_type}
        )
        logger.info("store asset upload id=%s filename=%s bytes=%s", file_id, filename, len(data))
        return str(file_id)

    async def open_asset(self, asset_id: str) -> Optional[Tuple[bytes, str]]:
        """Return (bytes, content type) of a stored asset, None if it doesn't exist."""
        assert self.bucket is not None, "asset bucket not configured"
        try:
            stream = await self.bucket.open_download_stream(ObjectId(asset_id))
        except (InvalidId, NoFile):
            return None
        data = await stream.read()
        meta = stream.metadata or {}
        return data, meta.get("contentType", "application/octet-stream")

    def asset_url(self, asset_id: str) -> str:
        return f"{self.asset_base_url}{self.asset_path}/{asset_id}"

    def asset_id_from_url(self, url: str) -> Optional[str]:
        """Recognize URLs pointing at our own asset route, so they are referenced instead of re-uploaded."""
        prefix = f"{self.asset_base_url}{self.asset_path}/"
        if url.startswith(prefix):
            tail = url[len(prefix):].split("?", 1)[0].strip("/")
            return tail or None
        return None
