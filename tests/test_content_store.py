"""
Unit tests for ContentStore

These tests validate the query/mutation shapes sent to Motor without a database.
"""
import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from pymongo import ReturnDocument

from shopadmin.db.content_store import ContentStore, UnknownDocumentType


class _Cursor:
    def __init__(self, docs):
        self._docs = list(docs)

    def __aiter__(self):
        return self

    async def __anext__(self):
        if not self._docs:
            raise StopAsyncIteration
        return self._docs.pop(0)


def _store_with(collection):
    db = MagicMock()
    db.__getitem__.return_value = collection
    return ContentStore(db, asset_base_url="https://api.example.com/", asset_path="/api/assets"), db


def test_fetch_builds_projection_and_collection():
    col = MagicMock()
    col.find.return_value = _Cursor([{"_id": "p1", "title": "Stool"}])
    store, db = _store_with(col)

    docs = asyncio.run(store.fetch("product", ["title", "price"], {"_id": {"$in": ["p1"]}}))

    assert docs == [{"_id": "p1", "title": "Stool"}]
    db.__getitem__.assert_called_with("products")
    col.find.assert_called_once_with({"_id": {"$in": ["p1"]}}, {"title": 1, "price": 1})


def test_unknown_type_raises():
    store, _ = _store_with(MagicMock())
    with pytest.raises(UnknownDocumentType):
        asyncio.run(store.fetch("coupon"))


def test_create_assigns_id_and_timestamps():
    col = MagicMock()
    col.insert_one = AsyncMock()
    store, _ = _store_with(col)

    created = asyncio.run(store.create("category", {"title": "Lamps"}))

    assert created["title"] == "Lamps"
    assert len(created["_id"]) == 32
    assert created["_createdAt"] == created["_updatedAt"]
    assert created["_createdAt"].endswith("Z")
    col.insert_one.assert_awaited_once_with(created)


def test_patch_sets_fields_and_returns_updated():
    col = MagicMock()
    col.find_one_and_update = AsyncMock(return_value={"_id": "p1", "title": "New"})
    store, _ = _store_with(col)

    updated = asyncio.run(store.patch("product", "p1", {"title": "New"}))

    assert updated == {"_id": "p1", "title": "New"}
    args, kwargs = col.find_one_and_update.call_args
    assert args[0] == {"_id": "p1"}
    assert args[1]["$set"]["title"] == "New"
    assert "_updatedAt" in args[1]["$set"]
    assert kwargs["return_document"] == ReturnDocument.AFTER


def test_delete_reports_whether_document_existed():
    col = MagicMock()
    col.delete_one = AsyncMock(side_effect=[SimpleNamespace(deleted_count=1), SimpleNamespace(deleted_count=0)])
    store, _ = _store_with(col)

    assert asyncio.run(store.delete("order", "o1")) is True
    assert asyncio.run(store.delete("order", "o1")) is False


def test_asset_urls_round_trip():
    store, _ = _store_with(MagicMock())
    url = store.asset_url("65f0c0ffee")
    assert url == "https://api.example.com/api/assets/65f0c0ffee"
    assert store.asset_id_from_url(url) == "65f0c0ffee"
    assert store.asset_id_from_url(url + "?w=200") == "65f0c0ffee"
    assert store.asset_id_from_url("https://cdn.other.com/a.png") is None


def test_open_asset_rejects_malformed_id():
    bucket = MagicMock()
    store = ContentStore(MagicMock(), bucket=bucket)
    assert asyncio.run(store.open_asset("not-an-object-id")) is None
