"""
Pytest fixtures shared by the shopadmin test modules.

Settings are read from the environment, so the required values are set here
before anything imports shopadmin.main.
"""
import os

os.environ.setdefault("MONGO_URI", "mongodb://localhost:27017")
os.environ.setdefault("MONGO_DB", "shopadmin_test")
os.environ.setdefault("ADMIN_EMAIL", "admin@example.com")
os.environ.setdefault("ADMIN_PASSWORD", "s3cret-pass")
os.environ.setdefault("SESSION_SECRET", "test-session-secret")
os.environ.setdefault("REDIS_URL", "")

import httpx
import pytest
from fastapi.testclient import TestClient

from fakes import FakeContentStore, FakeRedis
from shopadmin.api.deps import content_store, redis_dep, image_service
from shopadmin.domain.services.image_svc import ImageService
from shopadmin.main import app

ADMIN_EMAIL = os.environ["ADMIN_EMAIL"]
ADMIN_PASSWORD = os.environ["ADMIN_PASSWORD"]

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


def _remote_images(request: httpx.Request) -> httpx.Response:
    if request.url.path.endswith("missing.png"):
        return httpx.Response(404)
    return httpx.Response(200, content=PNG_BYTES, headers={"content-type": "image/png"})


@pytest.fixture
def store():
    """In-memory content store seeded with two categories, two products and three orders"""
    s = FakeContentStore()
    s.seed(
        "category",
        {"_id": "cat-chairs", "title": "Chairs", "products": 2},
        {"_id": "cat-sofas", "title": "Sofas", "products": 1},
    )
    s.seed(
        "product",
        {
            "_id": "p1", "title": "Library Stool Chair", "price": 99, "stockLevel": 10,
            "inventory": 10, "tags": ["featured"], "category": {"_type": "reference", "_ref": "cat-chairs"},
            "rating": {"rate": 4.5, "count": 12},
        },
        {
            "_id": "p2", "title": "Rose Lounge", "price": 250, "stockLevel": 2,
            "inventory": 2, "category": {"_type": "reference", "_ref": "cat-sofas"},
            "image": {"_type": "image", "asset": {"_type": "reference", "_ref": "asset-sofa"}},
        },
    )
    s.seed(
        "order",
        {
            "_id": "o1", "orderNumber": "ORD-002", "createdAt": "2024-01-05", "total": 10,
            "items": [{"productId": "p1", "name": "Library Stool Chair", "quantity": 1, "price": 10}],
            "orderStatus": "completed",
        },
        {
            "_id": "o2", "orderNumber": "ORD-001", "createdAt": "2024-01-20", "total": 5,
            "items": [{"productId": "p2", "name": "Rose Lounge", "quantity": 1, "price": 5}],
            "orderStatus": "pending",
        },
        {
            "_id": "o3", "orderNumber": "ORD-003", "createdAt": "2024-02-01", "total": 20,
            "items": [{"productId": "p1", "name": "Library Stool Chair", "quantity": 2, "price": 10}],
            "orderStatus": "completed",
        },
    )
    s.seed("review", {"_id": "r1"}, {"_id": "r2"})
    return s


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def client(store, fake_redis):
    """TestClient with the store, Redis and image fetching replaced by in-memory doubles"""
    app.dependency_overrides[content_store] = lambda: store
    app.dependency_overrides[redis_dep] = lambda: fake_redis
    app.dependency_overrides[image_service] = lambda: ImageService(
        store, transport=httpx.MockTransport(_remote_images)
    )
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client):
    response = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['accessToken']}"}
