from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from shopadmin.core.config import get_settings
from shopadmin.core.lifespan import lifespan
from shopadmin.core.logging import configure_logging
from shopadmin.api.v1.routers.health import router as health_router
from shopadmin.api.v1.routers.auth import router as auth_router
from shopadmin.api.v1.routers.products import router as products_router
from shopadmin.api.v1.routers.categories import router as categories_router
from shopadmin.api.v1.routers.orders import router as orders_router
from shopadmin.api.v1.routers.dashboard import router as dashboard_router
from shopadmin.api.v1.routers.assets import router as assets_router

settings = get_settings()
configure_logging(level=logging.DEBUG if settings.DEBUG else logging.INFO)

app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

# ------- CORS -------
# ALLOWED_ORIGINS is a CSV, e.g. "https://admin.example.com,http://localhost:3000"
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins(),
    allow_credentials=False,                        # bearer tokens, no cookies
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    max_age=86400,
)

# ------- Routes -------
app.include_router(health_router)
app.include_router(auth_router, prefix=settings.api_prefix)
app.include_router(dashboard_router, prefix=settings.api_prefix)
app.include_router(products_router, prefix=settings.api_prefix)
app.include_router(categories_router, prefix=settings.api_prefix)
app.include_router(orders_router, prefix=settings.api_prefix)
app.include_router(assets_router, prefix=settings.api_prefix)   # public image URLs
