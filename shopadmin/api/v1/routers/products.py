# shopadmin/api/v1/routers/products.py

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status
from fastapi.responses import JSONResponse
from typing import List, Optional
import time

from shopadmin.api.deps import content_store, redis_dep, image_service
from shopadmin.api.v1.schemas.catalog import ProductCreateIn, ProductUpdateIn, ProductUpdateOut, ImageUploadOut
from shopadmin.core.security import require_session
from shopadmin.db.content_store import ContentStore
from shopadmin.domain.mappers import product_doc_for_create, product_fields_for_update
from shopadmin.domain.models.product import Product
from shopadmin.domain.repositories.product_repo import ProductRepo
from shopadmin.domain.services.catalog_svc import filter_products
from shopadmin.domain.services.dashboard_svc import invalidate_dashboard
from shopadmin.domain.services.image_svc import ImageService, ImageUploadError

import logging
logger = logging.getLogger(__name__)

router = APIRouter(tags=["products"], dependencies=[Depends(require_session)])


@router.get("/products", response_model=List[Product])
async def list_products(
    q: str = Query("", description="Case-insensitive match on title or category title"),
    store: ContentStore = Depends(content_store),
):
    t0 = time.perf_counter()
    products = await ProductRepo(store).list()
    result = filter_products(products, q)
    logger.info("products list q=%r total=%s items=%s in %.4fs", q, len(products), len(result), time.perf_counter() - t0)
    return result


# Static paths are declared before /products/{product_id}
@router.post("/products/upload-image", response_model=ImageUploadOut)
async def upload_image(
    file: UploadFile = File(...),
    images: ImageService = Depends(image_service),
):
    """Store an uploaded image file as an asset and return its URL."""
    data = await file.read()
    try:
        asset_id = await images.upload_bytes(data, file.filename or "image", file.content_type)
    except ImageUploadError as e:
        logger.warning("upload_image rejected filename=%s err=%s", file.filename, e)
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        logger.exception("upload_image failed filename=%s", file.filename)
        return JSONResponse(status_code=500, content={"error": "Failed to upload image"})
    return ImageUploadOut(image_url=images.store.asset_url(asset_id), asset_id=asset_id)


@router.put("/products/update", response_model=ProductUpdateOut)
async def update_product(
    body: Optional[ProductUpdateIn] = None,
    store: ContentStore = Depends(content_store),
    images: ImageService = Depends(image_service),
    redis=Depends(redis_dep),
):
    """
    Patch a product. Only the supplied fields are set; an `image` URL is
    fetched and re-stored as an asset before being referenced.
    """
    if body is None or not body.id:
        return JSONResponse(status_code=400, content={"error": "Product ID is required"})

    changes = body.model_dump(exclude_unset=True, exclude_none=True, exclude={"id"})
    logger.info("update_product id=%s fields=%s", body.id, sorted(changes))

    repo = ProductRepo(store)
    updated = None
    try:
        # nothing is uploaded for a product that does not exist
        if await repo.exists(body.id):
            asset_id = await images.import_from_url(body.image) if body.image else None
            updated = await repo.patch(body.id, product_fields_for_update(changes, asset_id))
    except Exception:
        logger.exception("update_product failed id=%s", body.id)
        return JSONResponse(status_code=500, content={"error": "Failed to update product"})

    if updated is None:
        raise HTTPException(status_code=404, detail="Product not found")

    await invalidate_dashboard(redis)
    return ProductUpdateOut(message="Product updated successfully", updated_product=updated)


@router.post("/products", response_model=Product, status_code=status.HTTP_201_CREATED)
async def create_product(
    body: ProductCreateIn,
    store: ContentStore = Depends(content_store),
    images: ImageService = Depends(image_service),
    redis=Depends(redis_dep),
):
    try:
        asset_id = await images.import_from_url(body.image) if body.image else None
    except ImageUploadError as e:
        raise HTTPException(status_code=400, detail=str(e))

    product = await ProductRepo(store).create(product_doc_for_create(body.model_dump(), asset_id))
    await invalidate_dashboard(redis)
    logger.info("create_product id=%s title=%r", product.id, product.title)
    return product


@router.get("/products/{product_id}", response_model=Product)
async def get_product(product_id: str, store: ContentStore = Depends(content_store)):
    product = await ProductRepo(store).get(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.delete("/products/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    product_id: str,
    store: ContentStore = Depends(content_store),
    redis=Depends(redis_dep),
):
    if not await ProductRepo(store).delete(product_id):
        raise HTTPException(status_code=404, detail="Product not found")
    await invalidate_dashboard(redis)
    logger.info("delete_product id=%s", product_id)
