from fastapi import APIRouter, Depends, HTTPException, status
from typing import List

from shopadmin.api.deps import content_store, image_service
from shopadmin.api.v1.schemas.catalog import CategoryIn
from shopadmin.core.security import require_session
from shopadmin.db.content_store import ContentStore
from shopadmin.domain.mappers import category_doc_for_write
from shopadmin.domain.models.product import Category
from shopadmin.domain.repositories.category_repo import CategoryRepo
from shopadmin.domain.services.image_svc import ImageService, ImageUploadError

import logging
logger = logging.getLogger(__name__)

router = APIRouter(tags=["categories"], dependencies=[Depends(require_session)])


async def _category_fields(body: CategoryIn, images: ImageService) -> dict:
    try:
        asset_id = await images.import_from_url(body.image) if body.image else None
    except ImageUploadError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return category_doc_for_write(body.model_dump(exclude_unset=True), asset_id)


@router.get("/categories", response_model=List[Category])
async def list_categories(store: ContentStore = Depends(content_store)):
    categories = await CategoryRepo(store).list()
    logger.info("categories list items=%s", len(categories))
    return categories


@router.get("/categories/{category_id}", response_model=Category)
async def get_category(category_id: str, store: ContentStore = Depends(content_store)):
    category = await CategoryRepo(store).get(category_id)
    if category is None:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


@router.post("/categories", response_model=Category, status_code=status.HTTP_201_CREATED)
async def create_category(
    body: CategoryIn,
    store: ContentStore = Depends(content_store),
    images: ImageService = Depends(image_service),
):
    if not body.title:
        raise HTTPException(status_code=400, detail="Category title is required")
    fields = await _category_fields(body, images)
    fields.setdefault("products", 0)
    category = await CategoryRepo(store).create(fields)
    logger.info("create_category id=%s title=%r", category.id, category.title)
    return category


@router.put("/categories/{category_id}", response_model=Category)
async def update_category(
    category_id: str,
    body: CategoryIn,
    store: ContentStore = Depends(content_store),
    images: ImageService = Depends(image_service),
):
    fields = await _category_fields(body, images)
    if not fields:
        raise HTTPException(status_code=400, detail="Nothing to update")
    category = await CategoryRepo(store).patch(category_id, fields)
    if category is None:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


@router.delete("/categories/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(category_id: str, store: ContentStore = Depends(content_store)):
    if not await CategoryRepo(store).delete(category_id):
        raise HTTPException(status_code=404, detail="Category not found")
    logger.info("delete_category id=%s", category_id)
