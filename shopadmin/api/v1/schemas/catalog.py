# api/v1/schemas/catalog.py
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import List, Optional

from shopadmin.domain.models.product import Product


class ApiModel(BaseModel):
    # accept and emit camelCase, tolerate the extra keys edit forms send back
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class ProductCreateIn(ApiModel):
    name: str = Field(min_length=1)
    details: Optional[str] = None
    price: float = 0
    price_without_discount: float = 0
    category: Optional[str] = None   # category id
    inventory: int = 0
    image: Optional[str] = None      # URL returned by /products/upload-image, or any remote URL


class ProductUpdateIn(ApiModel):
    id: Optional[str] = None         # required; checked by the handler to answer 400
    title: Optional[str] = None
    price: Optional[float] = None
    price_without_discount: Optional[float] = None
    badge: Optional[str] = None
    description: Optional[str] = None
    inventory: Optional[int] = None
    tags: Optional[List[str]] = None
    category: Optional[str] = None   # category id
    image: Optional[str] = None      # image URL


class ProductUpdateOut(ApiModel):
    message: str
    updated_product: Product


class ImageUploadOut(ApiModel):
    image_url: str
    asset_id: str


class CategoryIn(ApiModel):
    title: Optional[str] = None
    image: Optional[str] = None
    products: Optional[int] = Field(default=None, ge=0)


class LoginIn(BaseModel):
    email: str
    password: str


class TokenOut(ApiModel):
    access_token: str
    token_type: str = "bearer"
    expires_at: datetime


class SessionOut(ApiModel):
    email: str
    expires_at: datetime
