from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional, List


class StoreModel(BaseModel):
    # camelCase on the wire (same names as the content store), snake_case in python
    model_config = ConfigDict(
        frozen=True,  # immutable = safe
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Rating(StoreModel):
    rate: float = 0
    count: int = 0


class Dimensions(StoreModel):
    height: float = 0
    depth: float = 0
    width: float = 0


class CategoryRef(StoreModel):
    id: str
    title: Optional[str] = None


class Product(StoreModel):
    id: str
    title: str = ""
    description: Optional[str] = None
    slug: Optional[str] = None
    price: float = 0
    original_price: Optional[float] = None
    price_without_discount: Optional[float] = None
    discount_percentage: Optional[float] = None
    stock: Optional[int] = None
    stock_level: int = 0
    inventory: int = 0
    rating: Optional[Rating] = None
    badge: Optional[str] = None
    tags: List[str] = []
    dimensions: Optional[Dimensions] = None
    image: Optional[str] = None
    category: Optional[CategoryRef] = None
    is_featured_product: bool = False


class Category(StoreModel):
    id: str
    title: str = ""
    image: Optional[str] = None
    products: int = 0
