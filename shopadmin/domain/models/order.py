from typing import List, Optional
from pydantic import Field
from shopadmin.domain.models.product import StoreModel

# Status labels the admin screens know about. Stored orders may carry others.
ORDER_STATUSES = ("pending", "completed", "shipped", "cancelled")


class OrderItem(StoreModel):
    product_id: Optional[str] = None
    name: str = ""
    quantity: int = 0
    price: float = 0


class Order(StoreModel):
    id: str = ""
    order_number: str = ""
    created_at: Optional[str] = None  # raw ISO-8601 string, as stored
    total: float = 0
    items: List[OrderItem] = Field(default_factory=list)
    order_status: Optional[str] = None
