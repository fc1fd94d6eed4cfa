from typing import List
from pydantic import Field
from shopadmin.domain.models.product import StoreModel


class MonthlyBucket(StoreModel):
    label: str
    order_count: int = Field(ge=0)
    sales_total: float
    valid: bool = True  # False only for the "Invalid Date" bucket


class OrderStats(StoreModel):
    total_orders: int = 0
    completed_orders: int = 0
    pending_orders: int = 0
    shipped_orders: int = 0
    series: List[MonthlyBucket] = Field(default_factory=list)


class ProductStats(StoreModel):
    total_products: int = 0
    total_inventory: int = 0
    total_inventory_value: float = 0


class DashboardSummary(StoreModel):
    products: ProductStats
    orders: OrderStats
    total_reviews: int = 0
