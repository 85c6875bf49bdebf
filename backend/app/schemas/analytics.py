from pydantic import BaseModel
from typing import List, Optional


class SalesByStoreRow(BaseModel):
    store_name: str
    location: Optional[str] = None
    total_orders: int
    total_revenue: float
    avg_order_value: float
    unique_customers: int
    min_order_value: float
    max_order_value: float
    stddev_order_value: Optional[float] = None


class BestSellingItemRow(BaseModel):
    item_name: str
    category: Optional[str] = None
    total_quantity: int
    total_revenue: float
    orders_count: int


class SalesByStoreResponse(BaseModel):
    success: bool = True
    schema_name: str
    data: List[SalesByStoreRow]
    elapsed_ms: float


class BestSellingItemsResponse(BaseModel):
    success: bool = True
    schema_name: str
    data: List[BestSellingItemRow]
    elapsed_ms: float
