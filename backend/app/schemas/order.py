from pydantic import BaseModel
from typing import List, Optional
from decimal import Decimal


class OrderItemIn(BaseModel):
    menu_item_id: Optional[int] = None
    quantity: Optional[int] = None


class PlaceOrderNormalizedRequest(BaseModel):
    """Normalized placement only needs references; prices are looked up."""
    customer_id: Optional[int] = None
    store_id: Optional[int] = None
    employee_id: Optional[int] = None
    items: Optional[List[OrderItemIn]] = None


class CustomerBundle(BaseModel):
    id: Optional[int] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class StoreBundle(BaseModel):
    id: Optional[int] = None
    name: Optional[str] = None
    location: Optional[str] = None
    phone: Optional[str] = None


class EmployeeBundle(BaseModel):
    id: Optional[int] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    position: Optional[str] = None


class DenormalizedItemIn(BaseModel):
    menu_item_id: Optional[int] = None
    name: Optional[str] = None
    category: Optional[str] = None
    unit_price: Optional[Decimal] = None
    quantity: Optional[int] = None


class PlaceOrderDenormalizedRequest(BaseModel):
    """
    Denormalized placement copies attributes into the row, so the caller
    supplies fully resolved bundles instead of references.
    """
    customer: Optional[CustomerBundle] = None
    store: Optional[StoreBundle] = None
    employee: Optional[EmployeeBundle] = None
    items: Optional[List[DenormalizedItemIn]] = None


class PlaceOrderResponse(BaseModel):
    success: bool = True
    order_id: str
    total_amount: float
    elapsed_ms: float
