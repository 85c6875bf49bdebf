from app.models.customer import Customer
from app.models.store import Store
from app.models.employee import Employee
from app.models.menu_item import MenuItem
from app.models.order import Order, OrderLine, OrderType, OrderStatus
from app.models.denormalized_order import DenormalizedOrder

__all__ = [
    "Customer",
    "Store",
    "Employee",
    "MenuItem",
    "Order",
    "OrderLine",
    "OrderType",
    "OrderStatus",
    "DenormalizedOrder",
]
