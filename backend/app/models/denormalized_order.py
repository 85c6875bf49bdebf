"""
Denormalized order model.

One flat row per order with customer, store, employee and menu item
attributes copied in, plus temporal fields precomputed so aggregations
need neither joins nor date functions.

A row holds a single item. Multi-item orders keep only their first item
while total_amount still covers every item, so the total cannot be
rebuilt from the stored row alone.
"""

from sqlalchemy import Column, Integer, String, Numeric, DateTime, Index, Enum as SQLEnum

from app.core.database import Base
from app.models.order import OrderType, OrderStatus


class DenormalizedOrder(Base):
    __tablename__ = "denormalized_orders"

    order_id = Column(String(36), primary_key=True)
    order_date = Column(DateTime, nullable=False)
    total_amount = Column(Numeric(10, 2), nullable=False)
    order_type = Column(SQLEnum(OrderType, values_callable=lambda obj: [e.value for e in obj]), default=OrderType.DINE_IN, nullable=False)
    status = Column(SQLEnum(OrderStatus, values_callable=lambda obj: [e.value for e in obj]), default=OrderStatus.PENDING, nullable=False)

    # Customer copy
    customer_id = Column(Integer, nullable=False)
    customer_first_name = Column(String(50))
    customer_last_name = Column(String(50))
    customer_email = Column(String(255))
    customer_phone = Column(String(20))

    # Store copy
    store_id = Column(Integer, nullable=False)
    store_name = Column(String(100), nullable=False)
    store_location = Column(String(255))
    store_phone = Column(String(20))

    # Employee copy
    employee_id = Column(Integer, nullable=False)
    employee_first_name = Column(String(50))
    employee_last_name = Column(String(50))
    employee_position = Column(String(50))

    # First menu item only
    menu_item_id = Column(Integer, nullable=False)
    item_name = Column(String(100), nullable=False)
    category = Column(String(50))
    unit_price = Column(Numeric(8, 2), nullable=False)
    quantity = Column(Integer, nullable=False)
    subtotal = Column(Numeric(10, 2), nullable=False)

    # Precomputed time buckets
    order_month = Column(Integer, nullable=False)  # YYYYMM
    order_day = Column(String(10), nullable=False)  # YYYY-MM-DD
    order_hour = Column(Integer, nullable=False)  # 0-23

    __table_args__ = (
        Index('ix_denormalized_orders_date', 'order_date'),
        Index('ix_denormalized_orders_store', 'store_id', 'store_name', 'store_location'),
        Index('ix_denormalized_orders_item', 'item_name', 'category'),
    )

    def __repr__(self):
        return f"<DenormalizedOrder(order_id={self.order_id}, store={self.store_name}, total={self.total_amount})>"
