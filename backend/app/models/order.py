"""
Normalized order model.

An order header plus one order line per purchased menu item. Customer,
store, employee and menu item attributes live in their own tables and are
reached through foreign keys.
"""

from sqlalchemy import Column, Integer, Numeric, ForeignKey, DateTime, Index, Enum as SQLEnum
from sqlalchemy.orm import relationship
import enum

from app.core.database import Base


class OrderType(str, enum.Enum):
    DINE_IN = "dine_in"
    TAKEOUT = "takeout"
    DELIVERY = "delivery"


class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False)
    store_id = Column(Integer, ForeignKey("stores.id"), nullable=False)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False)
    total_amount = Column(Numeric(10, 2), nullable=False)
    order_type = Column(SQLEnum(OrderType, values_callable=lambda obj: [e.value for e in obj]), default=OrderType.DINE_IN, nullable=False)
    status = Column(SQLEnum(OrderStatus, values_callable=lambda obj: [e.value for e in obj]), default=OrderStatus.PENDING, nullable=False)
    order_date = Column(DateTime, nullable=False)

    # Relationships
    customer = relationship("Customer", back_populates="orders")
    store = relationship("Store", back_populates="orders")
    employee = relationship("Employee", back_populates="orders")
    lines = relationship("OrderLine", back_populates="order")

    __table_args__ = (
        Index('ix_orders_store_date', 'store_id', 'order_date'),
    )

    def __repr__(self):
        return f"<Order(id={self.id}, store_id={self.store_id}, total={self.total_amount})>"


class OrderLine(Base):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    menu_item_id = Column(Integer, ForeignKey("menu_items.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(8, 2), nullable=False)
    subtotal = Column(Numeric(10, 2), nullable=False)

    # Relationships
    order = relationship("Order", back_populates="lines")
    menu_item = relationship("MenuItem")

    def __repr__(self):
        return f"<OrderLine(order_id={self.order_id}, menu_item_id={self.menu_item_id}, qty={self.quantity})>"
