"""
Order Placement Service

Places a customer order against one of the two schemas:

- Normalized: prices are resolved from the menu catalog, then an order
  header and one order line per item are written in a single transaction.
- Denormalized: the caller supplies fully resolved customer, store,
  employee and item attributes and one flat row is written.

Both variants compute the total before anything is inserted.
"""

from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Optional, Union
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
import uuid

from sqlalchemy.orm import Session

from app.config import get_settings
from app.core.database import Database
from app.core.errors import ValidationError, InternalInconsistencyError
from app.models.menu_item import MenuItem
from app.models.order import Order, OrderLine, OrderType, OrderStatus
from app.models.denormalized_order import DenormalizedOrder
from app.schemas.order import PlaceOrderNormalizedRequest, PlaceOrderDenormalizedRequest
from app.services.workloads import Schema

settings = get_settings()

CENT = Decimal("0.01")


def to_money(value: Decimal) -> Decimal:
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass
class PlacedOrder:
    """Identifier and total of a successfully placed order."""
    order_id: Union[int, str]
    total_amount: Decimal
    schema: Schema

    def to_dict(self) -> Dict:
        return {
            "order_id": self.order_id,
            "total_amount": float(self.total_amount),
            "schema": self.schema.value,
        }


def _missing(fields: Dict[str, object]) -> List[str]:
    return [name for name, value in fields.items() if value is None or value == ""]


def _out_of_range(items: List) -> List[str]:
    """Quantities below one and negative unit prices."""
    problems = []
    for index, item in enumerate(items):
        if item.quantity is not None and item.quantity < 1:
            problems.append(f"items[{index}].quantity must be at least 1")
        unit_price = getattr(item, "unit_price", None)
        if unit_price is not None and unit_price < 0:
            problems.append(f"items[{index}].unit_price must not be negative")
    return problems


class OrderPlacer(ABC):
    """Places an order against one schema."""

    schema: Schema

    def __init__(self, database: Database, clock: Callable[[], datetime] = datetime.now):
        self.database = database
        self.clock = clock
        self.order_type = OrderType(settings.default_order_type)
        self.order_status = OrderStatus(settings.default_order_status)

    @abstractmethod
    def validate(self, request) -> None:
        """Raise ValidationError before any storage access if input is incomplete."""

    @abstractmethod
    def place_order(self, request) -> PlacedOrder:
        """Persist the order and return its identifier and total."""


class NormalizedOrderPlacer(OrderPlacer):
    schema = Schema.NORMALIZED

    def validate(self, request: PlaceOrderNormalizedRequest) -> None:
        missing = _missing({
            "customer_id": request.customer_id,
            "store_id": request.store_id,
            "employee_id": request.employee_id,
        })
        if not request.items:
            missing.append("items")
        else:
            for index, item in enumerate(request.items):
                missing.extend(
                    f"items[{index}].{name}"
                    for name in _missing({"menu_item_id": item.menu_item_id, "quantity": item.quantity})
                )
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

        invalid = _out_of_range(request.items)
        if invalid:
            raise ValidationError(f"Invalid fields: {', '.join(invalid)}")

    def _resolve_unit_price(self, db: Session, menu_item_id: int) -> Decimal:
        price = db.query(MenuItem.price).filter(MenuItem.id == menu_item_id).scalar()
        if price is None:
            raise InternalInconsistencyError(f"Menu item {menu_item_id} could not be resolved")
        return to_money(price)

    def place_order(self, request: PlaceOrderNormalizedRequest) -> PlacedOrder:
        self.validate(request)

        with self.database.transaction() as db:
            unit_prices = [self._resolve_unit_price(db, item.menu_item_id) for item in request.items]
            subtotals = [
                to_money(price * item.quantity)
                for price, item in zip(unit_prices, request.items)
            ]
            total_amount = sum(subtotals, Decimal("0.00"))

            order = Order(
                customer_id=request.customer_id,
                store_id=request.store_id,
                employee_id=request.employee_id,
                total_amount=total_amount,
                order_type=self.order_type,
                status=self.order_status,
                order_date=self.clock(),
            )
            db.add(order)
            db.flush()  # assigns order.id

            for item, price, subtotal in zip(request.items, unit_prices, subtotals):
                db.add(OrderLine(
                    order_id=order.id,
                    menu_item_id=item.menu_item_id,
                    quantity=item.quantity,
                    unit_price=price,
                    subtotal=subtotal,
                ))
            db.flush()
            order_id = order.id

        return PlacedOrder(order_id=order_id, total_amount=total_amount, schema=self.schema)


class DenormalizedOrderPlacer(OrderPlacer):
    """
    Writes a single flat row per order.

    Only the first item is stored, but total_amount covers every item. The
    flat layout has no place for a variable number of items, and the gap is
    kept so both schemas are compared on the same workload.
    """

    schema = Schema.DENORMALIZED

    def validate(self, request: PlaceOrderDenormalizedRequest) -> None:
        missing: List[str] = []
        if request.customer is None:
            missing.append("customer")
        else:
            missing.extend(f"customer.{name}" for name in _missing({"id": request.customer.id}))
        if request.store is None:
            missing.append("store")
        else:
            missing.extend(
                f"store.{name}" for name in _missing({"id": request.store.id, "name": request.store.name})
            )
        if request.employee is None:
            missing.append("employee")
        else:
            missing.extend(f"employee.{name}" for name in _missing({"id": request.employee.id}))

        if not request.items:
            missing.append("items")
        else:
            for index, item in enumerate(request.items):
                missing.extend(
                    f"items[{index}].{name}"
                    for name in _missing({
                        "menu_item_id": item.menu_item_id,
                        "name": item.name,
                        "unit_price": item.unit_price,
                        "quantity": item.quantity,
                    })
                )
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

        invalid = _out_of_range(request.items)
        if invalid:
            raise ValidationError(f"Invalid fields: {', '.join(invalid)}")

    def place_order(self, request: PlaceOrderDenormalizedRequest) -> PlacedOrder:
        self.validate(request)

        placed_at = self.clock()
        subtotals = [to_money(item.unit_price * item.quantity) for item in request.items]
        total_amount = sum(subtotals, Decimal("0.00"))

        customer, store, employee = request.customer, request.store, request.employee
        first_item = request.items[0]

        record = DenormalizedOrder(
            order_id=str(uuid.uuid4()),
            order_date=placed_at,
            total_amount=total_amount,
            order_type=self.order_type,
            status=self.order_status,
            customer_id=customer.id,
            customer_first_name=customer.first_name,
            customer_last_name=customer.last_name,
            customer_email=customer.email,
            customer_phone=customer.phone,
            store_id=store.id,
            store_name=store.name,
            store_location=store.location,
            store_phone=store.phone,
            employee_id=employee.id,
            employee_first_name=employee.first_name,
            employee_last_name=employee.last_name,
            employee_position=employee.position,
            menu_item_id=first_item.menu_item_id,
            item_name=first_item.name,
            category=first_item.category,
            unit_price=to_money(first_item.unit_price),
            quantity=first_item.quantity,
            subtotal=subtotals[0],
            order_month=placed_at.year * 100 + placed_at.month,
            order_day=placed_at.date().isoformat(),
            order_hour=placed_at.hour,
        )

        with self.database.transaction() as db:
            db.add(record)

        return PlacedOrder(order_id=record.order_id, total_amount=total_amount, schema=self.schema)


ORDER_PLACERS = {
    Schema.NORMALIZED: NormalizedOrderPlacer,
    Schema.DENORMALIZED: DenormalizedOrderPlacer,
}


def get_order_placer(
    schema: Schema,
    database: Database,
    clock: Optional[Callable[[], datetime]] = None,
) -> OrderPlacer:
    """Return the order placer for a schema tag."""
    placer_class = ORDER_PLACERS[Schema(schema)]
    if clock is None:
        return placer_class(database)
    return placer_class(database, clock=clock)
