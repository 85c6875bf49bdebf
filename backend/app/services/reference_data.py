"""
Reference Data Service

Read-only access to customers, stores, employees and menu items: the
sample data callers use to build valid orders, and the attribute bundles
the denormalized path needs in place of foreign keys.
"""

from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from app.config import get_settings
from app.models.customer import Customer
from app.models.store import Store
from app.models.employee import Employee
from app.models.menu_item import MenuItem
from app.schemas.order import (
    PlaceOrderNormalizedRequest,
    PlaceOrderDenormalizedRequest,
    CustomerBundle,
    StoreBundle,
    EmployeeBundle,
    DenormalizedItemIn,
)
from app.schemas.reference import CustomerResponse, StoreResponse, EmployeeResponse, MenuItemResponse

settings = get_settings()


class ReferenceDataService:
    """Service for reading reference data."""

    def __init__(self, db: Session):
        self.db = db

    def sample_data(self, customer_limit: Optional[int] = None) -> Dict[str, List]:
        limit = customer_limit or settings.sample_customer_limit
        customers = self.db.query(Customer).order_by(Customer.id).limit(limit).all()
        stores = self.db.query(Store).order_by(Store.id).all()
        employees = self.db.query(Employee).order_by(Employee.id).all()
        menu_items = self.db.query(MenuItem).filter(
            MenuItem.available.is_(True)
        ).order_by(MenuItem.id).all()

        return {
            "customers": [CustomerResponse.model_validate(c) for c in customers],
            "stores": [StoreResponse.model_validate(s) for s in stores],
            "employees": [EmployeeResponse.model_validate(e) for e in employees],
            "menu_items": [MenuItemResponse.model_validate(m) for m in menu_items],
        }

    def customer_bundle(self, customer_id: Optional[int]) -> Optional[CustomerBundle]:
        customer = self.db.query(Customer).filter(Customer.id == customer_id).first()
        if not customer:
            return None
        return CustomerBundle(
            id=customer.id,
            first_name=customer.first_name,
            last_name=customer.last_name,
            email=customer.email,
            phone=customer.phone,
        )

    def store_bundle(self, store_id: Optional[int]) -> Optional[StoreBundle]:
        store = self.db.query(Store).filter(Store.id == store_id).first()
        if not store:
            return None
        return StoreBundle(id=store.id, name=store.name, location=store.location, phone=store.phone)

    def employee_bundle(self, employee_id: Optional[int]) -> Optional[EmployeeBundle]:
        employee = self.db.query(Employee).filter(Employee.id == employee_id).first()
        if not employee:
            return None
        return EmployeeBundle(
            id=employee.id,
            first_name=employee.first_name,
            last_name=employee.last_name,
            position=employee.position,
        )

    def to_denormalized_request(self, request: PlaceOrderNormalizedRequest) -> PlaceOrderDenormalizedRequest:
        """
        Resolve the references of a normalized request into attribute bundles.

        References that do not resolve produce empty bundles or bare items,
        which the denormalized placer then rejects as incomplete input.
        """
        items = request.items or []
        menu_item_ids = [item.menu_item_id for item in items if item.menu_item_id is not None]
        menu_items = {
            m.id: m for m in self.db.query(MenuItem).filter(MenuItem.id.in_(menu_item_ids)).all()
        } if menu_item_ids else {}

        resolved_items = []
        for item in items:
            menu_item = menu_items.get(item.menu_item_id)
            if menu_item is None:
                resolved_items.append(DenormalizedItemIn(menu_item_id=item.menu_item_id, quantity=item.quantity))
                continue
            resolved_items.append(DenormalizedItemIn(
                menu_item_id=menu_item.id,
                name=menu_item.name,
                category=menu_item.category,
                unit_price=menu_item.price,
                quantity=item.quantity,
            ))

        return PlaceOrderDenormalizedRequest(
            customer=self.customer_bundle(request.customer_id),
            store=self.store_bundle(request.store_id),
            employee=self.employee_bundle(request.employee_id),
            items=resolved_items or None,
        )
