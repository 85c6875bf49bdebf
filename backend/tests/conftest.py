"""Pytest configuration and fixtures for Schema Lab tests."""

from decimal import Decimal

import pytest

from app.core.database import Database
from app.models.customer import Customer
from app.models.store import Store
from app.models.employee import Employee
from app.models.menu_item import MenuItem


# =============================================================================
# DATABASE FIXTURES
# =============================================================================

@pytest.fixture
def database(tmp_path):
    """File-backed SQLite database so worker threads can share it."""
    db = Database(
        f"sqlite:///{tmp_path / 'schema_lab.db'}",
        connect_args={"check_same_thread": False},
    )
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def reference_data(database):
    """One customer, store, employee and a small menu."""
    with database.transaction() as db:
        store = Store(name="Downtown Express", location="123 Main St", phone="555-0101")
        db.add(store)
        db.flush()

        customer = Customer(first_name="Ada", last_name="Lovelace", email="ada@example.com", phone="555-1000")
        employee = Employee(store_id=store.id, first_name="Grace", last_name="Hopper", position="Cashier")
        burger = MenuItem(name="Classic Burger", category="Burgers", price=Decimal("8.99"))
        fries = MenuItem(name="French Fries", category="Sides", price=Decimal("5.49"))
        sundae = MenuItem(name="Sundae", category="Desserts", price=Decimal("3.99"), available=False)
        db.add_all([customer, employee, burger, fries, sundae])
        db.flush()

        ids = {
            "customer_id": customer.id,
            "store_id": store.id,
            "employee_id": employee.id,
            "burger_id": burger.id,
            "fries_id": fries.id,
            "sundae_id": sundae.id,
        }
    return ids


# =============================================================================
# REQUEST FIXTURES
# =============================================================================

@pytest.fixture
def normalized_order_payload(reference_data):
    """Burger x1 and fries x2: 8.99 + 10.98 = 19.97."""
    return {
        "customer_id": reference_data["customer_id"],
        "store_id": reference_data["store_id"],
        "employee_id": reference_data["employee_id"],
        "items": [
            {"menu_item_id": reference_data["burger_id"], "quantity": 1},
            {"menu_item_id": reference_data["fries_id"], "quantity": 2},
        ],
    }


@pytest.fixture
def denormalized_order_payload(reference_data):
    return {
        "customer": {
            "id": reference_data["customer_id"],
            "first_name": "Ada",
            "last_name": "Lovelace",
            "email": "ada@example.com",
            "phone": "555-1000",
        },
        "store": {
            "id": reference_data["store_id"],
            "name": "Downtown Express",
            "location": "123 Main St",
            "phone": "555-0101",
        },
        "employee": {
            "id": reference_data["employee_id"],
            "first_name": "Grace",
            "last_name": "Hopper",
            "position": "Cashier",
        },
        "items": [
            {"menu_item_id": reference_data["burger_id"], "name": "Classic Burger",
             "category": "Burgers", "unit_price": 8.99, "quantity": 1},
            {"menu_item_id": reference_data["fries_id"], "name": "French Fries",
             "category": "Sides", "unit_price": 5.49, "quantity": 2},
        ],
    }


# =============================================================================
# API FIXTURES
# =============================================================================

@pytest.fixture
def client(database):
    """Test client bound to the test database."""
    from fastapi.testclient import TestClient
    from app.main import create_app

    with TestClient(create_app(database=database)) as test_client:
        yield test_client
