"""
Sample Data Seeder

Generates sample data for the schema comparison:
- Stores, employees, customers and a menu
- Historical orders spread over the last weeks, written to both the
  normalized tables and the denormalized table so the two schemas hold
  the same orders

Run with: python -m app.scripts.seed_data
"""

import random
import uuid
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Callable, Dict, List

from sqlalchemy.orm import Session

from app.config import get_settings
from app.core.database import Database
from app.models.customer import Customer
from app.models.store import Store
from app.models.employee import Employee
from app.models.menu_item import MenuItem
from app.models.order import Order, OrderLine, OrderType, OrderStatus
from app.models.denormalized_order import DenormalizedOrder
from app.services.order_placement import to_money


STORE_DATA = [
    {"name": "Downtown Express", "location": "123 Main St, Downtown", "phone": "555-0101"},
    {"name": "Westside Grill", "location": "456 West Ave, Westside", "phone": "555-0102"},
    {"name": "Eastgate Drive-Thru", "location": "789 East Blvd, Eastgate", "phone": "555-0103"},
    {"name": "Harbor Bites", "location": "147 Harbor Rd, Waterfront", "phone": "555-0104"},
    {"name": "Campus Corner", "location": "963 College Ave, University", "phone": "555-0105"},
]

MENU_DATA = [
    {"name": "Classic Burger", "category": "Burgers", "price": "8.99"},
    {"name": "Cheeseburger", "category": "Burgers", "price": "9.49"},
    {"name": "Veggie Burger", "category": "Burgers", "price": "8.49"},
    {"name": "Chicken Sandwich", "category": "Sandwiches", "price": "7.99"},
    {"name": "Fish Sandwich", "category": "Sandwiches", "price": "7.49"},
    {"name": "French Fries", "category": "Sides", "price": "5.49"},
    {"name": "Onion Rings", "category": "Sides", "price": "4.99"},
    {"name": "Garden Salad", "category": "Sides", "price": "6.49"},
    {"name": "Soft Drink", "category": "Beverages", "price": "2.49"},
    {"name": "Milkshake", "category": "Beverages", "price": "4.99"},
    {"name": "Apple Pie", "category": "Desserts", "price": "3.49"},
    {"name": "Sundae", "category": "Desserts", "price": "3.99", "available": False},
]

POSITIONS = ["Cashier", "Cook", "Shift Manager", "Drive-Thru Attendant"]

FIRST_NAMES = [
    "James", "Maria", "David", "Jennifer", "Michael", "Lisa", "Robert", "Patricia",
    "William", "Linda", "Richard", "Barbara", "Joseph", "Elizabeth", "Thomas", "Susan",
]

LAST_NAMES = [
    "Smith", "Johnson", "Williams", "Brown", "Jones", "Garcia", "Miller", "Davis",
    "Rodriguez", "Martinez", "Hernandez", "Lopez", "Gonzalez", "Wilson", "Anderson", "Thomas",
]


def create_stores(db: Session) -> List[Store]:
    """Create sample stores."""
    print("Creating stores...")
    stores = [Store(**data) for data in STORE_DATA]
    db.add_all(stores)
    db.flush()
    print(f"Created {len(stores)} stores")
    return stores


def create_menu_items(db: Session) -> List[MenuItem]:
    """Create the menu. One item is marked unavailable."""
    print("Creating menu items...")
    items = [
        MenuItem(
            name=data["name"],
            category=data["category"],
            price=Decimal(data["price"]),
            available=data.get("available", True),
        )
        for data in MENU_DATA
    ]
    db.add_all(items)
    db.flush()
    print(f"Created {len(items)} menu items")
    return items


def create_employees(db: Session, stores: List[Store], rng: random.Random, per_store: int = 3) -> List[Employee]:
    """Create employees for each store."""
    print("Creating employees...")
    employees = []
    emp_idx = 0
    for store in stores:
        for _ in range(per_store):
            employees.append(Employee(
                store_id=store.id,
                first_name=FIRST_NAMES[emp_idx % len(FIRST_NAMES)],
                last_name=LAST_NAMES[(emp_idx * 7) % len(LAST_NAMES)],
                position=rng.choice(POSITIONS),
            ))
            emp_idx += 1
    db.add_all(employees)
    db.flush()
    print(f"Created {len(employees)} employees")
    return employees


def create_customers(db: Session, rng: random.Random, count: int = 40) -> List[Customer]:
    """Create customers with unique emails."""
    print("Creating customers...")
    customers = []
    for idx in range(count):
        first_name = rng.choice(FIRST_NAMES)
        last_name = rng.choice(LAST_NAMES)
        customers.append(Customer(
            first_name=first_name,
            last_name=last_name,
            email=f"{first_name.lower()}.{last_name.lower()}{idx}@example.com",
            phone=f"555-{1000 + idx:04d}",
        ))
    db.add_all(customers)
    db.flush()
    print(f"Created {len(customers)} customers")
    return customers


def create_historical_orders(
    db: Session,
    customers: List[Customer],
    stores: List[Store],
    employees: List[Employee],
    menu_items: List[MenuItem],
    rng: random.Random,
    count: int = 300,
    days: int = 30,
    now: Callable[[], datetime] = datetime.now,
) -> int:
    """
    Generate orders inside the last ``days`` days in both schemas.

    Each normalized order gets a denormalized twin with the same store,
    customer, employee, date and total. The twin inlines the first item
    only, as live denormalized placement does.
    """
    print(f"Creating {count} historical orders in both schemas...")
    available = [m for m in menu_items if m.available]
    staff_by_store: Dict[int, List[Employee]] = {}
    for employee in employees:
        staff_by_store.setdefault(employee.store_id, []).append(employee)

    reference_time = now()
    # Keep a day of margin so every order stays inside the aggregation window
    span_seconds = max(days - 1, 1) * 24 * 3600

    for _ in range(count):
        store = rng.choice(stores)
        customer = rng.choice(customers)
        employee = rng.choice(staff_by_store[store.id])
        order_date = reference_time - timedelta(seconds=rng.randint(0, span_seconds))
        order_type = rng.choice(list(OrderType))

        picked = [(rng.choice(available), rng.randint(1, 3)) for _ in range(rng.randint(1, 4))]
        lines = [
            OrderLine(
                menu_item_id=item.id,
                quantity=quantity,
                unit_price=item.price,
                subtotal=to_money(item.price * quantity),
            )
            for item, quantity in picked
        ]
        total_amount = sum((line.subtotal for line in lines), Decimal("0.00"))

        db.add(Order(
            customer_id=customer.id,
            store_id=store.id,
            employee_id=employee.id,
            total_amount=total_amount,
            order_type=order_type,
            status=OrderStatus.COMPLETED,
            order_date=order_date,
            lines=lines,
        ))

        first_item, first_quantity = picked[0]
        db.add(DenormalizedOrder(
            order_id=str(uuid.UUID(int=rng.getrandbits(128), version=4)),
            order_date=order_date,
            total_amount=total_amount,
            order_type=order_type,
            status=OrderStatus.COMPLETED,
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
            menu_item_id=first_item.id,
            item_name=first_item.name,
            category=first_item.category,
            unit_price=first_item.price,
            quantity=first_quantity,
            subtotal=lines[0].subtotal,
            order_month=order_date.year * 100 + order_date.month,
            order_day=order_date.date().isoformat(),
            order_hour=order_date.hour,
        ))

    db.flush()
    print(f"Created {count} orders")
    return count


def seed_all(
    database: Database,
    order_count: int = 300,
    seed: int = 42,
    now: Callable[[], datetime] = datetime.now,
) -> Dict[str, int]:
    """Create tables and run all seed functions in one transaction."""
    print("\n" + "=" * 50)
    print("SEEDING SCHEMA LAB DATABASE")
    print("=" * 50 + "\n")

    database.create_all()
    rng = random.Random(seed)

    with database.transaction() as db:
        stores = create_stores(db)
        menu_items = create_menu_items(db)
        employees = create_employees(db, stores, rng)
        customers = create_customers(db, rng)
        orders = create_historical_orders(db, customers, stores, employees, menu_items, rng, count=order_count, now=now)

    print("\n" + "=" * 50)
    print("SEEDING COMPLETE")
    print("=" * 50 + "\n")

    return {
        "stores": len(stores),
        "menu_items": len(menu_items),
        "employees": len(employees),
        "customers": len(customers),
        "orders": orders,
    }


def main():
    """Main entry point."""
    database = Database.from_settings(get_settings())
    try:
        seed_all(database)
    except Exception as e:
        print(f"Error seeding database: {e}")
        raise
    finally:
        database.dispose()


if __name__ == "__main__":
    main()
