"""Initial database schema

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# Shared by orders and denormalized_orders, so created once up front
order_type = postgresql.ENUM('dine_in', 'takeout', 'delivery', name='ordertype', create_type=False)
order_status = postgresql.ENUM('pending', 'completed', 'cancelled', name='orderstatus', create_type=False)


def upgrade() -> None:
    op.execute("CREATE TYPE ordertype AS ENUM ('dine_in', 'takeout', 'delivery')")
    op.execute("CREATE TYPE orderstatus AS ENUM ('pending', 'completed', 'cancelled')")

    # === CUSTOMERS TABLE ===
    op.create_table(
        'customers',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('first_name', sa.String(50), nullable=False),
        sa.Column('last_name', sa.String(50), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(20), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_customers_id', 'customers', ['id'])
    op.create_index('ix_customers_email', 'customers', ['email'], unique=True)

    # === STORES TABLE ===
    op.create_table(
        'stores',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('location', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(20), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_stores_id', 'stores', ['id'])

    # === EMPLOYEES TABLE ===
    op.create_table(
        'employees',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('store_id', sa.Integer(), nullable=False),
        sa.Column('first_name', sa.String(50), nullable=False),
        sa.Column('last_name', sa.String(50), nullable=False),
        sa.Column('position', sa.String(50), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.ForeignKeyConstraint(['store_id'], ['stores.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_employees_id', 'employees', ['id'])

    # === MENU ITEMS TABLE ===
    op.create_table(
        'menu_items',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('category', sa.String(50), nullable=False),
        sa.Column('price', sa.Numeric(8, 2), nullable=False),
        sa.Column('available', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_menu_items_id', 'menu_items', ['id'])

    # === ORDERS TABLE ===
    op.create_table(
        'orders',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('customer_id', sa.Integer(), nullable=False),
        sa.Column('store_id', sa.Integer(), nullable=False),
        sa.Column('employee_id', sa.Integer(), nullable=False),
        sa.Column('total_amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('order_type', order_type, nullable=False),
        sa.Column('status', order_status, nullable=False),
        sa.Column('order_date', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['customer_id'], ['customers.id']),
        sa.ForeignKeyConstraint(['store_id'], ['stores.id']),
        sa.ForeignKeyConstraint(['employee_id'], ['employees.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_orders_id', 'orders', ['id'])
    op.create_index('ix_orders_store_date', 'orders', ['store_id', 'order_date'])

    # === ORDER ITEMS TABLE ===
    op.create_table(
        'order_items',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('order_id', sa.Integer(), nullable=False),
        sa.Column('menu_item_id', sa.Integer(), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('unit_price', sa.Numeric(8, 2), nullable=False),
        sa.Column('subtotal', sa.Numeric(10, 2), nullable=False),
        sa.ForeignKeyConstraint(['order_id'], ['orders.id']),
        sa.ForeignKeyConstraint(['menu_item_id'], ['menu_items.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_order_items_id', 'order_items', ['id'])
    op.create_index('ix_order_items_order_id', 'order_items', ['order_id'])
    op.create_index('ix_order_items_menu_item_id', 'order_items', ['menu_item_id'])

    # === DENORMALIZED ORDERS TABLE ===
    # No foreign keys: every referenced attribute is copied into the row
    op.create_table(
        'denormalized_orders',
        sa.Column('order_id', sa.String(36), nullable=False),
        sa.Column('order_date', sa.DateTime(), nullable=False),
        sa.Column('total_amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('order_type', order_type, nullable=False),
        sa.Column('status', order_status, nullable=False),
        sa.Column('customer_id', sa.Integer(), nullable=False),
        sa.Column('customer_first_name', sa.String(50), nullable=True),
        sa.Column('customer_last_name', sa.String(50), nullable=True),
        sa.Column('customer_email', sa.String(255), nullable=True),
        sa.Column('customer_phone', sa.String(20), nullable=True),
        sa.Column('store_id', sa.Integer(), nullable=False),
        sa.Column('store_name', sa.String(100), nullable=False),
        sa.Column('store_location', sa.String(255), nullable=True),
        sa.Column('store_phone', sa.String(20), nullable=True),
        sa.Column('employee_id', sa.Integer(), nullable=False),
        sa.Column('employee_first_name', sa.String(50), nullable=True),
        sa.Column('employee_last_name', sa.String(50), nullable=True),
        sa.Column('employee_position', sa.String(50), nullable=True),
        sa.Column('menu_item_id', sa.Integer(), nullable=False),
        sa.Column('item_name', sa.String(100), nullable=False),
        sa.Column('category', sa.String(50), nullable=True),
        sa.Column('unit_price', sa.Numeric(8, 2), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('subtotal', sa.Numeric(10, 2), nullable=False),
        sa.Column('order_month', sa.Integer(), nullable=False),
        sa.Column('order_day', sa.String(10), nullable=False),
        sa.Column('order_hour', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('order_id')
    )
    op.create_index('ix_denormalized_orders_date', 'denormalized_orders', ['order_date'])
    op.create_index('ix_denormalized_orders_store', 'denormalized_orders', ['store_id', 'store_name', 'store_location'])
    op.create_index('ix_denormalized_orders_item', 'denormalized_orders', ['item_name', 'category'])


def downgrade() -> None:
    # Drop tables in reverse order of creation (respecting foreign keys)
    op.drop_index('ix_denormalized_orders_item', 'denormalized_orders')
    op.drop_index('ix_denormalized_orders_store', 'denormalized_orders')
    op.drop_index('ix_denormalized_orders_date', 'denormalized_orders')
    op.drop_table('denormalized_orders')

    op.drop_index('ix_order_items_menu_item_id', 'order_items')
    op.drop_index('ix_order_items_order_id', 'order_items')
    op.drop_index('ix_order_items_id', 'order_items')
    op.drop_table('order_items')

    op.drop_index('ix_orders_store_date', 'orders')
    op.drop_index('ix_orders_id', 'orders')
    op.drop_table('orders')

    op.drop_index('ix_menu_items_id', 'menu_items')
    op.drop_table('menu_items')

    op.drop_index('ix_employees_id', 'employees')
    op.drop_table('employees')

    op.drop_index('ix_stores_id', 'stores')
    op.drop_table('stores')

    op.drop_index('ix_customers_email', 'customers')
    op.drop_index('ix_customers_id', 'customers')
    op.drop_table('customers')

    # Drop enums
    op.execute('DROP TYPE IF EXISTS orderstatus')
    op.execute('DROP TYPE IF EXISTS ordertype')
