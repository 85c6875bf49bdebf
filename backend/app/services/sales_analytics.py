"""
Sales Analytics Service

OLAP aggregations over recent orders, implemented once per schema:

- Normalized: joins stores (or menu items and order lines) to orders.
- Denormalized: aggregates the flat table directly, grouping by the
  inlined store or item fields.

Both implementations return the same row shapes and, for equivalent data,
the same numbers.
"""

from abc import ABC, abstractmethod
from typing import Callable, List, Optional
from datetime import datetime, timedelta

from sqlalchemy import func, distinct
from sqlalchemy.orm import Session, Query

from app.config import get_settings
from app.core.database import Database
from app.models.store import Store
from app.models.menu_item import MenuItem
from app.models.order import Order, OrderLine
from app.models.denormalized_order import DenormalizedOrder
from app.schemas.analytics import SalesByStoreRow, BestSellingItemRow
from app.services.workloads import Schema

settings = get_settings()


def _as_float(value) -> Optional[float]:
    if value is None:
        return None
    return round(float(value), 2)


class SalesAggregator(ABC):
    """Runs the sales aggregations against one schema."""

    schema: Schema

    def __init__(
        self,
        database: Database,
        window_days: Optional[int] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.database = database
        self.window_days = window_days if window_days is not None else settings.olap_window_days
        self.clock = clock

    def cutoff(self) -> datetime:
        """Oldest order date included in the aggregation window."""
        return self.clock() - timedelta(days=self.window_days)

    @abstractmethod
    def _sales_by_store_query(self, db: Session, cutoff: datetime) -> Query:
        ...

    @abstractmethod
    def _best_selling_items_query(self, db: Session, cutoff: datetime) -> Query:
        ...

    def sales_by_store(self) -> List[SalesByStoreRow]:
        """Order count, revenue and order value statistics per store."""
        with self.database.session() as db:
            rows = self._sales_by_store_query(db, self.cutoff()).all()

        return [
            SalesByStoreRow(
                store_name=row.store_name,
                location=row.location,
                total_orders=int(row.total_orders),
                total_revenue=_as_float(row.total_revenue),
                avg_order_value=_as_float(row.avg_order_value),
                unique_customers=int(row.unique_customers),
                min_order_value=_as_float(row.min_order_value),
                max_order_value=_as_float(row.max_order_value),
                stddev_order_value=_as_float(row.stddev_order_value),
            )
            for row in rows
        ]

    def best_selling_items(self, limit: Optional[int] = None) -> List[BestSellingItemRow]:
        """Top menu items by quantity sold."""
        limit = limit if limit is not None else settings.best_selling_limit
        with self.database.session() as db:
            rows = self._best_selling_items_query(db, self.cutoff()).limit(limit).all()

        return [
            BestSellingItemRow(
                item_name=row.item_name,
                category=row.category,
                total_quantity=int(row.total_quantity),
                total_revenue=_as_float(row.total_revenue),
                orders_count=int(row.orders_count),
            )
            for row in rows
        ]


class NormalizedSalesAggregator(SalesAggregator):
    schema = Schema.NORMALIZED

    def _sales_by_store_query(self, db: Session, cutoff: datetime) -> Query:
        total_revenue = func.sum(Order.total_amount).label("total_revenue")
        return db.query(
            Store.name.label("store_name"),
            Store.location.label("location"),
            func.count(Order.id).label("total_orders"),
            total_revenue,
            func.avg(Order.total_amount).label("avg_order_value"),
            func.count(distinct(Order.customer_id)).label("unique_customers"),
            func.min(Order.total_amount).label("min_order_value"),
            func.max(Order.total_amount).label("max_order_value"),
            func.stddev_samp(Order.total_amount).label("stddev_order_value"),
        ).join(
            Order, Order.store_id == Store.id
        ).filter(
            Order.order_date >= cutoff
        ).group_by(
            Store.id, Store.name, Store.location
        ).order_by(
            total_revenue.desc(), Store.name
        )

    def _best_selling_items_query(self, db: Session, cutoff: datetime) -> Query:
        total_quantity = func.sum(OrderLine.quantity).label("total_quantity")
        return db.query(
            MenuItem.name.label("item_name"),
            MenuItem.category.label("category"),
            total_quantity,
            func.sum(OrderLine.subtotal).label("total_revenue"),
            func.count(distinct(OrderLine.order_id)).label("orders_count"),
        ).join(
            OrderLine, OrderLine.menu_item_id == MenuItem.id
        ).join(
            Order, OrderLine.order_id == Order.id
        ).filter(
            Order.order_date >= cutoff
        ).group_by(
            MenuItem.id, MenuItem.name, MenuItem.category
        ).order_by(
            total_quantity.desc(), MenuItem.name
        )


class DenormalizedSalesAggregator(SalesAggregator):
    schema = Schema.DENORMALIZED

    def _sales_by_store_query(self, db: Session, cutoff: datetime) -> Query:
        total_revenue = func.sum(DenormalizedOrder.total_amount).label("total_revenue")
        return db.query(
            DenormalizedOrder.store_name.label("store_name"),
            DenormalizedOrder.store_location.label("location"),
            func.count().label("total_orders"),
            total_revenue,
            func.avg(DenormalizedOrder.total_amount).label("avg_order_value"),
            func.count(distinct(DenormalizedOrder.customer_id)).label("unique_customers"),
            func.min(DenormalizedOrder.total_amount).label("min_order_value"),
            func.max(DenormalizedOrder.total_amount).label("max_order_value"),
            func.stddev_samp(DenormalizedOrder.total_amount).label("stddev_order_value"),
        ).filter(
            DenormalizedOrder.order_date >= cutoff
        ).group_by(
            DenormalizedOrder.store_id, DenormalizedOrder.store_name, DenormalizedOrder.store_location
        ).order_by(
            total_revenue.desc(), DenormalizedOrder.store_name
        )

    def _best_selling_items_query(self, db: Session, cutoff: datetime) -> Query:
        total_quantity = func.sum(DenormalizedOrder.quantity).label("total_quantity")
        return db.query(
            DenormalizedOrder.item_name.label("item_name"),
            DenormalizedOrder.category.label("category"),
            total_quantity,
            func.sum(DenormalizedOrder.subtotal).label("total_revenue"),
            func.count().label("orders_count"),
        ).filter(
            DenormalizedOrder.order_date >= cutoff
        ).group_by(
            DenormalizedOrder.item_name, DenormalizedOrder.category
        ).order_by(
            total_quantity.desc(), DenormalizedOrder.item_name
        )


SALES_AGGREGATORS = {
    Schema.NORMALIZED: NormalizedSalesAggregator,
    Schema.DENORMALIZED: DenormalizedSalesAggregator,
}


def get_sales_aggregator(
    schema: Schema,
    database: Database,
    clock: Optional[Callable[[], datetime]] = None,
) -> SalesAggregator:
    """Return the sales aggregator for a schema tag."""
    aggregator_class = SALES_AGGREGATORS[Schema(schema)]
    if clock is None:
        return aggregator_class(database)
    return aggregator_class(database, clock=clock)
