"""
OLAP API Routes

Runs the sales aggregations against the schema named in the path.
"""

from typing import Optional
import logging

from fastapi import APIRouter, Depends, Query

from app.api.responses import failure_response
from app.core.database import Database, get_database
from app.schemas.analytics import SalesByStoreResponse, BestSellingItemsResponse
from app.services.sales_analytics import get_sales_aggregator
from app.services.timing import timed
from app.services.workloads import Schema

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/{schema}/sales-by-store", response_model=SalesByStoreResponse)
def sales_by_store(schema: Schema, database: Database = Depends(get_database)):
    """Orders, revenue and order value statistics per store over the last 30 days."""
    aggregator = get_sales_aggregator(schema, database)
    result = timed(aggregator.sales_by_store)
    if not result.succeeded:
        return failure_response(result, logger, f"Sales by store ({schema.value})")

    return SalesByStoreResponse(schema_name=schema.value, data=result.data, elapsed_ms=result.elapsed_ms)


@router.get("/{schema}/best-selling-items", response_model=BestSellingItemsResponse)
def best_selling_items(
    schema: Schema,
    limit: Optional[int] = Query(None, ge=1, le=100),
    database: Database = Depends(get_database)
):
    """Top menu items by quantity sold over the last 30 days."""
    aggregator = get_sales_aggregator(schema, database)
    result = timed(aggregator.best_selling_items, limit)
    if not result.succeeded:
        return failure_response(result, logger, f"Best selling items ({schema.value})")

    return BestSellingItemsResponse(schema_name=schema.value, data=result.data, elapsed_ms=result.elapsed_ms)
