"""
OLTP API Routes

Places a single order against the normalized or the denormalized schema
and reports how long the write took.
"""

import logging

from fastapi import APIRouter, Depends

from app.api.responses import failure_response
from app.core.database import Database, get_database
from app.schemas.order import PlaceOrderNormalizedRequest, PlaceOrderDenormalizedRequest, PlaceOrderResponse
from app.services.order_placement import NormalizedOrderPlacer, DenormalizedOrderPlacer
from app.services.timing import timed

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/normalized/place-order", response_model=PlaceOrderResponse)
def place_order_normalized(
    request: PlaceOrderNormalizedRequest,
    database: Database = Depends(get_database)
):
    """Place an order as a header plus order lines, resolving prices from the menu."""
    result = timed(NormalizedOrderPlacer(database).place_order, request)
    if not result.succeeded:
        return failure_response(result, logger, "Normalized order placement")

    return PlaceOrderResponse(
        order_id=str(result.data.order_id),
        total_amount=float(result.data.total_amount),
        elapsed_ms=result.elapsed_ms,
    )


@router.post("/denormalized/place-order", response_model=PlaceOrderResponse)
def place_order_denormalized(
    request: PlaceOrderDenormalizedRequest,
    database: Database = Depends(get_database)
):
    """Place an order as one flat row built from caller-supplied bundles."""
    result = timed(DenormalizedOrderPlacer(database).place_order, request)
    if not result.succeeded:
        return failure_response(result, logger, "Denormalized order placement")

    return PlaceOrderResponse(
        order_id=str(result.data.order_id),
        total_amount=float(result.data.total_amount),
        elapsed_ms=result.elapsed_ms,
    )
