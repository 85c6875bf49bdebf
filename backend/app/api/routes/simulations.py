"""
Simulation API Routes

Runs a workload against both schemas concurrently and returns both timings
together with a comparison.
"""

from fastapi import APIRouter, Depends

from app.core.database import Database, get_database
from app.schemas.order import PlaceOrderNormalizedRequest
from app.schemas.simulation import SimulationResponse
from app.services.simulation import SimulationRunner

router = APIRouter()


@router.post("/place-order", response_model=SimulationResponse)
async def simulate_place_order(
    request: PlaceOrderNormalizedRequest,
    database: Database = Depends(get_database)
):
    """
    Place the same order under both schemas.

    The denormalized variant receives customer, store, employee and menu
    item attributes resolved from the referenced ids.
    """
    result = await SimulationRunner(database).run_place_order(request)
    return result.to_dict()


@router.get("/sales-by-store", response_model=SimulationResponse)
async def simulate_sales_by_store(database: Database = Depends(get_database)):
    """Compare the sales-by-store aggregation across both schemas."""
    result = await SimulationRunner(database).run_sales_by_store()
    return result.to_dict()


@router.get("/best-selling-items", response_model=SimulationResponse)
async def simulate_best_selling_items(database: Database = Depends(get_database)):
    """Compare the best-selling-items aggregation across both schemas."""
    result = await SimulationRunner(database).run_best_selling_items()
    return result.to_dict()
