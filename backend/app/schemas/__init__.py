from app.schemas.order import (
    OrderItemIn,
    PlaceOrderNormalizedRequest,
    PlaceOrderDenormalizedRequest,
    CustomerBundle,
    StoreBundle,
    EmployeeBundle,
    DenormalizedItemIn,
    PlaceOrderResponse,
)
from app.schemas.analytics import SalesByStoreRow, BestSellingItemRow, SalesByStoreResponse, BestSellingItemsResponse
from app.schemas.reference import CustomerResponse, StoreResponse, EmployeeResponse, MenuItemResponse, SampleDataResponse
from app.schemas.simulation import ErrorDetail, TimedResultResponse, ComparisonResponse, SimulationResponse

__all__ = [
    "OrderItemIn", "PlaceOrderNormalizedRequest", "PlaceOrderDenormalizedRequest",
    "CustomerBundle", "StoreBundle", "EmployeeBundle", "DenormalizedItemIn", "PlaceOrderResponse",
    "SalesByStoreRow", "BestSellingItemRow", "SalesByStoreResponse", "BestSellingItemsResponse",
    "CustomerResponse", "StoreResponse", "EmployeeResponse", "MenuItemResponse", "SampleDataResponse",
    "ErrorDetail", "TimedResultResponse", "ComparisonResponse", "SimulationResponse",
]
