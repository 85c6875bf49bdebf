from enum import Enum


class Schema(str, Enum):
    """Which data layout an operation runs against."""
    NORMALIZED = "normalized"
    DENORMALIZED = "denormalized"


class Workload(str, Enum):
    PLACE_ORDER = "place_order"
    SALES_BY_STORE = "sales_by_store"
    BEST_SELLING_ITEMS = "best_selling_items"

    @property
    def kind(self) -> str:
        return "oltp" if self is Workload.PLACE_ORDER else "olap"
