"""
Simulation Runner

Runs one workload against both schemas at the same time and compares the
timings. Each variant runs in a worker thread with its own session, so the
two never share in-process state.
"""

from typing import Any, Callable, Dict, Optional
from dataclasses import dataclass
from datetime import datetime
import asyncio
import logging

from starlette.concurrency import run_in_threadpool

from app.core.database import Database
from app.schemas.order import PlaceOrderNormalizedRequest
from app.services.comparison import ComparisonOutcome, compare_results
from app.services.error_classifier import classify_exception
from app.services.order_placement import get_order_placer
from app.services.reference_data import ReferenceDataService
from app.services.sales_analytics import get_sales_aggregator
from app.services.timing import TimedResult, timed
from app.services.workloads import Schema, Workload

logger = logging.getLogger(__name__)


def serialize_data(data: Any) -> Any:
    if data is None:
        return None
    if isinstance(data, list):
        return [serialize_data(item) for item in data]
    if hasattr(data, "model_dump"):
        return data.model_dump()
    if hasattr(data, "to_dict"):
        return data.to_dict()
    return data


def timed_result_to_dict(result: TimedResult) -> Dict:
    return {
        "succeeded": result.succeeded,
        "elapsed_ms": result.elapsed_ms,
        "data": serialize_data(result.data),
        "error": classify_exception(result.error).to_dict() if result.error is not None else None,
    }


@dataclass
class SimulationResult:
    workload: Workload
    normalized: TimedResult
    denormalized: TimedResult
    comparison: Optional[ComparisonOutcome] = None

    @property
    def succeeded(self) -> bool:
        return self.normalized.succeeded and self.denormalized.succeeded

    def to_dict(self) -> Dict:
        return {
            "success": self.succeeded,
            "workload": self.workload.value,
            "normalized": timed_result_to_dict(self.normalized),
            "denormalized": timed_result_to_dict(self.denormalized),
            "comparison": self.comparison.to_dict() if self.comparison else None,
        }


class SimulationRunner:
    """Runs each workload under both schemas concurrently and compares them."""

    def __init__(self, database: Database, clock: Optional[Callable[[], datetime]] = None):
        self.database = database
        self.clock = clock

    async def _run_pair(
        self,
        workload: Workload,
        normalized_operation: Callable[[], Any],
        denormalized_operation: Callable[[], Any],
    ) -> SimulationResult:
        normalized, denormalized = await asyncio.gather(
            run_in_threadpool(timed, normalized_operation),
            run_in_threadpool(timed, denormalized_operation),
        )
        result = SimulationResult(workload=workload, normalized=normalized, denormalized=denormalized)

        for schema, timed_result in ((Schema.NORMALIZED, normalized), (Schema.DENORMALIZED, denormalized)):
            if not timed_result.succeeded:
                classified = classify_exception(timed_result.error)
                logger.warning(
                    f"{workload.value} ({schema.value}) failed after {timed_result.elapsed_ms}ms: "
                    f"{classified.category.value} ({classified.code})"
                )

        if result.succeeded:
            result.comparison = compare_results(workload, normalized, denormalized)
            logger.info(
                f"{workload.value}: normalized={normalized.elapsed_ms}ms "
                f"denormalized={denormalized.elapsed_ms}ms winner={result.comparison.winner}"
            )
        return result

    def _resolve_denormalized_request(self, request: PlaceOrderNormalizedRequest):
        with self.database.session() as db:
            return ReferenceDataService(db).to_denormalized_request(request)

    async def run_place_order(self, request: PlaceOrderNormalizedRequest) -> SimulationResult:
        """
        Place the same order under both schemas.

        The bundles the denormalized variant needs are fetched up front,
        outside the timed region.
        """
        denormalized_request = await run_in_threadpool(self._resolve_denormalized_request, request)
        normalized_placer = get_order_placer(Schema.NORMALIZED, self.database, clock=self.clock)
        denormalized_placer = get_order_placer(Schema.DENORMALIZED, self.database, clock=self.clock)
        return await self._run_pair(
            Workload.PLACE_ORDER,
            lambda: normalized_placer.place_order(request),
            lambda: denormalized_placer.place_order(denormalized_request),
        )

    async def run_sales_by_store(self) -> SimulationResult:
        normalized = get_sales_aggregator(Schema.NORMALIZED, self.database, clock=self.clock)
        denormalized = get_sales_aggregator(Schema.DENORMALIZED, self.database, clock=self.clock)
        return await self._run_pair(Workload.SALES_BY_STORE, normalized.sales_by_store, denormalized.sales_by_store)

    async def run_best_selling_items(self) -> SimulationResult:
        normalized = get_sales_aggregator(Schema.NORMALIZED, self.database, clock=self.clock)
        denormalized = get_sales_aggregator(Schema.DENORMALIZED, self.database, clock=self.clock)
        return await self._run_pair(
            Workload.BEST_SELLING_ITEMS, normalized.best_selling_items, denormalized.best_selling_items
        )

    async def run(self, workload: Workload, request: Optional[PlaceOrderNormalizedRequest] = None) -> SimulationResult:
        workload = Workload(workload)
        if workload is Workload.PLACE_ORDER:
            return await self.run_place_order(request or PlaceOrderNormalizedRequest())
        if workload is Workload.SALES_BY_STORE:
            return await self.run_sales_by_store()
        return await self.run_best_selling_items()
