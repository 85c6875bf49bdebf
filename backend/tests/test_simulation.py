"""Tests for running workloads against both schemas concurrently."""

import asyncio

import pytest

from app.models.denormalized_order import DenormalizedOrder
from app.models.order import Order
from app.schemas.order import PlaceOrderNormalizedRequest
from app.scripts.seed_data import seed_all
from app.services.simulation import SimulationRunner, timed_result_to_dict
from app.services.timing import TimedResult
from app.services.workloads import Workload


class TestPlaceOrderSimulation:

    def test_both_variants_succeed_with_same_total(self, database, normalized_order_payload):
        runner = SimulationRunner(database)
        result = asyncio.run(runner.run_place_order(PlaceOrderNormalizedRequest(**normalized_order_payload)))

        assert result.succeeded is True
        assert result.workload is Workload.PLACE_ORDER
        assert float(result.normalized.data.total_amount) == pytest.approx(19.97)
        assert float(result.denormalized.data.total_amount) == pytest.approx(19.97)
        assert result.normalized.elapsed_ms >= 0
        assert result.denormalized.elapsed_ms >= 0

        with database.session() as db:
            assert db.query(Order).count() == 1
            assert db.query(DenormalizedOrder).count() == 1
            row = db.query(DenormalizedOrder).one()
            assert row.store_name == "Downtown Express"
            assert row.customer_email == "ada@example.com"
            assert row.item_name == "Classic Burger"

    def test_comparison_attached(self, database, normalized_order_payload):
        result = asyncio.run(
            SimulationRunner(database).run_place_order(PlaceOrderNormalizedRequest(**normalized_order_payload))
        )

        comparison = result.comparison
        assert comparison is not None
        assert comparison.workload == "place_order"
        assert comparison.winner in ("normalized", "denormalized")
        assert comparison.normalized_ms == result.normalized.elapsed_ms
        assert comparison.denormalized_ms == result.denormalized.elapsed_ms
        assert 0 <= comparison.percent_diff <= 100

    def test_invalid_request_fails_both_without_comparison(self, database, reference_data):
        request = PlaceOrderNormalizedRequest(
            customer_id=reference_data["customer_id"],
            store_id=reference_data["store_id"],
            employee_id=reference_data["employee_id"],
            items=[],
        )
        result = asyncio.run(SimulationRunner(database).run_place_order(request))

        assert result.succeeded is False
        assert result.normalized.succeeded is False
        assert result.denormalized.succeeded is False
        assert result.comparison is None

        data = result.to_dict()
        assert data["success"] is False
        assert data["normalized"]["error"]["category"] == "incomplete_input"
        assert data["denormalized"]["error"]["category"] == "incomplete_input"
        assert data["normalized"]["elapsed_ms"] >= 0

    def test_unknown_references_fail_denormalized_as_incomplete(self, database, reference_data):
        request = PlaceOrderNormalizedRequest(
            customer_id=reference_data["customer_id"],
            store_id=9999,
            employee_id=reference_data["employee_id"],
            items=[{"menu_item_id": reference_data["burger_id"], "quantity": 1}],
        )
        result = asyncio.run(SimulationRunner(database).run_place_order(request))

        data = result.to_dict()
        assert data["normalized"]["error"]["category"] == "missing_reference"
        assert data["denormalized"]["error"]["category"] == "incomplete_input"


class TestAggregationSimulations:

    @pytest.fixture
    def seeded_database(self, database):
        seed_all(database, order_count=80, seed=3)
        return database

    def test_sales_by_store(self, seeded_database):
        result = asyncio.run(SimulationRunner(seeded_database).run_sales_by_store())

        assert result.succeeded is True
        assert result.comparison.workload == "sales_by_store"
        normalized = {row.store_name: row.total_orders for row in result.normalized.data}
        denormalized = {row.store_name: row.total_orders for row in result.denormalized.data}
        assert normalized == denormalized

    def test_best_selling_items(self, seeded_database):
        result = asyncio.run(SimulationRunner(seeded_database).run(Workload.BEST_SELLING_ITEMS))

        assert result.succeeded is True
        assert result.comparison.workload == "best_selling_items"
        assert len(result.normalized.data) > 0
        assert len(result.denormalized.data) > 0

    def test_to_dict_serializes_rows(self, seeded_database):
        data = asyncio.run(SimulationRunner(seeded_database).run("sales_by_store")).to_dict()

        assert data["success"] is True
        assert data["workload"] == "sales_by_store"
        assert isinstance(data["normalized"]["data"], list)
        assert "total_revenue" in data["normalized"]["data"][0]
        assert data["comparison"]["winner"] in ("normalized", "denormalized")


class TestTimedResultSerialization:

    def test_failure_is_classified(self):
        result = TimedResult(data=None, elapsed_ms=1.5, succeeded=False, error=RuntimeError("raw detail"))
        data = timed_result_to_dict(result)

        assert data["succeeded"] is False
        assert data["elapsed_ms"] == 1.5
        assert data["error"]["category"] == "failure"
        assert "raw detail" not in data["error"]["message"]

    def test_success_has_no_error(self):
        data = timed_result_to_dict(TimedResult(data={"a": 1}, elapsed_ms=0.5, succeeded=True))
        assert data["error"] is None
        assert data["data"] == {"a": 1}
