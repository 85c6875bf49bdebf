"""API endpoint tests using FastAPI TestClient."""

import pytest

from fastapi.testclient import TestClient

from app.core.database import Database
from app.main import create_app
from app.scripts.seed_data import seed_all


class TestHealthEndpoints:

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["message"] == "Schema Lab API"

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestSampleDataEndpoint:

    def test_returns_reference_data(self, client, reference_data):
        response = client.get("/api/sample-data")
        assert response.status_code == 200

        data = response.json()
        assert data["success"] is True
        assert [c["email"] for c in data["customers"]] == ["ada@example.com"]
        assert data["stores"][0]["name"] == "Downtown Express"
        assert data["employees"][0]["position"] == "Cashier"
        assert {m["name"] for m in data["menu_items"]} == {"Classic Burger", "French Fries"}
        assert {m["price"] for m in data["menu_items"]} == {8.99, 5.49}


class TestOLTPEndpoints:
    """Tests for order placement endpoints."""

    def test_place_order_normalized(self, client, normalized_order_payload):
        response = client.post("/api/oltp/normalized/place-order", json=normalized_order_payload)
        assert response.status_code == 200

        data = response.json()
        assert data["success"] is True
        assert data["total_amount"] == pytest.approx(19.97)
        assert data["order_id"]
        assert data["elapsed_ms"] >= 0

    def test_place_order_denormalized(self, client, denormalized_order_payload):
        response = client.post("/api/oltp/denormalized/place-order", json=denormalized_order_payload)
        assert response.status_code == 200

        data = response.json()
        assert data["success"] is True
        assert data["total_amount"] == pytest.approx(19.97)
        assert len(data["order_id"]) == 36
        assert data["elapsed_ms"] >= 0

    def test_missing_items_is_bad_request_with_timing(self, client, normalized_order_payload):
        payload = dict(normalized_order_payload)
        del payload["items"]

        response = client.post("/api/oltp/normalized/place-order", json=payload)
        assert response.status_code == 400

        data = response.json()
        assert data["success"] is False
        assert data["elapsed_ms"] >= 0
        assert data["error"]["category"] == "incomplete_input"
        assert "items" in data["error"]["message"]

    def test_denormalized_missing_customer(self, client, denormalized_order_payload):
        payload = dict(denormalized_order_payload)
        del payload["customer"]

        response = client.post("/api/oltp/denormalized/place-order", json=payload)
        assert response.status_code == 400
        assert response.json()["error"]["category"] == "incomplete_input"

    def test_unknown_employee_is_missing_reference(self, client, normalized_order_payload):
        payload = dict(normalized_order_payload, employee_id=9999)

        response = client.post("/api/oltp/normalized/place-order", json=payload)
        assert response.status_code == 400

        error = response.json()["error"]
        assert error["category"] == "missing_reference"
        assert error["code"] == "23503"
        assert "FOREIGN KEY" not in error["message"]

    def test_unknown_menu_item_is_server_error(self, client, normalized_order_payload):
        payload = dict(normalized_order_payload, items=[{"menu_item_id": 9999, "quantity": 1}])

        response = client.post("/api/oltp/normalized/place-order", json=payload)
        assert response.status_code == 500
        assert response.json()["error"]["category"] == "failure"

    def test_zero_quantity_is_bad_request_with_timing(self, client, normalized_order_payload):
        payload = dict(normalized_order_payload, items=[{"menu_item_id": 1, "quantity": 0}])

        response = client.post("/api/oltp/normalized/place-order", json=payload)
        assert response.status_code == 400

        data = response.json()
        assert data["elapsed_ms"] >= 0
        assert data["error"]["category"] == "incomplete_input"
        assert "items[0].quantity" in data["error"]["message"]

    def test_negative_price_is_bad_request(self, client, denormalized_order_payload):
        payload = dict(denormalized_order_payload)
        payload["items"] = [dict(payload["items"][0], unit_price=-1)]

        response = client.post("/api/oltp/denormalized/place-order", json=payload)
        assert response.status_code == 400
        assert response.json()["error"]["category"] == "incomplete_input"


class TestOLAPEndpoints:
    """Tests for aggregation endpoints."""

    @pytest.fixture
    def seeded(self, database):
        seed_all(database, order_count=60, seed=11)

    @pytest.mark.parametrize("schema", ["normalized", "denormalized"])
    def test_sales_by_store(self, client, seeded, schema):
        response = client.get(f"/api/olap/{schema}/sales-by-store")
        assert response.status_code == 200

        data = response.json()
        assert data["success"] is True
        assert data["schema_name"] == schema
        assert data["elapsed_ms"] >= 0
        assert sum(row["total_orders"] for row in data["data"]) == 60
        assert set(data["data"][0]) == {
            "store_name", "location", "total_orders", "total_revenue", "avg_order_value",
            "unique_customers", "min_order_value", "max_order_value", "stddev_order_value",
        }

    def test_schemas_agree(self, client, seeded):
        normalized = client.get("/api/olap/normalized/sales-by-store").json()["data"]
        denormalized = client.get("/api/olap/denormalized/sales-by-store").json()["data"]

        totals = {row["store_name"]: (row["total_orders"], row["total_revenue"]) for row in normalized}
        for row in denormalized:
            orders, revenue = totals[row["store_name"]]
            assert row["total_orders"] == orders
            assert row["total_revenue"] == pytest.approx(revenue, abs=0.01)

    @pytest.mark.parametrize("schema", ["normalized", "denormalized"])
    def test_best_selling_items(self, client, seeded, schema):
        response = client.get(f"/api/olap/{schema}/best-selling-items", params={"limit": 5})
        assert response.status_code == 200

        data = response.json()
        assert len(data["data"]) == 5
        assert {"item_name", "category", "total_quantity", "total_revenue", "orders_count"} == set(data["data"][0])

    def test_unknown_schema(self, client):
        response = client.get("/api/olap/snowflake/sales-by-store")
        assert response.status_code == 422


class TestSimulationEndpoints:

    def test_place_order(self, client, normalized_order_payload):
        response = client.post("/api/simulations/place-order", json=normalized_order_payload)
        assert response.status_code == 200

        data = response.json()
        assert data["success"] is True
        assert data["workload"] == "place_order"
        assert data["normalized"]["data"]["total_amount"] == pytest.approx(19.97)
        assert data["denormalized"]["data"]["total_amount"] == pytest.approx(19.97)
        assert data["comparison"]["winner"] in ("normalized", "denormalized")
        assert data["comparison"]["explanation"]

    def test_place_order_invalid(self, client, reference_data):
        response = client.post("/api/simulations/place-order", json={"items": []})
        assert response.status_code == 200

        data = response.json()
        assert data["success"] is False
        assert data["comparison"] is None
        assert data["normalized"]["error"]["category"] == "incomplete_input"

    def test_sales_by_store(self, client, database):
        seed_all(database, order_count=40, seed=12)

        data = client.get("/api/simulations/sales-by-store").json()
        assert data["success"] is True
        assert data["comparison"]["workload"] == "sales_by_store"
        assert len(data["normalized"]["data"]) == len(data["denormalized"]["data"])

    def test_best_selling_items(self, client, database):
        seed_all(database, order_count=40, seed=13)

        data = client.get("/api/simulations/best-selling-items").json()
        assert data["success"] is True
        assert data["comparison"]["workload"] == "best_selling_items"


class TestDatabaseWithoutTables:
    """Storage failures come back classified, with timing, on every route."""

    @pytest.fixture
    def empty_client(self, tmp_path):
        database = Database(
            f"sqlite:///{tmp_path / 'empty.db'}",
            connect_args={"check_same_thread": False},
        )
        with TestClient(create_app(database=database)) as test_client:
            yield test_client

    @pytest.mark.parametrize("path", [
        "/api/sample-data",
        "/api/olap/normalized/sales-by-store",
        "/api/olap/denormalized/best-selling-items",
    ])
    def test_missing_table_is_internal_misconfiguration(self, empty_client, path):
        response = empty_client.get(path)
        assert response.status_code == 500

        data = response.json()
        assert data["success"] is False
        assert data["elapsed_ms"] >= 0
        assert data["error"]["category"] == "internal_misconfiguration"
        assert data["error"]["code"] == "42P01"
        assert "no such table" not in data["error"]["message"]
