"""Integration tests for the storefront API via TestClient."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from storefront.api import ROUTERS, register_error_handlers
from storefront.payment.gateway import set_gateway
from storefront.payment.gateway.fake_adapter import FakeGateway


@pytest.fixture()
def client():
    app = FastAPI()
    for router in ROUTERS:
        app.include_router(router)
    register_error_handlers(app)
    return TestClient(app)


@pytest.fixture()
def gateway():
    gw = FakeGateway(latency=0)
    set_gateway(gw)
    return gw


def _create_product(client, **overrides):
    body = {"name": "Widget", "price": 10.0, "stock": 5, "category": "Gadgets"}
    body.update(overrides)
    response = client.post("/products", json=body)
    assert response.status_code == 201
    return response.json()


def _commit(client, product_id, quantity, **extra):
    return client.post("/orders", json={"items": [{"product_id": product_id, "quantity": quantity}], **extra})


class TestProductEndpoints:
    def test_create_and_list(self, client):
        created = _create_product(client)
        assert created["slug"] == "widget"

        response = client.get("/products")
        assert response.status_code == 200
        assert [p["id"] for p in response.json()] == [created["id"]]

    def test_get_product(self, client):
        created = _create_product(client, id="w-1")
        response = client.get("/products/w-1")
        assert response.status_code == 200
        assert response.json()["name"] == "Widget"
        assert created["id"] == "w-1"

    def test_get_unknown_product(self, client):
        assert client.get("/products/missing").status_code == 404

    def test_update_product(self, client):
        created = _create_product(client)
        response = client.put(f"/products/{created['id']}", json={"price": 12.0})
        assert response.status_code == 200
        assert response.json()["price"] == 12.0
        assert response.json()["stock"] == 5

    def test_update_unknown_product(self, client):
        assert client.put("/products/missing", json={"price": 1.0}).status_code == 404

    def test_negative_price_is_rejected(self, client):
        response = client.post("/products", json={"name": "Bad", "price": -1.0})
        assert response.status_code == 400

    def test_duplicate_id_is_rejected(self, client):
        _create_product(client, id="dup")
        assert client.post("/products", json={"id": "dup", "name": "Again", "price": 1.0}).status_code == 400

    def test_delete_product(self, client):
        created = _create_product(client)
        assert client.delete(f"/products/{created['id']}").status_code == 200
        assert client.get(f"/products/{created['id']}").status_code == 404

    def test_delete_unknown_product(self, client):
        assert client.delete("/products/missing").status_code == 404


class TestOrderEndpoints:
    def test_commit_order(self, client):
        product = _create_product(client)

        response = _commit(client, product["id"], 2, customer_name="Jane Smith")
        assert response.status_code == 201
        order = response.json()
        assert order["total_amount"] == 20.0
        assert order["status"] == "pending"
        assert order["payment_status"] == "unpaid"
        assert order["customer_name"] == "Jane Smith"
        assert order["items"][0]["line_total"] == 20.0

        assert client.get(f"/products/{product['id']}").json()["stock"] == 3

    def test_client_cannot_set_totals_or_status(self, client):
        product = _create_product(client)
        response = client.post(
            "/orders",
            json={
                "items": [{"product_id": product["id"], "quantity": 1}],
                "total_amount": 0.01,
                "status": "delivered",
                "payment_status": "paid",
            },
        )
        assert response.status_code == 201
        assert response.json()["total_amount"] == 10.0
        assert response.json()["status"] == "pending"
        assert response.json()["payment_status"] == "unpaid"

    def test_insufficient_stock(self, client):
        product = _create_product(client)
        response = _commit(client, product["id"], 6)
        assert response.status_code == 400
        assert "Available: 5" in response.text
        assert client.get(f"/products/{product['id']}").json()["stock"] == 5

    def test_empty_cart(self, client):
        assert client.post("/orders", json={"items": []}).status_code == 400

    def test_zero_quantity(self, client):
        product = _create_product(client)
        assert _commit(client, product["id"], 0).status_code == 400

    def test_unknown_product(self, client):
        assert _commit(client, "missing", 1).status_code == 404

    def test_list_orders_most_recent_first(self, client):
        product = _create_product(client, stock=10)
        first = _commit(client, product["id"], 1).json()
        second = _commit(client, product["id"], 1).json()

        response = client.get("/orders")
        assert response.status_code == 200
        assert [o["id"] for o in response.json()["orders"]] == [second["id"], first["id"]]

    def test_list_orders_for_user(self, client):
        product = _create_product(client, stock=10)
        _commit(client, product["id"], 1, user_id="u-1")
        _commit(client, product["id"], 1, user_id="u-2")

        orders = client.get("/orders", params={"user_id": "u-2"}).json()["orders"]
        assert [o["user_id"] for o in orders] == ["u-2"]

    def test_get_order(self, client):
        product = _create_product(client)
        order = _commit(client, product["id"], 1).json()
        response = client.get(f"/orders/{order['id']}")
        assert response.status_code == 200
        assert response.json()["order_number"] == order["order_number"]

    def test_get_unknown_order(self, client):
        assert client.get("/orders/missing").status_code == 404

    def test_update_status(self, client):
        product = _create_product(client)
        order = _commit(client, product["id"], 2).json()

        response = client.put(f"/orders/{order['id']}/status", json={"status": "cancelled"})
        assert response.status_code == 200
        assert response.json()["status"] == "cancelled"
        assert client.get(f"/products/{product['id']}").json()["stock"] == 3

    def test_update_status_unknown_order(self, client):
        assert client.put("/orders/missing/status", json={"status": "shipped"}).status_code == 404

    def test_shipping_address_round_trip(self, client):
        product = _create_product(client)
        address = {"street": "1 Main St", "city": "Springfield", "state": "IL", "zip": "62701", "country": "US"}
        order = _commit(client, product["id"], 1, shipping_address=address).json()
        assert order["shipping_address"] == address


class TestCheckoutAndPayments:
    def test_checkout(self, client, gateway):
        product = _create_product(client)
        response = client.post(
            "/checkout",
            json={"items": [{"product_id": product["id"], "quantity": 2}], "payment_method": "stripe"},
        )
        assert response.status_code == 201
        order = response.json()
        assert order["payment_status"] == "paid"
        assert order["payment_reference"].startswith("txn_")

    def test_declined_checkout(self, client, gateway):
        gateway.configure(should_succeed=False, failure_reason="Card declined")
        product = _create_product(client)

        response = client.post("/checkout", json={"items": [{"product_id": product["id"], "quantity": 2}]})
        assert response.status_code == 402
        assert response.json()["reason"] == "Card declined"
        assert client.get("/orders").json()["orders"] == []
        assert client.get(f"/products/{product['id']}").json()["stock"] == 5

    def test_process_payment(self, client, gateway):
        response = client.post("/payments", json={"amount": 70.0, "method": "paypal"})
        assert response.status_code == 201
        assert response.json()["method"] == "paypal"
        assert response.json()["transaction_id"].startswith("txn_")

    def test_declined_payment(self, client, gateway):
        gateway.configure(should_succeed=False)
        assert client.post("/payments", json={"amount": 70.0, "method": "stripe"}).status_code == 402

    def test_invalid_payment_amount(self, client, gateway):
        assert client.post("/payments", json={"amount": 0, "method": "stripe"}).status_code == 400


class TestAccountEndpoints:
    def test_register_and_list(self, client):
        response = client.post("/accounts", json={"name": "Jane", "email": "jane@example.com"})
        assert response.status_code == 201
        assert response.json()["role"] == "customer"

        accounts = client.get("/accounts").json()["accounts"]
        assert [a["email"] for a in accounts] == ["jane@example.com"]

    def test_duplicate_email(self, client):
        client.post("/accounts", json={"name": "Jane", "email": "jane@example.com"})
        response = client.post("/accounts", json={"name": "Jane 2", "email": "jane@example.com"})
        assert response.status_code == 400

    def test_toggle_and_role(self, client):
        account = client.post("/accounts", json={"name": "Jane", "email": "jane@example.com"}).json()

        toggled = client.put(f"/accounts/{account['id']}/toggle")
        assert toggled.status_code == 200
        assert toggled.json()["is_active"] is False

        promoted = client.put(f"/accounts/{account['id']}/role", json={"role": "manager"})
        assert promoted.status_code == 200
        assert promoted.json()["role"] == "manager"

    def test_unknown_account(self, client):
        assert client.put("/accounts/missing/toggle").status_code == 404


class TestDashboard:
    def test_dashboard(self, client):
        product = _create_product(client, stock=3)
        _commit(client, product["id"], 1)
        client.post("/accounts", json={"name": "Jane", "email": "jane@example.com"})

        response = client.get("/dashboard")
        assert response.status_code == 200
        body = response.json()
        assert body["order_count"] == 1
        assert body["product_count"] == 1
        assert body["customer_count"] == 1
        assert body["revenue"] == 0
        assert body["low_stock"] == [{"product_id": product["id"], "name": "Widget", "stock": 2}]
