"""Orders API: status changes go through the lifecycle rules."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "api"))

import uuid
from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from conftest import FakeOrderStore
from main import app
from models.order import Order
from routers.orders import get_store


def _order(status: str) -> Order:
    return Order(
        id=uuid.uuid4(),
        order_number="WX-1A2B3",
        delivery_address="Flat 402, Tower B",
        delivery_society="ASBL Spire",
        delivery_pincode="500032",
        order_source="Call",
        delivery_type="Home Delivery",
        items=[{
            "service_id": str(uuid.uuid4()), "service_name": "Wash & Fold",
            "service_type": "Standard", "weight_in_kg": 2, "price_per_kg": 80, "item_total": 160,
        }],
        bill_amount=160,
        order_status=status,
        payment_status="Pending",
        payment_method="Cash",
        ordered_on=datetime(2026, 3, 1, 9, 30),
    )


@pytest.fixture
def client_for():
    def build(status: str):
        store = FakeOrderStore()
        order = _order(status)
        store.orders[order.order_number] = order
        app.dependency_overrides[get_store] = lambda: store
        return TestClient(app), store
    yield build
    app.dependency_overrides.clear()


def test_delivered_order_cannot_go_back_to_new(client_for):
    client, store = client_for("Delivered")
    response = client.patch("/api/orders/WX-1A2B3/status", json={"order_status": "New"})

    assert response.status_code == 400
    assert "Delivered" in response.json()["detail"]
    assert store.updates == []


def test_cancelled_order_is_locked_on_edit(client_for):
    client, store = client_for("Cancelled")
    response = client.put("/api/orders/WX-1A2B3", json={"order_status": "In-Progress"})

    assert response.status_code == 400
    assert store.orders["WX-1A2B3"].order_status == "Cancelled"


def test_forward_move_allowed(client_for):
    client, store = client_for("Delivery Pending")
    response = client.patch("/api/orders/WX-1A2B3/status", json={"order_status": "Delivered"})

    assert response.status_code == 200
    assert response.json()["order_status"] == "Delivered"
    assert store.updates == [{"order_status": "Delivered"}]


def test_cancel_from_open_status(client_for):
    client, _ = client_for("In-Progress")
    response = client.patch("/api/orders/WX-1A2B3/status", json={"order_status": "Cancelled"})
    assert response.status_code == 200


def test_clearing_status_rejected(client_for):
    client, store = client_for("New")
    response = client.put("/api/orders/WX-1A2B3", json={"order_status": None})

    assert response.status_code == 400
    assert store.updates == []


def test_unknown_order_status_change(client_for):
    client, _ = client_for("New")
    response = client.patch("/api/orders/WX-FFFFF/status", json={"order_status": "Delivered"})
    assert response.status_code == 404
