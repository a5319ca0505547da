"""Tests for pickup/delivery manifest rows."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "api"))

from datetime import datetime
from decimal import Decimal

import pytest

from conftest import make_customer
from models.order import Order
from models.slot import Slot
from services.manifest import (
    DELIVERIES, DELIVERY_COLUMNS, PICKUP_COLUMNS, PICKUPS,
    amount_due, build_manifest, columns_for, describe_item, paginate,
)


def _order(number="WX-1A2B3", **fields) -> Order:
    values = dict(
        order_number=number,
        order_source="Call",
        delivery_address="Flat 402, Tower B",
        delivery_society="ASBL Spire",
        delivery_pincode="500032",
        items=[{"service_name": "Wash & Fold", "service_type": "Express", "weight_in_kg": 3, "item_total": 360}],
        bill_amount=Decimal("360.00"),
        payment_status="Pending",
        pickup_date=datetime(2026, 3, 2, 10, 0),
    )
    values.update(fields)
    return Order(**values)


def test_describe_weight_item():
    assert describe_item({"service_name": "Wash & Fold", "service_type": "Express", "weight_in_kg": 3.0}) == \
        "Wash & Fold (E) 3kg"
    assert describe_item({"service_name": "Dry Clean", "service_type": "Standard", "weight_in_kg": 2.5}) == \
        "Dry Clean (S) 2.5kg"


def test_describe_sub_items_and_pairs():
    ironing = {
        "service_name": "Ironing Only", "service_type": "Standard",
        "sub_items": [{"item_name": "Shirt", "quantity": 2}, {"item_name": "Jeans", "quantity": 1}],
    }
    assert describe_item(ironing) == "Ironing Only (S) [2xShirt, 1xJeans]"
    assert describe_item({"service_name": "Shoes", "service_type": "Superfast", "pair_count": 2}) == "Shoes (S) 2p"


def test_describe_missing_name():
    assert describe_item({"service_type": "Standard"}) == "Unknown Service (S)"


def test_amount_due_only_when_pending():
    assert amount_due(_order()) == "₹ 360.00"
    assert amount_due(_order(payment_status="Confirmed")) == "₹ 0.00"


def test_pickup_row():
    customer = make_customer()
    order = _order(
        customer=customer,
        pickup_slot=Slot(slot_name="10 AM - 12 PM", slot_type="Pickup", max_capacity=5),
        pickup_agent_name="Ravi Kumar",
    )
    row = build_manifest([order], PICKUPS)[0]

    assert row.sequence == 1
    assert row.order_ref == "WX-1A2B3\n(Call)"
    assert row.customer == "Asha Rao"
    assert row.contact == "9876543210"
    assert row.address == "Flat 402, Tower B, ASBL Spire, 500032"
    assert row.summary == "10 AM - 12 PM"
    assert row.items == "Wash & Fold (E) 3kg"
    assert row.agent == "Ravi Kumar"


def test_delivery_row_for_deleted_customer():
    row = build_manifest([_order(order_source="Walk-in")], DELIVERIES)[0]

    assert row.order_ref == "WX-1A2B3\n(Walk-in)"
    assert row.customer == "DELETED CUSTOMER"
    assert row.contact == "N/A"
    assert row.summary == "₹ 360.00"
    assert row.agent == "Unassigned"


def test_missing_slot():
    assert build_manifest([_order()], PICKUPS)[0].summary == "N/A"


def test_sequence_numbers():
    rows = build_manifest([_order(f"WX-0000{i}") for i in range(3)], PICKUPS)
    assert [r.sequence for r in rows] == [1, 2, 3]


def test_paginate():
    rows = build_manifest([_order(f"WX-{i:05d}") for i in range(23)], DELIVERIES)
    pages = paginate(rows, per_page=10)
    assert [len(p) for p in pages] == [10, 10, 3]
    assert pages[2][0].sequence == 21
    assert paginate([], per_page=10) == []
    with pytest.raises(ValueError):
        paginate(rows, per_page=0)


def test_columns():
    assert columns_for(PICKUPS) == PICKUP_COLUMNS
    assert columns_for(DELIVERIES)[5] == "Amount Due"
    assert DELIVERY_COLUMNS[0] == "S.No."
