"""Tests for partial order updates."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "api"))

import uuid
from datetime import datetime

import pytest

from schemas.order import OrderCreate, OrderItemIn, OrderUpdate, SubItemIn
from services.errors import EmptyOrder, MissingField, OrderNotFound, UnknownSubcategory
from services.order_assembler import create_orders
from services.order_mutator import update_order

NOW = datetime(2026, 3, 1, 9, 30)
PICKUP = datetime(2026, 3, 2, 10, 0)


async def _scheduled_order(store, customer, wash_fold, agents):
    data = OrderCreate(
        customer_id=customer.id,
        items=[OrderItemIn(service_id=wash_fold.id, weight_in_kg=2)],
        is_pickup_scheduled=True, pickup_date=PICKUP, pickup_agent_id=agents[0].id,
    )
    return (await create_orders(store, data, now=NOW))[0]


@pytest.mark.asyncio
async def test_unknown_order(store):
    with pytest.raises(OrderNotFound):
        await update_order(store, "WX-00000", OrderUpdate(payment_status="Confirmed"))


@pytest.mark.asyncio
async def test_only_present_fields_change(store, customer, wash_fold, agents):
    order = await _scheduled_order(store, customer, wash_fold, agents)
    updated = await update_order(store, order.order_number, OrderUpdate(payment_status="Confirmed"))

    assert updated.payment_status == "Confirmed"
    assert updated.pickup_agent_name == "Ravi Kumar"
    assert updated.bill_amount == 160
    assert store.updates[-1] == {"payment_status": "Confirmed"}


@pytest.mark.asyncio
async def test_status_stored_as_text(store, customer, wash_fold, agents):
    order = await _scheduled_order(store, customer, wash_fold, agents)
    updated = await update_order(store, order.order_number, OrderUpdate(order_status="In-Progress"))
    assert updated.order_status == "In-Progress"


@pytest.mark.asyncio
async def test_agent_names_follow_ids(store, customer, wash_fold, agents):
    order = await _scheduled_order(store, customer, wash_fold, agents)

    updated = await update_order(store, order.order_number, OrderUpdate(
        pickup_agent_id=agents[1].id, delivery_agent_id=agents[0].id,
    ))
    assert updated.pickup_agent_name == "Meena Das"
    assert updated.delivery_agent_name == "Ravi Kumar"


@pytest.mark.asyncio
async def test_clearing_delivery_agent_leaves_pickup_agent(store, customer, wash_fold, agents):
    order = await _scheduled_order(store, customer, wash_fold, agents)
    await update_order(store, order.order_number, OrderUpdate(delivery_agent_id=agents[1].id))

    updated = await update_order(store, order.order_number, OrderUpdate(delivery_agent_id=None))
    assert updated.delivery_agent_id is None
    assert updated.delivery_agent_name is None
    assert updated.pickup_agent_id == agents[0].id
    assert updated.pickup_agent_name == "Ravi Kumar"


@pytest.mark.asyncio
async def test_unknown_agent_gets_no_name(store, customer, wash_fold, agents):
    order = await _scheduled_order(store, customer, wash_fold, agents)
    updated = await update_order(store, order.order_number, OrderUpdate(delivery_agent_id=uuid.uuid4()))
    assert updated.delivery_agent_name is None


@pytest.mark.asyncio
async def test_delivery_date_sets_and_clears_slot(store, customer, wash_fold, agents, delivery_slot):
    order = await _scheduled_order(store, customer, wash_fold, agents)

    updated = await update_order(store, order.order_number, OrderUpdate(delivery_date=datetime(2026, 3, 5)))
    assert updated.delivery_slot_id == delivery_slot.id

    updated = await update_order(store, order.order_number, OrderUpdate(delivery_date=None))
    assert updated.delivery_date is None
    assert updated.delivery_slot_id is None


@pytest.mark.asyncio
async def test_delivery_date_without_configured_slot(store, customer, wash_fold, agents):
    store.delivery_slot = None
    order = await _scheduled_order(store, customer, wash_fold, agents)
    updated = await update_order(store, order.order_number, OrderUpdate(delivery_date=datetime(2026, 3, 5)))
    assert updated.delivery_date == datetime(2026, 3, 5)
    assert updated.delivery_slot_id is None


@pytest.mark.asyncio
async def test_items_repriced_with_bill_and_delivery(store, customer, wash_fold, ironing, shoes, agents):
    order = await _scheduled_order(store, customer, wash_fold, agents)
    updated = await update_order(store, order.order_number, OrderUpdate(items=[
        OrderItemIn(service_id=ironing.id, sub_items=[SubItemIn(item_name="Jeans", quantity=2)]),
        OrderItemIn(service_id=shoes.id, pair_count=1),
    ]))

    assert [i["item_total"] for i in updated.items] == [60, 120]
    assert updated.bill_amount == 180
    # Shoes carry the longest TAT (72h) from the stored pickup date
    assert updated.expected_delivery_date == datetime(2026, 3, 5, 10, 0)


@pytest.mark.asyncio
async def test_items_use_new_pickup_date_from_same_patch(store, customer, wash_fold, agents):
    order = await _scheduled_order(store, customer, wash_fold, agents)
    new_pickup = datetime(2026, 3, 10, 8, 0)
    updated = await update_order(store, order.order_number, OrderUpdate(
        pickup_date=new_pickup,
        items=[OrderItemIn(service_id=wash_fold.id, weight_in_kg=1)],
    ))
    assert updated.expected_delivery_date == datetime(2026, 3, 12, 8, 0)


@pytest.mark.asyncio
async def test_walk_in_items_start_from_creation(store, customer, wash_fold):
    data = OrderCreate(
        customer_id=customer.id, order_source="Walk-in",
        items=[OrderItemIn(service_id=wash_fold.id, weight_in_kg=1)],
    )
    order = (await create_orders(store, data, now=NOW))[0]
    updated = await update_order(store, order.order_number, OrderUpdate(
        items=[OrderItemIn(service_id=wash_fold.id, service_type="Superfast", weight_in_kg=1)],
    ))
    assert updated.bill_amount == 160
    assert updated.expected_delivery_date == datetime(2026, 3, 2, 9, 30)


@pytest.mark.asyncio
async def test_empty_items_rejected(store, customer, wash_fold, agents):
    order = await _scheduled_order(store, customer, wash_fold, agents)
    with pytest.raises(EmptyOrder):
        await update_order(store, order.order_number, OrderUpdate(items=[]))


@pytest.mark.asyncio
async def test_bad_item_leaves_order_untouched(store, customer, wash_fold, ironing, agents):
    order = await _scheduled_order(store, customer, wash_fold, agents)
    with pytest.raises(UnknownSubcategory):
        await update_order(store, order.order_number, OrderUpdate(
            payment_status="Confirmed",
            items=[OrderItemIn(service_id=ironing.id, sub_items=[SubItemIn(item_name="Kurta", quantity=1)])],
        ))
    assert order.payment_status == "Pending"
    assert order.bill_amount == 160


@pytest.mark.asyncio
async def test_address_snapshot_cannot_be_patched(store, customer, wash_fold, agents):
    order = await _scheduled_order(store, customer, wash_fold, agents)
    patch = OrderUpdate.model_validate({"delivery_address": "Somewhere else", "transaction_id": "UPI123"})
    updated = await update_order(store, order.order_number, patch)

    assert updated.delivery_address == "Flat 402, Tower B"
    assert updated.transaction_id == "UPI123"


@pytest.mark.asyncio
async def test_required_fields_cannot_be_cleared(store, customer, wash_fold, agents):
    order = await _scheduled_order(store, customer, wash_fold, agents)
    for field in ("order_status", "payment_status", "payment_method", "delivery_type"):
        with pytest.raises(MissingField):
            await update_order(store, order.order_number, OrderUpdate.model_validate({field: None}))

    assert order.order_status == "Pick-up Pending"
    assert order.payment_status == "Pending"
    assert store.updates == []
