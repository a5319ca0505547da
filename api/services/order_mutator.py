"""
Order Mutator — partial updates that keep derived fields in sync.

Only fields present in the patch are touched. Derived fields follow their
sources:
  - pickup/delivery agent id   → agent name (None when unassigned or unknown)
  - delivery date              → canonical all-day delivery slot
  - items                      → item prices, bill amount, expected delivery
The delivery address snapshot is never changed here.
"""

from __future__ import annotations

import logging

from models.order import Order
from schemas.order import OrderUpdate
from services.catalog import ServiceCatalog
from services.errors import EmptyOrder, MissingField, OrderNotFound
from services.order_assembler import price_items
from services.pricing import bill_total
from services.tat import estimate_delivery

logger = logging.getLogger(__name__)

WALK_IN = "Walk-in"

# Columns that may be changed but never cleared
REQUIRED_FIELDS = ("order_status", "payment_status", "payment_method", "delivery_type")


async def _agent_name(store, agent_id) -> str | None:
    if not agent_id:
        return None
    agent = await store.get_staff(agent_id)
    return agent.name if agent else None


async def update_order(store, order_number: str, patch: OrderUpdate) -> Order:
    """
    Apply a partial update to an order.

    Args:
        store: OrderStore (or any object with the same async methods)
        order_number: Human-readable id, e.g. "WX-1A2B3"
        patch: Fields to change; unset fields are left alone

    Returns:
        The updated order, re-read from the store

    Raises:
        OrderNotFound, MissingField, UnknownService, UnknownSubcategory, InvalidQuantity,
        InvalidPrice, DependencyError
    """
    order = await store.get_order(order_number)
    if order is None:
        raise OrderNotFound("Order not found.")

    changes = patch.model_dump(exclude_unset=True, exclude={"items"})
    for field in REQUIRED_FIELDS:
        if field in changes and changes[field] is None:
            raise MissingField(f"'{field}' cannot be empty.")
    if "order_status" in changes:
        changes["order_status"] = changes["order_status"].value

    if "pickup_agent_id" in changes:
        changes["pickup_agent_name"] = await _agent_name(store, changes["pickup_agent_id"])

    if "delivery_agent_id" in changes:
        changes["delivery_agent_name"] = await _agent_name(store, changes["delivery_agent_id"])

    if "delivery_date" in changes:
        if changes["delivery_date"] is not None:
            slot = await store.get_delivery_slot()
            if slot is None:
                logger.warning("All-day delivery slot not found; order %s left without one", order_number)
            changes["delivery_slot_id"] = slot.id if slot else None
        else:
            changes["delivery_slot_id"] = None

    if "items" in patch.model_fields_set and patch.items is not None:
        if not patch.items:
            raise EmptyOrder("Order must contain at least one item.")
        priced, services = await price_items(ServiceCatalog(store), patch.items)
        if order.order_source == WALK_IN:
            start = order.ordered_on
        else:
            start = changes.get("pickup_date") or order.pickup_date
        changes["items"] = [item.to_record() for item in priced]
        changes["bill_amount"] = bill_total(priced)
        changes["expected_delivery_date"] = estimate_delivery(priced, start, services)

    updated = await store.update_order(order, changes)
    logger.info("Order updated: %s fields=%s", order_number, sorted(changes))
    return updated
