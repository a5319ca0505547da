"""
Order Assembler — turns one booking request into persisted orders.

A booking may mix service tiers; it is split into one order per tier, in
the order the tiers first appear in the request. Every group is priced
before anything is written, so a pricing failure never leaves a partial
order behind. Groups are then persisted one by one, each in its own
transaction: if a later insert fails, orders already written for earlier
tiers stay in place.
"""

from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from datetime import datetime

from models.order import Order
from schemas.order import OrderCreate, OrderItemIn
from services.catalog import ServiceCatalog, ServiceDefinition
from services.errors import CustomerNotFound, EmptyOrder, MissingField, NoAddressOnFile
from services.lifecycle import initial_status
from services.pricing import PricedLineItem, bill_total, price_item
from services.tat import estimate_delivery

logger = logging.getLogger(__name__)

ORDER_NUMBER_PREFIX = "WX-"


@dataclass
class PricedGroup:
    tier: str
    items: list[PricedLineItem]
    services: dict[str, ServiceDefinition]

    @property
    def bill_amount(self) -> float:
        return bill_total(self.items)


def new_order_number_candidate() -> str:
    """WX- followed by five uppercase hex characters."""
    return f"{ORDER_NUMBER_PREFIX}{secrets.token_hex(3)[:5].upper()}"


async def generate_order_number(store) -> str:
    """
    Draw candidates until one is not taken.

    This is only a pre-check: the unique constraint on orders.order_number
    settles races between concurrent requests (surfacing as ConflictError).
    """
    while True:
        candidate = new_order_number_candidate()
        if not await store.order_number_exists(candidate):
            return candidate


def group_by_tier(raw_items: list[OrderItemIn]) -> dict[str, list[OrderItemIn]]:
    """Partition items by service tier, keeping first-seen tier order."""
    groups: dict[str, list[OrderItemIn]] = {}
    for item in raw_items:
        groups.setdefault(item.service_type.value, []).append(item)
    return groups


async def price_items(catalog: ServiceCatalog, raw_items: list[OrderItemIn]) -> tuple[list[PricedLineItem], dict[str, ServiceDefinition]]:
    """Resolve and price every item; returns the priced items and the entries used."""
    services: dict[str, ServiceDefinition] = {}
    priced: list[PricedLineItem] = []
    for raw in raw_items:
        service = await catalog.resolve(raw.service_id)
        services[service.id] = service
        priced.append(price_item(raw, service))
    return priced, services


async def create_orders(store, data: OrderCreate, now: datetime | None = None) -> list[Order]:
    """
    Create one order per service tier present in the request.

    Args:
        store: OrderStore (or any object with the same async methods)
        data: Booking request
        now: Creation instant; defaults to the current UTC time

    Returns:
        Created orders, in tier encounter order

    Raises:
        CustomerNotFound, NoAddressOnFile, EmptyOrder, MissingField,
        UnknownService, UnknownSubcategory, InvalidQuantity, InvalidPrice,
        ConflictError, DependencyError
    """
    now = now or datetime.utcnow()

    customer = await store.get_customer(data.customer_id)
    if customer is None:
        raise CustomerNotFound("Customer not found.")
    address = customer.current_address
    if address is None:
        raise NoAddressOnFile("Customer does not have a current address set.")

    if not data.items:
        raise EmptyOrder("Order must contain at least one item.")

    if data.is_pickup_scheduled and data.pickup_date is None:
        raise MissingField("Pickup date is required when a pickup is scheduled.")

    # Price everything first
    catalog = ServiceCatalog(store)
    groups: list[PricedGroup] = []
    for tier, raw_items in group_by_tier(data.items).items():
        priced, services = await price_items(catalog, raw_items)
        groups.append(PricedGroup(tier=tier, items=priced, services=services))

    pickup_agent_name = None
    if data.is_pickup_scheduled and data.pickup_agent_id:
        agent = await store.get_staff(data.pickup_agent_id)
        pickup_agent_name = agent.name if agent else None

    status = initial_status(data.is_pickup_scheduled, data.pickup_agent_id is not None)
    start = data.pickup_date if data.is_pickup_scheduled else now

    created: list[Order] = []
    for group in groups:
        order = Order(
            order_number=await generate_order_number(store),
            customer_id=customer.id,
            delivery_address=address.address,
            delivery_society=address.society.name,
            delivery_pincode=address.pincode,
            order_source=data.order_source,
            delivery_type=data.delivery_type,
            items=[item.to_record() for item in group.items],
            bill_amount=group.bill_amount,
            order_status=status.value,
            payment_status=data.payment_status,
            payment_method=data.payment_method,
            transaction_id=data.transaction_id,
            expected_delivery_date=estimate_delivery(group.items, start, group.services),
            ordered_on=now,
        )
        if data.is_pickup_scheduled:
            order.pickup_date = data.pickup_date
            order.pickup_slot_id = data.pickup_slot_id
            order.pickup_agent_id = data.pickup_agent_id
            order.pickup_agent_name = pickup_agent_name

        saved = await store.insert_order(order)
        logger.info(
            "Order created: %s tier=%s bill=%.2f status=%s",
            saved.order_number, group.tier, group.bill_amount, saved.order_status,
        )
        created.append(saved)

    return created
