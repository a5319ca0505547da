"""
Order status lifecycle.

    New ──► Pick-up Pending ──► In-Progress ──► Delivery Pending ──► Delivered
     │             │                 │                  │
     └─────────────┴─────────────────┴──────────────────┴──────► Cancelled

Delivered and Cancelled are terminal. The pricing core never checks these
rules itself; callers that change status (the orders router) do.
"""

from enum import Enum


class OrderStatus(str, Enum):
    NEW = "New"
    PICKUP_PENDING = "Pick-up Pending"
    IN_PROGRESS = "In-Progress"
    DELIVERY_PENDING = "Delivery Pending"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


FORWARD_ORDER = [
    OrderStatus.NEW,
    OrderStatus.PICKUP_PENDING,
    OrderStatus.IN_PROGRESS,
    OrderStatus.DELIVERY_PENDING,
    OrderStatus.DELIVERED,
]

TERMINAL_STATUSES = frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED})

ACTIVE_STATUSES = frozenset({
    OrderStatus.NEW,
    OrderStatus.PICKUP_PENDING,
    OrderStatus.IN_PROGRESS,
    OrderStatus.DELIVERY_PENDING,
})


def can_transition(from_status: str, to_status: str) -> bool:
    """Whether staff may move an order from one status to another."""
    current = OrderStatus(from_status)
    target = OrderStatus(to_status)

    if current == target:
        return True
    if current in TERMINAL_STATUSES:
        return False
    if target == OrderStatus.CANCELLED:
        return True

    # Forward only; skipping ahead is allowed (e.g. walk-in straight to In-Progress)
    return FORWARD_ORDER.index(target) > FORWARD_ORDER.index(current)


def initial_status(is_pickup_scheduled: bool, has_pickup_agent: bool) -> OrderStatus:
    """Starting status for a freshly created order."""
    if not is_pickup_scheduled:
        return OrderStatus.IN_PROGRESS
    return OrderStatus.PICKUP_PENDING if has_pickup_agent else OrderStatus.NEW
