"""
Manifest Projector — printable pickup/delivery task lists.

Orders scheduled for a date are flattened into table rows; a renderer
(PDF, print view) only has to lay the pages out.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

PICKUPS = "pickups"
DELIVERIES = "deliveries"

PICKUP_COLUMNS = [
    "S.No.", "Order ID", "Customer", "Address & Pincode", "Contact",
    "Slot", "Items", "Assigned Agent", "Notes / Remarks",
]
DELIVERY_COLUMNS = [
    "S.No.", "Order ID", "Customer", "Address & Pincode", "Contact",
    "Amount Due", "Items", "Assigned Agent", "Notes / Remarks",
]


@dataclass(frozen=True)
class ManifestRow:
    sequence: int
    order_ref: str
    customer: str
    address: str
    contact: str
    summary: str  # slot name for pickups, amount due for deliveries
    items: str
    agent: str
    notes: str = ""


def _fmt_qty(value) -> str:
    return f"{float(value):g}"


def describe_item(item: dict) -> str:
    """One stored item as 'Wash & Fold (E) 3kg' / 'Ironing Only (S) [2xShirt, 1xJeans]'."""
    name = item.get("service_name") or "Unknown Service"
    tier = (item.get("service_type") or "?")[0]
    desc = f"{name} ({tier})"
    if item.get("weight_in_kg"):
        desc += f" {_fmt_qty(item['weight_in_kg'])}kg"
    if item.get("pair_count"):
        desc += f" {item['pair_count']}p"
    sub_items = item.get("sub_items") or []
    if sub_items:
        desc += " [" + ", ".join(f"{s['quantity']}x{s['item_name']}" for s in sub_items) + "]"
    return desc


def amount_due(order) -> str:
    due = float(order.bill_amount) if order.payment_status == "Pending" else 0.0
    return f"₹ {due:.2f}"


def project_row(order, index: int, kind: str) -> ManifestRow:
    """Flatten one order into a manifest row (index is zero-based)."""
    customer = order.customer
    if kind == PICKUPS:
        summary = order.pickup_slot.slot_name if order.pickup_slot else "N/A"
        agent = order.pickup_agent_name or "Unassigned"
    else:
        summary = amount_due(order)
        agent = order.delivery_agent_name or "Unassigned"

    return ManifestRow(
        sequence=index + 1,
        order_ref=f"{order.order_number}\n({order.order_source or 'Call'})",
        customer=customer.customer_name if customer else "DELETED CUSTOMER",
        address=f"{order.delivery_address}, {order.delivery_society}, {order.delivery_pincode or ''}",
        contact=customer.phone if customer else "N/A",
        summary=summary,
        items="; ".join(describe_item(item) for item in order.items or []),
        agent=agent,
    )


def build_manifest(orders: Iterable, kind: str) -> list[ManifestRow]:
    return [project_row(order, i, kind) for i, order in enumerate(orders)]


def paginate(rows: list[ManifestRow], per_page: int = 10) -> list[list[ManifestRow]]:
    """Split rows into fixed-size pages."""
    if per_page < 1:
        raise ValueError("per_page must be at least 1")
    return [rows[i:i + per_page] for i in range(0, len(rows), per_page)]


def columns_for(kind: str) -> list[str]:
    return PICKUP_COLUMNS if kind == PICKUPS else DELIVERY_COLUMNS
