"""
Line-Item Pricer — turns a requested service quantity into a priced item.

Pricing models:
  1. PerKg:   weight × rate_per_kg × tier multiplier
  2. PerPair: pairs × rate_per_pair × tier multiplier
  3. PerItem: Σ quantity × subcategory price × tier multiplier

Tier multipliers: Standard 1.0, Express (default 1.5), Superfast (default 2.0).
A caller-supplied unit price replaces the catalog rate × multiplier.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from services.catalog import (
    PerCountedUnitService, PerItemCountService, PerWeightService,
    ServiceDefinition, ServiceTier,
)
from services.errors import InvalidPrice, InvalidQuantity, UnknownSubcategory


# ── Data classes ───────────────────────────────────────────

@dataclass(frozen=True)
class PricedSubItem:
    item_name: str
    quantity: int
    price_per_item: float

    @property
    def total(self) -> float:
        return self.quantity * self.price_per_item


@dataclass(frozen=True)
class PricedLineItem:
    service_id: str
    service_name: str
    service_type: str
    item_total: float
    weight_in_kg: float | None = None
    price_per_kg: float | None = None
    pair_count: int | None = None
    price_per_pair: float | None = None
    sub_items: tuple[PricedSubItem, ...] = field(default_factory=tuple)

    def to_record(self) -> dict:
        """JSON-ready form stored in Order.items."""
        record = {
            "service_id": self.service_id,
            "service_name": self.service_name,
            "service_type": self.service_type,
            "item_total": self.item_total,
        }
        if self.weight_in_kg is not None:
            record["weight_in_kg"] = self.weight_in_kg
            record["price_per_kg"] = self.price_per_kg
        if self.pair_count is not None:
            record["pair_count"] = self.pair_count
            record["price_per_pair"] = self.price_per_pair
        if self.sub_items:
            record["sub_items"] = [
                {"item_name": s.item_name, "quantity": s.quantity, "price_per_item": s.price_per_item}
                for s in self.sub_items
            ]
        return record


# ── Core Functions ─────────────────────────────────────────

def resolve_unit_price(override: float | None, base_rate: float, multiplier: float) -> float:
    """
    Caller override if supplied, else catalog rate × tier multiplier.

    The unit price is rounded to 2 decimals here, before callers multiply it
    by the quantity, so item totals are quantity × the rounded unit price.
    """
    if override is not None:
        if override < 0:
            raise InvalidPrice(f"Unit price cannot be negative: {override}")
        return round(override, 2)
    return round(base_rate * multiplier, 2)


def _require_quantity(value, label: str, service_name: str):
    if value is None:
        raise InvalidQuantity(f"{label} is required for '{service_name}'")
    if value < 0:
        raise InvalidQuantity(f"{label} cannot be negative for '{service_name}'")
    return value


def price_item(raw, service: ServiceDefinition) -> PricedLineItem:
    """
    Price one requested line item against its catalog entry.

    Args:
        raw: Requested item (schemas.OrderItemIn) with service_id, service_type and
             the quantity fields matching the service's pricing model
        service: Catalog entry the item refers to

    Returns:
        PricedLineItem with resolved unit prices and item_total

    Raises:
        InvalidQuantity, InvalidPrice, UnknownSubcategory
    """
    tier = ServiceTier(raw.service_type).value
    multiplier = service.multiplier(tier)
    common = dict(service_id=service.id, service_name=service.name, service_type=tier)

    if isinstance(service, PerWeightService):
        weight = _require_quantity(raw.weight_in_kg, "Weight", service.name)
        unit = resolve_unit_price(raw.price_per_kg, service.rate_per_kg, multiplier)
        return PricedLineItem(
            weight_in_kg=weight,
            price_per_kg=unit,
            item_total=round(weight * unit, 2),
            **common,
        )

    if isinstance(service, PerCountedUnitService):
        pairs = _require_quantity(raw.pair_count, "Pair count", service.name)
        unit = resolve_unit_price(raw.price_per_pair, service.rate_per_pair, multiplier)
        return PricedLineItem(
            pair_count=pairs,
            price_per_pair=unit,
            item_total=round(pairs * unit, 2),
            **common,
        )

    if isinstance(service, PerItemCountService):
        if not raw.sub_items:
            raise InvalidQuantity(f"At least one item is required for '{service.name}'")
        priced_subs = []
        total = 0.0
        for sub in raw.sub_items:
            subcategory = service.find_subcategory(sub.item_name)
            if subcategory is None:
                raise UnknownSubcategory(f"Unknown item '{sub.item_name}' for '{service.name}'")
            if sub.quantity < 1:
                raise InvalidQuantity(f"Quantity for '{sub.item_name}' must be at least 1")
            unit = resolve_unit_price(sub.price_per_item, subcategory.price, multiplier)
            priced = PricedSubItem(item_name=sub.item_name, quantity=sub.quantity, price_per_item=unit)
            priced_subs.append(priced)
            total += priced.total
        return PricedLineItem(
            sub_items=tuple(priced_subs),
            item_total=round(total, 2),
            **common,
        )

    raise TypeError(f"Unsupported service definition: {type(service).__name__}")


def bill_total(items: Iterable[PricedLineItem]) -> float:
    """Bill amount is always the sum of the current item totals."""
    return round(sum(item.item_total for item in items), 2)
