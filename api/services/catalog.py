"""
Pricing Catalog — read-only view of the laundry services.

Each stored service becomes one variant of ServiceDefinition, keyed by its
pricing model; a variant carries only the rate fields its model uses:

  - PerKg   → PerWeightService       (rate_per_kg)
  - PerPair → PerCountedUnitService  (rate_per_pair)
  - PerItem → PerItemCountService    (subcategories)

Lookups go to the store on every call so that edits made through the
services API take effect on the next order.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Union

from services.errors import InvalidServiceDefinition, UnknownService

if TYPE_CHECKING:
    from models.service import Service
    from services.store import OrderStore


DEFAULT_EXPRESS_MULTIPLIER = 1.5
DEFAULT_SUPERFAST_MULTIPLIER = 2.0


class PricingModel(str, Enum):
    PER_KG = "PerKg"
    PER_ITEM = "PerItem"
    PER_PAIR = "PerPair"


class ServiceTier(str, Enum):
    STANDARD = "Standard"
    EXPRESS = "Express"
    SUPERFAST = "Superfast"


# ── Data classes ───────────────────────────────────────────

@dataclass(frozen=True)
class Subcategory:
    name: str
    price: float


@dataclass(frozen=True, kw_only=True)
class _ServiceBase:
    id: str
    name: str
    standard_tat: str
    express_tat: str | None = None
    superfast_tat: str | None = None
    express_multiplier: float = DEFAULT_EXPRESS_MULTIPLIER
    superfast_multiplier: float = DEFAULT_SUPERFAST_MULTIPLIER

    def multiplier(self, tier: str) -> float:
        """Price multiplier for a service tier (Standard is always 1)."""
        if tier == ServiceTier.EXPRESS:
            return self.express_multiplier
        if tier == ServiceTier.SUPERFAST:
            return self.superfast_multiplier
        return 1.0

    def tat(self, tier: str) -> str | None:
        """Turnaround-time string for a service tier."""
        if tier == ServiceTier.EXPRESS:
            return self.express_tat
        if tier == ServiceTier.SUPERFAST:
            return self.superfast_tat
        return self.standard_tat


@dataclass(frozen=True, kw_only=True)
class PerWeightService(_ServiceBase):
    rate_per_kg: float


@dataclass(frozen=True, kw_only=True)
class PerCountedUnitService(_ServiceBase):
    rate_per_pair: float


@dataclass(frozen=True, kw_only=True)
class PerItemCountService(_ServiceBase):
    subcategories: tuple[Subcategory, ...]

    def find_subcategory(self, name: str) -> Subcategory | None:
        for sub in self.subcategories:
            if sub.name == name:
                return sub
        return None


ServiceDefinition = Union[PerWeightService, PerCountedUnitService, PerItemCountService]


# ── Construction ───────────────────────────────────────────

def _multiplier_or_default(value, default: float) -> float:
    # A stored 0 or NULL falls back to the catalog default
    return float(value) if value else default


def definition_from_record(service: Service) -> ServiceDefinition:
    """Build the typed catalog entry for a stored service row."""
    common = dict(
        id=str(service.id),
        name=service.category_name,
        standard_tat=service.standard_tat,
        express_tat=service.express_tat,
        superfast_tat=service.superfast_tat,
        express_multiplier=_multiplier_or_default(
            service.express_price_multiplier, DEFAULT_EXPRESS_MULTIPLIER,
        ),
        superfast_multiplier=_multiplier_or_default(
            service.superfast_price_multiplier, DEFAULT_SUPERFAST_MULTIPLIER,
        ),
    )

    model = service.pricing_model
    if model == PricingModel.PER_KG:
        if service.price_per_kg is None:
            raise InvalidServiceDefinition(f"Service '{service.category_name}' is priced per kg but has no rate")
        return PerWeightService(rate_per_kg=float(service.price_per_kg), **common)

    if model == PricingModel.PER_PAIR:
        if service.price_per_pair is None:
            raise InvalidServiceDefinition(f"Service '{service.category_name}' is priced per pair but has no rate")
        return PerCountedUnitService(rate_per_pair=float(service.price_per_pair), **common)

    if model == PricingModel.PER_ITEM:
        subcategories = tuple(
            Subcategory(name=sub["item_name"], price=float(sub["price"]))
            for sub in (service.subcategories or [])
        )
        if not subcategories:
            raise InvalidServiceDefinition(f"Service '{service.category_name}' is priced per item but lists no items")
        names = [sub.name for sub in subcategories]
        if len(set(names)) != len(names):
            raise InvalidServiceDefinition(f"Service '{service.category_name}' has duplicate item names")
        return PerItemCountService(subcategories=subcategories, **common)

    raise InvalidServiceDefinition(f"Unknown pricing model: {model}")


class ServiceCatalog:
    """Resolves service ids to catalog entries through the order store."""

    def __init__(self, store: OrderStore):
        self.store = store

    async def resolve(self, service_id) -> ServiceDefinition:
        service = await self.store.get_service(service_id)
        if service is None:
            raise UnknownService(f"Invalid service ID: {service_id}")
        return definition_from_record(service)
