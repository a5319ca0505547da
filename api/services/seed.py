"""
Reference data seeding — roles, societies, the service catalog and slots.

Runs once on start-up and is idempotent: existing rows are kept (services
are refreshed to the seeded definition), missing rows are inserted.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.reference import Role, Society
from models.service import Service
from models.slot import Slot

logger = logging.getLogger(__name__)


DEFAULT_ROLES = ["Ironmen", "Delivery Agent", "Supervisor", "Washermen"]

DEFAULT_SOCIETIES = ["Riddhis Saphire", "ASBL Spire", "Asbl landmark", "Asbl Gooff"]

_KG_TATS = {"standard_tat": "48 Hours", "express_tat": "36 Hours", "superfast_tat": "24 Hours"}
_LONG_TATS = {"standard_tat": "72 Hours", "express_tat": "54 Hours", "superfast_tat": "36 Hours"}
_MULTIPLIERS = {"express_price_multiplier": 1.5, "superfast_price_multiplier": 2.0}

DEFAULT_SERVICES = [
    {"category_name": "Wash & Fold", "pricing_model": "PerKg", "price_per_kg": 80, **_KG_TATS, **_MULTIPLIERS},
    {"category_name": "Wash & Iron", "pricing_model": "PerKg", "price_per_kg": 100, **_KG_TATS, **_MULTIPLIERS},
    {
        "category_name": "Ironing Only",
        "pricing_model": "PerItem",
        "subcategories": [
            {"item_name": "Shirt", "price": 20}, {"item_name": "T-Shirt", "price": 15},
            {"item_name": "Pants / Trousers", "price": 25}, {"item_name": "Jeans", "price": 30},
            {"item_name": "Others", "price": 20},
        ],
        "standard_tat": "24 Hours", "express_tat": "18 Hours", "superfast_tat": "12 Hours",
        **_MULTIPLIERS,
    },
    {
        "category_name": "Dry Cleaning",
        "pricing_model": "PerItem",
        "subcategories": [
            {"item_name": "Kurta / Kurti", "price": 80}, {"item_name": "Saree (Plain)", "price": 150},
            {"item_name": "Blazer / Coat", "price": 200}, {"item_name": "Sherwani", "price": 350},
            {"item_name": "Lehenga", "price": 400}, {"item_name": "Others", "price": 100},
        ],
        **_LONG_TATS, **_MULTIPLIERS,
    },
    {"category_name": "Shoes & Footwear", "pricing_model": "PerPair", "price_per_pair": 120, **_LONG_TATS, **_MULTIPLIERS},
]

DEFAULT_PICKUP_SLOTS = ["9 AM - 12 PM", "12 PM - 3 PM", "4 PM - 7 PM"]
ALL_DAY_DELIVERY_SLOT = {"slot_name": "9 AM - 10 PM", "slot_type": "Delivery", "max_capacity": 20}


async def _seed_names(db: AsyncSession, model, column, names: list[str]):
    existing = set((await db.execute(select(column))).scalars().all())
    for name in names:
        if name not in existing:
            db.add(model(**{column.key: name}))
            logger.info("Seeded %s '%s'", model.__tablename__, name)


async def _seed_services(db: AsyncSession):
    for data in DEFAULT_SERVICES:
        result = await db.execute(select(Service).where(Service.category_name == data["category_name"]))
        service = result.scalar_one_or_none()
        if service is None:
            db.add(Service(**data))
            logger.info("Seeded service '%s'", data["category_name"])
        else:
            for field, value in data.items():
                setattr(service, field, value)


async def _seed_slots(db: AsyncSession):
    slots = (await db.execute(select(Slot))).scalars().all()
    if not any(s.slot_type == "Pickup" for s in slots):
        for name in DEFAULT_PICKUP_SLOTS:
            db.add(Slot(slot_name=name, slot_type="Pickup", max_capacity=5))
        logger.info("Seeded default pickup slots")
    if not any(s.slot_type == "Delivery" for s in slots):
        db.add(Slot(**ALL_DAY_DELIVERY_SLOT))
        logger.info("Seeded all-day delivery slot")


async def seed_reference_data(db: AsyncSession):
    """Insert any missing reference rows and commit."""
    await _seed_names(db, Role, Role.role_name, DEFAULT_ROLES)
    await _seed_names(db, Society, Society.name, DEFAULT_SOCIETIES)
    await _seed_services(db)
    await _seed_slots(db)
    await db.commit()
