"""Pickup/delivery slot API endpoints."""

import uuid
from fastapi import APIRouter, Depends
from sqlalchemy import select, or_, and_
from sqlalchemy.ext.asyncio import AsyncSession

from db.database import get_db
from models.order import Order
from models.slot import Slot
from schemas import SlotResponse, SlotStatusResponse, SlotCapacityUpdate
from services.errors import SlotNotFound
from services.scheduling import parse_day, day_window, count_slot_bookings

router = APIRouter()


@router.get("/", response_model=list[SlotResponse])
async def list_slots(db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(Slot).order_by(Slot.slot_type, Slot.slot_name))
    return result.scalars().all()


@router.get("/status", response_model=list[SlotStatusResponse])
async def slot_status(date: str, db: AsyncSession = Depends(get_db)):
    """Booked count per slot for one day (YYYY-MM-DD)."""
    day = parse_day(date)
    start, end = day_window(day)

    slots = (await db.execute(select(Slot))).scalars().all()
    orders = (await db.execute(
        select(Order).where(or_(
            and_(Order.pickup_date >= start, Order.pickup_date < end),
            and_(Order.delivery_date >= start, Order.delivery_date < end),
            and_(Order.expected_delivery_date >= start, Order.expected_delivery_date < end),
        ))
    )).scalars().all()

    return count_slot_bookings(slots, orders, day)


@router.put("/{slot_id}", response_model=SlotResponse)
async def update_slot_capacity(slot_id: uuid.UUID, data: SlotCapacityUpdate, db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(Slot).where(Slot.id == slot_id))
    slot = result.scalar_one_or_none()
    if not slot:
        raise SlotNotFound("Slot not found.")
    slot.max_capacity = data.max_capacity
    await db.commit()
    await db.refresh(slot)
    return slot
