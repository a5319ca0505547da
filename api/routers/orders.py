"""Order management API endpoints."""

import logging
from fastapi import APIRouter, Depends, Query
from sqlalchemy import select, func, or_, cast
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from db.database import get_db
from models.customer import Customer
from models.order import Order
from schemas import (
    OrderCreate, OrderUpdate, OrderStatusUpdate,
    OrderDetailResponse, OrderListResponse,
)
from services.errors import InvalidTransition, OrderNotFound
from services.lifecycle import can_transition
from services.order_assembler import create_orders
from services.order_mutator import update_order
from services.scheduling import parse_day, day_window
from services.store import OrderStore

router = APIRouter()
logger = logging.getLogger(__name__)

TIER_FILTERS = {"standard": "Standard", "express": "Express", "superfast": "Superfast"}
SOURCE_FILTERS = {"call": "Call", "walk-in": "Walk-in"}


async def get_store(db: AsyncSession = Depends(get_db)) -> OrderStore:
    return OrderStore(db)


async def _check_transition(store: OrderStore, order_number: str, target: str):
    order = await store.get_order(order_number)
    if order is None:
        raise OrderNotFound("Order not found.")
    if not can_transition(order.order_status, target):
        raise InvalidTransition(f"Cannot move order from '{order.order_status}' to '{target}'.")


@router.get("/", response_model=OrderListResponse)
async def list_orders(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.default_page_size, ge=1, le=200),
    order_status: str | None = None,
    payment_status: str | None = None,
    start_date: str | None = None,
    end_date: str | None = None,
    service: str | None = None,
    source: str | None = None,
    search: str | None = None,
    db: AsyncSession = Depends(get_db),
):
    """List orders, newest first, with filters, search and pagination."""
    query = select(Order).outerjoin(Customer, Order.customer_id == Customer.id)

    if order_status and order_status != "all":
        query = query.where(Order.order_status == order_status)
    if payment_status and payment_status != "all":
        query = query.where(Order.payment_status == payment_status)
    if start_date:
        query = query.where(Order.ordered_on >= day_window(parse_day(start_date))[0])
    if end_date:
        query = query.where(Order.ordered_on < day_window(parse_day(end_date))[1])
    if service and service != "all":
        tier = TIER_FILTERS.get(service.lower(), "Standard")
        query = query.where(cast(Order.items, JSONB).contains([{"service_type": tier}]))
    if source and source != "all":
        query = query.where(Order.order_source == SOURCE_FILTERS.get(source.lower(), "Call"))
    if search:
        pattern = f"%{search}%"
        query = query.where(or_(Customer.customer_name.ilike(pattern), Order.order_number.ilike(pattern)))

    total = (await db.execute(select(func.count()).select_from(query.subquery()))).scalar() or 0
    result = await db.execute(
        query.order_by(Order.ordered_on.desc()).offset((page - 1) * limit).limit(limit)
    )
    return OrderListResponse(
        orders=result.scalars().all(),
        total=total,
        page=page,
        has_more=page * limit < total,
    )


@router.get("/{order_number}", response_model=OrderDetailResponse)
async def get_order(order_number: str, store: OrderStore = Depends(get_store)):
    """Get order by its WX- number with customer, slots and agents expanded."""
    order = await store.get_order(order_number)
    if order is None:
        raise OrderNotFound("Order not found.")
    return order


@router.post(
    "/",
    response_model=list[OrderDetailResponse],
    response_model_exclude_none=True,
    status_code=201,
)
async def create_order(data: OrderCreate, store: OrderStore = Depends(get_store)):
    """Create one order per service tier in the request."""
    return await create_orders(store, data)


@router.put("/{order_number}", response_model=OrderDetailResponse)
async def edit_order(order_number: str, data: OrderUpdate, store: OrderStore = Depends(get_store)):
    """Partially update an order; prices, agent names and slots are re-derived."""
    if data.order_status is not None:
        await _check_transition(store, order_number, data.order_status.value)
    return await update_order(store, order_number, data)


@router.patch("/{order_number}/status", response_model=OrderDetailResponse)
async def update_order_status(
    order_number: str,
    data: OrderStatusUpdate,
    store: OrderStore = Depends(get_store),
):
    """Move an order through its lifecycle."""
    await _check_transition(store, order_number, data.order_status.value)
    order = await update_order(store, order_number, OrderUpdate(order_status=data.order_status))
    logger.info("Order %s status -> %s", order_number, order.order_status)
    return order
