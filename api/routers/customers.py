"""Customer management API endpoints."""

import logging
import uuid
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select, func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from db.database import get_db
from models.customer import Customer, CustomerAddress
from models.order import Order
from models.reference import Society
from schemas import (
    CustomerCreate, CustomerUpdate, CustomerResponse, CustomerSummary,
    CustomerListResponse, OrderRead,
)
from services.errors import ConflictError

router = APIRouter()
logger = logging.getLogger(__name__)

SORT_KEYS = {
    "created_at": Customer.created_at,
    "customer_name": Customer.customer_name,
    "phone": Customer.phone,
}


async def _get_customer(db: AsyncSession, customer_id: uuid.UUID) -> Customer:
    result = await db.execute(
        select(Customer).where(Customer.id == customer_id).execution_options(populate_existing=True)
    )
    customer = result.scalar_one_or_none()
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")
    return customer


@router.get("/", response_model=CustomerListResponse)
async def list_customers(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.default_page_size, ge=1, le=200),
    search: str | None = None,
    sort_key: str = "created_at",
    sort_order: str = "desc",
    db: AsyncSession = Depends(get_db),
):
    """Search customers (name, phone, pincode, society) with order stats."""
    stats = (
        select(
            Order.customer_id.label("customer_id"),
            func.count(Order.id).label("order_count"),
            func.coalesce(func.sum(Order.bill_amount), 0).label("total_spent"),
        )
        .group_by(Order.customer_id)
        .subquery()
    )
    query = select(
        Customer,
        func.coalesce(stats.c.order_count, 0),
        func.coalesce(stats.c.total_spent, 0),
    ).outerjoin(stats, stats.c.customer_id == Customer.id)

    if search:
        pattern = f"%{search}%"
        matching_addresses = (
            select(CustomerAddress.customer_id)
            .join(Society, CustomerAddress.society_id == Society.id)
            .where(or_(CustomerAddress.pincode.ilike(pattern), Society.name.ilike(pattern)))
        )
        query = query.where(or_(
            Customer.customer_name.ilike(pattern),
            Customer.phone.ilike(pattern),
            Customer.id.in_(matching_addresses),
        ))

    total = (await db.execute(select(func.count()).select_from(query.subquery()))).scalar() or 0

    sort_column = SORT_KEYS.get(sort_key, Customer.created_at)
    query = query.order_by(sort_column.asc() if sort_order == "asc" else sort_column.desc())
    rows = (await db.execute(query.offset((page - 1) * limit).limit(limit))).all()

    customers = []
    for customer, order_count, total_spent in rows:
        summary = CustomerSummary.model_validate(customer)
        summary.order_count = order_count
        summary.total_spent = float(total_spent)
        customers.append(summary)

    return CustomerListResponse(
        customers=customers, total=total, page=page, has_more=page * limit < total,
    )


@router.get("/{customer_id}/orders", response_model=list[OrderRead])
async def get_customer_orders(customer_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    """Order history for one customer, newest first."""
    result = await db.execute(
        select(Order).where(Order.customer_id == customer_id).order_by(Order.ordered_on.desc())
    )
    return result.scalars().all()


@router.post("/", response_model=CustomerResponse, status_code=201)
async def create_customer(data: CustomerCreate, db: AsyncSession = Depends(get_db)):
    """Register a customer with one current address."""
    customer = Customer(
        customer_name=data.customer_name,
        phone=data.phone,
        addresses=[CustomerAddress(
            address=data.address, society_id=data.society_id,
            pincode=data.pincode, is_current=True,
        )],
    )
    db.add(customer)
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise ConflictError("A customer with this phone number already exists.") from e

    logger.info("Customer created: phone=%s", data.phone)
    return await _get_customer(db, customer.id)


@router.put("/{customer_id}", response_model=CustomerResponse)
async def update_customer(customer_id: uuid.UUID, data: CustomerUpdate, db: AsyncSession = Depends(get_db)):
    """Update name, phone and the first address on file."""
    customer = await _get_customer(db, customer_id)
    customer.customer_name = data.customer_name
    customer.phone = data.phone

    if customer.addresses:
        first = customer.addresses[0]
        first.address = data.address
        first.society_id = data.society_id
        first.pincode = data.pincode
    else:
        customer.addresses.append(CustomerAddress(
            address=data.address, society_id=data.society_id,
            pincode=data.pincode, is_current=True,
        ))

    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise ConflictError("A customer with this phone number already exists.") from e

    logger.info("Customer updated: id=%s", customer_id)
    return await _get_customer(db, customer_id)


@router.delete("/{customer_id}")
async def delete_customer(customer_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    """Delete a customer; their orders keep the address snapshot."""
    customer = await _get_customer(db, customer_id)
    await db.delete(customer)
    await db.commit()
    return {"message": "Customer deleted successfully."}
