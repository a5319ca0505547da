"""Admin dashboard API endpoints."""

from datetime import datetime
from fastapi import APIRouter, Depends
from sqlalchemy import select, func, and_
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from db.database import get_db
from models.order import Order
from schemas import DashboardStats, StatusCount, RecentOrder
from services.lifecycle import ACTIVE_STATUSES
from services.scheduling import dashboard_window

router = APIRouter()


async def _revenue(db: AsyncSession, in_window, payment_status: str) -> float:
    total = (await db.execute(
        select(func.coalesce(func.sum(Order.bill_amount), 0))
        .where(and_(in_window, Order.payment_status == payment_status))
    )).scalar()
    return float(total or 0)


@router.get("/stats", response_model=DashboardStats)
async def get_dashboard_stats(
    start_date: str | None = None,
    end_date: str | None = None,
    db: AsyncSession = Depends(get_db),
):
    """KPIs for a date window (defaults to the last 7 days, inclusive)."""
    start, end = dashboard_window(
        start_date, end_date, datetime.utcnow().date(), settings.dashboard_default_days,
    )
    in_window = and_(Order.ordered_on >= start, Order.ordered_on <= end)

    total_orders = (await db.execute(
        select(func.count(Order.id)).where(in_window)
    )).scalar() or 0

    active_customers = (await db.execute(
        select(func.count(func.distinct(Order.customer_id))).where(and_(
            in_window, Order.order_status.in_([s.value for s in ACTIVE_STATUSES]),
        ))
    )).scalar() or 0

    breakdown = await db.execute(
        select(Order.order_status, func.count(Order.id))
        .where(in_window)
        .group_by(Order.order_status)
    )

    recent = (await db.execute(
        select(Order).where(in_window).order_by(Order.ordered_on.desc()).limit(5)
    )).scalars().all()

    return DashboardStats(
        start_date=start,
        end_date=end,
        total_orders=total_orders,
        total_revenue=await _revenue(db, in_window, "Confirmed"),
        pending_revenue=await _revenue(db, in_window, "Pending"),
        total_active_customers=active_customers,
        order_status_breakdown=[StatusCount(status=s, count=c) for s, c in breakdown],
        recent_orders=[
            RecentOrder(
                order_number=o.order_number,
                customer_name=o.customer.customer_name if o.customer else None,
                bill_amount=float(o.bill_amount),
                order_status=o.order_status,
                ordered_on=o.ordered_on,
            )
            for o in recent
        ],
    )
