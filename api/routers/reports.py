"""Pickup and delivery manifest endpoints."""

from dataclasses import asdict
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from db.database import get_db
from models.order import Order
from schemas import ManifestType, ManifestResponse, ManifestPage, ManifestRowSchema
from services.manifest import PICKUPS, build_manifest, columns_for, paginate
from services.scheduling import parse_day, day_window

router = APIRouter()


@router.get("/{kind}", response_model=ManifestResponse)
async def get_manifest(kind: ManifestType, date: str, db: AsyncSession = Depends(get_db)):
    """Orders scheduled for pickup or delivery on a day, as paginated manifest rows."""
    start, end = day_window(parse_day(date))
    column = Order.pickup_date if kind.value == PICKUPS else Order.delivery_date

    orders = (await db.execute(
        select(Order)
        .where(column >= start, column < end)
        .order_by(Order.ordered_on.asc())
    )).scalars().all()

    if not orders:
        raise HTTPException(status_code=404, detail=f"No scheduled {kind.value} found for {date}.")

    rows = build_manifest(orders, kind.value)
    pages = paginate(rows, settings.manifest_rows_per_page)
    is_pickup = kind.value == PICKUPS

    return ManifestResponse(
        title="Pickup Manifest" if is_pickup else "Delivery Manifest",
        date_label="Pickup Date" if is_pickup else "Delivery Date",
        report_date=date,
        total_tasks=len(rows),
        columns=columns_for(kind.value),
        pages=[
            ManifestPage(
                page=n,
                rows=[ManifestRowSchema(**asdict(row)) for row in page],
            )
            for n, page in enumerate(pages, start=1)
        ],
    )
