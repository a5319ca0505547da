"""
Scheduling helpers — day windows and slot booking counts.

Rules:
  - Dates arrive as YYYY-MM-DD and cover the whole UTC day
  - Pickup slots count orders booked into that slot for that pickup date
  - The delivery slot counts orders delivering that day, plus open orders
    (not Delivered/Cancelled) without a delivery date whose expected
    delivery falls on that day
  - Dashboard window defaults to the last N days ending today, inclusive
"""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta
from typing import Iterable

from services.errors import ValidationError
from services.lifecycle import TERMINAL_STATUSES

_DAY_FORMAT = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_day(value: str) -> date:
    """Parse a YYYY-MM-DD string; ValidationError otherwise."""
    if not value or not _DAY_FORMAT.match(value):
        raise ValidationError("Valid date required (YYYY-MM-DD).")
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise ValidationError(f"Valid date required (YYYY-MM-DD): {value}") from e


def day_window(day: date) -> tuple[datetime, datetime]:
    """Half-open [start, end) covering one day."""
    start = datetime.combine(day, time(0, 0))
    return start, start + timedelta(days=1)


def dashboard_window(
    start_str: str | None,
    end_str: str | None,
    today: date,
    default_days: int = 7,
) -> tuple[datetime, datetime]:
    """
    Inclusive [start, end] for dashboard statistics.

    Returns:
        (start of the first day, last microsecond of the last day)
    """
    end_day = parse_day(end_str) if end_str else today
    end = datetime.combine(end_day, time.max)

    if start_str:
        start_day = parse_day(start_str)
    else:
        start_day = end_day - timedelta(days=default_days - 1)
    return datetime.combine(start_day, time(0, 0)), end


def _naive(dt: datetime | None) -> datetime | None:
    # Stored timestamps may come back timezone-aware (UTC)
    if dt is not None and dt.tzinfo is not None:
        return dt.replace(tzinfo=None) - (dt.utcoffset() or timedelta(0))
    return dt


def _within(dt: datetime | None, start: datetime, end: datetime) -> bool:
    dt = _naive(dt)
    return dt is not None and start <= dt < end


def count_slot_bookings(slots: Iterable, orders: Iterable, day: date) -> list[dict]:
    """
    Booked count for every slot on a given day.

    Args:
        slots: Slot rows (id, slot_name, slot_type, max_capacity)
        orders: Candidate orders touching that day
        day: Day to count

    Returns:
        One dict per slot with the slot fields and booked_count
    """
    start, end = day_window(day)
    orders = list(orders)
    terminal = {s.value for s in TERMINAL_STATUSES}

    results = []
    for slot in slots:
        if slot.slot_type == "Pickup":
            booked = sum(
                1 for o in orders
                if o.pickup_slot_id == slot.id and _within(o.pickup_date, start, end)
            )
        else:
            booked = sum(
                1 for o in orders
                if _within(o.delivery_date, start, end)
                or (
                    o.delivery_date is None
                    and _within(o.expected_delivery_date, start, end)
                    and o.order_status not in terminal
                )
            )
        results.append({
            "id": slot.id,
            "slot_name": slot.slot_name,
            "slot_type": slot.slot_type,
            "max_capacity": slot.max_capacity,
            "booked_count": booked,
        })
    return results
