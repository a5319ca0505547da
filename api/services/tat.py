"""TAT Estimator — expected delivery from turnaround times of priced items."""

from __future__ import annotations

import re
from datetime import datetime, timedelta
from typing import Iterable, Mapping

from services.catalog import ServiceDefinition
from services.pricing import PricedLineItem

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_tat_hours(tat: str | None) -> int:
    """Leading integer of a TAT string ("48 Hours" → 48); 0 when unusable."""
    if not tat:
        return 0
    match = _LEADING_INT.match(tat)
    return int(match.group(1)) if match else 0


def estimate_delivery(
    items: Iterable[PricedLineItem],
    start: datetime | None,
    services: Mapping[str, ServiceDefinition],
) -> datetime | None:
    """
    Expected delivery = start + the longest TAT among the items.

    Args:
        items: Priced items of one order
        start: Pickup date, or the creation instant for orders taken in-store
        services: Catalog entries keyed by service id

    Returns:
        Expected delivery datetime, or None when there is no start or no usable TAT
    """
    if start is None:
        return None

    max_hours = 0
    for item in items:
        service = services.get(item.service_id)
        if service is None:
            continue
        max_hours = max(max_hours, parse_tat_hours(service.tat(item.service_type)))

    if max_hours <= 0:
        return None
    return start + timedelta(hours=max_hours)
