"""
Order Store — database access for the pricing and order lifecycle core.

The assembler and mutator only talk to the database through these methods.
SQLAlchemy failures are translated into the service error taxonomy:
  - IntegrityError (duplicate order number)   → ConflictError
  - OperationalError / InterfaceError         → DependencyError
"""

import functools
import logging
import uuid

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from models.customer import Customer
from models.order import Order
from models.service import Service
from models.slot import Slot
from models.staff import Staff
from services.errors import ConflictError, DependencyError

logger = logging.getLogger(__name__)


def _as_uuid(value) -> uuid.UUID | None:
    if value is None or isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


def _translate_errors(func):
    """Map storage failures onto ConflictError / DependencyError."""
    @functools.wraps(func)
    async def wrapper(self, *args, **kwargs):
        try:
            return await func(self, *args, **kwargs)
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError("Record conflicts with an existing one (duplicate unique field)") from e
        except (OperationalError, InterfaceError) as e:
            logger.error("Storage failure in %s: %s", func.__name__, e)
            raise DependencyError("Storage is unavailable. Please try again.") from e
    return wrapper


class OrderStore:
    def __init__(self, session: AsyncSession):
        self.session = session

    @_translate_errors
    async def get_customer(self, customer_id) -> Customer | None:
        key = _as_uuid(customer_id)
        if key is None:
            return None
        result = await self.session.execute(select(Customer).where(Customer.id == key))
        return result.scalar_one_or_none()

    @_translate_errors
    async def get_service(self, service_id) -> Service | None:
        key = _as_uuid(service_id)
        if key is None:
            return None
        result = await self.session.execute(select(Service).where(Service.id == key))
        return result.scalar_one_or_none()

    @_translate_errors
    async def get_staff(self, staff_id) -> Staff | None:
        key = _as_uuid(staff_id)
        if key is None:
            return None
        result = await self.session.execute(select(Staff).where(Staff.id == key))
        return result.scalar_one_or_none()

    @_translate_errors
    async def get_delivery_slot(self) -> Slot | None:
        """The canonical all-day delivery slot."""
        result = await self.session.execute(
            select(Slot).where(Slot.slot_type == "Delivery").limit(1)
        )
        return result.scalar_one_or_none()

    @_translate_errors
    async def order_number_exists(self, order_number: str) -> bool:
        result = await self.session.execute(
            select(Order.id).where(Order.order_number == order_number)
        )
        return result.first() is not None

    @_translate_errors
    async def get_order(self, order_number: str) -> Order | None:
        result = await self.session.execute(
            select(Order)
            .where(Order.order_number == order_number)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    @_translate_errors
    async def insert_order(self, order: Order) -> Order:
        """Persist one order in its own transaction and return it fully loaded."""
        self.session.add(order)
        await self.session.commit()
        return await self.get_order(order.order_number)

    @_translate_errors
    async def update_order(self, order: Order, changes: dict) -> Order:
        """Apply field changes to an order, commit, and return it re-resolved."""
        for field, value in changes.items():
            setattr(order, field, value)
        await self.session.commit()
        return await self.get_order(order.order_number)
