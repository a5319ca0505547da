"""Slot ORM model — named pickup windows and the all-day delivery slot."""

import uuid
from sqlalchemy import String, Integer, Enum as PgEnum
from sqlalchemy.orm import Mapped, mapped_column
from db.database import Base


class Slot(Base):
    __tablename__ = "slots"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    slot_name: Mapped[str] = mapped_column(String(50), nullable=False)
    slot_type: Mapped[str] = mapped_column(
        PgEnum("Pickup", "Delivery", name="slot_type"),
        nullable=False,
    )
    max_capacity: Mapped[int] = mapped_column(Integer, default=5)
