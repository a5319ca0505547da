"""Order ORM model — one record per service tier of a submitted booking."""

import uuid
from datetime import datetime
from sqlalchemy import (
    String, Numeric, DateTime, ForeignKey, Text, JSON,
    Enum as PgEnum,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from db.database import Base


ORDER_STATUS_ENUM = PgEnum(
    "New", "Pick-up Pending", "In-Progress", "Delivery Pending", "Delivered", "Cancelled",
    name="order_status",
)


class Order(Base):
    __tablename__ = "orders"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    order_number: Mapped[str] = mapped_column(String(8), unique=True, index=True, nullable=False)  # WX-XXXXX
    customer_id: Mapped[uuid.UUID | None] = mapped_column(ForeignKey("customers.id", ondelete="SET NULL"))

    # Delivery address snapshot, copied from the customer at creation
    delivery_address: Mapped[str] = mapped_column(Text, nullable=False)
    delivery_society: Mapped[str] = mapped_column(String(255), nullable=False)
    delivery_pincode: Mapped[str | None] = mapped_column(String(10))

    order_source: Mapped[str] = mapped_column(
        PgEnum("Call", "Walk-in", name="order_source"), default="Call",
    )
    delivery_type: Mapped[str] = mapped_column(
        PgEnum("Store Pick-up", "Home Delivery", name="delivery_type"), default="Home Delivery",
    )

    # Priced line items — see services.pricing.PricedLineItem.to_record()
    items: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    bill_amount: Mapped[float] = mapped_column(Numeric(10, 2), nullable=False)

    # Status and payment
    order_status: Mapped[str] = mapped_column(ORDER_STATUS_ENUM, default="New")
    payment_status: Mapped[str] = mapped_column(
        PgEnum("Pending", "Confirmed", name="payment_status"), default="Pending",
    )
    payment_method: Mapped[str] = mapped_column(
        PgEnum("Cash", "UPI", name="payment_method"), default="Cash",
    )
    transaction_id: Mapped[str | None] = mapped_column(String(255))

    # Pickup phase
    pickup_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    pickup_slot_id: Mapped[uuid.UUID | None] = mapped_column(ForeignKey("slots.id"))
    pickup_agent_id: Mapped[uuid.UUID | None] = mapped_column(ForeignKey("staff.id", ondelete="SET NULL"))
    pickup_agent_name: Mapped[str | None] = mapped_column(String(255))

    # Delivery phase
    delivery_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    expected_delivery_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    delivery_slot_id: Mapped[uuid.UUID | None] = mapped_column(ForeignKey("slots.id"))
    delivery_agent_id: Mapped[uuid.UUID | None] = mapped_column(ForeignKey("staff.id", ondelete="SET NULL"))
    delivery_agent_name: Mapped[str | None] = mapped_column(String(255))

    # Timestamps
    ordered_on: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=datetime.utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    customer = relationship("Customer", back_populates="orders", lazy="selectin")
    pickup_slot = relationship("Slot", foreign_keys=[pickup_slot_id], lazy="selectin")
    delivery_slot = relationship("Slot", foreign_keys=[delivery_slot_id], lazy="selectin")
    pickup_agent = relationship("Staff", foreign_keys=[pickup_agent_id], lazy="selectin")
    delivery_agent = relationship("Staff", foreign_keys=[delivery_agent_id], lazy="selectin")
