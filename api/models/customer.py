"""Customer and CustomerAddress ORM models."""

import uuid
from datetime import datetime
from sqlalchemy import String, Integer, Boolean, DateTime, ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from db.database import Base


class Customer(Base):
    __tablename__ = "customers"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    customer_name: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    addresses = relationship(
        "CustomerAddress", back_populates="customer", lazy="selectin",
        cascade="all, delete-orphan", order_by="CustomerAddress.id",
    )
    orders = relationship("Order", back_populates="customer", lazy="raise", passive_deletes=True)

    @property
    def current_address(self) -> "CustomerAddress | None":
        """The address flagged current, else the first one on file."""
        for address in self.addresses:
            if address.is_current:
                return address
        return self.addresses[0] if self.addresses else None


class CustomerAddress(Base):
    __tablename__ = "customer_addresses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    customer_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("customers.id", ondelete="CASCADE"), nullable=False)
    address: Mapped[str] = mapped_column(Text, nullable=False)
    society_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("societies.id"), nullable=False)
    pincode: Mapped[str] = mapped_column(String(10), nullable=False)
    is_current: Mapped[bool] = mapped_column(Boolean, default=False)

    # Relationships
    customer = relationship("Customer", back_populates="addresses")
    society = relationship("Society", lazy="selectin")
