"""Service ORM model — one row per laundry service in the pricing catalog."""

import uuid
from sqlalchemy import String, Numeric, JSON, Enum as PgEnum
from sqlalchemy.orm import Mapped, mapped_column
from db.database import Base


class Service(Base):
    __tablename__ = "services"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    category_name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    pricing_model: Mapped[str] = mapped_column(
        PgEnum("PerKg", "PerItem", "PerPair", name="pricing_model"),
        nullable=False,
    )

    # Rates — which one is required depends on pricing_model
    price_per_kg: Mapped[float | None] = mapped_column(Numeric(10, 2))
    price_per_pair: Mapped[float | None] = mapped_column(Numeric(10, 2))
    subcategories: Mapped[list] = mapped_column(JSON, default=list)  # [{"item_name", "price"}]

    # Turnaround times, e.g. "48 Hours"
    standard_tat: Mapped[str] = mapped_column(String(50), nullable=False)
    express_tat: Mapped[str | None] = mapped_column(String(50))
    superfast_tat: Mapped[str | None] = mapped_column(String(50))
    express_price_multiplier: Mapped[float | None] = mapped_column(Numeric(4, 2), default=1.5)
    superfast_price_multiplier: Mapped[float | None] = mapped_column(Numeric(4, 2), default=2.0)
