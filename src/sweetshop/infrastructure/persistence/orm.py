"""SQLAlchemy mapping for the ``sweets`` table."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import CheckConstraint, DateTime, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from sweetshop.domain.model.product import DESCRIPTION_MAX_LENGTH, NAME_MAX_LENGTH
from sweetshop.infrastructure.persistence.database import Base


class SweetRecord(Base):
    __tablename__ = "sweets"
    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_sweets_quantity_non_negative"),
        CheckConstraint("price > 0", name="ck_sweets_price_positive"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), index=True)
    category: Mapped[str] = mapped_column(String(80), index=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2))
    currency: Mapped[str] = mapped_column(String(3), default="USD")
    quantity: Mapped[int] = mapped_column(Integer, default=0)
    description: Mapped[str | None] = mapped_column(Text(DESCRIPTION_MAX_LENGTH), nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))

    def __repr__(self) -> str:
        return f"<SweetRecord(id={self.id!r}, name={self.name!r}, quantity={self.quantity})>"
