"""SQLAlchemy ORM model for the ``transactions`` table.

Column names follow the legacy schema: the unit price is stored as
``cost_per_share`` and fees as ``commission``.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Index,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Shared declarative base for all ORM models."""

    pass


class TransactionRecord(Base):
    """Persisted row for one ``Transaction`` aggregate."""

    __tablename__ = "transactions"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    ticker: Mapped[str] = mapped_column(String(20), nullable=False)
    transaction_type: Mapped[str] = mapped_column(String(16), nullable=False)
    quantity: Mapped[Decimal] = mapped_column(Numeric(18, 6), nullable=False)
    cost_per_share: Mapped[Decimal] = mapped_column(Numeric(18, 4), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False)
    transaction_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    commission: Mapped[Decimal | None] = mapped_column(Numeric(18, 4), nullable=True)
    commission_currency: Mapped[str | None] = mapped_column(String(3), nullable=True)
    exchange: Mapped[str | None] = mapped_column(String(20), nullable=True)
    country: Mapped[str | None] = mapped_column(String(50), nullable=True)
    company_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    is_fractional: Mapped[bool] = mapped_column(Boolean, default=False)
    fractional_multiplier: Mapped[Decimal | None] = mapped_column(
        Numeric(10, 8), nullable=True,
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, server_default=func.now(),
    )

    __table_args__ = (
        Index("idx_transactions_ticker", "ticker"),
        Index("idx_transactions_date", "transaction_date"),
        Index("idx_transactions_ticker_date", "ticker", "transaction_date"),
    )

    def __repr__(self) -> str:
        return (
            f"<TransactionRecord(id={self.id!r}, ticker={self.ticker!r}, "
            f"type={self.transaction_type!r}, quantity={self.quantity!r})>"
        )
