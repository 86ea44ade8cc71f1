"""Immutable value records carried as domain event payloads."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any

from portfolio_ledger.core.enums import Currency, TransactionType


@dataclass(frozen=True, kw_only=True)
class TransactionSnapshot:
    """Point-in-time, event-free copy of a transaction's state."""

    id: uuid.UUID | None = None
    ticker: str
    transaction_type: TransactionType
    quantity: Decimal
    price: Decimal
    fees: Decimal | None = None
    currency: Currency = Currency.USD
    transaction_date: date | None = None
    notes: str | None = None
    is_active: bool = True
    is_fractional: bool = False
    fractional_multiplier: Decimal | None = None
    commission_currency: Currency | None = None
    exchange: str | None = None
    country: str | None = None
    company_name: str | None = None

    def total_value(self) -> Decimal:
        return self.quantity * self.price

    def total_cost(self) -> Decimal:
        fees = self.fees if self.fees is not None else Decimal("0")
        return self.total_value() + fees

    def to_dict(self) -> dict[str, Any]:
        """Wire representation with camelCase keys."""
        return {
            "id": self.id,
            "ticker": self.ticker,
            "transactionType": self.transaction_type,
            "quantity": self.quantity,
            "price": self.price,
            "fees": self.fees,
            "currency": self.currency,
            "transactionDate": self.transaction_date,
            "notes": self.notes,
            "isActive": self.is_active,
            "isFractional": self.is_fractional,
            "fractionalMultiplier": self.fractional_multiplier,
            "commissionCurrency": self.commission_currency,
            "exchange": self.exchange,
            "country": self.country,
            "companyName": self.company_name,
        }


@dataclass(frozen=True)
class TransactionChange:
    """Before/after pair recorded by a single ``Transaction.update`` call."""

    before: TransactionSnapshot
    after: TransactionSnapshot

    @property
    def changed_fields(self) -> tuple[str, ...]:
        """Names of fields whose value differs between the two snapshots.

        Empty for no-op updates; consumers must tolerate that.
        """
        before, after = self.before.to_dict(), self.after.to_dict()
        return tuple(k for k in after if before[k] != after[k])

    def to_dict(self) -> dict[str, Any]:
        return {
            "previousTransaction": self.before.to_dict(),
            "newTransaction": self.after.to_dict(),
        }


@dataclass(frozen=True)
class TransactionErrorSummary:
    """What was known about a transaction whose creation failed.

    There is no identity: storage never assigned one.
    """

    ticker: str | None
    transaction_type: TransactionType | None
    quantity: Decimal | None
    price: Decimal | None
    transaction_date: date | None

    def to_dict(self) -> dict[str, Any]:
        return {
            "ticker": self.ticker,
            "transactionType": self.transaction_type,
            "quantity": self.quantity,
            "price": self.price,
            "transactionDate": self.transaction_date,
        }
