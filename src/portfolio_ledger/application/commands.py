"""Command value objects accepted by the use-case services.

Validation and parameter coercion happen in the calling adapter; a
command that reaches a service is taken at face value.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, fields
from datetime import date
from decimal import Decimal
from typing import Any

from portfolio_ledger.core.enums import Currency, TransactionType
from portfolio_ledger.domain.snapshot import TransactionErrorSummary
from portfolio_ledger.domain.transaction import Transaction


def _meaningful(text: str | None) -> str | None:
    """Blank strings count as "not provided"."""
    if text is None or not text.strip():
        return None
    return text


@dataclass(frozen=True, kw_only=True)
class CreateTransactionCommand:
    ticker: str
    transaction_type: TransactionType
    quantity: Decimal
    price: Decimal
    fees: Decimal | None = None
    currency: Currency = Currency.USD
    transaction_date: date | None = None
    notes: str | None = None
    is_fractional: bool = False
    fractional_multiplier: Decimal | None = None
    commission_currency: Currency | None = None
    exchange: str | None = None
    country: str | None = None
    company_name: str | None = None

    def to_transaction(self) -> Transaction:
        """New active aggregate; buffers its ``TransactionCreated``."""
        return Transaction.create(
            ticker=self.ticker,
            transaction_type=self.transaction_type,
            quantity=self.quantity,
            price=self.price,
            fees=self.fees,
            currency=self.currency,
            transaction_date=self.transaction_date,
            notes=self.notes,
            is_active=True,
            is_fractional=self.is_fractional,
            fractional_multiplier=self.fractional_multiplier,
            commission_currency=self.commission_currency,
            exchange=self.exchange,
            country=self.country,
            company_name=self.company_name,
        )

    def to_error_summary(self) -> TransactionErrorSummary:
        return TransactionErrorSummary(
            ticker=self.ticker,
            transaction_type=self.transaction_type,
            quantity=self.quantity,
            price=self.price,
            transaction_date=self.transaction_date,
        )


@dataclass(frozen=True, kw_only=True)
class UpdateTransactionCommand:
    """Partial update: every ``None`` field is left unchanged."""

    transaction_id: uuid.UUID
    ticker: str | None = None
    transaction_type: TransactionType | None = None
    quantity: Decimal | None = None
    price: Decimal | None = None
    fees: Decimal | None = None
    currency: Currency | None = None
    transaction_date: date | None = None
    notes: str | None = None
    is_active: bool | None = None
    is_fractional: bool | None = None
    fractional_multiplier: Decimal | None = None
    commission_currency: Currency | None = None
    exchange: str | None = None
    country: str | None = None
    company_name: str | None = None

    def changes(self) -> dict[str, Any]:
        """Keyword arguments for ``Transaction.update``."""
        out: dict[str, Any] = {}
        for f in fields(self):
            if f.name == "transaction_id":
                continue
            value = getattr(self, f.name)
            if isinstance(value, str):
                value = _meaningful(value)
            out[f.name] = value
        return out


@dataclass(frozen=True)
class DeleteTransactionCommand:
    transaction_id: uuid.UUID
