"""Tests for snapshot <-> ORM record conversion (no database needed)."""

from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.dialects import postgresql

from portfolio_ledger.core.enums import Currency, TransactionType
from portfolio_ledger.domain.snapshot import TransactionSnapshot
from portfolio_ledger.storage.postgres.models import TransactionRecord
from portfolio_ledger.storage.postgres.repos import (
    PostgresTransactionRepository,
    _apply_snapshot,
    _record_to_snapshot,
)


class TestConversion:
    def test_round_trip_keeps_every_field(self):
        snapshot = TransactionSnapshot(
            id=uuid.uuid4(),
            ticker="SHOP",
            transaction_type=TransactionType.SELL,
            quantity=Decimal("3.5"),
            price=Decimal("71.25"),
            fees=Decimal("4.95"),
            currency=Currency.CAD,
            transaction_date=date(2024, 2, 29),
            notes="trim",
            is_active=False,
            is_fractional=True,
            fractional_multiplier=Decimal("0.5"),
            commission_currency=Currency.USD,
            exchange="TSX",
            country="CA",
            company_name="Shopify",
        )
        record = TransactionRecord(id=snapshot.id)
        _apply_snapshot(record, snapshot)

        assert record.cost_per_share == Decimal("71.25")
        assert record.commission == Decimal("4.95")
        assert record.transaction_type == "SELL"
        assert _record_to_snapshot(record) == snapshot

    def test_optional_currency_absent(self):
        snapshot = TransactionSnapshot(
            id=uuid.uuid4(),
            ticker="T",
            transaction_type=TransactionType.DIVIDEND,
            quantity=Decimal("1"),
            price=Decimal("0.28"),
        )
        record = TransactionRecord(id=snapshot.id)
        _apply_snapshot(record, snapshot)
        assert record.commission_currency is None
        assert _record_to_snapshot(record).commission_currency is None


# ---------------------------------------------------------------------------
# Query shape (session mocked, statement compiled for postgres)
# ---------------------------------------------------------------------------

def _capturing_factory() -> tuple[MagicMock, AsyncMock]:
    result = MagicMock()
    result.scalars.return_value.all.return_value = []
    session = AsyncMock()
    session.execute = AsyncMock(return_value=result)
    return MagicMock(return_value=session), session


def _compiled(session: AsyncMock) -> str:
    (stmt,) = session.execute.await_args.args
    return str(stmt.compile(dialect=postgresql.dialect()))


class TestFindByTickerQuery:
    @pytest.mark.asyncio
    async def test_orders_newest_first_with_nulls_last(self):
        factory, session = _capturing_factory()
        await PostgresTransactionRepository(factory).find_by_ticker("AAPL")
        assert "DESC NULLS LAST" in _compiled(session)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("limit", [None, 0, -1])
    async def test_non_positive_limit_is_unbounded(self, limit):
        factory, session = _capturing_factory()
        await PostgresTransactionRepository(factory).find_by_ticker("AAPL", limit)
        assert "LIMIT" not in _compiled(session)

    @pytest.mark.asyncio
    async def test_positive_limit_applied(self):
        factory, session = _capturing_factory()
        await PostgresTransactionRepository(factory).find_by_ticker("AAPL", 3)
        assert "LIMIT" in _compiled(session)
