"""Postgres adapter for the ``TransactionRepository`` port.

Each call runs in its own session scope and commits before returning,
so a write is acknowledged only once it is durable.  Driver errors are
propagated unchanged; the use-case services classify them.

Conversion helpers translate between domain snapshots and ORM records.
"""

from __future__ import annotations

import logging
import uuid

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from portfolio_ledger.core.enums import Currency, TransactionType
from portfolio_ledger.core.errors import RepositoryError, UpdateErrorCode
from portfolio_ledger.domain.snapshot import TransactionSnapshot
from portfolio_ledger.domain.transaction import Transaction

from .connection import session_scope
from .models import TransactionRecord

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Conversion helpers
# ---------------------------------------------------------------------------

def _apply_snapshot(record: TransactionRecord, snapshot: TransactionSnapshot) -> None:
    """Copy every value field of *snapshot* onto *record*."""
    record.ticker = snapshot.ticker
    record.transaction_type = snapshot.transaction_type.value
    record.quantity = snapshot.quantity
    record.cost_per_share = snapshot.price
    record.currency = snapshot.currency.value
    record.transaction_date = snapshot.transaction_date
    record.commission = snapshot.fees
    record.commission_currency = (
        snapshot.commission_currency.value if snapshot.commission_currency else None
    )
    record.exchange = snapshot.exchange
    record.country = snapshot.country
    record.company_name = snapshot.company_name
    record.is_active = snapshot.is_active
    record.is_fractional = snapshot.is_fractional
    record.fractional_multiplier = snapshot.fractional_multiplier
    record.notes = snapshot.notes


def _record_to_snapshot(record: TransactionRecord) -> TransactionSnapshot:
    return TransactionSnapshot(
        id=record.id,
        ticker=record.ticker,
        transaction_type=TransactionType(record.transaction_type),
        quantity=record.quantity,
        price=record.cost_per_share,
        fees=record.commission,
        currency=Currency(record.currency),
        transaction_date=record.transaction_date,
        notes=record.notes,
        is_active=bool(record.is_active),
        is_fractional=bool(record.is_fractional),
        fractional_multiplier=record.fractional_multiplier,
        commission_currency=(
            Currency(record.commission_currency) if record.commission_currency else None
        ),
        exchange=record.exchange,
        country=record.country,
        company_name=record.company_name,
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------

class PostgresTransactionRepository:
    """Repository for :class:`TransactionRecord` persistence and retrieval."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def save(self, transaction: Transaction) -> Transaction:
        """Insert a new row and return the materialized aggregate.

        The returned aggregate carries the id assigned here and takes
        over the caller's buffered events.
        """
        record = TransactionRecord(id=transaction.id or uuid.uuid4())
        _apply_snapshot(record, transaction.snapshot())
        async with session_scope(self._session_factory) as session:
            session.add(record)
            await session.flush()
            transaction_id = record.id
        logger.debug("Inserted transaction %s", transaction_id)
        return transaction.persisted_as(transaction_id)

    async def find_by_id(self, transaction_id: uuid.UUID) -> Transaction | None:
        async with session_scope(self._session_factory) as session:
            record = await session.get(TransactionRecord, transaction_id)
            if record is None:
                return None
            return Transaction.from_snapshot(_record_to_snapshot(record))

    async def find_by_ticker(
        self, ticker: str, limit: int | None = None,
    ) -> list[Transaction]:
        """Transactions for *ticker*, most recent first, undated rows last.

        A *limit* of ``None``, zero or less returns every row.
        """
        stmt = (
            select(TransactionRecord)
            .where(TransactionRecord.ticker == ticker)
            .order_by(TransactionRecord.transaction_date.desc().nulls_last())
        )
        if limit is not None and limit > 0:
            stmt = stmt.limit(limit)
        async with session_scope(self._session_factory) as session:
            result = await session.execute(stmt)
            return [
                Transaction.from_snapshot(_record_to_snapshot(r))
                for r in result.scalars().all()
            ]

    async def update(self, transaction: Transaction) -> Transaction:
        if transaction.id is None:
            raise RepositoryError(
                UpdateErrorCode.INVALID_INPUT, "Cannot update an unsaved transaction",
            )
        async with session_scope(self._session_factory) as session:
            record = await session.get(TransactionRecord, transaction.id)
            if record is None:
                raise RepositoryError(
                    UpdateErrorCode.NOT_FOUND,
                    f"Transaction {transaction.id} does not exist",
                )
            _apply_snapshot(record, transaction.snapshot())
            await session.flush()
        logger.debug("Updated transaction %s", transaction.id)
        return transaction.persisted_as(transaction.id)

    async def delete_by_id(self, transaction_id: uuid.UUID) -> bool:
        stmt = delete(TransactionRecord).where(TransactionRecord.id == transaction_id)
        async with session_scope(self._session_factory) as session:
            result = await session.execute(stmt)
            return result.rowcount > 0

    async def exists_by_id(self, transaction_id: uuid.UUID) -> bool:
        stmt = select(TransactionRecord.id).where(
            TransactionRecord.id == transaction_id,
            TransactionRecord.is_active.is_(True),
        )
        async with session_scope(self._session_factory) as session:
            result = await session.execute(stmt)
            return result.scalar_one_or_none() is not None

    async def count_all(self) -> int:
        async with session_scope(self._session_factory) as session:
            result = await session.execute(
                select(func.count()).select_from(TransactionRecord)
            )
            return int(result.scalar_one())
