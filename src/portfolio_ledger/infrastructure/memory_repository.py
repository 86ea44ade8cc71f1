"""Dict-backed transaction repository for tests and local runs."""

from __future__ import annotations

import logging
import uuid
from datetime import date

from portfolio_ledger.core.errors import RepositoryError, UpdateErrorCode
from portfolio_ledger.core.ids import new_id
from portfolio_ledger.domain.snapshot import TransactionSnapshot
from portfolio_ledger.domain.transaction import Transaction

logger = logging.getLogger(__name__)


class InMemoryTransactionRepository:
    """Stores snapshots only; reads always return event-free aggregates."""

    def __init__(self) -> None:
        self._rows: dict[uuid.UUID, TransactionSnapshot] = {}

    async def save(self, transaction: Transaction) -> Transaction:
        transaction_id = transaction.id or new_id()
        persisted = transaction.persisted_as(transaction_id)
        self._rows[transaction_id] = persisted.snapshot()
        logger.debug("Stored transaction %s", transaction_id)
        return persisted

    async def find_by_id(self, transaction_id: uuid.UUID) -> Transaction | None:
        snapshot = self._rows.get(transaction_id)
        if snapshot is None:
            return None
        return Transaction.from_snapshot(snapshot)

    async def find_by_ticker(
        self, ticker: str, limit: int | None = None,
    ) -> list[Transaction]:
        """Newest first; undated rows last.  A limit of 0 or less means no limit."""
        matching = sorted(
            (s for s in self._rows.values() if s.ticker == ticker),
            key=lambda s: s.transaction_date or date.min,
            reverse=True,
        )
        if limit is not None and limit > 0:
            matching = matching[:limit]
        return [Transaction.from_snapshot(s) for s in matching]

    async def update(self, transaction: Transaction) -> Transaction:
        if transaction.id is None or transaction.id not in self._rows:
            raise RepositoryError(
                UpdateErrorCode.NOT_FOUND,
                f"Transaction {transaction.id} does not exist",
            )
        persisted = transaction.persisted_as(transaction.id)
        self._rows[transaction.id] = persisted.snapshot()
        return persisted

    async def delete_by_id(self, transaction_id: uuid.UUID) -> bool:
        return self._rows.pop(transaction_id, None) is not None

    async def exists_by_id(self, transaction_id: uuid.UUID) -> bool:
        """True only for stored rows that are still active."""
        snapshot = self._rows.get(transaction_id)
        return snapshot is not None and snapshot.is_active

    async def count_all(self) -> int:
        return len(self._rows)
