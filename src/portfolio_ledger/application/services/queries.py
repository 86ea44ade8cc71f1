"""Read-side use cases.  They never publish."""

from __future__ import annotations

import logging
import uuid

from portfolio_ledger.application.ports import TransactionRepository
from portfolio_ledger.application.results import (
    GetError,
    GetNotFound,
    GetResult,
    GetSuccess,
    ListError,
    ListNotFound,
    ListResult,
    ListSuccess,
)
from portfolio_ledger.core.errors import GetErrorCode

from .base import classify_failure

logger = logging.getLogger(__name__)


class GetTransactionService:
    def __init__(self, repository: TransactionRepository) -> None:
        self._repository = repository

    async def execute(self, transaction_id: uuid.UUID) -> GetResult:
        try:
            found = await self._repository.find_by_id(transaction_id)
        except Exception as exc:
            logger.error("Loading transaction %s failed: %s", transaction_id, exc)
            return GetError(
                error=classify_failure(exc, GetErrorCode.PERSISTENCE_ERROR),
                cause=exc,
            )
        if found is None:
            return GetNotFound(transaction_id)
        return GetSuccess(found)


class ListTransactionsByTickerService:
    """All transactions for a ticker, newest first, optionally capped."""

    def __init__(self, repository: TransactionRepository) -> None:
        self._repository = repository

    async def execute(self, ticker: str, limit: int | None = None) -> ListResult:
        try:
            transactions = await self._repository.find_by_ticker(ticker, limit)
        except Exception as exc:
            logger.error("Listing transactions for %s failed: %s", ticker, exc)
            return ListError(
                error=classify_failure(exc, GetErrorCode.PERSISTENCE_ERROR),
                cause=exc,
            )
        if not transactions:
            return ListNotFound(ticker)
        return ListSuccess(transactions)
