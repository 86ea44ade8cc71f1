"""Tests for the read-side services."""

from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from portfolio_ledger.application.results import (
    GetError,
    GetNotFound,
    GetSuccess,
    ListError,
    ListNotFound,
    ListSuccess,
)
from portfolio_ledger.application.services import (
    GetTransactionService,
    ListTransactionsByTickerService,
)
from portfolio_ledger.core.enums import TransactionType
from portfolio_ledger.core.errors import GetErrorCode
from portfolio_ledger.domain.transaction import Transaction


def _stored() -> Transaction:
    return Transaction.reconstruct(
        id=uuid.uuid4(),
        ticker="NVDA",
        transaction_type=TransactionType.BUY,
        quantity=Decimal("2"),
        price=Decimal("900"),
    )


class TestGetTransaction:
    @pytest.mark.asyncio
    async def test_found(self):
        stored = _stored()
        repo = AsyncMock()
        repo.find_by_id.return_value = stored
        assert await GetTransactionService(repo).execute(stored.id) == GetSuccess(stored)

    @pytest.mark.asyncio
    async def test_missing(self):
        repo = AsyncMock()
        repo.find_by_id.return_value = None
        tid = uuid.uuid4()
        assert await GetTransactionService(repo).execute(tid) == GetNotFound(tid)

    @pytest.mark.asyncio
    async def test_failure(self):
        repo = AsyncMock()
        repo.find_by_id.side_effect = ConnectionError("down")
        result = await GetTransactionService(repo).execute(uuid.uuid4())
        assert isinstance(result, GetError)
        assert result.error is GetErrorCode.PERSISTENCE_ERROR


class TestListByTicker:
    @pytest.mark.asyncio
    async def test_found_passes_limit(self):
        stored = [_stored(), _stored()]
        repo = AsyncMock()
        repo.find_by_ticker.return_value = stored

        result = await ListTransactionsByTickerService(repo).execute("NVDA", 5)

        assert result == ListSuccess(stored)
        repo.find_by_ticker.assert_awaited_once_with("NVDA", 5)

    @pytest.mark.asyncio
    async def test_empty_is_not_found(self):
        repo = AsyncMock()
        repo.find_by_ticker.return_value = []
        assert await ListTransactionsByTickerService(repo).execute("ZZZ") == ListNotFound("ZZZ")

    @pytest.mark.asyncio
    async def test_failure(self):
        repo = AsyncMock()
        repo.find_by_ticker.side_effect = RuntimeError("boom")
        result = await ListTransactionsByTickerService(repo).execute("NVDA")
        assert isinstance(result, ListError)


class TestListLimitAgainstMemoryStore:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("limit,expected", [(None, 3), (0, 3), (-1, 3), (2, 2), (5, 3)])
    async def test_non_positive_limit_means_no_limit(self, memory_repository, limit, expected):
        for day in (1, 2, 3):
            await memory_repository.save(
                Transaction.create(
                    ticker="AAPL",
                    transaction_type=TransactionType.BUY,
                    quantity=Decimal("1"),
                    price=Decimal("100"),
                    transaction_date=date(2024, 1, day),
                )
            )

        result = await ListTransactionsByTickerService(memory_repository).execute("AAPL", limit)

        assert isinstance(result, ListSuccess)
        assert len(result.transactions) == expected
