"""Shared fixtures for the portfolio-ledger test suite."""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from portfolio_ledger.application.commands import CreateTransactionCommand
from portfolio_ledger.core.clock import FixedClock
from portfolio_ledger.core.enums import Currency, TransactionType
from portfolio_ledger.domain.transaction import Transaction
from portfolio_ledger.infrastructure.memory_publisher import InMemoryEventPublisher
from portfolio_ledger.infrastructure.memory_repository import InMemoryTransactionRepository


# ---------------------------------------------------------------------------
# Commands / aggregates
# ---------------------------------------------------------------------------

@pytest.fixture
def create_command() -> CreateTransactionCommand:
    """Return a buy of 10 AAPL at 150.50 with 9.99 fees."""
    return CreateTransactionCommand(
        ticker="AAPL",
        transaction_type=TransactionType.BUY,
        quantity=Decimal("10"),
        price=Decimal("150.50"),
        fees=Decimal("9.99"),
        currency=Currency.USD,
        transaction_date=date(2024, 1, 15),
        notes="Initial position",
        exchange="NASDAQ",
        country="US",
        company_name="Apple Inc.",
    )


@pytest.fixture
def new_transaction(create_command: CreateTransactionCommand) -> Transaction:
    """Unsaved aggregate with its TransactionCreated still buffered."""
    return create_command.to_transaction()


# ---------------------------------------------------------------------------
# Clock
# ---------------------------------------------------------------------------

@pytest.fixture
def fixed_clock() -> FixedClock:
    """Return a FixedClock starting at 2024-06-01 12:00 UTC."""
    return FixedClock(start=datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc))


# ---------------------------------------------------------------------------
# Adapters
# ---------------------------------------------------------------------------

@pytest.fixture
def memory_publisher(fixed_clock: FixedClock) -> InMemoryEventPublisher:
    return InMemoryEventPublisher(clock=fixed_clock)


@pytest.fixture
def memory_repository() -> InMemoryTransactionRepository:
    return InMemoryTransactionRepository()
