"""Property tests: transaction aggregate and service publishing rules.

- update() appends exactly one event per call, whatever the arguments.
- Fields passed as None are never changed.
- pop_events() returns everything once, then nothing.
- total_cost == total_value + fees (fees treated as 0 when absent).
- A failed write never reaches the main publisher.
"""

import asyncio
import uuid
from decimal import Decimal
from unittest.mock import AsyncMock

from hypothesis import given, settings, strategies as st

from portfolio_ledger.application.commands import CreateTransactionCommand
from portfolio_ledger.application.results import CreateError, CreateSuccess
from portfolio_ledger.application.services import CreateTransactionService
from portfolio_ledger.core.enums import Currency, TransactionType
from portfolio_ledger.domain.events import TransactionUpdated
from portfolio_ledger.domain.transaction import Transaction

_money = st.decimals(
    min_value=Decimal("0"), max_value=Decimal("1000000"),
    places=4, allow_nan=False, allow_infinity=False,
)
_quantity = st.decimals(
    min_value=Decimal("0.0001"), max_value=Decimal("100000"),
    places=4, allow_nan=False, allow_infinity=False,
)

_update_kwargs = st.fixed_dictionaries(
    {},
    optional={
        "ticker": st.none() | st.text(alphabet="ABCDEFGHIJKLMNOPQRSTUVWXYZ", min_size=1, max_size=5),
        "transaction_type": st.none() | st.sampled_from(TransactionType),
        "quantity": st.none() | _quantity,
        "price": st.none() | _money,
        "fees": st.none() | _money,
        "currency": st.none() | st.sampled_from(Currency),
        "notes": st.none() | st.text(max_size=20),
        "is_active": st.none() | st.booleans(),
    },
)


def _stored() -> Transaction:
    return Transaction.reconstruct(
        id=uuid.uuid4(),
        ticker="BASE",
        transaction_type=TransactionType.BUY,
        quantity=Decimal("1"),
        price=Decimal("1"),
        fees=Decimal("0.5"),
    )


@given(updates=st.lists(_update_kwargs, max_size=8))
@settings(max_examples=100)
def test_one_event_per_update(updates: list[dict]) -> None:
    tx = _stored()
    for kwargs in updates:
        tx.update(**kwargs)

    events = tx.pop_events()
    assert len(events) == len(updates)
    assert all(isinstance(e, TransactionUpdated) for e in events)
    assert tx.pop_events() == ()


@given(kwargs=_update_kwargs)
@settings(max_examples=100)
def test_none_fields_are_untouched(kwargs: dict) -> None:
    tx = _stored()
    before = tx.snapshot()
    event = tx.update(**kwargs)
    after = tx.snapshot()

    for name in ("ticker", "transaction_type", "quantity", "price", "fees", "currency", "notes", "is_active"):
        expected = kwargs.get(name)
        if expected is None:
            assert getattr(after, name) == getattr(before, name)
        else:
            assert getattr(after, name) == expected
    assert event.payload.before == before
    assert event.payload.after == after


@given(quantity=_quantity, price=_money, fees=st.none() | _money)
@settings(max_examples=200)
def test_total_cost_is_value_plus_fees(quantity, price, fees) -> None:
    tx = Transaction.create(
        ticker="T",
        transaction_type=TransactionType.BUY,
        quantity=quantity,
        price=price,
        fees=fees,
    )
    assert tx.total_value() == quantity * price
    assert tx.total_cost() == tx.total_value() + (fees or Decimal("0"))


@given(fail_write=st.booleans(), ticker=st.sampled_from(["AAPL", "MSFT", "VOO"]))
@settings(max_examples=30)
def test_failed_write_never_reaches_main_publisher(fail_write: bool, ticker: str) -> None:
    command = CreateTransactionCommand(
        ticker=ticker,
        transaction_type=TransactionType.BUY,
        quantity=Decimal("1"),
        price=Decimal("2"),
    )
    repo = AsyncMock()
    if fail_write:
        repo.save.side_effect = ConnectionError("down")
    else:
        repo.save.side_effect = lambda tx: tx.persisted_as(uuid.uuid4())
    publisher, error_publisher = AsyncMock(), AsyncMock()
    service = CreateTransactionService(repo, publisher, error_publisher=error_publisher)

    result = asyncio.run(service.execute(command))

    if fail_write:
        assert isinstance(result, CreateError)
        assert publisher.publish.await_count == 0
        assert error_publisher.publish.await_count == 1
    else:
        assert isinstance(result, CreateSuccess)
        assert publisher.publish.await_count == 1
        assert error_publisher.publish.await_count == 0
