"""Tests for the Transaction aggregate (``domain/transaction.py``).

Covers:
- create() seeds exactly one TransactionCreated; reconstruct() seeds none.
- update() null-coalescing merge and one TransactionUpdated per call.
- pop_events() drains once.
- persisted_as() hands events to the stored copy.
- total_value / total_cost.
"""

from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal

import pytest

from portfolio_ledger.core.enums import Currency, TransactionType
from portfolio_ledger.domain.events import TransactionCreated, TransactionUpdated
from portfolio_ledger.domain.transaction import Transaction


def _stored(**overrides) -> Transaction:
    fields = dict(
        id=uuid.uuid4(),
        ticker="MSFT",
        transaction_type=TransactionType.BUY,
        quantity=Decimal("5"),
        price=Decimal("300"),
        fees=Decimal("1.50"),
        currency=Currency.USD,
        transaction_date=date(2024, 3, 1),
    )
    fields.update(overrides)
    return Transaction.reconstruct(**fields)


class TestCreate:
    def test_seeds_one_created_event(self, new_transaction):
        events = new_transaction.pending_events
        assert len(events) == 1
        assert isinstance(events[0], TransactionCreated)

    def test_created_payload_is_current_state(self, new_transaction):
        payload = new_transaction.pending_events[0].payload
        assert payload == new_transaction.snapshot()
        assert payload.ticker == "AAPL"
        assert payload.id is None

    def test_new_transaction_is_active_without_id(self, new_transaction):
        assert new_transaction.id is None
        assert new_transaction.is_active is True

    def test_pending_events_is_read_only_view(self, new_transaction):
        view = new_transaction.pending_events
        assert isinstance(view, tuple)
        assert len(new_transaction.pending_events) == 1


class TestReconstruct:
    def test_never_seeds_events(self):
        tx = _stored()
        assert tx.pending_events == ()
        assert tx.pop_events() == ()

    def test_adopts_explicit_events(self, new_transaction):
        created = new_transaction.pop_events()
        tx = _stored(events=created)
        assert tx.pending_events == created


class TestUpdate:
    def test_applies_only_non_null_fields(self):
        tx = _stored()
        tx.update(price=Decimal("310"), notes="rebalanced")
        assert tx.price == Decimal("310")
        assert tx.notes == "rebalanced"
        assert tx.quantity == Decimal("5")
        assert tx.ticker == "MSFT"
        assert tx.fees == Decimal("1.50")

    def test_appends_one_event_with_before_and_after(self):
        tx = _stored()
        event = tx.update(quantity=Decimal("7"))
        assert isinstance(event, TransactionUpdated)
        assert tx.pending_events == (event,)
        assert event.payload.before.quantity == Decimal("5")
        assert event.payload.after.quantity == Decimal("7")
        assert event.payload.after == tx.snapshot()

    def test_all_null_update_still_emits(self):
        tx = _stored()
        before = tx.snapshot()
        event = tx.update()
        assert tx.snapshot() == before
        assert len(tx.pending_events) == 1
        assert event.payload.before == event.payload.after
        assert event.payload.changed_fields == ()

    def test_multiple_updates_emit_one_event_each(self):
        tx = _stored()
        tx.update(price=Decimal("301"))
        tx.update(price=Decimal("302"))
        tx.update()
        events = tx.pending_events
        assert len(events) == 3
        assert events[0].payload.after.price == Decimal("301")
        assert events[1].payload.before.price == Decimal("301")
        assert events[1].payload.after.price == Decimal("302")

    def test_before_snapshot_unaffected_by_later_updates(self):
        tx = _stored()
        first = tx.update(ticker="MSFT.L")
        tx.update(ticker="MSFT.DE")
        assert first.payload.before.ticker == "MSFT"
        assert first.payload.after.ticker == "MSFT.L"

    def test_changed_fields(self):
        tx = _stored()
        event = tx.update(price=Decimal("1"), currency=Currency.EUR)
        assert set(event.payload.changed_fields) == {"price", "currency"}

    def test_false_is_not_treated_as_null(self):
        tx = _stored(is_fractional=True)
        tx.update(is_fractional=False)
        assert tx.is_fractional is False


class TestPopEvents:
    def test_drain_then_empty(self, new_transaction):
        first = new_transaction.pop_events()
        second = new_transaction.pop_events()
        assert len(first) == 1
        assert second == ()
        assert new_transaction.pending_events == ()

    def test_preserves_order(self, new_transaction):
        new_transaction.update(price=Decimal("1"))
        kinds = [type(e) for e in new_transaction.pop_events()]
        assert kinds == [TransactionCreated, TransactionUpdated]


class TestPersistedAs:
    def test_copy_carries_id_and_events(self, new_transaction):
        created = new_transaction.pending_events[0]
        tid = uuid.uuid4()
        stored = new_transaction.persisted_as(tid)

        assert stored.id == tid
        assert new_transaction.pending_events == ()
        (event,) = stored.pending_events
        assert event.event_id == created.event_id
        assert event.occurred_at == created.occurred_at
        assert event.payload.id == tid

    def test_updated_events_pass_through_unchanged(self):
        tx = _stored()
        event = tx.update(price=Decimal("1"))
        stored = tx.persisted_as(tx.id)
        assert stored.pending_events == (event,)


class TestDerivedValues:
    def test_total_value_and_cost(self, new_transaction):
        assert new_transaction.total_value() == Decimal("1505.00")
        assert new_transaction.total_cost() == Decimal("1514.99")

    def test_total_cost_without_fees(self):
        tx = _stored(quantity=Decimal("10"), price=Decimal("150.50"), fees=None)
        assert tx.total_cost() == tx.total_value() == Decimal("1505.00")

    @pytest.mark.parametrize(
        "quantity,price,expected",
        [
            (Decimal("0.5"), Decimal("200"), Decimal("100.0")),
            (Decimal("3"), Decimal("0.01"), Decimal("0.03")),
        ],
    )
    def test_total_value_is_exact(self, quantity, price, expected):
        tx = _stored(quantity=quantity, price=price)
        assert tx.total_value() == expected
