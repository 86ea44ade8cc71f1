"""Transaction aggregate root.

The aggregate is the only component that decides *when* a domain event
is produced.  Events are buffered on the instance until a caller drains
them with :meth:`Transaction.pop_events`.

Lifecycle
---------
``create()`` (buffers ``TransactionCreated``) -> repository ``save``
(``persisted_as`` hands the buffer to the stored copy) -> ``update()``
zero or more times (one ``TransactionUpdated`` per call) ->
``pop_events()`` -> publish.

Rehydrating from storage goes through ``reconstruct()`` /
``from_snapshot()`` and never seeds events.
"""

from __future__ import annotations

import uuid
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Any, Iterable

from portfolio_ledger.core.enums import Currency, TransactionType

from .events import DomainEvent, TransactionCreated, TransactionUpdated
from .snapshot import TransactionChange, TransactionSnapshot


def _state_field(name: str) -> property:
    return property(lambda self: getattr(self._state, name))


class Transaction:
    """A buy, sell or dividend recorded in the portfolio."""

    def __init__(
        self,
        state: TransactionSnapshot,
        events: Iterable[DomainEvent[Any]] = (),
    ) -> None:
        self._state = state
        self._events: list[DomainEvent[Any]] = list(events)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def create(
        cls,
        *,
        ticker: str,
        transaction_type: TransactionType,
        quantity: Decimal,
        price: Decimal,
        fees: Decimal | None = None,
        currency: Currency = Currency.USD,
        transaction_date: date | None = None,
        notes: str | None = None,
        is_active: bool = True,
        is_fractional: bool = False,
        fractional_multiplier: Decimal | None = None,
        commission_currency: Currency | None = None,
        exchange: str | None = None,
        country: str | None = None,
        company_name: str | None = None,
    ) -> Transaction:
        """Build a new, not yet persisted transaction.

        The buffer is seeded with exactly one ``TransactionCreated``.
        """
        state = TransactionSnapshot(
            ticker=ticker,
            transaction_type=transaction_type,
            quantity=quantity,
            price=price,
            fees=fees,
            currency=currency,
            transaction_date=transaction_date,
            notes=notes,
            is_active=is_active,
            is_fractional=is_fractional,
            fractional_multiplier=fractional_multiplier,
            commission_currency=commission_currency,
            exchange=exchange,
            country=country,
            company_name=company_name,
        )
        transaction = cls(state)
        transaction._events.append(TransactionCreated(payload=state))
        return transaction

    @classmethod
    def reconstruct(
        cls,
        *,
        id: uuid.UUID,
        events: Iterable[DomainEvent[Any]] = (),
        **fields: Any,
    ) -> Transaction:
        """Rehydrate a stored transaction.  Never seeds events."""
        return cls(TransactionSnapshot(id=id, **fields), events)

    @classmethod
    def from_snapshot(
        cls,
        snapshot: TransactionSnapshot,
        events: Iterable[DomainEvent[Any]] = (),
    ) -> Transaction:
        return cls(snapshot, events)

    def persisted_as(self, transaction_id: uuid.UUID) -> Transaction:
        """Return the materialized copy a repository hands back after a write.

        The copy carries *transaction_id* and takes over this instance's
        buffered events; this instance is left with an empty buffer.
        ``TransactionCreated`` payloads are re-pointed at the persisted
        identity, keeping their ``event_id`` and ``occurred_at``.
        """
        events = [
            replace(event, payload=replace(event.payload, id=transaction_id))
            if isinstance(event, TransactionCreated) and event.payload.id is None
            else event
            for event in self.pop_events()
        ]
        return Transaction(replace(self._state, id=transaction_id), events)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def update(
        self,
        *,
        ticker: str | None = None,
        transaction_type: TransactionType | None = None,
        quantity: Decimal | None = None,
        price: Decimal | None = None,
        fees: Decimal | None = None,
        currency: Currency | None = None,
        transaction_date: date | None = None,
        notes: str | None = None,
        is_active: bool | None = None,
        is_fractional: bool | None = None,
        fractional_multiplier: Decimal | None = None,
        commission_currency: Currency | None = None,
        exchange: str | None = None,
        country: str | None = None,
        company_name: str | None = None,
    ) -> TransactionUpdated:
        """Apply the non-null arguments and record the change.

        ``None`` means "leave unchanged".  Exactly one
        ``TransactionUpdated`` is appended per call, even when nothing
        changed.  The appended event is also returned.
        """
        changes = {
            "ticker": ticker,
            "transaction_type": transaction_type,
            "quantity": quantity,
            "price": price,
            "fees": fees,
            "currency": currency,
            "transaction_date": transaction_date,
            "notes": notes,
            "is_active": is_active,
            "is_fractional": is_fractional,
            "fractional_multiplier": fractional_multiplier,
            "commission_currency": commission_currency,
            "exchange": exchange,
            "country": country,
            "company_name": company_name,
        }
        before = self._state
        after = replace(before, **{k: v for k, v in changes.items() if v is not None})
        event = TransactionUpdated(payload=TransactionChange(before=before, after=after))

        self._state = after
        self._events.append(event)
        return event

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    @property
    def pending_events(self) -> tuple[DomainEvent[Any], ...]:
        """Read-only view of the buffered events."""
        return tuple(self._events)

    def pop_events(self) -> tuple[DomainEvent[Any], ...]:
        """Return the buffered events in order and clear the buffer."""
        events = tuple(self._events)
        self._events.clear()
        return events

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    def snapshot(self) -> TransactionSnapshot:
        return self._state

    def total_value(self) -> Decimal:
        return self._state.total_value()

    def total_cost(self) -> Decimal:
        return self._state.total_cost()

    id = _state_field("id")
    ticker = _state_field("ticker")
    transaction_type = _state_field("transaction_type")
    quantity = _state_field("quantity")
    price = _state_field("price")
    fees = _state_field("fees")
    currency = _state_field("currency")
    transaction_date = _state_field("transaction_date")
    notes = _state_field("notes")
    is_active = _state_field("is_active")
    is_fractional = _state_field("is_fractional")
    fractional_multiplier = _state_field("fractional_multiplier")
    commission_currency = _state_field("commission_currency")
    exchange = _state_field("exchange")
    country = _state_field("country")
    company_name = _state_field("company_name")

    def __repr__(self) -> str:
        return (
            f"<Transaction(id={self.id!r}, ticker={self.ticker!r}, "
            f"type={self.transaction_type.value!r}, qty={self.quantity}, "
            f"pending_events={len(self._events)})>"
        )
