"""Domain events emitted by the transaction aggregate and use cases.

Design invariants
-----------------
1.  Every event is **immutable** (``frozen=True``) and its payload is an
    immutable snapshot, never a reference to a live aggregate.
2.  ``event_id`` is a UUID4 generated at creation time; it is the
    idempotency / dedup key for consumers.  Stream entry ids assigned by
    the log are unrelated to it.
3.  ``occurred_at`` records when the domain fact happened, not when the
    event log accepted it.
4.  Each concrete event type carries exactly one ``kind`` tag, used to
    route it to a stream.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

from portfolio_ledger.core.enums import EventKind
from portfolio_ledger.core.ids import new_id, utc_now

from .snapshot import TransactionChange, TransactionErrorSummary, TransactionSnapshot

if TYPE_CHECKING:
    from .transaction import Transaction

T = TypeVar("T")


@dataclass(frozen=True)
class DomainEvent(Generic[T]):
    """Immutable base for every domain event.

    Shared fields
    ~~~~~~~~~~~~~
    payload      Typed payload (snapshot, change pair or error summary).
    event_id     Unique identity (UUID4).  Idempotency key.
    occurred_at  UTC creation time.
    """

    payload: T
    event_id: uuid.UUID = field(default_factory=new_id)
    occurred_at: datetime = field(default_factory=utc_now)

    kind: ClassVar[EventKind | None] = None

    def payload_dict(self) -> dict[str, Any]:
        return self.payload.to_dict()  # type: ignore[attr-defined]


@dataclass(frozen=True)
class TransactionCreated(DomainEvent[TransactionSnapshot]):
    """A new transaction was recorded."""

    kind: ClassVar[EventKind] = EventKind.CREATED


@dataclass(frozen=True)
class TransactionUpdated(DomainEvent[TransactionChange]):
    """An update was applied (possibly without changing any value)."""

    kind: ClassVar[EventKind] = EventKind.UPDATED


@dataclass(frozen=True)
class TransactionDeleted(DomainEvent[TransactionSnapshot]):
    """A transaction was removed from storage."""

    kind: ClassVar[EventKind] = EventKind.DELETED

    @classmethod
    def of(cls, transaction: Transaction) -> TransactionDeleted:
        return cls(payload=transaction.snapshot())


@dataclass(frozen=True)
class TransactionCreationError(DomainEvent[TransactionErrorSummary]):
    """Creating a transaction failed before it was persisted."""

    kind: ClassVar[EventKind] = EventKind.CREATION_ERROR


#: Every concrete event type, keyed by its wire tag.
EVENT_KINDS: dict[EventKind, type[DomainEvent[Any]]] = {
    cls.kind: cls
    for cls in (
        TransactionCreated,
        TransactionUpdated,
        TransactionDeleted,
        TransactionCreationError,
    )
}
