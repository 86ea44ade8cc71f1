"""Ports the use cases depend on.

Adapters live in ``portfolio_ledger.infrastructure`` and
``portfolio_ledger.storage``; the services only see these protocols.
"""

from __future__ import annotations

import uuid
from typing import Any, Protocol, runtime_checkable

from portfolio_ledger.domain.events import DomainEvent
from portfolio_ledger.domain.transaction import Transaction


@runtime_checkable
class TransactionRepository(Protocol):
    """Persistence for the transaction aggregate.

    Implementations must never publish events.  ``save`` and ``update``
    return the materialized aggregate; adapters in this package hand the
    caller's buffered events over to it (see ``Transaction.persisted_as``).
    Failures are raised, not swallowed.
    """

    async def save(self, transaction: Transaction) -> Transaction: ...

    async def find_by_id(self, transaction_id: uuid.UUID) -> Transaction | None: ...

    async def find_by_ticker(
        self, ticker: str, limit: int | None = None,
    ) -> list[Transaction]: ...

    async def update(self, transaction: Transaction) -> Transaction: ...

    async def delete_by_id(self, transaction_id: uuid.UUID) -> bool: ...

    async def exists_by_id(self, transaction_id: uuid.UUID) -> bool: ...

    async def count_all(self) -> int: ...


@runtime_checkable
class EventPublisher(Protocol):
    """Sends one event to a durable log.

    Returns normally once the log accepted the event; raises
    ``EventPublishError`` otherwise.
    """

    async def publish(self, event: DomainEvent[Any]) -> None: ...
