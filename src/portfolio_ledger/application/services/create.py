"""Create-transaction use case."""

from __future__ import annotations

import logging

from portfolio_ledger.application.commands import CreateTransactionCommand
from portfolio_ledger.application.ports import EventPublisher, TransactionRepository
from portfolio_ledger.application.results import (
    CreateError,
    CreatePublishError,
    CreateResult,
    CreateSuccess,
)
from portfolio_ledger.core.errors import CreateErrorCode
from portfolio_ledger.domain.events import TransactionCreationError

from .base import classify_failure, publish_all

logger = logging.getLogger(__name__)


class CreateTransactionService:
    """Persist a new transaction, then publish the events it buffered.

    When the write fails a ``TransactionCreationError`` is sent to
    ``error_publisher`` (the main publisher unless one is given) on a
    best-effort basis; the outcome of that publish never changes the
    returned ``CreateError``.
    """

    def __init__(
        self,
        repository: TransactionRepository,
        publisher: EventPublisher,
        *,
        error_publisher: EventPublisher | None = None,
    ) -> None:
        self._repository = repository
        self._publisher = publisher
        self._error_publisher = error_publisher or publisher

    async def execute(self, command: CreateTransactionCommand) -> CreateResult:
        try:
            saved = await self._repository.save(command.to_transaction())
        except Exception as exc:
            error = classify_failure(exc, CreateErrorCode.PERSISTENCE_ERROR)
            logger.error(
                "Saving transaction for ticker %s failed [%s]: %s",
                command.ticker,
                error.value,
                exc,
            )
            await self._report_creation_error(command)
            return CreateError(error=error, command=command, cause=exc)

        logger.info("Transaction %s saved for ticker %s", saved.id, saved.ticker)

        events = saved.pop_events()
        if not events:
            return CreateSuccess(saved)

        failure = await publish_all(self._publisher, events)
        if failure is not None:
            logger.warning(
                "Transaction %s saved but %d event(s) not fully published",
                saved.id,
                len(events),
            )
            return CreatePublishError(transaction=saved, cause=failure)
        return CreateSuccess(saved)

    async def _report_creation_error(self, command: CreateTransactionCommand) -> None:
        event = TransactionCreationError(payload=command.to_error_summary())
        try:
            await self._error_publisher.publish(event)
        except Exception:
            logger.warning(
                "Could not publish creation error %s for ticker %s",
                event.event_id,
                command.ticker,
                exc_info=True,
            )
