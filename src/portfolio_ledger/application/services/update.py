"""Update-transaction use case."""

from __future__ import annotations

import logging

from portfolio_ledger.application.commands import UpdateTransactionCommand
from portfolio_ledger.application.ports import EventPublisher, TransactionRepository
from portfolio_ledger.application.results import (
    UpdateError,
    UpdateNotFound,
    UpdatePublishError,
    UpdateResult,
    UpdateSuccess,
)
from portfolio_ledger.core.errors import UpdateErrorCode

from .base import classify_failure, publish_all

logger = logging.getLogger(__name__)


class UpdateTransactionService:
    """Load, apply a partial update, persist, then publish."""

    def __init__(
        self,
        repository: TransactionRepository,
        publisher: EventPublisher,
    ) -> None:
        self._repository = repository
        self._publisher = publisher

    async def execute(self, command: UpdateTransactionCommand) -> UpdateResult:
        transaction_id = command.transaction_id

        try:
            found = await self._repository.find_by_id(transaction_id)
        except Exception as exc:
            return self._error(command, exc)

        if found is None:
            logger.info("Transaction %s not found for update", transaction_id)
            return UpdateNotFound(transaction_id)

        found.update(**command.changes())

        try:
            updated = await self._repository.update(found)
        except Exception as exc:
            return self._error(command, exc)

        logger.info("Transaction %s updated", transaction_id)

        events = updated.pop_events()
        if not events:
            return UpdateSuccess(updated)

        failure = await publish_all(self._publisher, events)
        if failure is not None:
            return UpdatePublishError(transaction=updated, cause=failure)
        return UpdateSuccess(updated)

    @staticmethod
    def _error(command: UpdateTransactionCommand, exc: Exception) -> UpdateError:
        error = classify_failure(exc, UpdateErrorCode.PERSISTENCE_ERROR)
        logger.error(
            "Updating transaction %s failed [%s]: %s",
            command.transaction_id,
            error.value,
            exc,
        )
        return UpdateError(error=error, command=command, cause=exc)
