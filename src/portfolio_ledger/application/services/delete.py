"""Delete-transaction use case."""

from __future__ import annotations

import logging
import uuid

from portfolio_ledger.application.commands import DeleteTransactionCommand
from portfolio_ledger.application.ports import EventPublisher, TransactionRepository
from portfolio_ledger.application.results import (
    DeleteError,
    DeleteNotFound,
    DeletePublishError,
    DeleteResult,
    DeleteSuccess,
)
from portfolio_ledger.core.errors import DeleteErrorCode, RepositoryError
from portfolio_ledger.domain.events import TransactionDeleted

from .base import classify_failure, publish_all

logger = logging.getLogger(__name__)


class DeleteTransactionService:
    """Remove a transaction and publish ``TransactionDeleted``.

    The deleted event is built here from the loaded snapshot; deleting
    does not go through the aggregate's event buffer.
    """

    def __init__(
        self,
        repository: TransactionRepository,
        publisher: EventPublisher,
    ) -> None:
        self._repository = repository
        self._publisher = publisher

    async def execute(
        self, command: DeleteTransactionCommand | uuid.UUID,
    ) -> DeleteResult:
        transaction_id = (
            command.transaction_id
            if isinstance(command, DeleteTransactionCommand)
            else command
        )

        try:
            found = await self._repository.find_by_id(transaction_id)
            if found is None:
                logger.info("Transaction %s not found for delete", transaction_id)
                return DeleteNotFound(transaction_id)

            deleted = await self._repository.delete_by_id(transaction_id)
        except Exception as exc:
            return self._error(transaction_id, exc)

        if not deleted:
            return self._error(
                transaction_id,
                RepositoryError(
                    DeleteErrorCode.PERSISTENCE_ERROR, "Delete returned false",
                ),
            )

        logger.info("Transaction %s deleted", transaction_id)

        failure = await publish_all(self._publisher, [TransactionDeleted.of(found)])
        if failure is not None:
            return DeletePublishError(
                transaction_id=transaction_id, transaction=found, cause=failure,
            )
        return DeleteSuccess(transaction_id)

    @staticmethod
    def _error(transaction_id: uuid.UUID, exc: Exception) -> DeleteError:
        error = classify_failure(exc, DeleteErrorCode.PERSISTENCE_ERROR)
        logger.error(
            "Deleting transaction %s failed [%s]: %s",
            transaction_id,
            error.value,
            exc,
        )
        return DeleteError(error=error, transaction_id=transaction_id, cause=exc)
