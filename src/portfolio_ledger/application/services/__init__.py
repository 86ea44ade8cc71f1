"""Use-case services.

Every service is constructed with its ports and exposes one
``execute`` coroutine returning a closed result variant.
"""

from portfolio_ledger.application.services.create import CreateTransactionService
from portfolio_ledger.application.services.delete import DeleteTransactionService
from portfolio_ledger.application.services.queries import (
    GetTransactionService,
    ListTransactionsByTickerService,
)
from portfolio_ledger.application.services.update import UpdateTransactionService

__all__ = [
    "CreateTransactionService",
    "DeleteTransactionService",
    "GetTransactionService",
    "ListTransactionsByTickerService",
    "UpdateTransactionService",
]
