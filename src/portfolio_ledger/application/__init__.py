"""Application layer: commands, ports, result variants and use cases."""

from portfolio_ledger.application.commands import (
    CreateTransactionCommand,
    DeleteTransactionCommand,
    UpdateTransactionCommand,
)
from portfolio_ledger.application.services import (
    CreateTransactionService,
    DeleteTransactionService,
    GetTransactionService,
    ListTransactionsByTickerService,
    UpdateTransactionService,
)

__all__ = [
    "CreateTransactionCommand",
    "CreateTransactionService",
    "DeleteTransactionCommand",
    "DeleteTransactionService",
    "GetTransactionService",
    "ListTransactionsByTickerService",
    "UpdateTransactionCommand",
    "UpdateTransactionService",
]
