"""Closed result variants returned by the use-case services.

Each use case has its own fixed set of outcomes.  Adapters (CLI, HTTP,
RPC) decide what to show the user purely from the variant they receive.

``*PublishError`` is a partial failure: the write committed but at
least one event was not accepted by the log.  Retrying the whole use
case would repeat the write; only publication should be retried.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any, Union

from portfolio_ledger.core.errors import ErrorCode
from portfolio_ledger.domain.transaction import Transaction

from .commands import CreateTransactionCommand, UpdateTransactionCommand


# ---------------------------------------------------------------------------
# Create
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CreateSuccess:
    transaction: Transaction


@dataclass(frozen=True)
class CreatePublishError:
    transaction: Transaction
    cause: BaseException


@dataclass(frozen=True)
class CreateError:
    error: ErrorCode
    command: CreateTransactionCommand
    cause: BaseException


CreateResult = Union[CreateSuccess, CreatePublishError, CreateError]
CREATE_VARIANTS: tuple[type, ...] = (CreateSuccess, CreatePublishError, CreateError)


# ---------------------------------------------------------------------------
# Update
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class UpdateSuccess:
    transaction: Transaction


@dataclass(frozen=True)
class UpdateNotFound:
    transaction_id: uuid.UUID


@dataclass(frozen=True)
class UpdatePublishError:
    transaction: Transaction
    cause: BaseException


@dataclass(frozen=True)
class UpdateError:
    error: ErrorCode
    command: UpdateTransactionCommand
    cause: BaseException


UpdateResult = Union[UpdateSuccess, UpdateNotFound, UpdatePublishError, UpdateError]
UPDATE_VARIANTS: tuple[type, ...] = (
    UpdateSuccess, UpdateNotFound, UpdatePublishError, UpdateError,
)


# ---------------------------------------------------------------------------
# Delete
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DeleteSuccess:
    transaction_id: uuid.UUID


@dataclass(frozen=True)
class DeleteNotFound:
    transaction_id: uuid.UUID


@dataclass(frozen=True)
class DeletePublishError:
    transaction_id: uuid.UUID
    transaction: Transaction
    cause: BaseException


@dataclass(frozen=True)
class DeleteError:
    error: ErrorCode
    transaction_id: uuid.UUID
    cause: BaseException


DeleteResult = Union[DeleteSuccess, DeleteNotFound, DeletePublishError, DeleteError]
DELETE_VARIANTS: tuple[type, ...] = (
    DeleteSuccess, DeleteNotFound, DeletePublishError, DeleteError,
)


# ---------------------------------------------------------------------------
# Read side
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class GetSuccess:
    transaction: Transaction


@dataclass(frozen=True)
class GetNotFound:
    transaction_id: uuid.UUID


@dataclass(frozen=True)
class GetError:
    error: ErrorCode
    cause: BaseException


GetResult = Union[GetSuccess, GetNotFound, GetError]


@dataclass(frozen=True)
class ListSuccess:
    transactions: list[Transaction]


@dataclass(frozen=True)
class ListNotFound:
    ticker: str


@dataclass(frozen=True)
class ListError:
    error: ErrorCode
    cause: BaseException


ListResult = Union[ListSuccess, ListNotFound, ListError]


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def _transaction_view(transaction: Transaction) -> dict[str, Any]:
    view = transaction.snapshot().to_dict()
    view["totalValue"] = transaction.total_value()
    view["totalCost"] = transaction.total_cost()
    return view


def describe_result(result: Any) -> dict[str, Any]:
    """Render any result variant as a plain dict.

    Raises ``TypeError`` for objects that are not a known variant.
    """
    match result:
        case CreateSuccess(transaction=tx) | UpdateSuccess(transaction=tx) | GetSuccess(transaction=tx):
            return {"status": "success", "transaction": _transaction_view(tx)}
        case DeleteSuccess(transaction_id=tid):
            return {"status": "success", "id": tid}
        case ListSuccess(transactions=txs):
            return {
                "status": "success",
                "transactions": [_transaction_view(tx) for tx in txs],
            }
        case UpdateNotFound(transaction_id=tid) | DeleteNotFound(transaction_id=tid) | GetNotFound(transaction_id=tid):
            return {"status": "not_found", "id": tid}
        case ListNotFound(ticker=ticker):
            return {"status": "not_found", "ticker": ticker}
        case CreatePublishError(transaction=tx, cause=cause) | UpdatePublishError(transaction=tx, cause=cause):
            return {
                "status": "publish_error",
                "transaction": _transaction_view(tx),
                "cause": str(cause),
            }
        case DeletePublishError(transaction_id=tid, cause=cause):
            return {"status": "publish_error", "id": tid, "cause": str(cause)}
        case CreateError(error=code, cause=cause) | UpdateError(error=code, cause=cause):
            return {"status": "error", "code": code.value, "cause": str(cause)}
        case DeleteError(error=code, transaction_id=tid, cause=cause):
            return {"status": "error", "code": code.value, "id": tid, "cause": str(cause)}
        case GetError(error=code, cause=cause) | ListError(error=code, cause=cause):
            return {"status": "error", "code": code.value, "cause": str(cause)}
        case _:
            raise TypeError(f"Unknown result variant: {type(result).__name__}")
