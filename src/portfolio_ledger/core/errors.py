"""Custom exception hierarchy and error classifications for the ledger.

Error codes are grouped per use case.  A code is a short numeric string:
a two-digit use-case prefix followed by the case number, e.g. ``01003``
is a persistence failure while creating a transaction.
"""

from __future__ import annotations

from enum import Enum


class CreateErrorCode(str, Enum):
    GENERAL_ERROR = "01001"
    PUBLISH_DOMAIN_EVENT_ERROR = "01002"
    PERSISTENCE_ERROR = "01003"
    NOT_FOUND = "01004"
    INVALID_INPUT = "01005"


class DeleteErrorCode(str, Enum):
    INVALID_INPUT = "0601"
    NOT_FOUND = "0602"
    PERSISTENCE_ERROR = "0603"


class UpdateErrorCode(str, Enum):
    INVALID_INPUT = "0701"
    NOT_FOUND = "0702"
    PERSISTENCE_ERROR = "0703"


class GetErrorCode(str, Enum):
    INVALID_INPUT = "0801"
    NOT_FOUND = "0802"
    PERSISTENCE_ERROR = "0803"


class PublishErrorCode(str, Enum):
    PUBLISH_ERROR = "0901"


ErrorCode = (
    CreateErrorCode
    | DeleteErrorCode
    | UpdateErrorCode
    | GetErrorCode
    | PublishErrorCode
)


class LedgerError(Exception):
    """Base exception for all ledger errors."""


# --- Configuration ---
class ConfigError(LedgerError):
    """Invalid or missing configuration."""


# --- Classified service failures ---
class ServiceError(LedgerError):
    """A failure that already carries a domain error classification.

    Use-case services propagate ``error`` as-is instead of falling back
    to their default persistence classification.
    """

    def __init__(self, error: ErrorCode, message: str | None = None) -> None:
        self.error = error
        super().__init__(message or f"[{error.value}] {error.name}")


class RepositoryError(ServiceError):
    """Storage adapter failure (connection lost, constraint violated...)."""


# --- Publishing ---
class EventPublishError(ServiceError):
    """An event could not be durably appended to the event log.

    Covers both encoding and transport failures; callers only need to
    know that publication did not complete.
    """

    def __init__(self, message: str) -> None:
        super().__init__(PublishErrorCode.PUBLISH_ERROR, message)


class UnsupportedEventError(EventPublishError):
    """No stream is configured for the event's kind."""
