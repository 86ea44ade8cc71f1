"""Enumerations used across the ledger."""

from enum import Enum


class TransactionType(str, Enum):
    BUY = "BUY"
    SELL = "SELL"
    DIVIDEND = "DIVIDEND"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


class Currency(str, Enum):
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"
    CAD = "CAD"
    JPY = "JPY"

    @property
    def display_name(self) -> str:
        return _CURRENCY_NAMES[self]


_CURRENCY_NAMES = {
    Currency.USD: "US Dollar",
    Currency.EUR: "Euro",
    Currency.GBP: "British Pound",
    Currency.CAD: "Canadian Dollar",
    Currency.JPY: "Japanese Yen",
}


class EventKind(str, Enum):
    """Wire tag written into every published envelope."""

    CREATED = "TransactionCreated"
    UPDATED = "TransactionUpdated"
    DELETED = "TransactionDeleted"
    CREATION_ERROR = "TransactionCreationError"


class RepositoryBackend(str, Enum):
    MEMORY = "memory"
    POSTGRES = "postgres"


class PublisherBackend(str, Enum):
    MEMORY = "memory"
    REDIS = "redis"
