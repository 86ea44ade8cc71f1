"""Application bootstrap.

Wires the configured repository and publisher into the use-case
services.  This is the only place that knows which adapters are used.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .application.ports import EventPublisher, TransactionRepository
from .application.services import (
    CreateTransactionService,
    DeleteTransactionService,
    GetTransactionService,
    ListTransactionsByTickerService,
    UpdateTransactionService,
)
from .core.config import Settings, load_settings
from .core.enums import PublisherBackend, RepositoryBackend
from .infrastructure.memory_publisher import InMemoryEventPublisher
from .infrastructure.memory_repository import InMemoryTransactionRepository
from .infrastructure.redis_publisher import RedisStreamPublisher
from .observability.logger import setup_logging

logger = logging.getLogger(__name__)


@dataclass
class LedgerServices:
    """Use cases bound to one repository / publisher pair."""

    repository: TransactionRepository
    publisher: EventPublisher
    create: CreateTransactionService
    update: UpdateTransactionService
    delete: DeleteTransactionService
    get: GetTransactionService
    list_by_ticker: ListTransactionsByTickerService


def build_services(
    repository: TransactionRepository,
    publisher: EventPublisher,
) -> LedgerServices:
    return LedgerServices(
        repository=repository,
        publisher=publisher,
        create=CreateTransactionService(repository, publisher),
        update=UpdateTransactionService(repository, publisher),
        delete=DeleteTransactionService(repository, publisher),
        get=GetTransactionService(repository),
        list_by_ticker=ListTransactionsByTickerService(repository),
    )


def build_publisher(settings: Settings) -> RedisStreamPublisher | InMemoryEventPublisher:
    """Create the event publisher for the configured backend.

    - memory: InMemoryEventPublisher (no external deps, deterministic)
    - redis: RedisStreamPublisher (durable streams)
    """
    if settings.publisher == PublisherBackend.REDIS:
        return RedisStreamPublisher(settings.redis_url, streams=settings.streams)
    return InMemoryEventPublisher(streams=settings.streams)


@asynccontextmanager
async def open_ledger(settings: Settings) -> AsyncIterator[LedgerServices]:
    """Start the adapters, yield the services, then release resources."""
    publisher = build_publisher(settings)
    await publisher.start()

    repository: TransactionRepository
    if settings.repository == RepositoryBackend.POSTGRES:
        from .storage.postgres import connection
        from .storage.postgres.repos import PostgresTransactionRepository

        db = settings.database
        session_factory = await connection.init_engine(
            db.url,
            pool_size=db.pool_size,
            max_overflow=db.max_overflow,
            echo=db.echo,
            create_tables=db.create_tables,
        )
        repository = PostgresTransactionRepository(session_factory)
    else:
        repository = InMemoryTransactionRepository()

    logger.info(
        "Ledger started (repository=%s, publisher=%s)",
        settings.repository.value,
        settings.publisher.value,
    )
    try:
        yield build_services(repository, publisher)
    finally:
        await publisher.stop()
        if settings.repository == RepositoryBackend.POSTGRES:
            from .storage.postgres import connection

            await connection.dispose()


def bootstrap(
    config_path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> Settings:
    """Load settings and configure logging."""
    settings = load_settings(config_path=config_path, overrides=overrides)
    setup_logging(
        level=settings.observability.log_level,
        format=settings.observability.log_format,
    )
    return settings
