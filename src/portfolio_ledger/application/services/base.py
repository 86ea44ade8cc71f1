"""Helpers shared by the write-side services."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import Any

from portfolio_ledger.application.ports import EventPublisher
from portfolio_ledger.core.errors import ErrorCode, ServiceError
from portfolio_ledger.domain.events import DomainEvent

logger = logging.getLogger(__name__)


def classify_failure(exc: BaseException, default: ErrorCode) -> ErrorCode:
    """Keep an existing classification, otherwise fall back to *default*."""
    if isinstance(exc, ServiceError):
        return exc.error
    return default


async def publish_all(
    publisher: EventPublisher,
    events: Sequence[DomainEvent[Any]],
) -> BaseException | None:
    """Publish *events* concurrently and wait for every attempt.

    Events are independent facts, so there is no ordering between the
    publish calls.  Returns the first failure in event order, or
    ``None`` when the log accepted all of them.
    """
    if not events:
        return None

    outcomes = await asyncio.gather(
        *(publisher.publish(event) for event in events),
        return_exceptions=True,
    )

    first_failure: BaseException | None = None
    for event, outcome in zip(events, outcomes):
        if isinstance(outcome, asyncio.CancelledError):
            raise outcome
        if isinstance(outcome, BaseException):
            logger.error(
                "Publishing %s event %s failed: %s",
                type(event).__name__,
                event.event_id,
                outcome,
            )
            if first_failure is None:
                first_failure = outcome
    return first_failure
