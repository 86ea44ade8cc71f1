"""Redis Streams event publisher.

Each event kind is appended to its own stream (``XADD``) as a single
entry holding the JSON envelope.  Redis assigns a monotonic entry id
that is unrelated to the domain ``event_id``.

Delivery is at-least-once from the caller's point of view: a failed
publish raises, and the caller decides whether to retry publication.
Every failure mode (unknown kind, encoding, connection, rejected
append) surfaces as ``EventPublishError``.
"""

from __future__ import annotations

import logging
from typing import Any

import redis.asyncio as aioredis

from portfolio_ledger.core.clock import IClock, WallClock
from portfolio_ledger.core.config import StreamConfig
from portfolio_ledger.core.errors import EventPublishError
from portfolio_ledger.domain.events import DomainEvent

from .envelope import ENTRY_FIELD, build_envelope, encode_envelope, stream_for

logger = logging.getLogger(__name__)


class RedisStreamPublisher:
    """Production publisher backed by Redis Streams.

    Either pass ``redis_url`` and call :meth:`start`, or inject an
    already connected ``client`` (its lifecycle stays with the caller).
    """

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379/0",
        *,
        streams: StreamConfig | None = None,
        clock: IClock | None = None,
        client: aioredis.Redis | None = None,
    ) -> None:
        self._redis_url = redis_url
        self._streams = streams or StreamConfig()
        self._clock = clock or WallClock()
        self._redis: aioredis.Redis | None = client
        self._owns_client = client is None
        self._published = 0
        self._failures = 0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> None:
        """Connect to Redis."""
        if self._redis is None:
            self._redis = aioredis.from_url(
                self._redis_url, decode_responses=True
            )
            self._owns_client = True

    async def stop(self) -> None:
        """Close the Redis connection if this publisher opened it."""
        if self._redis is not None and self._owns_client:
            await self._redis.aclose()
            self._redis = None

    # ------------------------------------------------------------------
    # Publish
    # ------------------------------------------------------------------

    async def publish(self, event: DomainEvent[Any]) -> None:
        """Append *event* to the stream for its kind."""
        try:
            if self._redis is None:
                raise EventPublishError("RedisStreamPublisher not started")
            stream = stream_for(event, self._streams)
            data = encode_envelope(build_envelope(event, self._clock.now()))
        except EventPublishError:
            self._failures += 1
            logger.exception(
                "Failed to prepare %s event %s for publishing",
                type(event).__name__,
                event.event_id,
            )
            raise

        try:
            entry_id = await self._redis.xadd(
                stream,
                {ENTRY_FIELD: data},
                maxlen=self._streams.max_stream_length,
                approximate=True,
            )
        except Exception as exc:
            self._failures += 1
            logger.exception(
                "Failed to publish %s event %s to Redis stream %s",
                type(event).__name__,
                event.event_id,
                stream,
            )
            raise EventPublishError(
                f"XADD to {stream} failed for event {event.event_id}: {exc}"
            ) from exc

        self._published += 1
        logger.info(
            "Published %s event %s to Redis stream %s with entry id %s",
            type(event).__name__,
            event.event_id,
            stream,
            entry_id,
        )

    # ------------------------------------------------------------------
    # Observability
    # ------------------------------------------------------------------

    @property
    def published_count(self) -> int:
        return self._published

    @property
    def failure_count(self) -> int:
        return self._failures
