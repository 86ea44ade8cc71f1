"""In-memory event publisher.

Mirrors ``RedisStreamPublisher``: same routing, same envelope encoding,
one list of entries per stream with monotonically increasing entry ids.
Used for tests and local runs without Redis.  Failures can be injected
per event kind or with a predicate.
"""

from __future__ import annotations

import itertools
import logging
from collections import defaultdict
from collections.abc import Callable, Iterable
from typing import Any

from portfolio_ledger.core.clock import IClock, WallClock
from portfolio_ledger.core.config import StreamConfig
from portfolio_ledger.core.enums import EventKind
from portfolio_ledger.core.errors import EventPublishError
from portfolio_ledger.domain.events import DomainEvent

from .envelope import (
    EventEnvelope,
    build_envelope,
    decode_envelope,
    encode_envelope,
    event_kind,
    stream_for,
)

logger = logging.getLogger(__name__)


class InMemoryEventPublisher:
    """Deterministic, in-process stand-in for the stream store."""

    def __init__(
        self,
        *,
        streams: StreamConfig | None = None,
        clock: IClock | None = None,
        fail_on: Iterable[EventKind] = (),
        fail_when: Callable[[DomainEvent[Any]], bool] | None = None,
    ) -> None:
        self._streams = streams or StreamConfig()
        self._clock = clock or WallClock()
        self._fail_on = set(fail_on)
        self._fail_when = fail_when
        self._entries: dict[str, list[tuple[str, str]]] = defaultdict(list)
        self._seq = itertools.count(1)
        self._attempts = 0

    async def start(self) -> None:
        pass

    async def stop(self) -> None:
        pass

    async def publish(self, event: DomainEvent[Any]) -> None:
        self._attempts += 1
        stream = stream_for(event, self._streams)

        if event_kind(event) in self._fail_on or (
            self._fail_when is not None and self._fail_when(event)
        ):
            logger.warning(
                "Injected publish failure for %s event %s",
                type(event).__name__,
                event.event_id,
            )
            raise EventPublishError(
                f"Injected failure publishing event {event.event_id} to {stream}"
            )

        published_at = self._clock.now()
        data = encode_envelope(build_envelope(event, published_at))
        entry_id = f"{int(published_at.timestamp() * 1000)}-{next(self._seq)}"
        self._entries[stream].append((entry_id, data))
        logger.debug("Appended event %s to %s as %s", event.event_id, stream, entry_id)

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def fail_on(self, *kinds: EventKind) -> None:
        """Make subsequent publishes of *kinds* fail."""
        self._fail_on.update(kinds)

    def heal(self) -> None:
        """Stop injecting failures."""
        self._fail_on.clear()
        self._fail_when = None

    def entries(self, stream: str) -> list[tuple[str, str]]:
        """Raw ``(entry_id, json)`` pairs appended to *stream*."""
        return list(self._entries.get(stream, []))

    @property
    def published(self) -> list[EventEnvelope]:
        """Every accepted envelope, decoded, grouped by stream."""
        return [
            decode_envelope(data)
            for entries in self._entries.values()
            for _, data in entries
        ]

    @property
    def attempts(self) -> int:
        return self._attempts

    def clear(self) -> None:
        self._entries.clear()
        self._attempts = 0
