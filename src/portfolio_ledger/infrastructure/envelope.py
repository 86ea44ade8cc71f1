"""Event envelope encoding and stream routing.

Wire format of one stream entry (field ``payload``)::

    {
      "eventId": "<uuid>",
      "occurredAt": "<ISO-8601 instant>",
      "publishedAt": "<ISO-8601 instant>",
      "kind": "TransactionCreated",
      "payload": { ...event payload... }
    }

``publishedAt`` is stamped when the publisher hands the entry to the
log, independently of ``occurredAt``.  The log assigns its own entry
id; consumers dedupe on ``eventId``.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticSerializationError

from portfolio_ledger.core.config import StreamConfig
from portfolio_ledger.core.enums import EventKind
from portfolio_ledger.core.errors import EventPublishError, UnsupportedEventError
from portfolio_ledger.domain.events import DomainEvent

#: Name of the single field written to each stream entry.
ENTRY_FIELD = "payload"


class EventEnvelope(BaseModel):
    """Metadata plus JSON payload for one published event."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    event_id: uuid.UUID
    occurred_at: datetime
    published_at: datetime
    kind: EventKind
    payload: dict[str, Any]


def event_kind(event: DomainEvent[Any]) -> EventKind:
    """Return the wire tag of *event* or raise ``UnsupportedEventError``."""
    kind = getattr(type(event), "kind", None)
    if not isinstance(kind, EventKind):
        raise UnsupportedEventError(
            f"Unsupported event type: {type(event).__name__}"
        )
    return kind


def stream_for(event: DomainEvent[Any], streams: StreamConfig) -> str:
    """Destination stream for *event*, selected by its runtime kind."""
    return streams.stream_for(event_kind(event))


def build_envelope(event: DomainEvent[Any], published_at: datetime) -> EventEnvelope:
    """Wrap *event* for the log.  Failures surface as ``EventPublishError``."""
    kind = event_kind(event)
    try:
        return EventEnvelope(
            event_id=event.event_id,
            occurred_at=event.occurred_at,
            published_at=published_at,
            kind=kind,
            payload=event.payload_dict(),
        )
    except (ValidationError, TypeError, ValueError, AttributeError) as exc:
        raise EventPublishError(
            f"Cannot build envelope for {type(event).__name__} {event.event_id}: {exc}"
        ) from exc


def encode_envelope(envelope: EventEnvelope) -> str:
    """Serialize to JSON.  Failures surface as ``EventPublishError``."""
    try:
        return envelope.model_dump_json(by_alias=True)
    except (PydanticSerializationError, TypeError, ValueError) as exc:
        raise EventPublishError(
            f"Failed to serialize {envelope.kind.value} event {envelope.event_id}: {exc}"
        ) from exc


def decode_envelope(raw: str | bytes) -> EventEnvelope:
    """Parse a stream entry back into an envelope (consumers, tests)."""
    return EventEnvelope.model_validate_json(raw)
