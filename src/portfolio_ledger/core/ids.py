"""Canonical ID and timestamp factories for the ledger.

All modules import from here instead of calling ``uuid.uuid4()`` or
``datetime.now()`` directly.

Timestamp Rule
--------------
All timestamps are ``datetime`` with ``tzinfo=timezone.utc``, never naive.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone


def new_id() -> uuid.UUID:
    """Generate a new UUID v4.  Used for transaction and event identities."""
    return uuid.uuid4()


def utc_now() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(timezone.utc)
