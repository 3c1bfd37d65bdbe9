"""Canonical ID and timestamp factories.

Event IDs are UUID v4 rendered as 32 lowercase hex characters (no dashes).
All timestamps are ``datetime`` with ``tzinfo=timezone.utc``.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone


def new_event_id() -> str:
    """Generate a new event ID."""
    return uuid.uuid4().hex


def utc_now() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(timezone.utc)
