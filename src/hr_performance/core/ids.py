"""Canonical ID and timestamp factories.

All modules import from here instead of defining local _uuid()/_now() copies.

Timestamp Rule
--------------
All timestamps are ``datetime`` with ``tzinfo=timezone.utc``, never naive,
and are issued by a process-wide ``MonotonicClock`` so facts created one
after another never carry a decreasing ``occurred_at``.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from .clock import MonotonicClock

_process_clock = MonotonicClock()


def new_id() -> str:
    """Generate a new UUID v4 string.  Use for all internal entity IDs."""
    return str(uuid.uuid4())


def utc_now() -> datetime:
    """Return the current UTC time, never earlier than the previous call."""
    return _process_clock.now()
