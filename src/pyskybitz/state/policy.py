"""Age-based freshness predicates.

Staleness is advisory: these functions only compare timestamps, the store
never acts on them.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from pyskybitz.state.store import CacheEntry


def entry_age(entry: CacheEntry, now: datetime) -> timedelta:
    return now - entry.fetched_at


def is_soft_fresh(entry: CacheEntry, now: datetime, soft_ttl: timedelta) -> bool:
    """Whether *entry* may be served without contacting the provider."""
    return entry_age(entry, now) < soft_ttl


def is_hard_fresh(entry: CacheEntry, now: datetime, hard_ttl: timedelta) -> bool:
    """Whether *entry* may still be served as a fallback."""
    return entry_age(entry, now) < hard_ttl
