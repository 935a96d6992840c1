"""Cache-mediated position resolution.

Every lookup goes through :meth:`PositionResolver.resolve`:

1. A soft-fresh cache entry is returned without contacting the provider.
2. Otherwise the provider is queried. A fresh fix is cached and returned.
3. On any other outcome a hard-fresh cache entry is served as a possibly
   stale fallback; without one the answer is :class:`NoDataAvailable`.

Concurrent calls for the same asset may both query the provider. The last
successful write wins; writes replace whole entries.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Protocol

from pyskybitz.models.outcome import (
    Outcome,
    OutcomeKind,
    QueryNoData,
    QueryOk,
    QueryRateLimited,
    QueryUnavailable,
)
from pyskybitz.models.resolution import (
    NoDataAvailable,
    NoDataReason,
    Resolution,
    ResolutionSource,
    ResolvedPosition,
)
from pyskybitz.state.policy import entry_age, is_hard_fresh, is_soft_fresh
from pyskybitz.state.store import PositionStore

_logger = logging.getLogger(__name__)

_NO_DATA_REASONS: dict[OutcomeKind, NoDataReason] = {
    OutcomeKind.NO_DATA: NoDataReason.NO_DATA,
    OutcomeKind.RATE_LIMITED: NoDataReason.RATE_LIMITED,
    OutcomeKind.UNAVAILABLE: NoDataReason.UNAVAILABLE,
}


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _served_age(fetched_at: datetime, now: datetime) -> timedelta:
    return max(now - fetched_at, timedelta(0))


class PositionSource(Protocol):
    """Anything that can answer a single latest-position query."""

    async def query_latest(self, asset_id: str) -> Outcome:
        ...


class PositionResolver:
    """Resolve asset identifiers to their latest known position.

    Parameters
    ----------
    source : PositionSource
        Upstream adapter, called at most once per :meth:`resolve`.
    store : PositionStore
        Cache owned by this resolver.
    soft_ttl : timedelta
        Age below which a cached position is served without asking.
    hard_ttl : timedelta
        Age below which a cached position may be served as a fallback.
    clock : callable
        Returns the current UTC time when ``resolve`` is called without
        an explicit ``now``.
    """

    def __init__(
        self,
        source: PositionSource,
        store: PositionStore,
        *,
        soft_ttl: timedelta,
        hard_ttl: timedelta,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if soft_ttl <= timedelta(0):
            raise ValueError(f"soft_ttl must be positive, got {soft_ttl}")
        if hard_ttl <= soft_ttl:
            raise ValueError(f"hard_ttl ({hard_ttl}) must exceed soft_ttl ({soft_ttl})")
        self._source = source
        self._store = store
        self._soft_ttl = soft_ttl
        self._hard_ttl = hard_ttl
        self._clock = clock

    @property
    def store(self) -> PositionStore:
        return self._store

    async def resolve(self, asset_id: str, now: datetime | None = None) -> Resolution:
        """Return the position to serve for *asset_id*.

        Provider failures never raise; they resolve to a cached fallback or
        to :class:`NoDataAvailable`. Store errors propagate.
        """
        if now is None:
            now = self._clock()

        entry = await self._store.get(asset_id)
        if entry is not None and is_soft_fresh(entry, now, self._soft_ttl):
            _logger.debug("Cache hit for asset=%s age=%s", asset_id, entry_age(entry, now))
            return ResolvedPosition(
                position=entry.position,
                source=ResolutionSource.CACHE,
                age=_served_age(entry.fetched_at, now),
            )

        outcome = await self._source.query_latest(asset_id)

        if isinstance(outcome, QueryOk):
            await self._store.put(asset_id, outcome.position)
            return ResolvedPosition(
                position=outcome.position,
                source=ResolutionSource.UPSTREAM,
                age=_served_age(outcome.position.fetched_at, now),
                upstream=outcome.kind,
            )

        if not isinstance(outcome, (QueryNoData, QueryRateLimited, QueryUnavailable)):
            raise TypeError(f"Unexpected outcome {outcome!r}")

        # Re-read: a concurrent resolve may have stored a newer fix while
        # this one was waiting on the provider.
        entry = await self._store.get(asset_id)
        if entry is not None and is_hard_fresh(entry, now, self._hard_ttl):
            _logger.info(
                "Serving cached position for asset=%s after %s (age=%s)",
                asset_id,
                outcome.kind,
                entry_age(entry, now),
            )
            return ResolvedPosition(
                position=entry.position,
                source=ResolutionSource.FALLBACK,
                age=_served_age(entry.fetched_at, now),
                upstream=outcome.kind,
            )

        _logger.debug("No position for asset=%s (%s, no fallback)", asset_id, outcome.kind)
        return NoDataAvailable(asset_id=asset_id, reason=_NO_DATA_REASONS[outcome.kind])
