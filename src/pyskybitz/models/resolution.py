"""Results returned by :class:`pyskybitz.resolver.PositionResolver`."""

from __future__ import annotations

from datetime import timedelta
from enum import StrEnum

from pyskybitz.models._base import FrozenModel
from pyskybitz.models.outcome import OutcomeKind
from pyskybitz.models.position import Position


class ResolutionSource(StrEnum):
    CACHE = "cache"
    """Served from a soft-fresh cache entry; the provider was not asked."""
    UPSTREAM = "upstream"
    """A fresh fix from the provider."""
    FALLBACK = "fallback"
    """The provider failed or had nothing; served from a hard-fresh entry."""


class NoDataReason(StrEnum):
    NO_DATA = "no_data"
    RATE_LIMITED = "rate_limited"
    UNAVAILABLE = "unavailable"


class ResolvedPosition(FrozenModel):
    """A position answer, possibly served from cache.

    Parameters
    ----------
    position : Position
        The position being served.
    source : ResolutionSource
        Where the position came from.
    age : timedelta
        Time elapsed since the position was cached.
    upstream : OutcomeKind or None
        What the provider answered, or ``None`` when it was not asked.
    """

    position: Position
    source: ResolutionSource
    age: timedelta = timedelta(0)
    upstream: OutcomeKind | None = None

    @property
    def possibly_stale(self) -> bool:
        return self.source is ResolutionSource.FALLBACK


class NoDataAvailable(FrozenModel):
    """Neither a fresh fix nor a hard-fresh cache entry exists."""

    asset_id: str
    reason: NoDataReason = NoDataReason.NO_DATA


Resolution = ResolvedPosition | NoDataAvailable
