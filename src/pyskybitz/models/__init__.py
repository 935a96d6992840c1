"""Typed models for provider payloads and resolution results."""

from pyskybitz.models.outcome import (
    Outcome,
    OutcomeKind,
    QueryNoData,
    QueryOk,
    QueryRateLimited,
    QueryUnavailable,
)
from pyskybitz.models.position import GlsRecord, Position
from pyskybitz.models.resolution import (
    NoDataAvailable,
    NoDataReason,
    Resolution,
    ResolutionSource,
    ResolvedPosition,
)

__all__ = [
    "GlsRecord",
    "NoDataAvailable",
    "NoDataReason",
    "Outcome",
    "OutcomeKind",
    "Position",
    "QueryNoData",
    "QueryOk",
    "QueryRateLimited",
    "QueryUnavailable",
    "Resolution",
    "ResolutionSource",
    "ResolvedPosition",
]
