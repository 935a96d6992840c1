"""Classified results of a single provider query.

A provider response is turned into exactly one of these variants at the
adapter boundary. Nothing downstream inspects raw payloads.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Literal

from pyskybitz.models._base import FrozenModel
from pyskybitz.models.position import Position


class OutcomeKind(StrEnum):
    OK = "ok"
    NO_DATA = "no_data"
    RATE_LIMITED = "rate_limited"
    UNAVAILABLE = "unavailable"


class QueryOk(FrozenModel):
    """The provider returned a usable fix."""

    kind: Literal[OutcomeKind.OK] = OutcomeKind.OK
    position: Position


class QueryNoData(FrozenModel):
    """The call succeeded but carried no usable fix."""

    kind: Literal[OutcomeKind.NO_DATA] = OutcomeKind.NO_DATA
    reason: str = ""


class QueryRateLimited(FrozenModel):
    """The provider throttled queries for this asset."""

    kind: Literal[OutcomeKind.RATE_LIMITED] = OutcomeKind.RATE_LIMITED
    code: int | None = None


class QueryUnavailable(FrozenModel):
    """Transport failure, non-2xx status or any other provider error code."""

    kind: Literal[OutcomeKind.UNAVAILABLE] = OutcomeKind.UNAVAILABLE
    reason: str = ""
    code: int | None = None
    status_code: int | None = None


Outcome = QueryOk | QueryNoData | QueryRateLimited | QueryUnavailable
