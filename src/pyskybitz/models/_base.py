"""Shared pieces for pyskybitz models.

Every value type is a frozen pydantic model. Timestamps are always
timezone-aware UTC; naive datetimes are assumed to already be UTC.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict


def ensure_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


UtcDatetime = Annotated[datetime, AfterValidator(ensure_utc)]
"""Datetime coerced to timezone-aware UTC."""


class FrozenModel(BaseModel):
    """Base for immutable value models."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )
