"""Position models."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from pyskybitz.ingestion.normalize import safe_float, safe_str, strict_float
from pyskybitz.models._base import FrozenModel, UtcDatetime


class Position(FrozenModel):
    """Last known location of an asset.

    Parameters
    ----------
    asset_id : str
        Provider asset identifier, case-sensitive.
    latitude : float
        WGS84 latitude in degrees, within [-90, 90].
    longitude : float
        WGS84 longitude in degrees, within [-180, 180].
    observed_at : datetime
        When this library accepted the fix.
    fetched_at : datetime
        When the position was inserted into the cache.
    fix_time : str or None
        The provider's own fix time, kept verbatim for display.
    """

    asset_id: str
    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)
    observed_at: UtcDatetime
    fetched_at: UtcDatetime
    fix_time: str | None = None


class GlsRecord(BaseModel):
    """One position record from a ``QueryPositions`` response.

    Coordinates are ``None`` unless the provider sent them as JSON numbers.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    asset_id: str | None = Field(default=None, validation_alias=AliasChoices("assetid", "asset", "assetId"))
    latitude: float | None = Field(default=None, validation_alias=AliasChoices("latitude", "lat"))
    longitude: float | None = Field(default=None, validation_alias=AliasChoices("longitude", "lon", "lng"))
    time: str | None = Field(default=None, validation_alias=AliasChoices("time", "fixtime"))
    speed: float | None = None
    heading: str | None = None
    battery: str | None = None
    landmark: str | None = None
    raw: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _stash_raw(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        merged = dict(values)
        merged["raw"] = values
        return merged

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def _coerce_coordinates(cls, value: Any) -> float | None:
        return strict_float(value)

    @field_validator("speed", mode="before")
    @classmethod
    def _coerce_speed(cls, value: Any) -> float | None:
        return safe_float(value)

    @field_validator("asset_id", "time", "heading", "battery", "landmark", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str | None:
        if isinstance(value, dict):
            # landmark is sometimes a nested object with its own fields
            return safe_str(value.get("name") or value.get("city"))
        if isinstance(value, bool):
            return None
        if isinstance(value, (int, float)):
            return str(value)
        return safe_str(value)

    @property
    def has_fix(self) -> bool:
        return self.latitude is not None and self.longitude is not None
