from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any

import pytest

from pyskybitz import (
    NoDataAvailable,
    NoDataReason,
    Position,
    QueryOk,
    ResolutionSource,
    ResolvedPosition,
    SkyBitzClient,
    SkyBitzConfig,
    SkyBitzError,
    SqlitePositionStore,
)
from pyskybitz.exceptions import SkyBitzTransportError


@dataclass
class Clock:
    now: datetime = field(default_factory=lambda: datetime(2026, 1, 1, tzinfo=UTC))

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


@dataclass
class FakeSkyBitzBackend:
    """Scripted provider: pops one response per call, repeating the last."""

    responses: list[Any] = field(default_factory=list)
    calls: list[dict[str, str]] = field(default_factory=list)

    async def get_json(self, endpoint: str, params: Mapping[str, str]) -> Any:
        assert endpoint == "/QueryPositions"
        self.calls.append(dict(params))
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            raise response
        return response


def _fix(lat: float, lon: float) -> dict[str, Any]:
    return {"skybitz": {"error": 0, "gls": [{"assetid": "H03036", "latitude": lat, "longitude": lon, "time": "fix"}]}}


def _config(**overrides: Any) -> SkyBitzConfig:
    fields: dict[str, Any] = {
        "base_url": "https://xml.example.test",
        "customer": "acme",
        "password": "s3cret",
        "soft_ttl": 60.0,
        "hard_ttl": 3600.0,
    }
    fields.update(overrides)
    return SkyBitzConfig(**fields)


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_resolve_cache_and_fallback_lifecycle() -> None:
    clock = Clock()
    backend = FakeSkyBitzBackend(
        [
            _fix(34.05, -118.25),
            {"skybitz": {"error": 97}},
            SkyBitzTransportError("HTTP 502", status_code=502, endpoint="/QueryPositions"),
        ]
    )

    async with SkyBitzClient(_config(), transport=backend, clock=clock) as client:
        first = await client.get_latest_position("H03036")
        assert isinstance(first, ResolvedPosition)
        assert first.source is ResolutionSource.UPSTREAM
        assert (first.position.latitude, first.position.longitude) == (34.05, -118.25)
        assert first.position.fix_time == "fix"

        clock.advance(timedelta(seconds=30))
        cached = await client.get_latest_position("H03036")
        assert isinstance(cached, ResolvedPosition)
        assert cached.source is ResolutionSource.CACHE
        assert cached.position == first.position
        assert len(backend.calls) == 1

        clock.advance(timedelta(minutes=5))
        throttled = await client.get_latest_position("H03036")
        assert isinstance(throttled, ResolvedPosition)
        assert throttled.source is ResolutionSource.FALLBACK
        assert throttled.possibly_stale

        clock.advance(timedelta(hours=2))
        gone = await client.get_latest_position("H03036")
        assert gone == NoDataAvailable(asset_id="H03036", reason=NoDataReason.UNAVAILABLE)

    assert len(backend.calls) == 3
    assert backend.calls[0]["password"] == "s3cret"


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_rate_limited_unknown_asset_reports_reason() -> None:
    backend = FakeSkyBitzBackend([{"skybitz": {"error": 97}}])
    async with SkyBitzClient(_config(), transport=backend) as client:
        result = await client.get_latest_position("ZZ999")
    assert result == NoDataAvailable(asset_id="ZZ999", reason=NoDataReason.RATE_LIMITED)


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_query_latest_bypasses_cache() -> None:
    backend = FakeSkyBitzBackend([_fix(1.0, 2.0)])
    async with SkyBitzClient(_config(), transport=backend) as client:
        outcome = await client.query_latest("H03036")
        assert isinstance(outcome, QueryOk)
        assert await client.store.get("H03036") is None


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_durable_store_from_config(tmp_path: Path) -> None:
    clock = Clock()
    db_path = tmp_path / "positions.db"
    config = _config(store_path=str(db_path))

    async with SkyBitzClient(config, transport=FakeSkyBitzBackend([_fix(1.0, 2.0)]), clock=clock) as client:
        assert isinstance(client.store, SqlitePositionStore)
        await client.get_latest_position("H03036")

    # A new process with the provider down still serves the stored fix.
    clock.advance(timedelta(minutes=10))
    down = FakeSkyBitzBackend([SkyBitzTransportError("down", endpoint="/QueryPositions")])
    async with SkyBitzClient(config, transport=down, clock=clock) as client:
        result = await client.get_latest_position("H03036")
    assert isinstance(result, ResolvedPosition)
    assert result.source is ResolutionSource.FALLBACK
    assert result.position.latitude == 1.0


@pytest.mark.asyncio
async def test_client_requires_context_manager() -> None:
    client = SkyBitzClient(_config(), transport=FakeSkyBitzBackend([_fix(1.0, 2.0)]))
    with pytest.raises(SkyBitzError):
        await client.get_latest_position("H03036")


def test_map_links() -> None:
    now = datetime(2026, 1, 1, tzinfo=UTC)
    links = SkyBitzClient.map_links(
        Position(asset_id="H03036", latitude=34.05, longitude=-118.25, observed_at=now, fetched_at=now)
    )
    assert links.maps_link.startswith("https://www.google.com/maps?q=34.05,-118.25")
    assert "bbox=" in links.image_url
