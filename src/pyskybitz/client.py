"""High-level async client for the SkyBitz position API."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

import aiohttp

from pyskybitz._api.positions import PositionAdapter
from pyskybitz._constants import DEFAULT_IMAGE_HEIGHT, DEFAULT_IMAGE_WIDTH, DEFAULT_MAP_ZOOM
from pyskybitz._transport import HttpTransport, Transport
from pyskybitz.config import SkyBitzConfig
from pyskybitz.exceptions import SkyBitzError
from pyskybitz.maps import MapLinks, map_links
from pyskybitz.models.outcome import Outcome
from pyskybitz.models.position import Position
from pyskybitz.models.resolution import Resolution
from pyskybitz.resolver import PositionResolver
from pyskybitz.state.store import MemoryPositionStore, PositionStore, SqlitePositionStore

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _default_store(config: SkyBitzConfig) -> PositionStore:
    if config.store_path:
        _logger.debug("Using durable position store at %s", config.store_path)
        return SqlitePositionStore(config.store_path)
    return MemoryPositionStore()


class SkyBitzClient:
    """Async client resolving asset identifiers to their latest position.

    Usage::

        async with SkyBitzClient(SkyBitzConfig.from_env()) as client:
            result = await client.get_latest_position("H03036")

    The position cache outlives the HTTP session, so a client may be
    entered repeatedly without losing cached fixes.
    """

    def __init__(
        self,
        config: SkyBitzConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        store: PositionStore | None = None,
        transport: Transport | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._injected_transport = transport
        self._transport: Transport | None = None
        self._store = store if store is not None else _default_store(config)
        self._clock = clock
        self._adapter: PositionAdapter | None = None
        self._resolver: PositionResolver | None = None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> SkyBitzClient:
        if self._injected_transport is not None:
            self._transport = self._injected_transport
        else:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = HttpTransport(self._config, self._http_session)
        self._adapter = PositionAdapter(self._config, self._transport, clock=self._clock)
        self._resolver = PositionResolver(
            self._adapter,
            self._store,
            soft_ttl=timedelta(seconds=self._config.soft_ttl),
            hard_ttl=timedelta(seconds=self._config.hard_ttl),
            clock=self._clock,
        )
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._transport = None
        self._adapter = None
        self._resolver = None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_resolver(self) -> PositionResolver:
        if self._resolver is None:
            raise SkyBitzError("Client not initialized. Use 'async with SkyBitzClient(...) as client:'")
        return self._resolver

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def config(self) -> SkyBitzConfig:
        return self._config

    @property
    def store(self) -> PositionStore:
        return self._store

    async def get_latest_position(self, asset_id: str) -> Resolution:
        """Resolve *asset_id* through the position cache."""
        return await self._require_resolver().resolve(asset_id)

    async def query_latest(self, asset_id: str) -> Outcome:
        """Query the provider directly, bypassing and not updating the cache."""
        self._require_resolver()
        assert self._adapter is not None  # noqa: S101
        return await self._adapter.query_latest(asset_id)

    @staticmethod
    def map_links(
        position: Position,
        *,
        zoom: int = DEFAULT_MAP_ZOOM,
        width: int = DEFAULT_IMAGE_WIDTH,
        height: int = DEFAULT_IMAGE_HEIGHT,
    ) -> MapLinks:
        """Google Maps link and satellite image URL for *position*."""
        return map_links(position, zoom=zoom, width=width, height=height)
