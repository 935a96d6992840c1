"""Position stores.

Two backings share one contract: :class:`MemoryPositionStore` (lost on
restart, degrading to always-miss) and :class:`SqlitePositionStore`
(survives restarts). A ``put`` replaces the entry for one key atomically;
no cross-key transactions exist.
"""

from __future__ import annotations

import asyncio
import logging
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Protocol

from pyskybitz.models._base import FrozenModel, UtcDatetime
from pyskybitz.models.position import Position

_logger = logging.getLogger(__name__)


class CacheEntry(FrozenModel):
    """Latest accepted position for one asset."""

    position: Position
    fetched_at: UtcDatetime

    @classmethod
    def from_position(cls, position: Position) -> CacheEntry:
        return cls(position=position, fetched_at=position.fetched_at)


class PositionStore(Protocol):
    """Structural interface the resolver reads and writes through."""

    async def get(self, asset_id: str) -> CacheEntry | None:
        ...

    async def put(self, asset_id: str, position: Position) -> None:
        ...


class MemoryPositionStore:
    """Process-local store.

    Entries are immutable and replaced by a single dict assignment, so a
    reader never sees a partially written entry.
    """

    def __init__(self) -> None:
        self._entries: dict[str, CacheEntry] = {}

    async def get(self, asset_id: str) -> CacheEntry | None:
        return self._entries.get(asset_id)

    async def put(self, asset_id: str, position: Position) -> None:
        self._entries[asset_id] = CacheEntry.from_position(position)

    def __len__(self) -> int:
        return len(self._entries)


class SqlitePositionStore:
    """SQLite-backed store that keeps last known positions across restarts."""

    def __init__(self, db_path: str | Path) -> None:
        self.db_path = str(db_path)
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path)

    def _init_db(self) -> None:
        conn = self._connect()
        try:
            with conn:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS positions (
                        asset_id TEXT PRIMARY KEY,
                        data TEXT NOT NULL,
                        fetched_at TEXT NOT NULL
                    )
                    """
                )
        finally:
            conn.close()

    def _get_sync(self, asset_id: str) -> CacheEntry | None:
        conn = self._connect()
        try:
            row = conn.execute(
                "SELECT data, fetched_at FROM positions WHERE asset_id = ?",
                (asset_id,),
            ).fetchone()
        finally:
            conn.close()
        if row is None:
            return None
        data, fetched_at = row
        return CacheEntry(
            position=Position.model_validate_json(data),
            fetched_at=datetime.fromisoformat(fetched_at),
        )

    def _put_sync(self, asset_id: str, position: Position) -> None:
        entry = CacheEntry.from_position(position)
        conn = self._connect()
        try:
            with conn:
                conn.execute(
                    """
                    INSERT INTO positions (asset_id, data, fetched_at)
                    VALUES (?, ?, ?)
                    ON CONFLICT(asset_id) DO UPDATE SET
                        data = excluded.data,
                        fetched_at = excluded.fetched_at
                    """,
                    (asset_id, entry.position.model_dump_json(), entry.fetched_at.isoformat()),
                )
        finally:
            conn.close()
        _logger.debug("Stored position for asset=%s in %s", asset_id, self.db_path)

    async def get(self, asset_id: str) -> CacheEntry | None:
        return await asyncio.to_thread(self._get_sync, asset_id)

    async def put(self, asset_id: str, position: Position) -> None:
        await asyncio.to_thread(self._put_sync, asset_id, position)
