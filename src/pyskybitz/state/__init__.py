"""Position cache layer.

The store only keeps the latest accepted position per asset. Freshness is
computed on read by :mod:`pyskybitz.state.policy`; nothing is evicted.
"""

from pyskybitz.state.policy import entry_age, is_hard_fresh, is_soft_fresh
from pyskybitz.state.store import CacheEntry, MemoryPositionStore, PositionStore, SqlitePositionStore

__all__ = [
    "CacheEntry",
    "MemoryPositionStore",
    "PositionStore",
    "SqlitePositionStore",
    "entry_age",
    "is_hard_fresh",
    "is_soft_fresh",
]
