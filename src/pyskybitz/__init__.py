"""pyskybitz - Async client resolving SkyBitz asset positions through a staleness-aware cache."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyskybitz")
except PackageNotFoundError:
    __version__ = "0+local"
from pyskybitz.assets import sanitize_asset_id
from pyskybitz.client import SkyBitzClient
from pyskybitz.config import SkyBitzConfig
from pyskybitz.exceptions import (
    InvalidPosition,
    SkyBitzApiError,
    SkyBitzConfigError,
    SkyBitzError,
    SkyBitzRateLimitError,
    SkyBitzTransportError,
)
from pyskybitz.maps import MapLinks, google_maps_link, map_links, world_imagery_url
from pyskybitz.models import (
    NoDataAvailable,
    NoDataReason,
    Outcome,
    OutcomeKind,
    Position,
    QueryNoData,
    QueryOk,
    QueryRateLimited,
    QueryUnavailable,
    Resolution,
    ResolutionSource,
    ResolvedPosition,
)
from pyskybitz.projection import BoundingBox, bounding_box, meters_per_pixel, project_point
from pyskybitz.resolver import PositionResolver
from pyskybitz.state import CacheEntry, MemoryPositionStore, PositionStore, SqlitePositionStore

__all__ = [
    "__version__",
    "BoundingBox",
    "CacheEntry",
    "InvalidPosition",
    "MapLinks",
    "MemoryPositionStore",
    "NoDataAvailable",
    "NoDataReason",
    "Outcome",
    "OutcomeKind",
    "Position",
    "PositionResolver",
    "PositionStore",
    "QueryNoData",
    "QueryOk",
    "QueryRateLimited",
    "QueryUnavailable",
    "Resolution",
    "ResolutionSource",
    "ResolvedPosition",
    "SkyBitzApiError",
    "SkyBitzClient",
    "SkyBitzConfig",
    "SkyBitzConfigError",
    "SkyBitzError",
    "SkyBitzRateLimitError",
    "SkyBitzTransportError",
    "SqlitePositionStore",
    "bounding_box",
    "google_maps_link",
    "map_links",
    "meters_per_pixel",
    "project_point",
    "sanitize_asset_id",
    "world_imagery_url",
]
