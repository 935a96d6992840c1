"""Internal constants shared across the library."""

QUERY_POSITIONS_ENDPOINT = "/QueryPositions"
DEFAULT_PROTOCOL_VERSION = "2.76"
USER_AGENT = "pyskybitz"

#: Provider error codes signalling that an asset is being polled too often.
RATE_LIMIT_CODES: frozenset[int] = frozenset({97})

# ------------------------------------------------------------------
# Web Mercator (EPSG:3857)
# ------------------------------------------------------------------

EARTH_RADIUS_M = 6378137.0
MAX_MERCATOR_LATITUDE = 85.05112878
TILE_SIZE_PX = 256

# ------------------------------------------------------------------
# Map link endpoints
# ------------------------------------------------------------------

GOOGLE_MAPS_URL = "https://www.google.com/maps"
WORLD_IMAGERY_EXPORT_URL = "https://services.arcgisonline.com/ArcGIS/rest/services/World_Imagery/MapServer/export"
DEFAULT_MAP_ZOOM = 18
DEFAULT_IMAGE_WIDTH = 900
DEFAULT_IMAGE_HEIGHT = 600
