"""Map links for a resolved position."""

from __future__ import annotations

from urllib.parse import urlencode

from pyskybitz._constants import (
    DEFAULT_IMAGE_HEIGHT,
    DEFAULT_IMAGE_WIDTH,
    DEFAULT_MAP_ZOOM,
    GOOGLE_MAPS_URL,
    WORLD_IMAGERY_EXPORT_URL,
)
from pyskybitz.models._base import FrozenModel
from pyskybitz.models.position import Position
from pyskybitz.projection import bounding_box


class MapLinks(FrozenModel):
    """Human-facing link plus a static satellite image URL."""

    maps_link: str
    image_url: str


def google_maps_link(lat: float, lon: float, zoom: int = DEFAULT_MAP_ZOOM) -> str:
    # t=k selects the satellite layer
    return f"{GOOGLE_MAPS_URL}?q={lat},{lon}&z={zoom}&t=k"


def world_imagery_url(
    lat: float,
    lon: float,
    zoom: int = DEFAULT_MAP_ZOOM,
    width: int = DEFAULT_IMAGE_WIDTH,
    height: int = DEFAULT_IMAGE_HEIGHT,
) -> str:
    """Esri World Imagery export URL for a ``width`` x ``height`` image."""
    bbox = bounding_box(lat, lon, zoom, width, height)
    params = {
        "bbox": ",".join(repr(v) for v in bbox),
        "bboxSR": "3857",
        "imageSR": "3857",
        "size": f"{width},{height}",
        "format": "png",
        "f": "image",
    }
    return f"{WORLD_IMAGERY_EXPORT_URL}?{urlencode(params)}"


def map_links(
    position: Position,
    *,
    zoom: int = DEFAULT_MAP_ZOOM,
    width: int = DEFAULT_IMAGE_WIDTH,
    height: int = DEFAULT_IMAGE_HEIGHT,
) -> MapLinks:
    return MapLinks(
        maps_link=google_maps_link(position.latitude, position.longitude, zoom),
        image_url=world_imagery_url(position.latitude, position.longitude, zoom, width, height),
    )
