"""Web Mercator (EPSG:3857) projection helpers.

Used to request a correctly scaled static satellite image around a fix.
All functions are pure and deterministic.
"""

from __future__ import annotations

import math
from typing import NamedTuple

from pyskybitz._constants import EARTH_RADIUS_M, MAX_MERCATOR_LATITUDE, TILE_SIZE_PX


class BoundingBox(NamedTuple):
    """Ground extent in projected meters."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center(self) -> tuple[float, float]:
        return (self.min_x + self.max_x) / 2.0, (self.min_y + self.max_y) / 2.0


def clamp_latitude(lat: float) -> float:
    """Clamp *lat* into the range where the projection stays finite.

    Raises :class:`ValueError` for NaN, which no clamp can place.
    """
    if math.isnan(lat):
        raise ValueError("latitude must be a number, got nan")
    return max(min(lat, MAX_MERCATOR_LATITUDE), -MAX_MERCATOR_LATITUDE)


def project_point(lat: float, lon: float) -> tuple[float, float]:
    """Project WGS84 degrees to Web Mercator meters ``(x, y)``.

    Raises :class:`ValueError` for non-finite coordinates.
    """
    if not (math.isfinite(lat) and math.isfinite(lon)):
        raise ValueError(f"coordinates must be finite, got ({lat}, {lon})")
    phi = math.radians(clamp_latitude(lat))
    x = math.radians(lon) * EARTH_RADIUS_M
    y = math.log(math.tan(math.pi / 4.0 + phi / 2.0)) * EARTH_RADIUS_M
    return x, y


def meters_per_pixel(zoom: int) -> float:
    """Ground resolution of the standard 256px tile pyramid at *zoom*.

    Raises :class:`ValueError` for a negative zoom level.
    """
    if zoom < 0:
        raise ValueError(f"zoom must be >= 0, got {zoom}")
    world_meters = 2.0 * math.pi * EARTH_RADIUS_M
    return world_meters / (TILE_SIZE_PX * 2**zoom)


def bounding_box(lat: float, lon: float, zoom: int, width: int, height: int) -> BoundingBox:
    """Box of ``width`` x ``height`` pixels at *zoom*, centered on the point.

    Raises :class:`ValueError` for non-positive pixel dimensions.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"image size must be positive, got {width}x{height}")
    x, y = project_point(lat, lon)
    res = meters_per_pixel(zoom)
    half_w = (width * res) / 2.0
    half_h = (height * res) / 2.0
    return BoundingBox(x - half_w, y - half_h, x + half_w, y + half_h)
