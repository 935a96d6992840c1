from __future__ import annotations

from datetime import UTC, datetime
from urllib.parse import parse_qs, urlsplit

import pytest

from pyskybitz.assets import sanitize_asset_id
from pyskybitz.maps import google_maps_link, map_links, world_imagery_url
from pyskybitz.models.position import Position
from pyskybitz.projection import bounding_box


def test_google_maps_link_uses_satellite_layer() -> None:
    assert google_maps_link(34.05, -118.25) == "https://www.google.com/maps?q=34.05,-118.25&z=18&t=k"


def test_world_imagery_url_parameters() -> None:
    url = world_imagery_url(34.05, -118.25, zoom=18, width=900, height=600)
    parts = urlsplit(url)
    query = parse_qs(parts.query)

    assert parts.netloc == "services.arcgisonline.com"
    assert parts.path.endswith("/World_Imagery/MapServer/export")
    assert query["bboxSR"] == ["3857"]
    assert query["imageSR"] == ["3857"]
    assert query["size"] == ["900,600"]
    assert query["format"] == ["png"]
    assert query["f"] == ["image"]
    bbox = [float(v) for v in query["bbox"][0].split(",")]
    assert bbox == pytest.approx(list(bounding_box(34.05, -118.25, 18, 900, 600)))


def test_map_links_for_position() -> None:
    now = datetime(2026, 1, 1, tzinfo=UTC)
    position = Position(asset_id="H03036", latitude=10.0, longitude=20.0, observed_at=now, fetched_at=now)
    links = map_links(position, zoom=15, width=300, height=200)
    assert links.maps_link == google_maps_link(10.0, 20.0, 15)
    assert links.image_url == world_imagery_url(10.0, 20.0, 15, 300, 200)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("H03036", "H03036"),
        ("  h03036 \n", "h03036"),
        ("A1", "A1"),
        ("trailer_7-b", "trailer_7-b"),
        ("X" * 32, "X" * 32),
    ],
)
def test_sanitize_asset_id_accepts(text: str, expected: str) -> None:
    assert sanitize_asset_id(text) == expected


@pytest.mark.parametrize("text", [None, "", "A", "X" * 33, "_H0303", "-H03", "/start", "H03 036", "H03.036", "Н03036"])
def test_sanitize_asset_id_rejects(text: str | None) -> None:
    assert sanitize_asset_id(text) is None
