#!/usr/bin/env python3
"""Resolve one asset's latest position from the command line.

Reads ``SKYBITZ_BASE_URL``, ``SKYBITZ_USER``, ``SKYBITZ_PASS`` and the
optional ``SKYBITZ_*`` variables from the environment, resolves the given
asset identifier and prints the result with map links.

Usage::

    python scripts/query_position.py H03036
    python scripts/query_position.py H03036 --raw --json
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyskybitz import (  # noqa: E402
    NoDataAvailable,
    SkyBitzClient,
    SkyBitzConfig,
    SkyBitzConfigError,
    sanitize_asset_id,
)


def _resolution_to_dict(client: SkyBitzClient, result: Any, zoom: int) -> dict[str, Any]:
    data: dict[str, Any] = result.model_dump(mode="json")
    if not isinstance(result, NoDataAvailable):
        links = client.map_links(result.position, zoom=zoom)
        data["possibly_stale"] = result.possibly_stale
        data["links"] = links.model_dump()
    return data


async def main() -> int:
    parser = argparse.ArgumentParser(description="Resolve the latest known position of an asset.")
    parser.add_argument("asset_id", help="Asset identifier, e.g. H03036")
    parser.add_argument("--raw", action="store_true", help="Query the provider directly, bypassing the cache")
    parser.add_argument("--zoom", type=int, default=18, help="Map zoom level for the links (default: 18)")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    asset_id = sanitize_asset_id(args.asset_id)
    if asset_id is None:
        print(f"Invalid asset identifier: {args.asset_id!r}", file=sys.stderr)
        return 2

    try:
        config = SkyBitzConfig.from_env()
    except SkyBitzConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    async with SkyBitzClient(config) as client:
        if args.raw:
            outcome = await client.query_latest(asset_id)
            data: dict[str, Any] = outcome.model_dump(mode="json")
        else:
            result = await client.get_latest_position(asset_id)
            data = _resolution_to_dict(client, result, args.zoom)

    if args.json_mode:
        print(json.dumps(data, indent=2, ensure_ascii=False))
    elif "position" in data:
        position = data["position"]
        print(f"{asset_id}: {position['latitude']}, {position['longitude']} ({data.get('source', data.get('kind'))})")
        if "links" in data:
            print(data["links"]["maps_link"])
            print(data["links"]["image_url"])
    else:
        print(f"No position known for {asset_id} ({data.get('reason') or data.get('kind')})")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
