from __future__ import annotations

from typing import Any

import aiohttp
import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer as _TestServer

from pyskybitz._transport import HttpTransport
from pyskybitz.config import SkyBitzConfig
from pyskybitz.exceptions import SkyBitzTransportError


def _config(base_url: str) -> SkyBitzConfig:
    return SkyBitzConfig(base_url=base_url, customer="acme", password="s3cret", request_timeout=5.0)


async def _get(handler: Any, params: dict[str, str] | None = None) -> Any:
    app = web.Application()
    app.router.add_get("/QueryPositions", handler)
    async with _TestServer(app) as server, aiohttp.ClientSession() as session:
        transport = HttpTransport(_config(str(server.make_url(""))), session)
        return await transport.get_json("/QueryPositions", params or {})


@pytest.mark.asyncio
async def test_returns_decoded_json_and_sends_params() -> None:
    seen: dict[str, Any] = {}

    async def handler(request: web.Request) -> web.Response:
        seen["query"] = dict(request.query)
        seen["accept"] = request.headers.get("Accept")
        return web.json_response({"skybitz": {"error": 0, "gls": []}})

    body = await _get(handler, {"assetid": "H03036", "getJson": "1"})

    assert body == {"skybitz": {"error": 0, "gls": []}}
    assert seen["query"] == {"assetid": "H03036", "getJson": "1"}
    assert seen["accept"] == "application/json"


@pytest.mark.asyncio
async def test_non_success_status_raises() -> None:
    async def handler(request: web.Request) -> web.Response:
        return web.Response(status=503, text="maintenance")

    with pytest.raises(SkyBitzTransportError) as excinfo:
        await _get(handler)
    assert excinfo.value.status_code == 503
    assert excinfo.value.endpoint == "/QueryPositions"


@pytest.mark.asyncio
async def test_invalid_json_raises() -> None:
    async def handler(request: web.Request) -> web.Response:
        return web.Response(text="<skybitz><error>0</error></skybitz>", content_type="text/xml")

    with pytest.raises(SkyBitzTransportError) as excinfo:
        await _get(handler)
    assert excinfo.value.status_code is None


@pytest.mark.asyncio
async def test_connection_failure_raises() -> None:
    async with aiohttp.ClientSession() as session:
        transport = HttpTransport(_config("http://127.0.0.1:1"), session)
        with pytest.raises(SkyBitzTransportError):
            await transport.get_json("/QueryPositions", {})


@pytest.mark.asyncio
async def test_undecodable_body_raises() -> None:
    async def handler(request: web.Request) -> web.Response:
        return web.Response(
            body=b'{"skybitz": {"error": 0, "gls": {"time": "\xff\xfe"}}}',
            content_type="application/json",
            charset="utf-8",
        )

    with pytest.raises(SkyBitzTransportError, match="Undecodable body"):
        await _get(handler)
