"""HTTP transport for the provider's JSON query interface."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from pyskybitz._constants import USER_AGENT
from pyskybitz._redact import redact_for_log
from pyskybitz.config import SkyBitzConfig
from pyskybitz.exceptions import SkyBitzTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles while keeping
    the production implementation (`HttpTransport`) concrete.
    """

    async def get_json(self, endpoint: str, params: Mapping[str, str]) -> Any:
        ...


class HttpTransport:
    """GET transport returning decoded JSON bodies.

    Every failure below the JSON layer (connection errors, timeouts,
    non-2xx status, undecodable bodies) is raised as
    :class:`SkyBitzTransportError`.
    """

    def __init__(self, config: SkyBitzConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    async def get_json(self, endpoint: str, params: Mapping[str, str]) -> Any:
        url = f"{self._config.base_url}{endpoint}"
        headers = {
            "accept": "application/json",
            "user-agent": USER_AGENT,
        }

        _logger.debug("GET %s params=%s", url, redact_for_log(dict(params)))

        try:
            async with self._http.get(url, params=dict(params), headers=headers, timeout=self._timeout) as resp:
                raw = await resp.read()
                charset = resp.charset or "utf-8"
                if not 200 <= resp.status < 300:
                    raise SkyBitzTransportError(
                        f"HTTP {resp.status} from {endpoint}: {raw[:200].decode('utf-8', errors='replace')}",
                        status_code=resp.status,
                        endpoint=endpoint,
                    )
        except SkyBitzTransportError:
            raise
        except asyncio.TimeoutError as exc:
            raise SkyBitzTransportError(
                f"Request to {endpoint} timed out after {self._config.request_timeout}s",
                endpoint=endpoint,
            ) from exc
        except aiohttp.ClientError as exc:
            raise SkyBitzTransportError(
                f"Request to {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc

        try:
            text = raw.decode(charset)
        except (UnicodeDecodeError, LookupError) as exc:
            raise SkyBitzTransportError(
                f"Undecodable body from {endpoint} (charset={charset})",
                endpoint=endpoint,
            ) from exc

        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise SkyBitzTransportError(
                f"Invalid JSON from {endpoint}: {text[:200]}",
                endpoint=endpoint,
            ) from exc
