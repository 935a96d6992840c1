"""Latest-position query endpoint.

Endpoint:
  - /QueryPositions (no ``from``/``to`` -> most recent fix)

The response envelope is ``{"skybitz": {"error": <code>, "gls": <record(s)>}}``
where ``gls`` is either one record or a list of records.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import Any

from pydantic import ValidationError

from pyskybitz._constants import QUERY_POSITIONS_ENDPOINT
from pyskybitz._transport import Transport
from pyskybitz.config import SkyBitzConfig
from pyskybitz.exceptions import (
    InvalidPosition,
    SkyBitzApiError,
    SkyBitzRateLimitError,
    SkyBitzTransportError,
)
from pyskybitz.ingestion.normalize import first_record, safe_float
from pyskybitz.models.outcome import Outcome, QueryNoData, QueryOk, QueryRateLimited, QueryUnavailable
from pyskybitz.models.position import GlsRecord, Position

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def build_query_params(config: SkyBitzConfig, asset_id: str) -> dict[str, str]:
    """Build the query string for a latest-position request."""
    return {
        "assetid": asset_id,
        "customer": config.customer,
        "password": config.password,
        "version": config.version,
        "getJson": "1",
    }


def _parse_error_code(value: Any) -> int | None:
    """Return the provider error code, ``0`` meaning success.

    ``None`` is returned for a code that is present but not a finite
    integral number.
    """
    if value is None or value == "":
        return 0
    if isinstance(value, bool):
        return None
    parsed = safe_float(value)
    if parsed is None or not math.isfinite(parsed) or not parsed.is_integer():
        return None
    return int(parsed)


def _raise_for_code(
    *,
    endpoint: str,
    raw_code: Any,
    rate_limit_codes: frozenset[int],
) -> None:
    code = _parse_error_code(raw_code)
    if code == 0:
        return
    if code is not None and code in rate_limit_codes:
        raise SkyBitzRateLimitError(
            f"{endpoint} rate limited: error={code}",
            code=code,
            endpoint=endpoint,
        )
    raise SkyBitzApiError(
        f"{endpoint} failed: error={raw_code!r}",
        code=code,
        endpoint=endpoint,
    )


def _unwrap_envelope(payload: Any, *, endpoint: str) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise SkyBitzApiError(f"{endpoint} returned {type(payload).__name__}, expected an object", endpoint=endpoint)
    body = payload.get("skybitz")
    if not isinstance(body, Mapping):
        raise SkyBitzApiError(f"Missing 'skybitz' envelope from {endpoint}", endpoint=endpoint)
    return body


def build_position(record: GlsRecord, asset_id: str, now: datetime) -> Position:
    """Turn a parsed record into a :class:`Position`.

    Raises
    ------
    InvalidPosition
        If the coordinates are outside the WGS84 range.
    """
    try:
        return Position(
            asset_id=asset_id,
            latitude=record.latitude,
            longitude=record.longitude,
            observed_at=now,
            fetched_at=now,
            fix_time=record.time,
        )
    except ValidationError as exc:
        raise InvalidPosition(
            f"Discarding fix for {asset_id}: lat={record.latitude} lon={record.longitude}"
        ) from exc


def classify_response(
    payload: Any,
    *,
    asset_id: str,
    now: datetime,
    rate_limit_codes: frozenset[int],
    endpoint: str = QUERY_POSITIONS_ENDPOINT,
) -> Outcome:
    """Classify a decoded response body into an :data:`Outcome`.

    Never raises for malformed payloads: bad records become
    :class:`QueryNoData`, bad envelopes become :class:`QueryUnavailable`.
    """
    try:
        body = _unwrap_envelope(payload, endpoint=endpoint)
        _raise_for_code(endpoint=endpoint, raw_code=body.get("error"), rate_limit_codes=rate_limit_codes)
    except SkyBitzRateLimitError as exc:
        _logger.debug("Rate limited for asset=%s code=%s", asset_id, exc.code)
        return QueryRateLimited(code=exc.code)
    except SkyBitzApiError as exc:
        _logger.warning("Provider error for asset=%s: %s", asset_id, exc)
        return QueryUnavailable(reason=str(exc), code=exc.code)

    raw_record = first_record(body.get("gls"))
    if raw_record is None:
        return QueryNoData(reason="empty record set")

    try:
        record = GlsRecord.model_validate(dict(raw_record))
    except ValidationError:
        _logger.debug("Unparseable record for asset=%s", asset_id, exc_info=True)
        return QueryNoData(reason="malformed record")

    if not record.has_fix:
        return QueryNoData(reason="missing coordinates")

    try:
        position = build_position(record, asset_id, now)
    except InvalidPosition as exc:
        _logger.warning("%s", exc)
        return QueryNoData(reason="invalid coordinates")

    return QueryOk(position=position)


async def query_latest(
    config: SkyBitzConfig,
    transport: Transport,
    asset_id: str,
    *,
    clock: Callable[[], datetime] = _utcnow,
) -> Outcome:
    """Query the most recent fix for *asset_id*.

    Parameters
    ----------
    config : SkyBitzConfig
        Client configuration.
    transport : Transport
        HTTP transport.
    asset_id : str
        Provider asset identifier.
    clock : callable
        Source of the acceptance time stamped on the position. Read
        after the response arrives.

    Returns
    -------
    Outcome
        Exactly one of the classified outcome variants.
    """
    endpoint = QUERY_POSITIONS_ENDPOINT
    try:
        payload = await transport.get_json(endpoint, build_query_params(config, asset_id))
    except SkyBitzTransportError as exc:
        _logger.warning("Position query failed for asset=%s: %s", asset_id, exc)
        return QueryUnavailable(reason=str(exc), status_code=exc.status_code)

    return classify_response(
        payload,
        asset_id=asset_id,
        now=clock(),
        rate_limit_codes=config.rate_limit_codes,
        endpoint=endpoint,
    )


class PositionAdapter:
    """Bound form of :func:`query_latest` used by the resolver."""

    def __init__(
        self,
        config: SkyBitzConfig,
        transport: Transport,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._config = config
        self._transport = transport
        self._clock = clock

    async def query_latest(self, asset_id: str) -> Outcome:
        return await query_latest(self._config, self._transport, asset_id, clock=self._clock)
