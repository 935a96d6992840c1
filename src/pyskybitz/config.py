"""Client configuration for pyskybitz."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Mapping
from typing import Any

from pyskybitz._constants import DEFAULT_PROTOCOL_VERSION, RATE_LIMIT_CODES
from pyskybitz.exceptions import SkyBitzConfigError

_REQUIRED_ENV = {
    "base_url": "SKYBITZ_BASE_URL",
    "customer": "SKYBITZ_USER",
    "password": "SKYBITZ_PASS",
}


def _parse_codes(value: str) -> frozenset[int]:
    codes: set[int] = set()
    for part in value.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            codes.add(int(part))
        except ValueError as exc:
            raise SkyBitzConfigError(f"SKYBITZ_RATE_LIMIT_CODES: {part!r} is not an integer") from exc
    return frozenset(codes)


def _env_float(env: Mapping[str, str], key: str) -> float | None:
    value = env.get(key)
    if value is None or not value.strip():
        return None
    try:
        return float(value)
    except ValueError as exc:
        raise SkyBitzConfigError(f"{key}: {value!r} is not a number") from exc


@dataclasses.dataclass(frozen=True)
class SkyBitzConfig:
    """Client configuration.

    Construction fails with :class:`SkyBitzConfigError` when credentials
    are missing, so a misconfigured host never reaches the network.

    Parameters
    ----------
    base_url : str
        Provider base URL, including the port when one is required
        (e.g. ``"https://xml.skybitz.com:9443"``).
    customer : str
        Account name sent as the ``customer`` query parameter.
    password : str
        Account password.
    version : str
        Query protocol version.
    soft_ttl : float
        Seconds during which a cached position is served without asking
        the provider.
    hard_ttl : float
        Seconds after which a cached position is too old to be served
        even as a fallback. Must exceed ``soft_ttl``.
    request_timeout : float
        Total timeout in seconds for one provider request.
    rate_limit_codes : frozenset[int]
        Provider error codes that mean "queried too frequently".
    store_path : str or None
        SQLite file for a durable position cache. ``None`` keeps the
        cache in process memory.
    """

    base_url: str
    customer: str
    password: str = dataclasses.field(repr=False)
    version: str = DEFAULT_PROTOCOL_VERSION
    soft_ttl: float = 60.0
    hard_ttl: float = 24 * 3600.0
    request_timeout: float = 15.0
    rate_limit_codes: frozenset[int] = RATE_LIMIT_CODES
    store_path: str | None = None

    def __post_init__(self) -> None:
        missing = [env for name, env in _REQUIRED_ENV.items() if not str(getattr(self, name) or "").strip()]
        if missing:
            raise SkyBitzConfigError(f"Missing configuration: {', '.join(missing)}")
        if self.soft_ttl <= 0:
            raise SkyBitzConfigError(f"soft_ttl must be positive, got {self.soft_ttl}")
        if self.hard_ttl <= self.soft_ttl:
            raise SkyBitzConfigError(f"hard_ttl ({self.hard_ttl}) must be greater than soft_ttl ({self.soft_ttl})")
        if self.request_timeout <= 0:
            raise SkyBitzConfigError(f"request_timeout must be positive, got {self.request_timeout}")
        object.__setattr__(self, "base_url", self.base_url.strip().rstrip("/"))
        object.__setattr__(self, "rate_limit_codes", frozenset(self.rate_limit_codes))

    @classmethod
    def from_env(cls, **overrides: Any) -> SkyBitzConfig:
        """Create configuration from environment variables.

        Reads ``SKYBITZ_BASE_URL``, ``SKYBITZ_USER`` and ``SKYBITZ_PASS``
        plus the optional ``SKYBITZ_*`` tuning variables. Explicit keyword
        arguments override environment values.

        Raises
        ------
        SkyBitzConfigError
            If a required value is absent or a numeric value is malformed.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "SKYBITZ_BASE_URL": "base_url",
            "SKYBITZ_USER": "customer",
            "SKYBITZ_PASS": "password",
            "SKYBITZ_VERSION": "version",
            "SKYBITZ_STORE_PATH": "store_path",
        }
        config_kwargs: dict[str, Any] = {field_name: "" for field_name in _REQUIRED_ENV}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val:
                config_kwargs[field_name] = val

        _ENV_FLOAT_MAP = {
            "SKYBITZ_SOFT_TTL": "soft_ttl",
            "SKYBITZ_HARD_TTL": "hard_ttl",
            "SKYBITZ_REQUEST_TIMEOUT": "request_timeout",
        }
        for env_key, field_name in _ENV_FLOAT_MAP.items():
            if field_name in overrides:
                continue
            number = _env_float(env, env_key)
            if number is not None:
                config_kwargs[field_name] = number

        codes_env = env.get("SKYBITZ_RATE_LIMIT_CODES")
        if codes_env and "rate_limit_codes" not in overrides:
            config_kwargs["rate_limit_codes"] = _parse_codes(codes_env)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
