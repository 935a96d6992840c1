"""Custom exception hierarchy for pyskybitz."""

from __future__ import annotations


class SkyBitzError(Exception):
    """Base exception for all pyskybitz errors."""


class SkyBitzConfigError(SkyBitzError):
    """Invalid or missing configuration."""


class SkyBitzTransportError(SkyBitzError):
    """HTTP-level failure (network, non-2xx, timeout, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class SkyBitzApiError(SkyBitzError):
    """Provider returned a non-zero ``error`` code in the response envelope."""

    def __init__(
        self,
        message: str,
        *,
        code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.code = code
        self.endpoint = endpoint
        super().__init__(message)


class SkyBitzRateLimitError(SkyBitzApiError):
    """The asset is being queried too frequently.

    Raised for the error codes listed in ``SkyBitzConfig.rate_limit_codes``.
    The adapter converts it into a rate-limited outcome so the resolver can
    fall back to a cached position.
    """


class InvalidPosition(SkyBitzError):
    """A fix with out-of-range coordinates. Never cached."""
