"""Normalization helpers.

Centralizes lenient parsing of provider payloads.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any


def strict_float(value: Any) -> float | None:
    """Return *value* as a float only when it is a JSON number.

    Numeric strings, booleans and NaN/inf are rejected: the provider sends
    coordinates as numbers and anything else is treated as a missing fix.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    result = float(value)
    if not math.isfinite(result):
        return None
    return result


def safe_float(value: Any) -> float | None:
    if value is None or value == "" or value == "--":
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(result):
        return None
    return result


def safe_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text if text else None


def first_record(value: Any) -> Mapping[str, Any] | None:
    """Return the position record from a ``gls`` payload.

    The provider sends either a single object or an array of objects; only
    the first array element is used. Anything that is not a mapping yields
    ``None``.
    """
    if isinstance(value, list):
        if not value:
            return None
        value = value[0]
    if isinstance(value, Mapping):
        return value
    return None
