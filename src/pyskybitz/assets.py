"""Asset identifier validation for inbound request decoders."""

from __future__ import annotations

import re

_ASSET_ID_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]*$")
_MIN_LEN = 2
_MAX_LEN = 32


def sanitize_asset_id(text: str | None) -> str | None:
    """Return the trimmed asset identifier, or ``None`` if it is malformed.

    Identifiers are 2-32 characters, start with a letter or digit and may
    contain ``_`` or ``-`` afterwards. Case is preserved.
    """
    if text is None:
        return None
    candidate = text.strip()
    if not _MIN_LEN <= len(candidate) <= _MAX_LEN:
        return None
    if not _ASSET_ID_RE.match(candidate):
        return None
    return candidate
