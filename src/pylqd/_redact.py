"""Helpers for safe debug logging.

Snapshots carry a persistent device identifier, push tokens and precise
coordinates.  This module redacts those fields before emitting DEBUG logs.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

_SENSITIVE_VALUE_KEYS: frozenset[str] = frozenset(
    {
        "unique_id",
        "push_token",
        "latitude",
        "longitude",
    }
)


def redact_for_log(snapshot: Mapping[str, Any], *, max_string: int = 512) -> dict[str, Any]:
    """Return a copy of a flat *snapshot* suitable for debug logs."""
    redacted: dict[str, Any] = {}
    for key, value in snapshot.items():
        if key.lower() in _SENSITIVE_VALUE_KEYS:
            redacted[key] = "<redacted>"
        elif isinstance(value, str) and len(value) > max_string:
            redacted[key] = f"{value[:max_string]}…<truncated>"
        else:
            redacted[key] = value
    return redacted
