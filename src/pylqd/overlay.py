"""Caller-controlled attribute overlay.

The overlay holds runtime facts the host application supplies
explicitly (location, push token, custom keys).  A single lock guards
every read and write so the latitude/longitude pair is always observed
together or not at all.
"""

from __future__ import annotations

import logging
import threading
from typing import Any

from pylqd._constants import LATITUDE_KEY, LONGITUDE_KEY, PUSH_TOKEN_KEY, is_reserved
from pylqd.exceptions import LqdReservedAttributeError
from pylqd.models.location import Location

_logger = logging.getLogger(__name__)

# Coordinates only change as a pair through set_location.
_LOCATION_KEYS: frozenset[str] = frozenset({LATITUDE_KEY, LONGITUDE_KEY})


def _check_settable(key: str) -> None:
    if is_reserved(key):
        raise LqdReservedAttributeError(key)
    if key in _LOCATION_KEYS:
        raise LqdReservedAttributeError(key, reason="can only change through set_location")


class AttributeOverlay:
    """Mutable mapping of dynamic attributes layered beneath device facts."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._attributes: dict[str, Any] = {}

    def set_location(self, location: Location | tuple[float, float] | None) -> None:
        """Store both coordinates, or remove both when *location* is ``None``."""
        loc = Location.coerce(location)
        with self._lock:
            if loc is None:
                self._attributes.pop(LATITUDE_KEY, None)
                self._attributes.pop(LONGITUDE_KEY, None)
            else:
                self._attributes[LATITUDE_KEY] = loc.latitude
                self._attributes[LONGITUDE_KEY] = loc.longitude

    def set_push_token(self, token: str | None) -> None:
        """Store *token*; ``None`` and ``""`` both clear it."""
        with self._lock:
            if not token:
                self._attributes.pop(PUSH_TOKEN_KEY, None)
            else:
                self._attributes[PUSH_TOKEN_KEY] = token

    def set_attribute(self, key: str, value: Any) -> None:
        """Set a custom attribute; ``None`` removes it.

        ``push_token`` follows :meth:`set_push_token`, so an empty
        string clears it.

        Raises
        ------
        LqdReservedAttributeError
            If *key* names a device fact or a location coordinate.
        """
        _check_settable(key)
        if key == PUSH_TOKEN_KEY:
            self.set_push_token(value)
            return
        with self._lock:
            if value is None:
                self._attributes.pop(key, None)
            else:
                self._attributes[key] = value

    def remove_attribute(self, key: str) -> None:
        """Remove a custom attribute.

        Raises
        ------
        LqdReservedAttributeError
            If *key* names a device fact or a location coordinate.
        """
        _check_settable(key)
        with self._lock:
            self._attributes.pop(key, None)

    def get(self) -> dict[str, Any]:
        """Return a copy of the current non-reserved attributes."""
        with self._lock:
            snapshot = dict(self._attributes)
        stripped = [key for key in snapshot if is_reserved(key)]
        if stripped:
            _logger.debug("Dropping reserved overlay keys: %s", sorted(stripped))
            for key in stripped:
                del snapshot[key]
        return snapshot
