"""Persistent device identifier.

A single opaque identifier is generated per storage namespace and
cached in the backing :class:`~pylqd.storage.KeyValueStorage` so it
survives process restarts.  Generation is serialized per namespace:
concurrent first-time callers in the same process all observe the
identifier produced by exactly one of them.

Durability is best-effort.  When the backing write fails the generated
value is still handed out (and reused for the rest of the process),
but a later process may generate a different one.
"""

from __future__ import annotations

import logging
import threading
import uuid

from pylqd.exceptions import LqdStorageError
from pylqd.storage import KeyValueStorage

_logger = logging.getLogger(__name__)


def new_identifier() -> str:
    """Return a fresh random, globally unique identifier."""
    return str(uuid.uuid4()).upper()


class IdentifierStore:
    """Get-or-create access to durable per-namespace identifiers."""

    def __init__(self, storage: KeyValueStorage) -> None:
        self._storage = storage
        self._registry_lock = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}
        # Values handed out by this process, including ones whose write failed.
        self._issued: dict[str, str] = {}

    def _lock_for(self, namespace: str) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(namespace)
            if lock is None:
                lock = threading.Lock()
                self._locks[namespace] = lock
            return lock

    def _read(self, namespace: str) -> str | None:
        try:
            value = self._storage.get(namespace)
        except LqdStorageError:
            _logger.warning("Could not read identifier namespace %s", namespace, exc_info=True)
            return None
        return value or None

    def _persist(self, namespace: str, value: str) -> bool:
        try:
            return bool(self._storage.put(namespace, value))
        except LqdStorageError:
            _logger.debug("Storage raised while persisting %s", namespace, exc_info=True)
            return False

    def get_or_create(self, namespace: str) -> str:
        """Return the identifier for *namespace*, generating it on first use.

        The write result is checked but never retried; on failure a
        warning is logged and the in-memory value is returned.
        """
        with self._lock_for(namespace):
            issued = self._issued.get(namespace)
            if issued is not None:
                return issued

            stored = self._read(namespace)
            if stored is not None:
                self._issued[namespace] = stored
                return stored

            value = new_identifier()
            if self._persist(namespace, value):
                _logger.debug("Generated identifier for namespace %s", namespace)
            else:
                _logger.warning(
                    "Identifier for namespace %s was not persisted; a new one may be generated on next start",
                    namespace,
                )
            self._issued[namespace] = value
            return value
