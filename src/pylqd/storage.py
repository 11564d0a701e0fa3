"""Persistent key-value storage backends.

The identifier store only needs ``get`` and ``put``; ``put`` reports
success as a bool instead of raising so callers can decide how much
durability they need.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Protocol

from pylqd.exceptions import LqdStorageError

_logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    """Structural interface for namespace-keyed string storage."""

    def get(self, namespace: str) -> str | None:
        ...

    def put(self, namespace: str, value: str) -> bool:
        ...


class MemoryStorage:
    """Process-local storage; values vanish with the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, namespace: str) -> str | None:
        with self._lock:
            return self._values.get(namespace)

    def put(self, namespace: str, value: str) -> bool:
        with self._lock:
            self._values[namespace] = value
        return True

    def clear(self) -> None:
        with self._lock:
            self._values.clear()


class JsonFileStorage:
    """Preferences kept in a single JSON object on disk.

    Writes go to a temporary file in the same directory which then
    replaces the target, so a crash never leaves a truncated file.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = Path(path)
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, str]:
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise LqdStorageError(f"cannot read {self._path}: {exc}") from exc
        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            _logger.warning("Ignoring corrupt preferences file %s", self._path)
            return {}
        if not isinstance(data, dict):
            _logger.warning("Ignoring preferences file %s: not a JSON object", self._path)
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _dump(self, data: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(data, handle, separators=(",", ":"), sort_keys=True)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def get(self, namespace: str) -> str | None:
        with self._lock:
            return self._load().get(namespace)

    def put(self, namespace: str, value: str) -> bool:
        with self._lock:
            try:
                data = self._load()
                data[namespace] = value
                self._dump(data)
            except (OSError, LqdStorageError):
                _logger.debug("Failed to write %s to %s", namespace, self._path, exc_info=True)
                return False
        return True
