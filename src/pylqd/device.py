"""Device profile: static facts, caller overlay and the canonical snapshot."""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Mapping
from typing import Any

from pylqd._constants import UID_NAMESPACE
from pylqd._redact import redact_for_log
from pylqd.config import LqdConfig
from pylqd.exceptions import LqdSerializationError
from pylqd.facts import OSFactsProvider
from pylqd.host import HostFactsProvider
from pylqd.identifier import IdentifierStore
from pylqd.models.device_facts import DeviceFacts
from pylqd.models.location import Location
from pylqd.overlay import AttributeOverlay
from pylqd.storage import JsonFileStorage, KeyValueStorage, MemoryStorage

_logger = logging.getLogger(__name__)


def merge_attributes(overlay: Mapping[str, Any], reserved: Mapping[str, Any]) -> dict[str, Any]:
    """Merge overlay attributes beneath reserved facts.

    The overlay is copied first and every reserved key is then written
    over it, so facts win on any collision.
    """
    merged = dict(overlay)
    for key, value in reserved.items():
        merged[key] = value
    return merged


def _check_value(key: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise LqdSerializationError(
            f"attribute {key!r} has unsupported type {type(value).__name__}",
            key=key,
        )
    if isinstance(value, float) and not math.isfinite(value):
        raise LqdSerializationError(f"attribute {key!r} is not a finite number: {value!r}", key=key)


def serialize_attributes(attributes: Mapping[str, Any]) -> dict[str, Any]:
    """Validate *attributes* against the canonical form and return a flat copy.

    Raises
    ------
    LqdSerializationError
        If any key is not a string or any value is not a string,
        integer or finite float.
    """
    serialized: dict[str, Any] = {}
    for key, value in attributes.items():
        if not isinstance(key, str):
            raise LqdSerializationError(f"attribute key {key!r} is not a string")
        _check_value(key, value)
        serialized[key] = value
    return serialized


class DeviceProfile:
    """Context attached to every telemetry event.

    Static facts are read once from the :class:`OSFactsProvider` at
    construction; connectivity is re-queried on every snapshot.  Runtime
    facts go through the overlay setters.

    Parameters
    ----------
    facts : OSFactsProvider
        Source of device and app metadata.
    identifiers : IdentifierStore
        Store that yields the persistent ``unique_id``.
    liquid_version : str
        SDK version string reported as ``liquid_version``.
    uid_namespace : str
        Namespace passed to :meth:`IdentifierStore.get_or_create`.
    location : Location, tuple or None
        Optional initial location seeded into the overlay.
    """

    def __init__(
        self,
        facts: OSFactsProvider,
        identifiers: IdentifierStore,
        *,
        liquid_version: str,
        uid_namespace: str = UID_NAMESPACE,
        location: Location | tuple[float, float] | None = None,
    ) -> None:
        self._provider = facts
        self._facts = DeviceFacts(
            vendor=facts.vendor(),
            model=facts.model(),
            system_version=facts.system_version(),
            screen_size=facts.screen_size(),
            carrier=facts.carrier(),
            unique_id=identifiers.get_or_create(uid_namespace),
            app_bundle=facts.app_bundle(),
            app_name=facts.app_name(),
            app_version=facts.app_version(),
            release_version=facts.release_version(),
            liquid_version=liquid_version,
            locale=facts.locale(),
            system_language=facts.system_language(),
        )
        self._overlay = AttributeOverlay()
        if location is not None:
            self._overlay.set_location(location)

    @classmethod
    def from_config(
        cls,
        config: LqdConfig,
        *,
        facts: OSFactsProvider | None = None,
        storage: KeyValueStorage | None = None,
        location: Location | tuple[float, float] | None = None,
    ) -> DeviceProfile:
        """Build a profile wired from *config*.

        Defaults to the host adapter and to file or memory storage
        depending on ``config.storage_path``.
        """
        if facts is None:
            facts = HostFactsProvider(config)
        if storage is None:
            storage = JsonFileStorage(config.storage_path) if config.storage_path else MemoryStorage()
        return cls(
            facts,
            IdentifierStore(storage),
            liquid_version=config.liquid_version,
            uid_namespace=config.uid_namespace,
            location=location,
        )

    @property
    def unique_id(self) -> str:
        return self._facts.unique_id

    @property
    def facts(self) -> DeviceFacts:
        return self._facts

    @property
    def overlay(self) -> AttributeOverlay:
        return self._overlay

    # Overlay setters

    def set_location(self, location: Location | tuple[float, float] | None) -> None:
        self._overlay.set_location(location)

    def set_push_token(self, token: str | None) -> None:
        self._overlay.set_push_token(token)

    def set_attribute(self, key: str, value: Any) -> None:
        self._overlay.set_attribute(key, value)

    # Snapshot

    def attributes(self) -> dict[str, Any]:
        """Return the merged, unvalidated attribute map."""
        connectivity = self._provider.connectivity()
        return merge_attributes(self._overlay.get(), self._facts.to_attributes(connectivity))

    def serialize(self) -> dict[str, Any]:
        """Return the canonical snapshot, raising on unsupported values.

        Raises
        ------
        LqdSerializationError
            If an overlay value cannot be represented.
        """
        serialized = serialize_attributes(self.attributes())
        if _logger.isEnabledFor(logging.DEBUG):
            _logger.debug("Device snapshot: %s", redact_for_log(serialized))
        return serialized

    def snapshot(self) -> dict[str, Any] | None:
        """Return the canonical snapshot, or ``None`` if it cannot be serialized."""
        try:
            return self.serialize()
        except LqdSerializationError as exc:
            _logger.error("Device snapshot failed: %s", exc)
            return None

    def to_json(self) -> str | None:
        """Return the snapshot as compact JSON text, or ``None`` on failure."""
        data = self.snapshot()
        if data is None:
            return None
        return json.dumps(data, separators=(",", ":"), allow_nan=False)
