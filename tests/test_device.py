from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from pylqd._constants import PLATFORM, RESERVED_KEYS, UID_NAMESPACE
from pylqd.config import LqdConfig
from pylqd.device import DeviceProfile, merge_attributes, serialize_attributes
from pylqd.exceptions import LqdReservedAttributeError, LqdSerializationError
from pylqd.identifier import IdentifierStore
from pylqd.models.device_facts import Connectivity
from pylqd.storage import JsonFileStorage, MemoryStorage


@dataclass
class _FakeFacts:
    vendor_name: str = "Acme"
    model_name: str = "X1"
    os_version: int = 34
    bundle: str = "com.acme.app"
    name: str = "Acme"
    version: str = "2.3"
    release: int = 7
    network: Connectivity | str = Connectivity.WIFI
    calls: dict[str, int] = field(default_factory=dict)

    def _record(self, query: str) -> None:
        self.calls[query] = self.calls.get(query, 0) + 1

    def vendor(self) -> str:
        self._record("vendor")
        return self.vendor_name

    def model(self) -> str:
        return self.model_name

    def system_version(self) -> int:
        return self.os_version

    def screen_size(self) -> str:
        return "1080x2400"

    def carrier(self) -> str:
        return "Vodafone"

    def connectivity(self) -> Connectivity | str:
        self._record("connectivity")
        return self.network

    def app_bundle(self) -> str:
        return self.bundle

    def app_name(self) -> str:
        return self.name

    def app_version(self) -> str:
        return self.version

    def release_version(self) -> int:
        return self.release

    def locale(self) -> str:
        return "pt_PT"

    def system_language(self) -> str:
        return "pt"


def _profile(facts: _FakeFacts | None = None, **kwargs: object) -> DeviceProfile:
    return DeviceProfile(
        facts or _FakeFacts(),
        IdentifierStore(MemoryStorage()),
        liquid_version="1.2.0",
        **kwargs,  # type: ignore[arg-type]
    )


def test_end_to_end_first_snapshot() -> None:
    storage = MemoryStorage()
    profile = DeviceProfile(_FakeFacts(), IdentifierStore(storage), liquid_version="1.2.0")

    snapshot = profile.snapshot()

    assert snapshot is not None
    assert snapshot["unique_id"]
    assert snapshot["unique_id"] == storage.get(UID_NAMESPACE)
    assert snapshot["vendor"] == "Acme"
    assert snapshot["model"] == "X1"
    assert snapshot["app_bundle"] == "com.acme.app"
    assert snapshot["app_version"] == "2.3"
    assert snapshot["release_version"] == 7
    assert snapshot["platform"] == PLATFORM
    for key in ("latitude", "longitude", "push_token"):
        assert key not in snapshot


def test_snapshot_contains_every_reserved_key() -> None:
    snapshot = _profile().snapshot()

    assert snapshot is not None
    assert set(snapshot) == set(RESERVED_KEYS)
    assert snapshot["system_version"] == 34
    assert snapshot["screen_size"] == "1080x2400"
    assert snapshot["carrier"] == "Vodafone"
    assert snapshot["liquid_version"] == "1.2.0"
    assert snapshot["locale"] == "pt_PT"
    assert snapshot["system_language"] == "pt"
    assert snapshot["internet_connectivity"] == "WiFi"


def test_static_facts_queried_once() -> None:
    facts = _FakeFacts()
    profile = _profile(facts)

    profile.snapshot()
    profile.snapshot()

    assert facts.calls["vendor"] == 1
    assert facts.calls["connectivity"] == 2


def test_connectivity_refreshed_on_every_snapshot() -> None:
    facts = _FakeFacts(network=Connectivity.WIFI)
    profile = _profile(facts)

    first = profile.snapshot()
    facts.network = Connectivity.CELLULAR
    second = profile.snapshot()

    assert first is not None and second is not None
    assert first["internet_connectivity"] == "WiFi"
    assert second["internet_connectivity"] == "Cellular"
    first.pop("internet_connectivity")
    second.pop("internet_connectivity")
    assert first == second


def test_location_set_and_cleared() -> None:
    profile = _profile()

    profile.set_location((1.0, 2.0))
    snapshot = profile.snapshot()
    assert snapshot is not None
    assert snapshot["latitude"] == 1.0
    assert snapshot["longitude"] == 2.0

    profile.set_location(None)
    snapshot = profile.snapshot()
    assert snapshot is not None
    assert "latitude" not in snapshot
    assert "longitude" not in snapshot


def test_initial_location_seeded_at_construction() -> None:
    profile = _profile(location=(48.85, 2.35))

    snapshot = profile.snapshot()

    assert snapshot is not None
    assert snapshot["latitude"] == 48.85
    assert snapshot["longitude"] == 2.35


def test_empty_push_token_matches_never_set() -> None:
    untouched = _profile()
    cleared = DeviceProfile(
        _FakeFacts(),
        IdentifierStore(MemoryStorage({UID_NAMESPACE: untouched.unique_id})),
        liquid_version="1.2.0",
    )
    cleared.set_push_token("")

    assert cleared.snapshot() == untouched.snapshot()


def test_push_token_included_when_set() -> None:
    profile = _profile()
    profile.set_push_token("token-123")

    snapshot = profile.snapshot()

    assert snapshot is not None
    assert snapshot["push_token"] == "token-123"


def test_reserved_key_in_overlay_never_wins() -> None:
    profile = _profile()
    profile.overlay._attributes["vendor"] = "Evil"  # noqa: SLF001
    profile.overlay._attributes["platform"] = "iOS"  # noqa: SLF001

    snapshot = profile.snapshot()

    assert snapshot is not None
    assert snapshot["vendor"] == "Acme"
    assert snapshot["platform"] == PLATFORM


def test_merge_attributes_reserved_wins() -> None:
    merged = merge_attributes({"vendor": "Evil", "plan": "gold"}, {"vendor": "Acme"})

    assert merged == {"vendor": "Acme", "plan": "gold"}


def test_custom_attributes_pass_through() -> None:
    profile = _profile()
    profile.set_attribute("plan", "gold")
    profile.set_attribute("score", 9.5)

    snapshot = profile.snapshot()

    assert snapshot is not None
    assert snapshot["plan"] == "gold"
    assert snapshot["score"] == 9.5


def test_unsupported_value_yields_none(caplog: pytest.LogCaptureFixture) -> None:
    profile = _profile()
    profile.set_attribute("nested", {"a": 1})

    with caplog.at_level(logging.ERROR, logger="pylqd.device"):
        assert profile.snapshot() is None
        assert profile.to_json() is None

    assert "nested" in caplog.text


def test_serialize_raises_for_unsupported_value() -> None:
    profile = _profile()
    profile.set_attribute("tags", ["a", "b"])

    with pytest.raises(LqdSerializationError) as excinfo:
        profile.serialize()

    assert excinfo.value.key == "tags"


@pytest.mark.parametrize("value", [float("nan"), float("inf"), True, object()])
def test_serialize_attributes_rejects(value: object) -> None:
    with pytest.raises(LqdSerializationError):
        serialize_attributes({"bad": value})


def test_to_json_is_compact_flat_object() -> None:
    profile = _profile()
    profile.set_location((1.5, -2.5))

    text = profile.to_json()

    assert text is not None
    assert ", " not in text
    assert ": " not in text
    data = json.loads(text)
    assert data["latitude"] == 1.5
    assert data["release_version"] == 7


def test_unique_id_matches_snapshot() -> None:
    profile = _profile()
    snapshot = profile.snapshot()

    assert snapshot is not None
    assert profile.unique_id == snapshot["unique_id"]


def test_from_config_persists_identifier(tmp_path: Path) -> None:
    config = LqdConfig(liquid_version="9.9.9", storage_path=str(tmp_path / "prefs.json"))

    first = DeviceProfile.from_config(config, facts=_FakeFacts())
    second = DeviceProfile.from_config(config, facts=_FakeFacts())

    assert first.unique_id == second.unique_id
    assert JsonFileStorage(tmp_path / "prefs.json").get(UID_NAMESPACE) == first.unique_id
    snapshot = second.snapshot()
    assert snapshot is not None
    assert snapshot["liquid_version"] == "9.9.9"


def test_set_attribute_cannot_tear_location_pair() -> None:
    profile = _profile()

    with pytest.raises(LqdReservedAttributeError):
        profile.set_attribute("latitude", 1.0)

    snapshot = profile.snapshot()
    assert snapshot is not None
    assert "latitude" not in snapshot
    assert "longitude" not in snapshot


def test_empty_push_token_via_set_attribute_is_absent() -> None:
    profile = _profile()
    profile.set_attribute("push_token", "")

    snapshot = profile.snapshot()

    assert snapshot is not None
    assert "push_token" not in snapshot


def test_debug_log_redacts_sensitive_values(caplog: pytest.LogCaptureFixture) -> None:
    profile = _profile(location=(1.25, 2.5))
    profile.set_push_token("secret-token")

    with caplog.at_level(logging.DEBUG, logger="pylqd.device"):
        profile.snapshot()

    assert "Device snapshot" in caplog.text
    assert profile.unique_id not in caplog.text
    assert "secret-token" not in caplog.text
    assert "1.25" not in caplog.text
    assert "'vendor': 'Acme'" in caplog.text
