from __future__ import annotations

import pytest

from pylqd.config import LqdConfig
from pylqd.exceptions import LqdConfigError


def test_defaults() -> None:
    config = LqdConfig()

    assert config.uid_namespace == "io.lqd.UUID"
    assert config.storage_path is None
    assert config.liquid_version


def test_from_env_reads_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LQD_LIQUID_VERSION", "2.0.1")
    monkeypatch.setenv("LQD_APP_BUNDLE", "com.acme.app")
    monkeypatch.setenv("LQD_RELEASE_VERSION", "7")

    config = LqdConfig.from_env()

    assert config.liquid_version == "2.0.1"
    assert config.app_bundle == "com.acme.app"
    assert config.release_version == 7


def test_from_env_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LQD_APP_NAME", "From Env")
    monkeypatch.setenv("LQD_RELEASE_VERSION", "not-a-number")

    config = LqdConfig.from_env(app_name="Explicit", release_version=3)

    assert config.app_name == "Explicit"
    assert config.release_version == 3


def test_from_env_rejects_bad_release_version(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LQD_RELEASE_VERSION", "seven")

    with pytest.raises(LqdConfigError):
        LqdConfig.from_env()
