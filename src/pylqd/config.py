"""Client configuration for pylqd."""

from __future__ import annotations

import dataclasses
import os
from importlib.metadata import PackageNotFoundError, version
from typing import Any

from pylqd._constants import UID_NAMESPACE
from pylqd.exceptions import LqdConfigError


def _default_liquid_version() -> str:
    try:
        return version("pylqd")
    except PackageNotFoundError:
        return "0+local"


def _env_int(name: str, value: str) -> int:
    try:
        return int(value.strip())
    except ValueError as exc:
        raise LqdConfigError(f"{name} must be an integer, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class LqdConfig:
    """Client configuration.

    Parameters
    ----------
    liquid_version : str
        SDK version string reported as ``liquid_version`` in every snapshot.
    storage_path : str or None
        Path of the JSON preferences file that keeps the device
        identifier across restarts.  ``None`` keeps it in memory only.
    uid_namespace : str
        Storage key under which the device identifier is cached.
    package_name : str or None
        Installed distribution whose metadata describes the host app.
    app_bundle : str or None
        Explicit app bundle id; wins over package metadata.
    app_name : str or None
        Explicit human readable app name.
    app_version : str or None
        Explicit app version string.
    release_version : int or None
        Explicit release/build number.
    """

    liquid_version: str = dataclasses.field(default_factory=_default_liquid_version)
    storage_path: str | None = None
    uid_namespace: str = UID_NAMESPACE
    package_name: str | None = None
    app_bundle: str | None = None
    app_name: str | None = None
    app_version: str | None = None
    release_version: int | None = None

    @classmethod
    def from_env(cls, **overrides: Any) -> LqdConfig:
        """Create configuration from ``LQD_*`` environment variables.

        Explicit keyword arguments override environment values.

        Raises
        ------
        LqdConfigError
            If ``LQD_RELEASE_VERSION`` is not an integer.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "LQD_LIQUID_VERSION": "liquid_version",
            "LQD_STORAGE_PATH": "storage_path",
            "LQD_UID_NAMESPACE": "uid_namespace",
            "LQD_PACKAGE_NAME": "package_name",
            "LQD_APP_BUNDLE": "app_bundle",
            "LQD_APP_NAME": "app_name",
            "LQD_APP_VERSION": "app_version",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        release_env = env.get("LQD_RELEASE_VERSION")
        if release_env is not None and "release_version" not in overrides:
            config_kwargs["release_version"] = _env_int("LQD_RELEASE_VERSION", release_env)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
