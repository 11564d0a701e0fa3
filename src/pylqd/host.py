"""OS-facts adapter for a general-purpose Python host.

Each query falls back to a fixed value instead of raising:

* vendor/model: ``platform`` module values, then ``"unknown"``
* system version: leading integer of the kernel release, then ``0``
* app bundle/name/version/release: ``""`` / ``"(unknown)"`` / ``""`` / ``0``
* locale/system language: ``"en_US"`` / ``"en"``
"""

from __future__ import annotations

import locale as _locale
import logging
import platform
import re
from collections.abc import Callable
from importlib import metadata
from pathlib import Path

from pylqd._constants import UNKNOWN_APP_NAME
from pylqd.config import LqdConfig
from pylqd.models.device_facts import Connectivity

_logger = logging.getLogger(__name__)

DEFAULT_VENDOR = "unknown"
DEFAULT_MODEL = "unknown"
DEFAULT_LOCALE = "en_US"

_DMI_DIR = Path("/sys/class/dmi/id")
_NET_DIR = Path("/sys/class/net")
_LEADING_INT = re.compile(r"^\s*(\d+)")


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8").strip()
    except OSError:
        return ""


def probe_connectivity(net_dir: Path = _NET_DIR) -> Connectivity:
    """Classify reachability from Linux network interface state.

    Wireless and wired links count as ``WiFi``, ``ww*`` modems as
    ``Cellular``.  An unreadable interface table reports the
    permission marker.
    """
    try:
        interfaces = sorted(net_dir.iterdir())
    except PermissionError:
        return Connectivity.NO_PERMISSION
    except OSError:
        return Connectivity.NONE

    cellular = False
    for iface in interfaces:
        if iface.name == "lo" or _read_text(iface / "operstate") != "up":
            continue
        if iface.name.startswith("ww"):
            cellular = True
            continue
        return Connectivity.WIFI
    return Connectivity.CELLULAR if cellular else Connectivity.NONE


class HostFactsProvider:
    """Read device facts from the running interpreter's host.

    Parameters
    ----------
    config : LqdConfig or None
        Supplies app metadata overrides and the package to inspect.
    screen : tuple of int
        Screen width and height; hosts without a display keep ``(0, 0)``.
    carrier : str
        Mobile network operator name, empty when not applicable.
    connectivity_probe : callable
        Returns the current :class:`Connectivity`; called on every snapshot.
    """

    def __init__(
        self,
        config: LqdConfig | None = None,
        *,
        screen: tuple[int, int] = (0, 0),
        carrier: str = "",
        connectivity_probe: Callable[[], Connectivity | str] = probe_connectivity,
    ) -> None:
        self._config = config or LqdConfig()
        self._screen = screen
        self._carrier = carrier
        self._connectivity_probe = connectivity_probe

    def _distribution(self) -> metadata.PackageMetadata | None:
        name = self._config.package_name
        if not name:
            return None
        try:
            return metadata.metadata(name)
        except metadata.PackageNotFoundError:
            _logger.debug("Package metadata not found for %s", name)
            return None

    def vendor(self) -> str:
        return _read_text(_DMI_DIR / "sys_vendor") or platform.system() or DEFAULT_VENDOR

    def model(self) -> str:
        return _read_text(_DMI_DIR / "product_name") or platform.machine() or DEFAULT_MODEL

    def system_version(self) -> int:
        match = _LEADING_INT.match(platform.release())
        return int(match.group(1)) if match else 0

    def screen_size(self) -> str:
        width, height = self._screen
        return f"{width}x{height}"

    def carrier(self) -> str:
        return self._carrier

    def connectivity(self) -> Connectivity | str:
        return self._connectivity_probe()

    def app_bundle(self) -> str:
        if self._config.app_bundle is not None:
            return self._config.app_bundle
        return self._config.package_name or ""

    def app_name(self) -> str:
        if self._config.app_name is not None:
            return self._config.app_name
        dist = self._distribution()
        if dist is None:
            return UNKNOWN_APP_NAME
        return dist.get("Name") or UNKNOWN_APP_NAME

    def app_version(self) -> str:
        if self._config.app_version is not None:
            return self._config.app_version
        dist = self._distribution()
        if dist is None:
            return ""
        return dist.get("Version") or ""

    def release_version(self) -> int:
        if self._config.release_version is not None:
            return self._config.release_version
        return 0

    def locale(self) -> str:
        try:
            code = _locale.getlocale()[0]
        except ValueError:
            _logger.debug("Could not determine locale", exc_info=True)
            code = None
        if not code or code == "C":
            return DEFAULT_LOCALE
        return code

    def system_language(self) -> str:
        return self.locale().split("_", 1)[0]
