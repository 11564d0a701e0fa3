"""Static device and application facts."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from pylqd._constants import PLATFORM


class Connectivity(StrEnum):
    """Network reachability as reported by the OS."""

    WIFI = "WiFi"
    CELLULAR = "Cellular"
    NONE = "No Connectivity"
    NO_PERMISSION = "No ACCESS_NETWORK_STATE permission"


class DeviceFacts(BaseModel):
    """Facts gathered once when a device profile is built.

    Field names match the canonical snapshot keys, so
    :meth:`to_attributes` is a plain dump plus the platform constant
    and the current connectivity.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    vendor: str
    model: str
    system_version: int = 0
    screen_size: str = "0x0"
    carrier: str = ""
    unique_id: str = Field(min_length=1)
    app_bundle: str = ""
    app_name: str = ""
    app_version: str = ""
    release_version: int = 0
    liquid_version: str
    locale: str
    system_language: str

    def to_attributes(self, connectivity: Connectivity | str) -> dict[str, Any]:
        """Return every reserved key mapped to its fact value."""
        attributes = self.model_dump()
        attributes["platform"] = PLATFORM
        attributes["internet_connectivity"] = str(connectivity)
        return attributes
