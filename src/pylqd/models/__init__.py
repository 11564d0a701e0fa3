"""Data models for device context snapshots."""

from pylqd.models.device_facts import Connectivity, DeviceFacts
from pylqd.models.location import Location

__all__ = [
    "Connectivity",
    "DeviceFacts",
    "Location",
]
