"""pylqd - Device context snapshots for mobile analytics events."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pylqd")
except PackageNotFoundError:
    __version__ = "0+local"
from pylqd._constants import PLATFORM, RESERVED_KEYS, UID_NAMESPACE
from pylqd.config import LqdConfig
from pylqd.device import DeviceProfile, merge_attributes, serialize_attributes
from pylqd.exceptions import (
    LqdConfigError,
    LqdError,
    LqdReservedAttributeError,
    LqdSerializationError,
    LqdStorageError,
    SerializationError,
)
from pylqd.facts import OSFactsProvider
from pylqd.host import HostFactsProvider
from pylqd.identifier import IdentifierStore, new_identifier
from pylqd.models import Connectivity, DeviceFacts, Location
from pylqd.overlay import AttributeOverlay
from pylqd.storage import JsonFileStorage, KeyValueStorage, MemoryStorage

__all__ = [
    "__version__",
    "AttributeOverlay",
    "Connectivity",
    "DeviceFacts",
    "DeviceProfile",
    "HostFactsProvider",
    "IdentifierStore",
    "JsonFileStorage",
    "KeyValueStorage",
    "Location",
    "LqdConfig",
    "LqdConfigError",
    "LqdError",
    "LqdReservedAttributeError",
    "LqdSerializationError",
    "LqdStorageError",
    "MemoryStorage",
    "OSFactsProvider",
    "PLATFORM",
    "RESERVED_KEYS",
    "SerializationError",
    "UID_NAMESPACE",
    "merge_attributes",
    "new_identifier",
    "serialize_attributes",
]
