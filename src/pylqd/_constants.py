"""Internal constants shared across the library."""

PLATFORM = "Android"
UID_NAMESPACE = "io.lqd.UUID"

UNKNOWN_APP_NAME = "(unknown)"

# ------------------------------------------------------------------
# Canonical snapshot keys
# ------------------------------------------------------------------

RESERVED_KEYS: frozenset[str] = frozenset(
    {
        "vendor",
        "platform",
        "model",
        "system_version",
        "screen_size",
        "carrier",
        "internet_connectivity",
        "unique_id",
        "app_bundle",
        "app_name",
        "app_version",
        "release_version",
        "liquid_version",
        "locale",
        "system_language",
    }
)

LATITUDE_KEY = "latitude"
LONGITUDE_KEY = "longitude"
PUSH_TOKEN_KEY = "push_token"


def is_reserved(key: str) -> bool:
    """Return ``True`` when *key* is always sourced from device facts."""
    return key in RESERVED_KEYS
