"""Custom exception hierarchy for pylqd."""

from __future__ import annotations


class LqdError(Exception):
    """Base exception for all pylqd errors."""


class LqdConfigError(LqdError):
    """Invalid or missing configuration."""


class LqdStorageError(LqdError):
    """Key-value storage read or write failure."""

    def __init__(self, message: str, *, namespace: str = "") -> None:
        self.namespace = namespace
        super().__init__(message)


class LqdReservedAttributeError(LqdError, ValueError):
    """Attempt to set an attribute the overlay does not accept by name.

    Device fact names are never settable; location coordinates only
    change together through ``set_location``.
    """

    def __init__(self, key: str, *, reason: str = "is reserved and cannot be set") -> None:
        self.key = key
        super().__init__(f"attribute {key!r} {reason}")


class LqdSerializationError(LqdError):
    """A snapshot value cannot be encoded in the canonical form.

    Raised when an attribute holds something other than a string,
    integer or finite float (e.g. a nested dict or a custom object).
    """

    def __init__(self, message: str, *, key: str = "") -> None:
        self.key = key
        super().__init__(message)


SerializationError = LqdSerializationError
