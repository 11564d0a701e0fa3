"""OS-facts capability interface.

The device profile never talks to the operating system directly; it
consumes an object implementing :class:`OSFactsProvider`.  Every query
must degrade to a fallback value instead of raising.
"""

from __future__ import annotations

from typing import Protocol

from pylqd.models.device_facts import Connectivity


class OSFactsProvider(Protocol):
    """Structural interface for read-only device/app queries.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production adapter (:class:`pylqd.host.HostFactsProvider`)
    concrete.
    """

    def vendor(self) -> str:
        ...

    def model(self) -> str:
        ...

    def system_version(self) -> int:
        ...

    def screen_size(self) -> str:
        ...

    def carrier(self) -> str:
        ...

    def connectivity(self) -> Connectivity | str:
        ...

    def app_bundle(self) -> str:
        ...

    def app_name(self) -> str:
        ...

    def app_version(self) -> str:
        ...

    def release_version(self) -> int:
        ...

    def locale(self) -> str:
        ...

    def system_language(self) -> str:
        ...
