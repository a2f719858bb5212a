from __future__ import annotations

from typing import Any, Protocol, Sequence, TypeVar, runtime_checkable

S = TypeVar("S", bound="ConnectionSource")


@runtime_checkable
class ConnectionSource(Protocol):
    """Capabilities a data source needs to back a connection.

    The builder always works on ``duplicate()`` of the source it is given, so
    ``configure_window`` only ever touches a copy scoped to one call.
    """

    async def count(self) -> int:
        """Total number of items in the source's ordering, ignoring any window."""
        ...

    def configure_window(self, skip: int, limit: int) -> None:
        """Restrict later fetches to ``limit`` items starting at ``skip``."""
        ...

    async def fetch(self) -> Sequence[Any]:
        """Records inside the configured window, in the source's order."""
        ...

    def duplicate(self: S) -> S:
        """Independent copy; configuring it must not affect this instance."""
        ...
